"""
Admin console operations on the token set.

Used by the admin HTTP router and the publana-admin CLI. Neither goes through
the bearer-token dispatcher.
"""

import logging
from datetime import datetime, timezone
from typing import List, Tuple

from .generator import TokenGenerator
from .store import TokenStore, mask_token

logger = logging.getLogger(__name__)


class TokenConsole:
    """Generate, revoke and list bearer tokens."""

    def __init__(self, store: TokenStore, generator: TokenGenerator = None):
        self.store = store
        self.generator = generator or TokenGenerator()

    async def generate(self) -> Tuple[str, str]:
        """
        Generate a token and add it to the store.

        Returns:
            Tuple of (token, created_at ISO-8601)
        """
        token = self.generator.generate()
        await self.store.add(token)
        logger.info(f"Generated API token {mask_token(token)}")
        return token, datetime.now(timezone.utc).isoformat()

    async def revoke(self, token: str) -> bool:
        """
        Revoke a token. Revoking an unknown token is a no-op.

        Returns:
            True if the token was present before revocation
        """
        existed = await self.store.contains(token)
        await self.store.remove(token)
        if existed:
            logger.info(f"Revoked API token {mask_token(token)}")
        return existed

    async def list(self, reveal: bool = False) -> List[Tuple[int, str]]:
        """Return (index, token) pairs, masked unless reveal is set."""
        tokens = await self.store.list()
        return [
            (index, token if reveal else mask_token(token))
            for index, token in enumerate(tokens, start=1)
        ]
