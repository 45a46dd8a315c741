"""
Token store for Publana API bearer tokens.

The whole token set lives under a single option key and is loaded and
rewritten wholesale on every mutation. There is no locking: two concurrent
mutations can each read the same list and the later write wins, dropping the
other's change. Callers that need concurrent revocation to be exact must
serialise access themselves.
"""

import logging
from typing import List

from publana.modules.storage import OptionStore

logger = logging.getLogger(__name__)

DEFAULT_OPTION_KEY = "publana_api_tokens"


def mask_token(token: str, visible: int = 8) -> str:
    """Mask a token for display and logs."""
    if len(token) <= visible:
        return "•" * len(token)
    return token[:visible] + "•" * (len(token) - visible)


class TokenStore:
    """Owns the authoritative list of valid bearer tokens."""

    def __init__(self, option_store: OptionStore, option_key: str = DEFAULT_OPTION_KEY):
        """
        Initialize token store.

        Args:
            option_store: Persistence backend for the token list
            option_key: Option key the list is stored under
        """
        self.options = option_store
        self.option_key = option_key

    async def ensure_initialized(self) -> None:
        """Create an empty token set if none has been stored yet."""
        if await self.options.get(self.option_key) is None:
            await self.options.set(self.option_key, [])
            logger.info(f"Initialized empty token set under '{self.option_key}'")

    async def list(self) -> List[str]:
        """Return current tokens in insertion order."""
        tokens = await self.options.get(self.option_key, [])
        if not isinstance(tokens, list):
            return []
        return [token for token in tokens if isinstance(token, str)]

    async def add(self, token: str) -> None:
        """Append a token and persist the full set."""
        tokens = await self.list()
        tokens.append(token)
        await self.options.set(self.option_key, tokens)

    async def remove(self, token: str) -> None:
        """Remove every entry exactly equal to token and persist the full set."""
        tokens = [existing for existing in await self.list() if existing != token]
        await self.options.set(self.option_key, tokens)

    async def contains(self, token: str) -> bool:
        """Exact, case-sensitive membership test. Non-string input never matches."""
        if not isinstance(token, str):
            return False
        return any(type(existing) is str and existing == token for existing in await self.list())
