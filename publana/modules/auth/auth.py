"""
Authentication module for Publana API.

This module handles bearer token authentication for API clients and static
API key authentication for the admin console. It's designed as a black box
that can be replaced with any auth system without affecting other modules.
"""

import logging
import re
import secrets
from typing import Iterable, Optional

from publana.errors import AdminUnauthorized, InvalidToken, Unauthorized
from publana.modules.tokens import TokenStore

from .service import AuthResult

logger = logging.getLogger(__name__)

BEARER_PATTERN = re.compile(r"Bearer\s+(.*)$", re.IGNORECASE)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Extract the bearer credential from an Authorization header value.

    Args:
        authorization: Raw header value, may be None

    Returns:
        Trimmed token, or None if the header is missing or not a Bearer credential

    Example:
        >>> extract_bearer_token("bearer   abc123 ")
        'abc123'
    """
    if not authorization:
        return None

    match = BEARER_PATTERN.search(authorization)
    if not match:
        return None

    return match.group(1).strip()


class AuthModule:
    """
    Authentication module for validating credentials.

    Bearer tokens are checked against the token store on every call. Admin
    API keys are loaded once from configuration.
    """

    def __init__(self, token_store: TokenStore, admin_api_keys: Optional[Iterable[str]] = None):
        """
        Initialize auth module.

        Args:
            token_store: Store holding the valid bearer tokens
            admin_api_keys: Static keys accepted on the admin surface
        """
        self.token_store = token_store
        self.admin_api_keys = [key for key in (admin_api_keys or []) if key]

    async def authenticate(self, authorization: Optional[str]) -> AuthResult:
        """
        Authenticate a request from its Authorization header.

        Args:
            authorization: Authorization header value

        Returns:
            AuthResult with ok=True

        Raises:
            Unauthorized: Header missing or not a Bearer credential
            InvalidToken: Token not present in the token store
        """
        token = extract_bearer_token(authorization)
        if token is None:
            logger.warning("Rejected request without bearer credentials")
            raise Unauthorized()

        if not await self.token_store.contains(token):
            logger.warning("Rejected request with unknown bearer token")
            raise InvalidToken()

        return AuthResult(ok=True, method="bearer")

    def verify_admin_key(self, api_key: Optional[str]) -> AuthResult:
        """
        Verify an admin console API key.

        Raises:
            AdminUnauthorized: Key missing or not configured
        """
        if api_key:
            for candidate in self.admin_api_keys:
                # Constant-time comparison for security
                if secrets.compare_digest(api_key.encode("utf-8"), candidate.encode("utf-8")):
                    return AuthResult(ok=True, method="api_key")

        logger.warning("Rejected admin request with invalid API key")
        raise AdminUnauthorized()
