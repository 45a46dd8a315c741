"""
Authentication results and the protocol auth implementations satisfy.
"""

from dataclasses import dataclass
from typing import Literal, Optional, Protocol


@dataclass
class AuthResult:
    """Standardized authentication result. Bearer tokens carry no identity."""
    ok: bool
    method: Optional[Literal["bearer", "api_key"]] = None
    error: Optional[str] = None


class Authenticator(Protocol):
    """Protocol for bearer-token authenticators."""

    async def authenticate(self, authorization: Optional[str]) -> AuthResult:
        """
        Authenticate a request.

        Args:
            authorization: Authorization header value

        Returns:
            AuthResult on success; raises an ApiError subclass on failure
        """
        ...
