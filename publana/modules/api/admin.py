"""
Admin console router.

Token management for operators, authenticated with a static admin API key in
the X-API-Key header. Bearer tokens are not accepted here.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Response

from publana.modules.auth import AuthModule, AuthResult
from publana.modules.tokens import TokenConsole

from .models import ErrorResponse, TokenCreatedResponse, TokenEntry, TokenListResponse


def create_admin_router(auth_module: AuthModule, console: TokenConsole) -> APIRouter:
    """
    Create the admin token-management router.

    Args:
        auth_module: Verifies admin API keys
        console: Token console operating directly on the token store
    """
    router = APIRouter(
        prefix="/admin",
        tags=["admin"],
        responses={401: {"model": ErrorResponse, "description": "Invalid admin API key"}},
    )

    async def require_admin(
        x_api_key: Optional[str] = Header(None, description="Admin API key")
    ) -> AuthResult:
        return auth_module.verify_admin_key(x_api_key)

    @router.get("/tokens", response_model=TokenListResponse)
    async def list_tokens(
        reveal: bool = False,
        auth: AuthResult = Depends(require_admin),
    ) -> TokenListResponse:
        """List tokens, masked unless ?reveal=true."""
        entries = [
            TokenEntry(index=index, token=token)
            for index, token in await console.list(reveal=reveal)
        ]
        return TokenListResponse(tokens=entries, count=len(entries))

    @router.post("/tokens", response_model=TokenCreatedResponse, status_code=201)
    async def generate_token(auth: AuthResult = Depends(require_admin)) -> TokenCreatedResponse:
        """Generate a new token. The full value is only returned here."""
        token, created_at = await console.generate()
        return TokenCreatedResponse(token=token, created_at=created_at)

    @router.delete("/tokens/{token}", status_code=204)
    async def revoke_token(token: str, auth: AuthResult = Depends(require_admin)) -> Response:
        """Revoke a token. Unknown tokens are ignored."""
        await console.revoke(token.strip())
        return Response(status_code=204)

    return router
