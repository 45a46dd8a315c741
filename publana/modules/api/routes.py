"""
Publana API route table.

Two routes, both gated by bearer-token authentication:
- POST {namespace}/posts    create a post on the content host
- GET  {namespace}/validate confirm a token is valid
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request

from publana.modules.auth import AuthResult, Authenticator
from publana.modules.posts.service import PostService

from .models import ErrorResponse, PostCreatedResponse, ValidateResponse

logger = logging.getLogger(__name__)

AUTH_ERRORS = {401: {"model": ErrorResponse, "description": "Unauthorized or invalid token"}}


def create_api_router(
    authenticator: Authenticator,
    post_service: PostService,
    brand_name: str = "Publana",
) -> APIRouter:
    """
    Create the bearer-authenticated API router.

    Args:
        authenticator: Checks the Authorization header against the token store
        post_service: Handles post creation
        brand_name: Brand reported by the validate endpoint

    Returns:
        FastAPI router to be included under the API namespace
    """
    router = APIRouter(tags=["publana"])

    async def require_bearer(
        authorization: Optional[str] = Header(None, description="Bearer token")
    ) -> AuthResult:
        return await authenticator.authenticate(authorization)

    @router.post(
        "/posts",
        response_model=PostCreatedResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Post title is required"},
            500: {"model": ErrorResponse, "description": "Content host failed"},
            **AUTH_ERRORS,
        },
    )
    async def create_post(
        request: Request,
        auth: AuthResult = Depends(require_bearer),
    ) -> PostCreatedResponse:
        """
        Create a post via the content host.

        Body: {title, content?, status?, author?}. The body is read directly so
        that a missing or unparsable body is treated as an empty payload.
        """
        try:
            payload = await request.json()
        except ValueError:
            payload = {}

        data = await post_service.create(payload)
        return PostCreatedResponse(data=data)

    @router.get("/validate", response_model=ValidateResponse, responses=AUTH_ERRORS)
    async def validate_token(auth: AuthResult = Depends(require_bearer)) -> ValidateResponse:
        """Token validation endpoint."""
        return ValidateResponse(
            brand=brand_name,
            timestamp=datetime.now().astimezone().isoformat(timespec="seconds"),
        )

    return router
