"""
API Module - Black Box Interface

Purpose: HTTP routing and request/response models
Interface: create_api_router(), create_admin_router(), request/response models
Hidden: Header extraction, body parsing, response shaping

The API module only orchestrates - it contains no business logic.
All logic is delegated to appropriate modules. Routers are imported from
their own modules so that models can be shared without import cycles.
"""

from .models import (
    CreatePostRequest,
    ErrorResponse,
    PostCreatedData,
    PostCreatedResponse,
    TokenCreatedResponse,
    TokenListResponse,
    ValidateResponse,
)

__all__ = [
    "CreatePostRequest",
    "ErrorResponse",
    "PostCreatedData",
    "PostCreatedResponse",
    "TokenCreatedResponse",
    "TokenListResponse",
    "ValidateResponse",
]
