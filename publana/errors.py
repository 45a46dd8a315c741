"""
Publana API error taxonomy.

Every error maps to a fixed HTTP status, a machine-readable code and a
human-readable message. They are terminal for the request.
"""

from typing import Any, Dict


class ApiError(Exception):
    """Base class for errors rendered as `{code, message, data: {status}}`."""

    code = "publana_error"
    status = 500
    default_message = "Internal error."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "data": {"status": self.status}}


class Unauthorized(ApiError):
    """No Authorization header, or not a Bearer credential."""

    code = "publana_unauthorized"
    status = 401
    default_message = "Authentication required."


class InvalidToken(ApiError):
    """Well-formed bearer credential that is not in the token store."""

    code = "publana_invalid_token"
    status = 401
    default_message = "Invalid or expired authentication."


class AdminUnauthorized(ApiError):
    code = "publana_admin_unauthorized"
    status = 401
    default_message = "Invalid or missing admin API key."


class MissingTitle(ApiError):
    code = "publana_missing_title"
    status = 400
    default_message = "Post title is required."


class CreationFailed(ApiError):
    """The content host refused or failed to create the post."""

    code = "publana_creation_failed"
    status = 500

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Failed to create post: {detail}")
