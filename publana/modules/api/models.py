"""
Publana shared data models.

These models define the structure of all data passed between
components in the Publana system.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from publana.modules.posts.sanitize import coerce_author, sanitize_post_html, sanitize_text_field

# Request Models (API Input)


class CreatePostRequest(BaseModel):
    """
    Request to create a post.

    Every field is optional at parse time and normalised by its validator;
    an empty title is rejected by the post service, not here.
    """

    title: str = Field(default="", description="Post title (plain text)")
    content: str = Field(default="", description="Post body (HTML, allow-listed)")
    status: str = Field(default="publish", description="Post status, passed to the host as-is")
    author: int = Field(default=1, description="Author user id", ge=0)

    @field_validator("title", mode="before")
    @classmethod
    def sanitize_title(cls, v: Any) -> str:
        return sanitize_text_field(v)

    @field_validator("content", mode="before")
    @classmethod
    def sanitize_content(cls, v: Any) -> str:
        return sanitize_post_html(v)

    @field_validator("status", mode="before")
    @classmethod
    def sanitize_status(cls, v: Any) -> str:
        if v is None:
            return "publish"
        return sanitize_text_field(v)

    @field_validator("author", mode="before")
    @classmethod
    def normalize_author(cls, v: Any) -> int:
        return coerce_author(v)


# Response Models (API Output)


class PostCreatedData(BaseModel):
    """Links for a newly created post, as reported by the content host."""

    post_id: int
    permalink: str
    edit_link: Optional[str] = None


class PostCreatedResponse(BaseModel):
    success: bool = True
    message: str = "Post created successfully."
    data: PostCreatedData


class ValidateResponse(BaseModel):
    success: bool = True
    message: str = "Token is valid."
    brand: str
    timestamp: str = Field(..., description="Current server time, ISO-8601")


class ErrorData(BaseModel):
    status: int


class ErrorResponse(BaseModel):
    code: str
    message: str
    data: ErrorData


# Admin Models


class TokenEntry(BaseModel):
    index: int
    token: str


class TokenListResponse(BaseModel):
    tokens: List[TokenEntry]
    count: int


class TokenCreatedResponse(BaseModel):
    token: str
    created_at: str
    message: str = "New token generated successfully."
