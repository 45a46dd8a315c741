"""
Posts Module - Black Box Interface

Purpose: Sanitize post payloads and hand them to the content host
Interface: PostService.create(), ContentHost protocol, create_content_host()
Hidden: Sanitization rules, WordPress REST details

The content host can be swapped (WordPress, in-memory, anything else
implementing ContentHost) without affecting other modules.
"""

from .host import (
    ContentHost,
    ContentHostError,
    InMemoryContentHost,
    WordPressContentHost,
    create_content_host,
)

__all__ = [
    "ContentHost",
    "ContentHostError",
    "InMemoryContentHost",
    "WordPressContentHost",
    "create_content_host",
]
