"""
Content host adapters.

The content host owns post storage. Publana only creates posts and reads
back their links:
- WordPressContentHost talks to the WordPress REST API
- InMemoryContentHost keeps posts in process for development and tests
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx

from publana.config.provider import ContentHostConfig

logger = logging.getLogger(__name__)

# Statuses WordPress registers for the "post" type
REGISTERED_STATUSES = frozenset({"publish", "future", "draft", "pending", "private"})

REST_BASES = {"post": "posts", "page": "pages"}


class ContentHostError(Exception):
    """Raised when the content host refuses or fails an operation."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code
        super().__init__(message)


class ContentHost(Protocol):
    """Protocol for content hosts."""

    async def create_post(
        self, title: str, content: str, status: str, author: int, post_type: str = "post"
    ) -> int:
        """Create a post and return its identifier. Raises ContentHostError."""
        ...

    async def get_permalink(self, post_id: int) -> str:
        """Public URL of the post."""
        ...

    async def get_edit_link(self, post_id: int) -> str:
        """Admin edit URL of the post."""
        ...

    async def close(self) -> None:
        ...


@dataclass
class StoredPost:
    id: int
    title: str
    content: str
    status: str
    author: int
    post_type: str = "post"


class InMemoryContentHost:
    """Content host keeping posts in a dict, with WordPress-like status checks."""

    def __init__(self, site_url: str = "http://localhost"):
        self.site_url = site_url.rstrip("/")
        self.posts: Dict[int, StoredPost] = {}
        self._ids = itertools.count(1)

    async def create_post(
        self, title: str, content: str, status: str, author: int, post_type: str = "post"
    ) -> int:
        # WordPress falls back to draft for an empty status
        status = status or "draft"
        if status not in REGISTERED_STATUSES:
            raise ContentHostError("Invalid post status.", code="invalid_status")

        post_id = next(self._ids)
        self.posts[post_id] = StoredPost(
            id=post_id,
            title=title,
            content=content,
            status=status,
            author=author,
            post_type=post_type,
        )
        return post_id

    async def get_permalink(self, post_id: int) -> str:
        return f"{self.site_url}/?p={post_id}"

    async def get_edit_link(self, post_id: int) -> str:
        return f"{self.site_url}/wp-admin/post.php?post={post_id}&action=edit"

    async def close(self) -> None:
        return None


class WordPressContentHost:
    """
    Content host backed by the WordPress REST API.

    Authenticates with an application password over HTTP basic auth.
    """

    def __init__(
        self,
        base_url: str,
        username: Optional[str] = None,
        app_password: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize WordPress client.

        Args:
            base_url: Site root, e.g. https://blog.example.com
            username: WordPress user owning the application password
            app_password: Application password
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        auth = httpx.BasicAuth(username, app_password) if username and app_password else None
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}/wp-json/wp/v2",
            auth=auth,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )
        self._links: Dict[int, str] = {}

    @staticmethod
    def _error_message(response: httpx.Response) -> ContentHostError:
        try:
            body = response.json()
        except ValueError:
            body = {}

        if isinstance(body, dict) and body.get("message"):
            return ContentHostError(str(body["message"]), code=body.get("code"))
        return ContentHostError(f"Content host returned HTTP {response.status_code}")

    @staticmethod
    def _read_object(response: httpx.Response) -> Dict[str, Any]:
        """Decode a successful response body, which must be a JSON object."""
        try:
            body = response.json()
        except ValueError as e:
            raise ContentHostError("Content host returned an unreadable response") from e

        if not isinstance(body, dict):
            raise ContentHostError("Content host returned an unreadable response")
        return body

    async def create_post(
        self, title: str, content: str, status: str, author: int, post_type: str = "post"
    ) -> int:
        endpoint = f"/{REST_BASES.get(post_type, post_type)}"
        payload = {"title": title, "content": content, "status": status, "author": author}

        try:
            response = await self._client.post(endpoint, json=payload)
        except httpx.HTTPError as e:
            raise ContentHostError(f"Content host request failed: {e}") from e

        if response.status_code >= 400:
            raise self._error_message(response)

        body = self._read_object(response)
        try:
            post_id = int(body["id"])
        except (KeyError, TypeError, ValueError) as e:
            raise ContentHostError("Content host returned an unreadable response") from e
        if body.get("link"):
            self._links[post_id] = body["link"]

        logger.info(f"WordPress created post {post_id}")
        return post_id

    async def get_permalink(self, post_id: int) -> str:
        if post_id in self._links:
            return self._links[post_id]

        try:
            response = await self._client.get(f"/posts/{post_id}", params={"context": "edit"})
        except httpx.HTTPError as e:
            raise ContentHostError(f"Content host request failed: {e}") from e

        if response.status_code >= 400:
            raise self._error_message(response)

        link = self._read_object(response).get("link")
        if not isinstance(link, str) or not link:
            raise ContentHostError("Content host returned an unreadable response")
        self._links[post_id] = link
        return link

    async def get_edit_link(self, post_id: int) -> str:
        return f"{self.base_url}/wp-admin/post.php?post={post_id}&action=edit"

    async def close(self) -> None:
        await self._client.aclose()


def create_content_host(config: ContentHostConfig) -> ContentHost:
    """Build the content host selected by configuration."""
    if config.is_wordpress:
        logger.info(f"Using WordPress content host at {config.wordpress_url}")
        return WordPressContentHost(
            base_url=config.wordpress_url,
            username=config.wordpress_username,
            app_password=config.wordpress_app_password,
            timeout=config.timeout,
        )

    logger.info("Using in-memory content host")
    return InMemoryContentHost(site_url=config.site_url)
