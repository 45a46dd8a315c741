"""
Post creation.

PostService normalises the request payload, rejects empty titles and hands
the post to the content host. Any host error or timeout surfaces as
CreationFailed; nothing is retried.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from publana.errors import CreationFailed, MissingTitle
from publana.modules.api.models import CreatePostRequest, PostCreatedData

from .host import ContentHost, ContentHostError

logger = logging.getLogger(__name__)

POST_TYPE = "post"


class PostService:
    """Validates post payloads and delegates creation to the content host."""

    def __init__(self, content_host: ContentHost, timeout: Optional[float] = 30.0):
        """
        Initialize post service.

        Args:
            content_host: Host owning post storage
            timeout: Upper bound in seconds for each host call (None disables)
        """
        self.host = content_host
        self.timeout = timeout

    @staticmethod
    def parse(payload: Any) -> CreatePostRequest:
        """Normalise a decoded JSON body. Non-object bodies count as empty."""
        if not isinstance(payload, dict):
            payload = {}
        return CreatePostRequest.model_validate(payload)

    async def _call_host(self, coro):
        return await asyncio.wait_for(coro, timeout=self.timeout)

    async def create(self, payload: Dict[str, Any]) -> PostCreatedData:
        """
        Create a post from a JSON payload.

        Args:
            payload: Decoded request body

        Returns:
            PostCreatedData with the host's id, permalink and edit link

        Raises:
            MissingTitle: Title empty after sanitization
            CreationFailed: Host rejected the post, failed, or timed out
        """
        request = self.parse(payload)
        if not request.title:
            raise MissingTitle()

        try:
            post_id = await self._call_host(
                self.host.create_post(
                    title=request.title,
                    content=request.content,
                    status=request.status,
                    author=request.author,
                    post_type=POST_TYPE,
                )
            )
            permalink = await self._call_host(self.host.get_permalink(post_id))
            edit_link = await self._call_host(self.host.get_edit_link(post_id))
        except ContentHostError as e:
            logger.error(f"Content host rejected post '{request.title}': {e.message}")
            raise CreationFailed(e.message) from e
        except asyncio.TimeoutError as e:
            logger.error(f"Content host timed out after {self.timeout}s creating '{request.title}'")
            raise CreationFailed(f"content host did not respond within {self.timeout} seconds") from e

        logger.info(f"Created post {post_id} with status '{request.status}'")
        return PostCreatedData(post_id=post_id, permalink=permalink, edit_link=edit_link)
