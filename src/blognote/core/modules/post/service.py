from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from blognote.core.core import Service
from blognote.core.modules.post.models import Post, PostInput
from blognote.core.modules.post.validators import ensure_valid_post_input
from blognote.core.modules.user.models import User
from blognote.errors import NotFoundError
from blognote.utils import now

logger = structlog.get_logger(__name__)

# Newest first; _id breaks ties between posts created in the same instant
NEWEST_FIRST = [("created_at", -1), ("_id", -1)]


class PostService(Service):
    """Manages blog posts."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("posts")

    async def on_start(self) -> None:
        """Create indexes for newest-first listing and creator lookup."""
        await self._collection.create_index(NEWEST_FIRST)
        await self._collection.create_index([("creator_id", 1)])

    async def get_post(self, post_id: UUID) -> Post:
        doc = await self._collection.find_one({"_id": post_id})
        if doc is None:
            raise NotFoundError("No post found")
        return Post.model_validate(doc)

    async def list_posts(self, offset: int, limit: int) -> list[Post]:
        """Get a window of all posts, newest first."""
        cursor = self._collection.find({}).sort(NEWEST_FIRST).skip(offset).limit(limit)
        posts = await Post.list_cursor(cursor)
        logger.debug("list_posts", offset=offset, limit=limit, count=len(posts))
        return posts

    async def count_posts(self) -> int:
        return await self._collection.count_documents({})

    async def create_post(self, creator: User, post_input: PostInput) -> Post:
        """Insert a post and link it from the creator's post list.

        The two writes are not atomic. If linking fails the inserted post is
        deleted again and the error propagates, so no orphan is left behind.

        Expects a payload that already passed `ensure_valid_post_input`.
        """
        timestamp = now()
        post = Post(
            title=post_input.title,
            content=post_input.content,
            image_url=post_input.image_url,
            creator_id=creator.id,
            created_at=timestamp,
            updated_at=timestamp,
        )
        await self._collection.insert_one(post.to_mongo())

        try:
            await self.core.services.user.add_post(creator.id, post.id)
        except Exception:
            logger.warning("post_link_failed", post_id=post.id, user_id=creator.id)
            await self._collection.delete_one({"_id": post.id})
            raise

        logger.info("post_created", post_id=post.id, user_id=creator.id)
        return post

    async def update_post(self, post_id: UUID, post_input: PostInput) -> Post:
        """Replace title and content; replace image_url only when it was supplied.

        Raises:
            ValidationError: If the payload is invalid
            NotFoundError: If the post does not exist
        """
        ensure_valid_post_input(post_input)

        changes: dict[str, Any] = {
            "title": post_input.title,
            "content": post_input.content,
            "updated_at": now(),
        }
        if post_input.has_image_url:
            changes["image_url"] = post_input.image_url

        result = await self._collection.update_one({"_id": post_id}, {"$set": changes})
        if result.matched_count == 0:
            raise NotFoundError("No post found")

        logger.info("post_updated", post_id=post_id, fields=sorted(changes))
        return await self.get_post(post_id)
