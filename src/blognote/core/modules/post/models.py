from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from blognote.core.db import MongoModel
from blognote.core.modules.user.models import User, UserView
from blognote.utils import now, to_iso


class Post(MongoModel):
    """Blog post owned by the user who created it.

    Indexed on created_at for newest-first listing.
    """

    title: str
    content: str
    image_url: str | None = None
    creator_id: UUID  # Set once on creation, never changed
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)


class PostInput(BaseModel):
    """Post payload for create and edit.

    On edit, leaving out image_url keeps the stored image while an explicit
    null clears it; the two are told apart through `model_fields_set`.
    """

    title: str
    content: str
    image_url: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @property
    def has_image_url(self) -> bool:
        """Whether the caller supplied image_url at all."""
        return "image_url" in self.model_fields_set


class PostView(BaseModel):
    """Post with its creator resolved (API representation)."""

    id: UUID
    title: str
    content: str
    image_url: str | None
    creator: UserView
    created_at: str = Field(..., description="ISO-8601 creation timestamp")
    updated_at: str = Field(..., description="ISO-8601 last update timestamp")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_domain(cls, post: Post, creator: User) -> "PostView":
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            image_url=post.image_url,
            creator=UserView.from_domain(creator),
            created_at=to_iso(post.created_at),
            updated_at=to_iso(post.updated_at),
        )


class PostsPage(BaseModel):
    """One page of posts plus the total across all pages."""

    posts: list[PostView]
    total_posts: int = Field(..., ge=0)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
