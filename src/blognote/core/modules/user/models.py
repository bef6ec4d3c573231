from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from blognote.core.db import MongoModel
from blognote.utils import now


class User(MongoModel):
    """User domain model with credentials.

    Indexed on email - unique.
    """

    email: str
    name: str
    password_hash: str  # bcrypt hash
    posts: list[UUID] = Field(default_factory=list)  # Owned posts, oldest first
    created_at: datetime = Field(default_factory=now)


class UserView(BaseModel):
    """User account information (API representation, never carries the password hash)."""

    id: UUID = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    name: str = Field(..., description="Display name")
    posts: list[UUID] = Field(default_factory=list, description="IDs of posts created by the user")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, email=user.email, name=user.name, posts=list(user.posts))
