import asyncio
from collections.abc import Iterable
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from blognote.core.core import Service
from blognote.core.modules.user.models import User
from blognote.core.modules.user.passwords import check_password, hash_password
from blognote.core.modules.user.validators import validate_registration
from blognote.errors import ConflictError, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Manages user accounts and their credentials."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        """Create the unique email index."""
        await self._collection.create_index([("email", 1)], unique=True)

    async def get_user(self, user_id: UUID) -> User:
        doc = await self._collection.find_one({"_id": user_id})
        if doc is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return User.model_validate(doc)

    async def find_user_by_email(self, email: str) -> User | None:
        doc = await self._collection.find_one({"email": email})
        if doc is None:
            return None
        return User.model_validate(doc)

    async def has_email(self, email: str) -> bool:
        return await self._collection.count_documents({"email": email}, limit=1) > 0

    async def get_users(self, user_ids: Iterable[UUID]) -> dict[UUID, User]:
        """Fetch several users at once, keyed by ID. Unknown IDs are left out."""
        ids = list(set(user_ids))
        if not ids:
            return {}
        users = await User.list_cursor(self._collection.find({"_id": {"$in": ids}}))
        return {user.id: user for user in users}

    async def create_user(self, email: str, name: str, password: str) -> User:
        """Validate registration input and create user with hashed password.

        Raises:
            ValidationError: With every field problem at once
            ConflictError: If the email is already registered
        """
        errors = validate_registration(email, password)
        if errors:
            raise ValidationError("Invalid input", errors)

        if await self.has_email(email):
            raise ConflictError("User exists")

        password_hash = await asyncio.to_thread(hash_password, password, self.core.config.bcrypt_rounds)
        user = User(email=email, name=name, password_hash=password_hash)
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            # Lost a race with a concurrent registration of the same email
            raise ConflictError("User exists") from e

        logger.info("user_created", user_id=user.id)
        return user

    async def verify_password(self, user: User, password: str) -> bool:
        """Check password against the user's stored hash."""
        return await asyncio.to_thread(check_password, password, user.password_hash)

    async def add_post(self, user_id: UUID, post_id: UUID) -> None:
        """Append a post reference to the user's post list."""
        result = await self._collection.update_one({"_id": user_id}, {"$push": {"posts": post_id}})
        if result.matched_count == 0:
            raise NotFoundError(f"User '{user_id}' not found")
