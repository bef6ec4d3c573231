from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

import structlog
from pymongo import AsyncMongoClient

from blognote.config import Config
from blognote.core.core import Core
from blognote.core.modules.post.models import Post, PostInput, PostsPage, PostView
from blognote.core.modules.post.validators import ensure_valid_post_input
from blognote.core.modules.session.models import AuthContext, AuthToken, LoginResult
from blognote.core.modules.user.models import UserView
from blognote.core.pagination import page_window
from blognote.errors import AuthenticationError

logger = structlog.get_logger(__name__)

# Same message for unknown email and wrong password
LOGIN_FAILED_MESSAGE = "Invalid email or password"


class App:
    """Facade for all application operations, validates permissions before delegating to Core."""

    def __init__(self, config: Config, mongo_client: AsyncMongoClient[dict[str, Any]] | None = None) -> None:
        self._core = Core(config, mongo_client)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def get_auth_context(self, auth_token: AuthToken | None) -> AuthContext:
        """Derive request identity from a bearer token."""
        return self._core.services.session.get_auth_context(auth_token)

    async def create_user(self, email: str, name: str, password: str) -> UserView:
        """Register a new user (public)."""
        user = await self._core.services.user.create_user(email, name, password)
        return UserView.from_domain(user)

    async def login(self, email: str, password: str) -> LoginResult:
        """Authenticate user and issue a session token (public)."""
        user = await self._core.services.user.find_user_by_email(email)
        if user is None:
            logger.info("login_failed", reason="no_user")
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)
        if not await self._core.services.user.verify_password(user, password):
            logger.info("login_failed", reason="password_mismatch", user_id=user.id)
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)

        token = self._core.services.session.issue_token(user)
        return LoginResult(token=token, user_id=user.id)

    async def create_post(self, auth: AuthContext, post_input: PostInput) -> PostView:
        """Create a post owned by the current user."""
        self._core.services.access.ensure_authenticated(auth)
        ensure_valid_post_input(post_input)
        creator = await self._core.services.access.get_acting_user(auth)
        post = await self._core.services.post.create_post(creator, post_input)
        return await self._post_view(post)

    async def get_posts(self, auth: AuthContext, page: int | None = None) -> PostsPage:
        """Get one page of posts, newest first, with the overall total."""
        self._core.services.access.ensure_authenticated(auth)
        window = page_window(page, self._core.config.posts_per_page)
        total = await self._core.services.post.count_posts()
        if window.offset >= total:
            # Past the end; an offset this large may not even fit a BSON int64
            return PostsPage(posts=[], total_posts=total)
        posts = await self._core.services.post.list_posts(window.offset, window.limit)
        creators = await self._core.services.user.get_users(post.creator_id for post in posts)
        return PostsPage(
            posts=[PostView.from_domain(post, creators[post.creator_id]) for post in posts],
            total_posts=total,
        )

    async def get_post(self, auth: AuthContext, post_id: UUID) -> PostView:
        self._core.services.access.ensure_authenticated(auth)
        post = await self._core.services.post.get_post(post_id)
        return await self._post_view(post)

    async def edit_post(self, auth: AuthContext, post_id: UUID, post_input: PostInput) -> PostView:
        """Update a post (creator only)."""
        self._core.services.access.ensure_authenticated(auth)
        post = await self._core.services.post.get_post(post_id)
        self._core.services.access.ensure_post_owner(auth, post)
        updated = await self._core.services.post.update_post(post.id, post_input)
        return await self._post_view(updated)

    # === Private resolver methods ===
    async def _post_view(self, post: Post) -> PostView:
        """Resolve the post's creator and build the API view."""
        creator = await self._core.services.user.get_user(post.creator_id)
        return PostView.from_domain(post, creator)
