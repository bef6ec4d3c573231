from uuid import UUID

from blognote.core.core import Service
from blognote.core.modules.post.models import Post
from blognote.core.modules.session.models import AuthContext
from blognote.core.modules.user.models import User
from blognote.errors import AuthenticationError, NotFoundError


class AccessService(Service):
    def ensure_authenticated(self, auth: AuthContext) -> UUID:
        """Ensure the request carries a valid identity and return the user ID."""
        if not auth.is_authenticated or auth.user_id is None:
            raise AuthenticationError("Not authenticated")
        return auth.user_id

    async def get_acting_user(self, auth: AuthContext) -> User:
        """Resolve the authenticated user, who must still exist."""
        user_id = self.ensure_authenticated(auth)
        try:
            return await self.core.services.user.get_user(user_id)
        except NotFoundError as e:
            raise AuthenticationError("Invalid user") from e

    def ensure_post_owner(self, auth: AuthContext, post: Post) -> None:
        """Ensure the authenticated user created the post."""
        user_id = self.ensure_authenticated(auth)
        if post.creator_id != user_id:
            raise AuthenticationError("Invalid authentication")
