from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from blognote.app import App
from blognote.core.modules.session.models import AuthContext, AuthToken
from blognote.errors import AuthenticationError

bearer_scheme = HTTPBearer(auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_auth_context(
    app: Annotated[App, Depends(get_app)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> AuthContext:
    """Derive identity from the Authorization Bearer header.

    Never rejects the request itself: operations that need a user fail on
    an anonymous context, public ones ignore it.
    """
    if credentials and credentials.scheme.lower() == "bearer":
        return app.get_auth_context(AuthToken(credentials.credentials))
    return AuthContext.anonymous()


async def require_auth(auth: Annotated[AuthContext, Depends(get_auth_context)]) -> AuthContext:
    """Reject anonymous requests.

    Dependencies are resolved before the request body is validated, so a
    protected route answers 401 even when the body is malformed.
    """
    if not auth.is_authenticated:
        raise AuthenticationError("Not authenticated")
    return auth


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
AuthContextDep = Annotated[AuthContext, Depends(get_auth_context)]
AuthenticatedDep = Annotated[AuthContext, Depends(require_auth)]
