import jwt
import structlog
from jwt.exceptions import InvalidTokenError
from pydantic import ValidationError as PydanticValidationError

from blognote.core.core import Service
from blognote.core.modules.session.models import AuthContext, AuthToken, TokenClaims
from blognote.core.modules.user.models import User
from blognote.errors import AuthenticationError
from blognote.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Issues and verifies stateless signed session tokens.

    Nothing is stored server side: a token is valid as long as its
    signature checks out and it has not expired.
    """

    def issue_token(self, user: User) -> AuthToken:
        """Sign a token for the user, expiring exactly one TTL after issuance."""
        config = self.core.config
        issued_at = int(now().timestamp())
        payload = {
            "email": user.email,
            "userId": str(user.id),
            "iat": issued_at,
            "exp": issued_at + config.token_ttl_seconds,
        }
        return AuthToken(jwt.encode(payload, config.jwt_secret_key, algorithm=config.jwt_algorithm))

    def decode_token(self, auth_token: AuthToken) -> TokenClaims:
        """Verify signature and expiry and return the claims."""
        config = self.core.config
        try:
            payload = jwt.decode(
                auth_token,
                config.jwt_secret_key,
                algorithms=[config.jwt_algorithm],
                options={"require": ["exp", "iat"]},
            )
        except InvalidTokenError as e:
            logger.debug("token_rejected", error=str(e))
            raise AuthenticationError("Invalid or expired token") from e

        try:
            return TokenClaims.model_validate(payload)
        except PydanticValidationError as e:
            logger.debug("token_claims_invalid", error=str(e))
            raise AuthenticationError("Invalid or expired token") from e

    def get_auth_context(self, auth_token: AuthToken | None) -> AuthContext:
        """Derive the request's identity. Missing or bad tokens give an anonymous context."""
        if not auth_token:
            return AuthContext.anonymous()
        try:
            claims = self.decode_token(auth_token)
        except AuthenticationError:
            return AuthContext.anonymous()
        return AuthContext.for_user(claims.user_id)
