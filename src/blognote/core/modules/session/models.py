"""Session token models."""

from typing import NewType
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

AuthToken = NewType("AuthToken", str)


class TokenClaims(BaseModel):
    """Identity claims carried by a signed session token."""

    email: str
    user_id: UUID
    iat: int  # Issued at, unix seconds
    exp: int  # Expires at, unix seconds

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthContext(BaseModel):
    """Per-request identity derived from the bearer token. Never persisted."""

    is_authenticated: bool = False
    user_id: UUID | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def anonymous(cls) -> "AuthContext":
        return cls()

    @classmethod
    def for_user(cls, user_id: UUID) -> "AuthContext":
        return cls(is_authenticated=True, user_id=user_id)


class LoginResult(BaseModel):
    """Outcome of a successful login."""

    token: str = Field(..., description="Bearer token for subsequent requests")
    user_id: UUID = Field(..., description="ID of the authenticated user")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
