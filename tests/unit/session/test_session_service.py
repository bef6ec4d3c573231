"""Tests for session token issuing and verification."""

from uuid import uuid4

import jwt
import pytest

from blognote.core.modules.session.models import AuthToken
from blognote.errors import AuthenticationError


@pytest.fixture
def session(core):
    return core.services.session


class TestIssueToken:
    def test_claims_carry_identity(self, session, mock_user):
        token = session.issue_token(mock_user)
        claims = session.decode_token(token)
        assert claims.email == mock_user.email
        assert claims.user_id == mock_user.id

    def test_expires_exactly_one_hour_after_issuance(self, session, mock_user):
        claims = session.decode_token(session.issue_token(mock_user))
        assert claims.exp - claims.iat == 60 * 60

    def test_signed_with_configured_secret(self, session, mock_user, config):
        token = session.issue_token(mock_user)
        payload = jwt.decode(token, config.jwt_secret_key, algorithms=["HS256"])
        assert payload["userId"] == str(mock_user.id)
        assert set(payload) == {"email", "userId", "iat", "exp"}


class TestDecodeToken:
    def test_rejects_garbage(self, session):
        with pytest.raises(AuthenticationError):
            session.decode_token(AuthToken("not-a-token"))

    def test_rejects_foreign_signature(self, session, mock_user):
        forged = jwt.encode(
            {"email": mock_user.email, "userId": str(mock_user.id), "iat": 0, "exp": 4102444800},
            "some-other-secret",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            session.decode_token(AuthToken(forged))

    def test_rejects_expired_token(self, session, mock_user, config):
        expired = jwt.encode(
            {"email": mock_user.email, "userId": str(mock_user.id), "iat": 1000, "exp": 4600},
            config.jwt_secret_key,
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            session.decode_token(AuthToken(expired))

    def test_rejects_token_without_user_id(self, session, config):
        token = jwt.encode({"email": "a@example.com", "iat": 0, "exp": 4102444800}, config.jwt_secret_key)
        with pytest.raises(AuthenticationError):
            session.decode_token(AuthToken(token))


class TestGetAuthContext:
    def test_valid_token_authenticates(self, session, mock_user):
        auth = session.get_auth_context(session.issue_token(mock_user))
        assert auth.is_authenticated is True
        assert auth.user_id == mock_user.id

    @pytest.mark.parametrize("token", [None, "", "not-a-token"])
    def test_missing_or_bad_token_is_anonymous(self, session, token):
        auth = session.get_auth_context(token)
        assert auth.is_authenticated is False
        assert auth.user_id is None

    def test_expired_token_is_anonymous(self, session, config):
        expired = jwt.encode(
            {"email": "a@example.com", "userId": str(uuid4()), "iat": 1000, "exp": 4600},
            config.jwt_secret_key,
        )
        assert session.get_auth_context(AuthToken(expired)).is_authenticated is False
