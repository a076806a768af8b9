"""Unit tests for session identity resolution."""

import pytest

from src.schemas.auth import TokenPayload
from src.schemas.session import ANONYMOUS, Identity, Session, SessionUser, resolve_identity


class TestResolveIdentity:
    """Tests for resolve_identity."""

    def test_none_session_is_anonymous(self) -> None:
        assert resolve_identity(None) is ANONYMOUS

    def test_session_without_user_is_anonymous(self) -> None:
        assert resolve_identity(Session()) is ANONYMOUS

    @pytest.mark.parametrize("user_id", [None, ""])
    def test_user_without_id_is_anonymous(self, user_id: str | None) -> None:
        assert resolve_identity(Session(user=SessionUser(id=user_id))) is ANONYMOUS

    def test_user_with_id(self) -> None:
        session = Session(user=SessionUser(id="u1", email="alice@example.com"))

        assert resolve_identity(session) == Identity(user_id="u1")

    def test_session_is_read_only(self) -> None:
        session = Session(user=SessionUser(id="u1"))

        with pytest.raises(Exception):
            session.user = None  # type: ignore[misc]


class TestTokenPayloadToSession:
    def test_builds_session_from_claims(self) -> None:
        payload = TokenPayload(sub="u1", email="a@example.com", role="authenticated", exp=2, iat=1)

        session = payload.to_session(access_token="raw-token")

        assert session.user == SessionUser(id="u1", email="a@example.com", role="authenticated")
        assert session.access_token == "raw-token"
        assert resolve_identity(session) == Identity(user_id="u1")

    def test_token_is_hidden_from_repr(self) -> None:
        session = TokenPayload(sub="u1", exp=2, iat=1).to_session(access_token="raw-token")

        assert "raw-token" not in repr(session)
