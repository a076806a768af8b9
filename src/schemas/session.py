"""Request session schemas and identity resolution."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class SessionUser(BaseModel):
    """User attached to a session by the auth provider."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str | None = Field(default=None, description="Opaque user identifier")
    email: str | None = Field(default=None, description="User's email address if available")
    role: str | None = Field(default=None, description="User's role if available")


class Session(BaseModel):
    """Per-request session.

    Sessions are produced by the auth layer and are read-only here. A session
    without a user (or whose user has no id) is an anonymous session.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    user: SessionUser | None = Field(default=None, description="Authenticated user, if any")
    access_token: str | None = Field(default=None, repr=False, description="Raw bearer token")


@dataclass(frozen=True)
class Identity:
    """A session that identifies a user."""

    user_id: str


@dataclass(frozen=True)
class Anonymous:
    """A session that identifies nobody."""


ANONYMOUS = Anonymous()


def resolve_identity(session: Session | None) -> Identity | Anonymous:
    """Resolve who a session belongs to.

    Args:
        session: The request session, possibly None.

    Returns:
        Identity | Anonymous: Identity when the session carries a non-empty
        user id, ANONYMOUS otherwise.
    """
    if session is None or session.user is None:
        return ANONYMOUS
    if not session.user.id:
        return ANONYMOUS
    return Identity(user_id=session.user.id)
