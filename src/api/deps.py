"""FastAPI dependency injection functions."""

from typing import Annotated

from fastapi import Depends, Header
from supabase import Client

from src.api.middleware.auth import AuthError, AuthErrorCode, decode_jwt
from src.api.middleware.error_handler import AuthenticationError
from src.core.config import get_settings
from src.core.supabase import create_scoped_client
from src.schemas.session import Session
from src.services.profile_loader import ProfileLoader


async def get_session(
    authorization: Annotated[str | None, Header(description="Bearer token")] = None,
) -> Session:
    """Resolve the request session from the Authorization header.

    A missing header yields an anonymous session. A header that is present
    but malformed, expired or badly signed is rejected.

    Args:
        authorization: Optional Authorization header value.

    Returns:
        Session: The request session.

    Raises:
        AuthenticationError: 401 if a token is present but invalid.
    """
    if not authorization:
        return Session()

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Invalid authorization header format. Expected: Bearer <token>")

    token = parts[1]

    try:
        payload = decode_jwt(token)
    except AuthError as e:
        if e.code == AuthErrorCode.TOKEN_EXPIRED:
            raise AuthenticationError("Token has expired") from e
        raise AuthenticationError("Invalid access token") from e

    return payload.to_session(access_token=token)


CurrentSession = Annotated[Session, Depends(get_session)]


def get_scoped_client(session: CurrentSession) -> Client:
    """Build a store client carrying the caller's credentials."""
    return create_scoped_client(session.access_token)


ScopedClient = Annotated[Client, Depends(get_scoped_client)]


def get_profile_loader(client: ScopedClient) -> ProfileLoader:
    return ProfileLoader(client, table=get_settings().profiles_table)


ProfileLoaderDep = Annotated[ProfileLoader, Depends(get_profile_loader)]
