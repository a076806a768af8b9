"""Profile API routes."""

from fastapi import APIRouter

from src.api.deps import CurrentSession, ProfileLoaderDep
from src.api.middleware.error_handler import (
    APIError,
    AuthorizationError,
    IntegrityError,
    NotFoundError,
    UpstreamError,
)
from src.schemas.profile import LoadResult
from src.services.profile_loader import (
    ProfileFound,
    ProfileLoadError,
    ProfileNotFound,
    ProfileNotSingleRowError,
    ProfilePermissionError,
)

router = APIRouter(prefix="/profiles", tags=["profiles"])


def _api_error_for(error: ProfileLoadError) -> APIError:
    if isinstance(error, ProfileNotSingleRowError):
        return IntegrityError("Multiple profiles found for user")
    if isinstance(error, ProfilePermissionError):
        return AuthorizationError("Not allowed to read this profile")
    return UpstreamError("Profile store unavailable")


@router.get(
    "/me",
    response_model=LoadResult,
    summary="Get current session's profile",
    description="Returns the caller's profile, or a null profile for anonymous callers.",
    responses={
        401: {"description": "Bearer token present but invalid"},
        403: {"description": "Store denied the read"},
        404: {"description": "No profile exists for the authenticated user"},
        502: {"description": "Store unavailable"},
    },
)
async def get_my_profile(session: CurrentSession, loader: ProfileLoaderDep) -> LoadResult:
    """Load the profile owned by the current session.

    Args:
        session: The resolved request session.
        loader: Profile loader bound to the caller's store client.

    Returns:
        LoadResult: The profile, or profile=None without a signed-in user.

    Raises:
        NotFoundError: 404 if no profile matches the user.
        IntegrityError: 500 if several profiles match the user.
        AuthorizationError: 403 if the store refused the read.
        UpstreamError: 502 if the store failed.
    """
    outcome = await loader.load_outcome(session)

    if outcome is None:
        return LoadResult(profile=None)
    if isinstance(outcome, ProfileFound):
        return LoadResult(profile=outcome.profile)
    if isinstance(outcome, ProfileNotFound):
        raise NotFoundError("Profile not found")
    raise _api_error_for(outcome.error) from outcome.error
