"""Loads the profile owned by the current session."""

import logging
import re
from dataclasses import dataclass

import httpx
from postgrest.exceptions import APIError as PostgrestAPIError
from supabase import Client

from src.models.profile import PROFILE_KEY, Profile
from src.schemas.profile import LoadResult
from src.schemas.session import Anonymous, Session, resolve_identity

logger = logging.getLogger(__name__)

# PostgREST error codes
NOT_SINGLE_ROW_CODE = "PGRST116"
INSUFFICIENT_PRIVILEGE_CODE = "42501"

_ROW_COUNT_PATTERN = re.compile(r"(\d+)\s+rows?")


class ProfileLoadError(Exception):
    """Base class for failures while fetching a profile from the store."""

    def __init__(self, message: str, user_id: str) -> None:
        self.message = message
        self.user_id = user_id
        super().__init__(message)


class ProfileNotSingleRowError(ProfileLoadError):
    """The store did not find exactly one profile for the user.

    row_count is None when the store did not report how many rows matched.
    """

    def __init__(self, user_id: str, row_count: int | None) -> None:
        self.row_count = row_count
        count = "an unknown number of" if row_count is None else str(row_count)
        super().__init__(f"Expected exactly one profile, store matched {count} rows", user_id)

    @property
    def is_missing(self) -> bool:
        """True when no profile matched (or the count is unknown)."""
        return not self.row_count

    @property
    def is_duplicated(self) -> bool:
        return self.row_count is not None and self.row_count > 1


class ProfilePermissionError(ProfileLoadError):
    """The store refused the read for the caller's credentials."""


class ProfileStoreError(ProfileLoadError):
    """The store or the transport to it failed."""


@dataclass(frozen=True)
class ProfileFound:
    profile: Profile


@dataclass(frozen=True)
class ProfileNotFound:
    user_id: str


@dataclass(frozen=True)
class ProfileLoadFailed:
    user_id: str
    error: ProfileLoadError


ProfileOutcome = ProfileFound | ProfileNotFound | ProfileLoadFailed


def _parse_row_count(details: str | None) -> int | None:
    if not details:
        return None
    match = _ROW_COUNT_PATTERN.search(details)
    return int(match.group(1)) if match else None


def translate_store_error(exc: Exception, user_id: str) -> ProfileLoadError:
    """Map a store client exception onto the profile error taxonomy.

    Args:
        exc: Exception raised by the Supabase client.
        user_id: The user whose profile was requested.

    Returns:
        ProfileLoadError: The matching profile error.
    """
    if isinstance(exc, PostgrestAPIError):
        if exc.code == NOT_SINGLE_ROW_CODE:
            return ProfileNotSingleRowError(user_id, _parse_row_count(exc.details))
        if exc.code == INSUFFICIENT_PRIVILEGE_CODE:
            return ProfilePermissionError(exc.message or "Permission denied", user_id)
        return ProfileStoreError(f"Store rejected profile query: {exc.message}", user_id)
    return ProfileStoreError(f"Store request failed: {exc}", user_id)


class ProfileLoader:
    """Fetches the caller's profile through a store client scoped to the caller.

    The client is passed in rather than looked up so that row level security
    is always evaluated against the requesting user.
    """

    def __init__(self, client: Client, table: str = "profiles") -> None:
        """Initialize the loader.

        Args:
            client: Supabase client bound to the caller's authorization.
            table: Name of the profiles table.
        """
        self.client = client
        self.table = table

    async def _fetch(self, user_id: str) -> Profile:
        logger.debug("Fetching profile for user %s from %s", user_id, self.table)
        try:
            response = (
                self.client.table(self.table)
                .select("*")
                .eq(PROFILE_KEY, user_id)
                .single()
                .execute()
            )
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise translate_store_error(e, user_id) from e
        return response.data

    async def load(self, session: Session | None) -> LoadResult:
        """Load the profile owned by the session's user.

        Anonymous sessions short-circuit to an empty result without touching
        the store. Store failures are not recovered here.

        Args:
            session: The request session, possibly None.

        Returns:
            LoadResult: The profile row, or profile=None for anonymous sessions.

        Raises:
            ProfileNotSingleRowError: Zero or several profiles matched.
            ProfilePermissionError: The store denied the read.
            ProfileStoreError: Any other store or transport failure.
        """
        identity = resolve_identity(session)
        if isinstance(identity, Anonymous):
            logger.debug("Anonymous session, skipping profile lookup")
            return LoadResult(profile=None)

        profile = await self._fetch(identity.user_id)
        return LoadResult(profile=profile)

    async def load_outcome(self, session: Session | None) -> ProfileOutcome | None:
        """Load the profile and report every result as a value.

        Args:
            session: The request session, possibly None.

        Returns:
            ProfileOutcome | None: None for anonymous sessions, otherwise
            ProfileFound, ProfileNotFound (no row) or ProfileLoadFailed.
        """
        if isinstance(resolve_identity(session), Anonymous):
            return None

        try:
            result = await self.load(session)
        except ProfileNotSingleRowError as e:
            if e.is_missing:
                return ProfileNotFound(user_id=e.user_id)
            return ProfileLoadFailed(user_id=e.user_id, error=e)
        except ProfileLoadError as e:
            logger.debug("Profile load failed for user %s: %s", e.user_id, e.message)
            return ProfileLoadFailed(user_id=e.user_id, error=e)
        return ProfileFound(profile=result.profile)
