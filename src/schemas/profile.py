"""Profile Pydantic schemas for API response models."""

from pydantic import BaseModel, ConfigDict, Field

from src.models.profile import Profile


class LoadResult(BaseModel):
    """Result of loading the current session's profile.

    The profile row is forwarded exactly as the store returned it.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    profile: Profile | None = Field(
        default=None,
        description="The caller's profile row, or null for anonymous callers",
    )
