"""Database model type definitions."""

from src.models.profile import PROFILE_KEY, Profile

__all__ = [
    "Profile",
    "PROFILE_KEY",
]
