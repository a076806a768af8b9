"""Profile model type definitions for database operations."""

from typing import Any

# A row of the profiles table. Only "id" (equal to the auth user id) is
# relied on; every other column is forwarded untouched.
Profile = dict[str, Any]

PROFILE_KEY = "id"
