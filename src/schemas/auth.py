"""Authentication schemas for JWT tokens."""

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.session import Session, SessionUser


class TokenPayload(BaseModel):
    """JWT token payload structure for Supabase tokens.

    Represents the claims contained in a Supabase-issued JWT.
    Used for validation and extraction of user information.
    """

    model_config = ConfigDict(from_attributes=True)

    sub: str = Field(description="Subject - the user's id")
    email: str | None = Field(default=None, description="User's email address")
    role: str | None = Field(default=None, description="User's role")
    exp: int = Field(description="Expiration timestamp (Unix epoch)")
    iat: int = Field(description="Issued at timestamp (Unix epoch)")
    aud: str | None = Field(default=None, description="Audience - intended recipient")
    iss: str | None = Field(default=None, description="Issuer - token issuer URL")

    def to_session(self, access_token: str) -> Session:
        """Build the request session described by this token.

        Args:
            access_token: The raw token the claims were decoded from.

        Returns:
            Session: Session carrying the token's user.
        """
        return Session(
            user=SessionUser(id=self.sub, email=self.email, role=self.role),
            access_token=access_token,
        )
