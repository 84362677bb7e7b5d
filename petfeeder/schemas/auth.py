"""Authentication schemas for API request/response validation."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LoginRequestSchema(BaseModel):
    """Request schema for logging in."""

    username: str = Field(..., min_length=3, max_length=50, examples=["admin"])
    password: str = Field(..., min_length=1)


class UserSchema(BaseModel):
    """Logged-in user as shown to the dashboard."""

    id: int
    username: str


class LoginResponseSchema(BaseModel):
    """Response schema for a successful login."""

    success: bool = True
    message: str
    user: UserSchema


class SessionResponseSchema(BaseModel):
    """Response schema for the session lookup."""

    success: bool = True
    authenticated: bool
    user: UserSchema | None = None


class ChangePasswordRequestSchema(BaseModel):
    """Request schema for changing the logged-in user's password."""

    model_config = ConfigDict(populate_by_name=True)

    old_password: str = Field(..., alias="oldPassword", min_length=1)
    new_password: str = Field(..., alias="newPassword", min_length=8)
    confirm_password: str = Field(..., alias="confirmPassword")

    @model_validator(mode="after")
    def passwords_match(self) -> "ChangePasswordRequestSchema":
        """Require the confirmation to repeat the new password."""
        if self.confirm_password != self.new_password:
            raise ValueError("confirmPassword must match newPassword")
        return self
