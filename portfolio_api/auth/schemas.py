"""Authentication and profile request/response schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from ..integrations.media import MediaRefOut


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=255)


class UpdatePasswordRequest(BaseModel):
    old_password: str = Field("", alias="oldPassword")
    new_password: str = Field("", alias="newPassword")
    confirm_new_password: str = Field("", alias="confirmNewPassword")

    model_config = {"populate_by_name": True}


class ForgotPasswordRequest(BaseModel):
    email: str = Field("", max_length=255)


class ResetPasswordRequest(BaseModel):
    new_password: str = Field("", alias="newPassword")
    confirm_new_password: str = Field("", alias="confirmNewPassword")

    model_config = {"populate_by_name": True}


class UserResponse(BaseModel):
    """Public view of a user. Never carries the password or reset fields."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    gender: str
    phone: str | None = ""
    about_me: str | None = ""
    avatar: MediaRefOut
    resume: MediaRefOut
    portfolio_url: str | None = ""
    github_url: str | None = ""
    linkedin_url: str | None = ""
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
