"""Auth Schemas — registration, login and profile payloads.

Invariants:
    - username 3-50 chars, stripped; password 8-72 chars (bcrypt input limit)
    - Profile updates only touch display_name and avatar_url
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: str = Field(
        max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
    )
    password: str = Field(min_length=8, max_length=72)
    display_name: str | None = Field(None, max_length=100)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("username must be at least 3 characters")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=72)


class ProfileUpdate(BaseModel):
    display_name: str | None = Field(None, min_length=1, max_length=100)
    avatar_url: str | None = Field(None, max_length=500)

    @field_validator("avatar_url")
    @classmethod
    def strip_avatar(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class UserResponse(BaseModel):
    """Public user data — never includes the password hash."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    display_name: str
    avatar_url: str | None = None


class AuthResponse(BaseModel):
    token: str
    user: UserResponse
