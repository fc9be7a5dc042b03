from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from datetime import datetime
from typing import Optional

from .models import Role


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=2)
    phone: Optional[str] = None
    role: Role


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RefreshTokenRequest(BaseModel):
    token: Optional[str] = None


class ProfileUpdate(BaseModel):
    # Unknown keys such as email or password are ignored
    name: Optional[str] = Field(default=None, min_length=2)
    phone: Optional[str] = None
    avatar: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value: Optional[str]) -> str:
        # Only runs when name is sent; phone and avatar may still be cleared
        if value is None:
            raise ValueError("Name cannot be null")
        return value


class UserOut(BaseModel):
    """A user record without its password hash."""

    id: str
    email: str
    name: str
    phone: Optional[str] = None
    avatar: Optional[str] = None
    role: Role
    created_at: datetime = Field(alias="createdAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class MessageResponse(BaseModel):
    message: str


class AuthResponse(MessageResponse):
    user: UserOut
    token: str


class ProfileResponse(MessageResponse):
    user: UserOut


class TokenResponse(MessageResponse):
    token: str
