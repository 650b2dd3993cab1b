"""User, session and auth schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

UserRole = Literal["resident", "organization"]


class OrganizationData(BaseModel):
    """Registration details kept for organization accounts."""

    cnpj: str
    contact_name: str = ""
    segment: str = ""


class UserResponse(BaseModel):
    """Public user representation."""

    id: str
    name: str
    email: str
    role: UserRole
    avatar: str | None = None
    region: str
    address: str | None = None
    phone: str | None = None
    cpf: str | None = None
    household_size: int | None = None
    organization_data: OrganizationData | None = None


class UserRecord(UserResponse):
    """Stored user including the password hash."""

    password_hash: str | None = None

    def public(self) -> UserResponse:
        """Drop credentials before returning the user to a client."""
        return UserResponse.model_validate(self.model_dump(exclude={"password_hash"}))


class Session(BaseModel):
    """Active session with an absolute expiry."""

    token: str
    user_id: str
    expires_at: datetime


class RegisterRequest(BaseModel):
    """Request body for creating an account."""

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    role: UserRole = "resident"
    region: str = Field(..., min_length=1)
    address: str | None = None
    phone: str | None = None
    household_size: int | None = Field(default=None, ge=1)
    cpf: str | None = None
    organization_data: OrganizationData | None = None


class LoginRequest(BaseModel):
    """Request body for signing in."""

    email: str
    password: str


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile."""

    model_config = {"extra": "forbid"}

    name: str | None = None
    region: str | None = None
    address: str | None = None
    phone: str | None = None
    household_size: int | None = Field(default=None, ge=1)
    organization_data: OrganizationData | None = None


class AuthResponse(BaseModel):
    """Authenticated user plus session token."""

    user: UserResponse
    token: str
    expires_at: datetime
