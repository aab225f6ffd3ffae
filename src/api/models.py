"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from domain.model.bootcamp import Bootcamp
from domain.model.user import User

# ── auth ─────────────────────────────────────────────────────

class RegisterRequest(BaseModel):
    """Request model for user registration."""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(BaseModel):
    """Request model for user login. Presence is checked by the service."""
    email: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(BaseModel):
    email: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    password: Optional[str] = None


class UpdateDetailsRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class UpdatePasswordRequest(BaseModel):
    currentPassword: Optional[str] = None
    newPassword: Optional[str] = None


class UserResponse(BaseModel):
    """Public view of a user; never carries the password hash or reset fields."""
    id: str
    name: str
    email: str
    role: str
    created_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email, role=user.role, created_at=user.created_at)


class TokenResponse(BaseModel):
    success: bool = True
    token: str


class UserEnvelope(BaseModel):
    success: bool = True
    data: UserResponse


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class DataMessageResponse(BaseModel):
    success: bool = True
    data: str


# ── bootcamps ────────────────────────────────────────────────

class BootcampCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1, max_length=500)
    website: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=300)
    careers: list[str] = Field(default_factory=list)
    average_cost: Optional[float] = Field(None, ge=0)
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False


class BootcampUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    website: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=300)
    careers: Optional[list[str]] = None
    average_cost: Optional[float] = Field(None, ge=0)
    housing: Optional[bool] = None
    job_assistance: Optional[bool] = None
    job_guarantee: Optional[bool] = None
    accept_gi: Optional[bool] = None


class BootcampResponse(BaseModel):
    id: str
    name: str
    description: str
    user_id: str
    website: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    careers: list[str] = Field(default_factory=list)
    average_cost: Optional[float] = None
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, bootcamp: Bootcamp) -> "BootcampResponse":
        return cls.model_validate(bootcamp, from_attributes=True)


class BootcampEnvelope(BaseModel):
    success: bool = True
    data: BootcampResponse


class BootcampListResponse(BaseModel):
    success: bool = True
    count: int = Field(..., description="Number of bootcamps in this page")
    total: int = Field(..., description="Total number of bootcamps")
    skip: int
    limit: int
    data: list[BootcampResponse]


class EmptyDataResponse(BaseModel):
    success: bool = True
    data: dict = Field(default_factory=dict)
