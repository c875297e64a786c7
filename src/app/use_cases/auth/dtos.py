"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import User, UserRole


# ============================================================================
# Principal
# ============================================================================


class Principal(BaseModel):
    """Authenticated identity resolved from a session token"""

    user_id: UUID
    email: str
    name: str
    role: UserRole
    phone: Optional[str] = None
    is_active: bool = True
    avatar_url: Optional[str] = None
    age: Optional[int] = None
    sex: Optional[str] = None
    role_data: Optional[Dict[str, Any]] = None

    @classmethod
    def from_user(cls, user: User, role_data: Optional[Dict[str, Any]] = None) -> "Principal":
        return cls(
            user_id=user.id,
            email=user.email,
            name=user.full_name,
            role=UserRole(user.role),
            phone=user.phone,
            is_active=user.is_active,
            avatar_url=user.avatar_url,
            age=user.age,
            sex=user.sex,
            role_data=role_data,
        )


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResult(BaseModel):
    """Session issued by password or OTP login"""

    user: Principal
    session_token: str
    expires_at: datetime


class OtpSendResponse(BaseModel):
    """Response for OTP send use case"""

    success: bool
    message: str


class ChangePasswordResponse(BaseModel):
    """Response for change password use case"""

    success: bool


class CleanupCounts(BaseModel):
    sessions: int
    otp_codes: int


class CleanupResponse(BaseModel):
    """Response for expired-state cleanup use case"""

    success: bool
    cleaned: CleanupCounts
