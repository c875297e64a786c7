"""
Authentication Use Cases

All authentication-related business logic.
"""

from .resolve_principal_use_case import ANY_ROLE, ResolvePrincipalUseCase
from .login_use_case import LoginUseCase
from .send_otp_use_case import SendOtpUseCase
from .verify_otp_use_case import VerifyOtpUseCase
from .logout_use_case import LogoutUseCase
from .change_password_use_case import ChangePasswordUseCase
from .cleanup_expired_state_use_case import CleanupExpiredStateUseCase
from .dtos import (
    Principal,
    LoginResult,
    OtpSendResponse,
    ChangePasswordResponse,
    CleanupCounts,
    CleanupResponse,
)

__all__ = [
    # Use Cases
    "ResolvePrincipalUseCase",
    "LoginUseCase",
    "SendOtpUseCase",
    "VerifyOtpUseCase",
    "LogoutUseCase",
    "ChangePasswordUseCase",
    "CleanupExpiredStateUseCase",
    # Constants
    "ANY_ROLE",
    # DTOs
    "Principal",
    "LoginResult",
    "OtpSendResponse",
    "ChangePasswordResponse",
    "CleanupCounts",
    "CleanupResponse",
]
