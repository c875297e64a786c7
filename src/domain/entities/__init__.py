"""
Clinic Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import UserRole, STAFF_ROLES

# Export all entities
from .user import User
from .session import UserSession
from .otp_code import OtpCode
from .profiles import Doctor, Pharmacist

__all__ = [
    # Enums
    "UserRole",
    "STAFF_ROLES",
    # Entities
    "User",
    "UserSession",
    "OtpCode",
    "Doctor",
    "Pharmacist",
]
