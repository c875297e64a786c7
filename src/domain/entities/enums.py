"""
Clinic Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role of a clinic account"""

    admin = "admin"
    doctor = "doctor"
    pharmacist = "pharmacist"
    patient = "patient"


STAFF_ROLES = frozenset({UserRole.admin, UserRole.doctor, UserRole.pharmacist})
