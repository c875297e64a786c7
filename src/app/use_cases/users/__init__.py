"""
User Management Use Cases

All user-related business logic.
"""

from .manage_sessions_use_case import ManageSessionsUseCase
from .dtos import RevokeSessionsResponse, SessionInfo

__all__ = [
    "ManageSessionsUseCase",
    "RevokeSessionsResponse",
    "SessionInfo",
]
