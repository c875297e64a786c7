"""
UserSession Entity

Server-side record behind the session cookie.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class UserSession(SQLModel, table=True):
    """
    UserSession entity - one authenticated browser/device login.

    Business Rules:
    - session_token is 32 random bytes, hex encoded, unique
    - Valid only while now < expires_at, is_active is set and the user is active
    - Staff sessions last 24 hours, patient sessions 7 days
    - Deleted on logout, on expiry detection and by the cleanup sweep
    """

    __tablename__ = "user_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    session_token: str = Field(unique=True, index=True, max_length=64)
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_session_expires_at", "expires_at"),)
