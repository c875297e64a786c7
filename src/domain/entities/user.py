"""
User Entity

Represents any clinic account: staff (admin, doctor, pharmacist) or patient.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - one row per clinic account.

    Business Rules:
    - Email is unique and stored lower-cased
    - Staff log in with a bcrypt password, patients with an emailed OTP
    - Deactivated accounts cannot authenticate, even with a live session
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    full_name: str = Field(default="", max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)

    # Stored as text: rows with an unknown role still load
    role: str = Field(default=UserRole.patient.value, max_length=32)
    is_active: bool = Field(default=True)

    password_hash: Optional[str] = Field(default=None, max_length=60)  # Bcrypt output

    avatar_url: Optional[str] = None
    age: Optional[int] = None
    sex: Optional[str] = Field(default=None, max_length=16)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    last_login: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_role", "role"),)
