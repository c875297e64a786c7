"""
Role Profile Entities

Role-specific data attached to doctor and pharmacist accounts.
"""

from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class Doctor(SQLModel, table=True):
    __tablename__ = "doctors"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", unique=True, index=True)

    specialization: Optional[str] = Field(default=None, max_length=255)
    qualification: Optional[str] = Field(default=None, max_length=255)
    experience_years: Optional[int] = None
    consultation_fee: Optional[float] = None
    bio: Optional[str] = None
    is_available: bool = Field(default=True)


class Pharmacist(SQLModel, table=True):
    __tablename__ = "pharmacists"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", unique=True, index=True)

    license_number: Optional[str] = Field(default=None, max_length=64)
    qualification: Optional[str] = Field(default=None, max_length=255)
