"""
OtpCode Entity

One-time login codes for patient accounts.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class OtpCode(SQLModel, table=True):
    """
    OtpCode entity - emailed 6-digit login code.

    Business Rules:
    - Expires after 10 minutes
    - Single-use: marked as used after verification
    - Sending a new code deletes earlier codes for the same email
    """

    __tablename__ = "otp_codes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(index=True, max_length=255)
    code: str = Field(max_length=6)
    is_used: bool = Field(default=False)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_otp_code_expires_at", "expires_at"),
        Index("idx_otp_code_email_code", "email", "code"),
    )
