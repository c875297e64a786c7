from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.domain.entities import OtpCode


class IOtpCodeRepository(ABC):
    """One-time code repository interface - application layer"""

    @abstractmethod
    async def create(self, otp_code: OtpCode) -> OtpCode:
        """Store a new code"""
        pass

    @abstractmethod
    async def get_unused(self, email: str, code: str) -> Optional[OtpCode]:
        """Find an unused code for the email"""
        pass

    @abstractmethod
    async def update(self, otp_code: OtpCode) -> OtpCode:
        """Update existing code"""
        pass

    @abstractmethod
    async def delete_by_email(self, email: str) -> int:
        """Delete every code issued to the email. Returns count."""
        pass

    @abstractmethod
    async def delete_expired_or_used(self, now: datetime) -> int:
        """Delete codes that are expired or already consumed. Returns count."""
        pass
