from datetime import datetime
from typing import Optional

from sqlalchemy import delete, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.otp_code_repository import IOtpCodeRepository
from src.domain.entities import OtpCode


class OtpCodeRepository(IOtpCodeRepository):
    """One-time code repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, otp_code: OtpCode) -> OtpCode:
        self.session.add(otp_code)
        await self.session.flush()
        await self.session.refresh(otp_code)
        return otp_code

    async def get_unused(self, email: str, code: str) -> Optional[OtpCode]:
        stmt = (
            select(OtpCode)
            .where(
                OtpCode.email == email,
                OtpCode.code == code,
                OtpCode.is_used == False,  # noqa: E712
            )
            .order_by(OtpCode.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def update(self, otp_code: OtpCode) -> OtpCode:
        self.session.add(otp_code)
        await self.session.flush()
        await self.session.refresh(otp_code)
        return otp_code

    async def delete_by_email(self, email: str) -> int:
        stmt = delete(OtpCode).where(OtpCode.email == email)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired_or_used(self, now: datetime) -> int:
        stmt = delete(OtpCode).where(
            or_(OtpCode.expires_at < now, OtpCode.is_used == True)  # noqa: E712
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
