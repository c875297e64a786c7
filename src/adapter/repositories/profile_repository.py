from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.profile_repository import IProfileRepository
from src.domain.entities import Doctor, Pharmacist


class ProfileRepository(IProfileRepository):
    """Role profile repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_doctor_by_user_id(self, user_id: UUID) -> Optional[Doctor]:
        stmt = select(Doctor).where(Doctor.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pharmacist_by_user_id(self, user_id: UUID) -> Optional[Pharmacist]:
        stmt = select(Pharmacist).where(Pharmacist.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()
