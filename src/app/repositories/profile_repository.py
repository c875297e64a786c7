from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Doctor, Pharmacist


class IProfileRepository(ABC):
    """Role profile repository interface - application layer"""

    @abstractmethod
    async def get_doctor_by_user_id(self, user_id: UUID) -> Optional[Doctor]:
        """Get the doctor profile of a user"""
        pass

    @abstractmethod
    async def get_pharmacist_by_user_id(self, user_id: UUID) -> Optional[Pharmacist]:
        """Get the pharmacist profile of a user"""
        pass
