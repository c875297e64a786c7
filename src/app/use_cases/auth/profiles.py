from typing import Any, Dict, Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole


async def load_role_data(uow: UnitOfWork, user: User) -> Optional[Dict[str, Any]]:
    """Role profile of a doctor or pharmacist, None for every other role"""
    profile = None
    if user.role == UserRole.doctor:
        profile = await uow.profiles.get_doctor_by_user_id(user.id)
    elif user.role == UserRole.pharmacist:
        profile = await uow.profiles.get_pharmacist_by_user_id(user.id)

    if profile is None:
        return None
    return profile.model_dump(mode="json")
