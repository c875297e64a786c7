"""
Change Password Use Case

Lets a signed-in staff member replace their password.
"""

from uuid import UUID

import bcrypt

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import ChangePasswordResponse


class ChangePasswordUseCase:
    """
    Use case for changing a password.

    Business Rules:
    - New password must be at least 8 characters
    - New password must differ from the current one
    - Current password must verify against the stored bcrypt hash
    """

    def __init__(self, uow: UnitOfWork, bcrypt_rounds: int = 12):
        self.uow = uow
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(
        self, user_id: UUID, current_password: str, new_password: str
    ) -> Result[ChangePasswordResponse]:
        if len(new_password) < 8:
            return Return.err(
                Error("WEAK_PASSWORD", "New password must be at least 8 characters")
            )

        if current_password == new_password:
            return Return.err(
                Error(
                    "PASSWORD_UNCHANGED",
                    "New password must be different from the current password",
                )
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not user.password_hash:
                return Return.err(
                    Error("PASSWORD_NOT_SET", "Password not set for this account")
                )

            if not bcrypt.checkpw(current_password.encode(), user.password_hash.encode()):
                return Return.err(
                    Error("INVALID_PASSWORD", "Current password is incorrect")
                )

            user.password_hash = bcrypt.hashpw(
                new_password.encode(), bcrypt.gensalt(self.bcrypt_rounds)
            ).decode()
            user.updated_at = utcnow()
            await self.uow.users.update(user)

            await self.uow.commit()

            return Return.ok(ChangePasswordResponse(success=True))
