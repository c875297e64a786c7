"""
Manage Sessions Use Case

Administrative listing and revocation of a user's sessions.
"""

from typing import List
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import RevokeSessionsResponse, SessionInfo


class ManageSessionsUseCase:
    """
    Use case for managing another user's sessions.

    Business Rules:
    - Caller authorization (admin only) is enforced by the API layer
    - Revocation deletes the session rows, so the cookies stop working at once
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list_sessions(self, user_id: UUID) -> Result[List[SessionInfo]]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if not user:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            now = utcnow()
            sessions = await self.uow.sessions.get_by_user_id(user_id)
            return Return.ok(
                [
                    SessionInfo(
                        id=s.id,
                        created_at=s.created_at,
                        expires_at=s.expires_at,
                        is_active=s.is_active,
                        expired=s.expires_at <= now,
                    )
                    for s in sessions
                ]
            )

    async def revoke_all(self, user_id: UUID) -> Result[RevokeSessionsResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if not user:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            count = await self.uow.sessions.delete_all_by_user_id(user_id)

            await self.uow.commit()

            return Return.ok(RevokeSessionsResponse(revoked_count=count, user_id=user_id))
