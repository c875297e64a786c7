"""
Cleanup Expired State Use Case

Deletes expired sessions and expired or consumed one-time codes.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import CleanupCounts, CleanupResponse

logger = logging.getLogger(__name__)


class CleanupExpiredStateUseCase:
    """
    Use case for the expired-state sweep.

    Business Rules:
    - Sessions with expires_at in the past are deleted
    - OTP codes that are expired or already used are deleted
    - Idempotent: rows already gone are simply not counted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[CleanupResponse]:
        now = utcnow()
        try:
            async with self.uow:
                sessions = await self.uow.sessions.delete_expired(now)
                otp_codes = await self.uow.otp_codes.delete_expired_or_used(now)
                await self.uow.commit()
        except SQLAlchemyError as exc:
            logger.error(f"Expired state cleanup failed: {exc}")
            return Return.err(Error("CLEANUP_FAILED", "Cleanup failed"))

        if sessions or otp_codes:
            logger.info(f"Cleaned up {sessions} session(s) and {otp_codes} OTP code(s)")

        return Return.ok(
            CleanupResponse(
                success=True,
                cleaned=CleanupCounts(sessions=sessions, otp_codes=otp_codes),
            )
        )
