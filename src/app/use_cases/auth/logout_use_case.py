from typing import Optional

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork


class LogoutUseCase:
    """Deletes the session behind a token. Logging out twice is not an error."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_token: Optional[str]) -> Result[int]:
        if not session_token:
            return Return.ok(0)

        async with self.uow:
            deleted = await self.uow.sessions.delete_by_token(session_token)
            await self.uow.commit()

        return Return.ok(deleted)
