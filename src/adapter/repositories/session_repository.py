from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import User, UserSession


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_token_with_user(
        self, session_token: str
    ) -> Optional[Tuple[UserSession, Optional[User]]]:
        """
        Find session by exact token match.

        Outer join so a session whose user row is gone still comes back
        (with user=None) and the caller can reject it explicitly.
        """
        stmt = (
            select(UserSession, User)
            .join(User, UserSession.user_id == User.id, isouter=True)
            .where(UserSession.session_token == session_token)
        )
        result = await self.session.exec(stmt)
        row = result.first()
        if row is None:
            return None
        user_session, user = row
        return user_session, user

    async def get_by_user_id(self, user_id: UUID) -> List[UserSession]:
        stmt = (
            select(UserSession)
            .where(UserSession.user_id == user_id)
            .order_by(UserSession.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, session_obj: UserSession) -> UserSession:
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def delete_by_id(self, session_id: UUID) -> bool:
        stmt = delete(UserSession).where(UserSession.id == session_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_token(self, session_token: str) -> int:
        stmt = delete(UserSession).where(UserSession.session_token == session_token)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_all_by_user_id(self, user_id: UUID) -> int:
        stmt = delete(UserSession).where(UserSession.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(UserSession).where(UserSession.expires_at < now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired_for_user(self, user_id: UUID, now: datetime) -> int:
        stmt = delete(UserSession).where(
            UserSession.user_id == user_id, UserSession.expires_at < now
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
