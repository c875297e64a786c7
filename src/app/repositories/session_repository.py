from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import User, UserSession


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_token_with_user(
        self, session_token: str
    ) -> Optional[Tuple[UserSession, Optional[User]]]:
        """Find session by exact token match, joined with its owning user"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> List[UserSession]:
        """Get all sessions for a user"""
        pass

    @abstractmethod
    async def create(self, session: UserSession) -> UserSession:
        """Create a new session"""
        pass

    @abstractmethod
    async def delete_by_id(self, session_id: UUID) -> bool:
        """Delete a session. Returns True if a row was removed."""
        pass

    @abstractmethod
    async def delete_by_token(self, session_token: str) -> int:
        """Delete the session carrying this token. Returns count."""
        pass

    @abstractmethod
    async def delete_all_by_user_id(self, user_id: UUID) -> int:
        """Delete every session of a user. Returns count."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete all sessions with expires_at before now. Returns count."""
        pass

    @abstractmethod
    async def delete_expired_for_user(self, user_id: UUID, now: datetime) -> int:
        """Delete a user's sessions with expires_at before now. Returns count."""
        pass
