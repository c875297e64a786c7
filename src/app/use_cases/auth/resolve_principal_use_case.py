"""
Resolve Principal Use Case

Session authorization gate: turns the opaque session cookie into an
authenticated principal, or refuses it.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import UserRole
from .dtos import Principal
from .profiles import load_role_data

logger = logging.getLogger(__name__)

ANY_ROLE = frozenset(UserRole)


class ResolvePrincipalUseCase:
    """
    Use case for resolving the principal behind a session token.

    Business Rules:
    - Missing token, unknown token, expired session, revoked session,
      missing or deactivated user and role mismatch all fail
    - An expired session is deleted when it is detected
    - Storage failures fail closed
    - Error codes are diagnostic only; the API layer turns every one of
      them into the same 401 so callers cannot tell the reasons apart
    - Role profile (doctor / pharmacist) is loaded only when asked for
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        session_token: Optional[str],
        allowed_roles: Iterable[UserRole] = ANY_ROLE,
        include_profile: bool = False,
    ) -> Result[Principal]:
        """
        Execute resolve principal use case.

        Args:
            session_token: Token from the session cookie, may be None or empty
            allowed_roles: Roles admitted by the caller (ANY_ROLE for all)
            include_profile: Attach the doctor/pharmacist profile

        Returns:
            Result with Principal, or Error describing the denial
        """
        if not session_token:
            return self._deny("NO_SESSION", "No session token")

        roles = frozenset(UserRole(role) for role in allowed_roles)

        try:
            async with self.uow:
                return await self._resolve(session_token, roles, include_profile)
        except (SQLAlchemyError, OSError) as exc:
            logger.warning(f"Session lookup failed: {exc.__class__.__name__}: {exc}")
            return self._deny("SESSION_LOOKUP_FAILED", "Session verification failed")

    async def _resolve(
        self, session_token: str, roles: frozenset, include_profile: bool
    ) -> Result[Principal]:
        found = await self.uow.sessions.get_by_token_with_user(session_token)
        if found is None:
            return self._deny("INVALID_SESSION", "Invalid session")

        user_session, user = found

        if user_session.expires_at <= utcnow():
            await self.uow.sessions.delete_by_id(user_session.id)
            await self.uow.commit()
            return self._deny("SESSION_EXPIRED", "Session has expired")

        if not user_session.is_active:
            return self._deny("SESSION_REVOKED", "Session has been revoked")

        if user is None:
            return self._deny("USER_NOT_FOUND", "User not found")

        if not user.is_active:
            return self._deny("ACCOUNT_DEACTIVATED", "Account has been deactivated")

        try:
            role = UserRole(user.role)
        except ValueError:
            return self._deny("UNKNOWN_ROLE", "Account role is not recognised")

        if role not in roles:
            return self._deny("INSUFFICIENT_ROLE", "Insufficient permissions")

        role_data = await load_role_data(self.uow, user) if include_profile else None
        return Return.ok(Principal.from_user(user, role_data))

    @staticmethod
    def _deny(code: str, message: str) -> Result[Principal]:
        logger.debug(f"Session rejected: {code}")
        return Return.err(Error(code, message))
