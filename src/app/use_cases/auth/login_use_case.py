"""
Login Use Case

Password login for staff accounts (admin, doctor, pharmacist).
"""

from datetime import timedelta
from functools import lru_cache

import bcrypt

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import UserRole, UserSession
from .dtos import LoginResult, Principal
from .profiles import load_role_data
from .tokens import generate_session_token


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> bytes:
    return bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(rounds))


class LoginUseCase:
    """
    Use case for staff login and session issuance.

    Business Rules:
    - Unknown email and wrong password return the same error
    - Password check runs even for unknown emails (constant time)
    - Patients must use OTP login
    - Deactivated accounts are refused
    - Creates a session (24 hours by default) and updates last_login
    """

    def __init__(
        self,
        uow: UnitOfWork,
        session_ttl: timedelta = timedelta(hours=24),
        bcrypt_rounds: int = 12,
    ):
        self.uow = uow
        self.session_ttl = session_ttl
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(self, email: str, password: str) -> Result[LoginResult]:
        """
        Execute login use case.

        Args:
            email: User email (any case)
            password: Plain text password

        Returns:
            Result with LoginResult containing the session token and user, or Error
        """
        normalized_email = email.lower().strip()

        async with self.uow:
            user = await self.uow.users.get_by_email(normalized_email)

            if user is None:
                bcrypt.checkpw(password.encode(), _dummy_hash(self.bcrypt_rounds))
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            if user.role == UserRole.patient:
                return Return.err(
                    Error("USE_OTP_LOGIN", "Please use OTP login for patient accounts")
                )

            if not user.is_active:
                return Return.err(
                    Error(
                        "ACCOUNT_DEACTIVATED",
                        "Your account has been deactivated. Please contact support.",
                    )
                )

            if not user.password_hash:
                return Return.err(
                    Error("PASSWORD_NOT_SET", "Password not set. Please contact administrator.")
                )

            if not bcrypt.checkpw(password.encode(), user.password_hash.encode()):
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            now = utcnow()
            user.last_login = now
            await self.uow.users.update(user)

            session = UserSession(
                user_id=user.id,
                session_token=generate_session_token(),
                expires_at=now + self.session_ttl,
                is_active=True,
            )
            await self.uow.sessions.create(session)

            role_data = await load_role_data(self.uow, user)

            await self.uow.commit()

            return Return.ok(
                LoginResult(
                    user=Principal.from_user(user, role_data),
                    session_token=session.session_token,
                    expires_at=session.expires_at,
                )
            )
