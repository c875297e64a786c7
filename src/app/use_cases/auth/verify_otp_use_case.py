"""
Verify OTP Use Case

Exchanges a valid one-time code for a session.
"""

from datetime import timedelta

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import UserSession
from .dtos import LoginResult, Principal
from .profiles import load_role_data
from .tokens import generate_session_token


class VerifyOtpUseCase:
    """
    Use case for OTP login.

    Business Rules:
    - Code must match an unused code issued to the email
    - Expired codes are refused
    - A code is consumed by a successful verification
    - Creates a session (7 days by default) and updates last_login
    - Expired sessions of the same user are purged
    """

    def __init__(self, uow: UnitOfWork, session_ttl: timedelta = timedelta(days=7)):
        self.uow = uow
        self.session_ttl = session_ttl

    async def execute(self, email: str, code: str) -> Result[LoginResult]:
        normalized_email = email.lower().strip()

        async with self.uow:
            otp_code = await self.uow.otp_codes.get_unused(normalized_email, code)
            if otp_code is None:
                return Return.err(Error("INVALID_OTP", "Invalid or expired OTP"))

            now = utcnow()
            if otp_code.expires_at < now:
                return Return.err(
                    Error("OTP_EXPIRED", "OTP has expired. Please request a new one.")
                )

            otp_code.is_used = True
            await self.uow.otp_codes.update(otp_code)

            user = await self.uow.users.get_by_email(normalized_email)
            if user is None:
                return Return.err(
                    Error(
                        "ACCOUNT_NOT_FOUND",
                        "No account found with this email. "
                        "Please book an appointment first to create your account.",
                    )
                )

            if not user.is_active:
                return Return.err(
                    Error(
                        "ACCOUNT_DEACTIVATED",
                        "Your account has been deactivated. Please contact support.",
                    )
                )

            user.last_login = now
            await self.uow.users.update(user)

            session = UserSession(
                user_id=user.id,
                session_token=generate_session_token(),
                expires_at=now + self.session_ttl,
                is_active=True,
            )
            await self.uow.sessions.create(session)

            await self.uow.sessions.delete_expired_for_user(user.id, now)

            role_data = await load_role_data(self.uow, user)

            await self.uow.commit()

            return Return.ok(
                LoginResult(
                    user=Principal.from_user(user, role_data),
                    session_token=session.session_token,
                    expires_at=session.expires_at,
                )
            )
