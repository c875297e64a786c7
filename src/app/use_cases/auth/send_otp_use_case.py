"""
Send OTP Use Case

Issues a one-time login code to a patient's email address.
"""

import logging
from datetime import timedelta

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import OtpCode
from .dtos import OtpSendResponse
from .tokens import generate_otp_code

logger = logging.getLogger(__name__)


class SendOtpUseCase:
    """
    Use case for issuing an OTP code.

    Business Rules:
    - The account must already exist (created by appointment booking)
    - Deactivated accounts are refused
    - Earlier codes for the email are discarded
    - Codes expire after 10 minutes by default
    """

    def __init__(self, uow: UnitOfWork, otp_ttl: timedelta = timedelta(minutes=10)):
        self.uow = uow
        self.otp_ttl = otp_ttl

    async def execute(self, email: str) -> Result[OtpSendResponse]:
        normalized_email = email.lower().strip()

        async with self.uow:
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

            await self.uow.otp_codes.delete_by_email(normalized_email)

            otp_code = OtpCode(
                email=normalized_email,
                code=generate_otp_code(),
                expires_at=utcnow() + self.otp_ttl,
            )
            await self.uow.otp_codes.create(otp_code)

            await self.uow.commit()

            # NOTE: Delivery happens outside this service: the mailer picks up
            # the code from otp_codes. Nothing here reveals whether it was sent.
            logger.info(f"OTP issued for user {user.id}")

            return Return.ok(OtpSendResponse(success=True, message="OTP sent to your email"))
