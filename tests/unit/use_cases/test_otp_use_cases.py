"""
Unit tests for SendOtpUseCase and VerifyOtpUseCase
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.use_cases.auth import SendOtpUseCase, VerifyOtpUseCase
from src.domain.base import utcnow
from src.domain.entities import OtpCode, User, UserRole


def make_patient(is_active=True):
    return User(
        id=uuid4(),
        email="patient@clinic.test",
        full_name="Pat Ient",
        role=UserRole.patient,
        is_active=is_active,
    )


def make_code(expires_in=timedelta(minutes=5)):
    return OtpCode(
        email="patient@clinic.test",
        code="123456",
        expires_at=utcnow() + expires_in,
    )


class TestSendOtp:
    @pytest.mark.asyncio
    async def test_send_replaces_previous_codes(self, mock_uow):
        mock_uow.users.get_by_email.return_value = make_patient()

        result = await SendOtpUseCase(mock_uow).execute("Patient@Clinic.test")

        assert result.is_ok()
        assert result.value.success is True
        mock_uow.otp_codes.delete_by_email.assert_called_once_with("patient@clinic.test")

        created = mock_uow.otp_codes.create.call_args[0][0]
        assert created.email == "patient@clinic.test"
        assert len(created.code) == 6 and created.code.isdigit()
        assert created.is_used is False
        assert timedelta(minutes=9) < created.expires_at - utcnow() <= timedelta(minutes=10)
        mock_uow.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_send_unknown_email(self, mock_uow):
        mock_uow.users.get_by_email.return_value = None

        result = await SendOtpUseCase(mock_uow).execute("ghost@clinic.test")

        assert result.is_err()
        assert result.error.code == "ACCOUNT_NOT_FOUND"
        mock_uow.otp_codes.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_send_deactivated_account(self, mock_uow):
        mock_uow.users.get_by_email.return_value = make_patient(is_active=False)

        result = await SendOtpUseCase(mock_uow).execute("patient@clinic.test")

        assert result.is_err()
        assert result.error.code == "ACCOUNT_DEACTIVATED"

    @pytest.mark.asyncio
    async def test_code_is_not_logged(self, mock_uow, caplog):
        mock_uow.users.get_by_email.return_value = make_patient()

        with caplog.at_level("DEBUG"):
            await SendOtpUseCase(mock_uow).execute("patient@clinic.test")

        code = mock_uow.otp_codes.create.call_args[0][0].code
        assert code not in caplog.text


class TestVerifyOtp:
    @pytest.mark.asyncio
    async def test_verify_creates_patient_session(self, mock_uow):
        patient = make_patient()
        otp = make_code()
        mock_uow.otp_codes.get_unused.return_value = otp
        mock_uow.users.get_by_email.return_value = patient

        result = await VerifyOtpUseCase(mock_uow).execute("patient@clinic.test", "123456")

        assert result.is_ok()
        assert result.value.user.role == UserRole.patient
        assert otp.is_used is True
        assert patient.last_login is not None

        created = mock_uow.sessions.create.call_args[0][0]
        assert created.user_id == patient.id
        assert timedelta(days=6, hours=23) < created.expires_at - utcnow() <= timedelta(days=7)
        mock_uow.sessions.delete_expired_for_user.assert_called_once()
        assert mock_uow.sessions.delete_expired_for_user.call_args[0][0] == patient.id
        mock_uow.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_verify_wrong_code(self, mock_uow):
        mock_uow.otp_codes.get_unused.return_value = None

        result = await VerifyOtpUseCase(mock_uow).execute("patient@clinic.test", "000000")

        assert result.is_err()
        assert result.error.code == "INVALID_OTP"
        mock_uow.otp_codes.get_unused.assert_called_once_with("patient@clinic.test", "000000")

    @pytest.mark.asyncio
    async def test_verify_expired_code(self, mock_uow):
        mock_uow.otp_codes.get_unused.return_value = make_code(timedelta(minutes=-1))

        result = await VerifyOtpUseCase(mock_uow).execute("patient@clinic.test", "123456")

        assert result.is_err()
        assert result.error.code == "OTP_EXPIRED"
        mock_uow.sessions.create.assert_not_called()
        mock_uow.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_verify_deactivated_account(self, mock_uow):
        mock_uow.otp_codes.get_unused.return_value = make_code()
        mock_uow.users.get_by_email.return_value = make_patient(is_active=False)

        result = await VerifyOtpUseCase(mock_uow).execute("patient@clinic.test", "123456")

        assert result.is_err()
        assert result.error.code == "ACCOUNT_DEACTIVATED"
        mock_uow.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_verify_missing_account(self, mock_uow):
        mock_uow.otp_codes.get_unused.return_value = make_code()
        mock_uow.users.get_by_email.return_value = None

        result = await VerifyOtpUseCase(mock_uow).execute("patient@clinic.test", "123456")

        assert result.is_err()
        assert result.error.code == "ACCOUNT_NOT_FOUND"
