import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.sessions = MagicMock()
    uow.sessions.get_by_token_with_user = AsyncMock()
    uow.sessions.get_by_user_id = AsyncMock(return_value=[])
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.delete_by_id = AsyncMock(return_value=True)
    uow.sessions.delete_by_token = AsyncMock(return_value=1)
    uow.sessions.delete_all_by_user_id = AsyncMock(return_value=0)
    uow.sessions.delete_expired = AsyncMock(return_value=0)
    uow.sessions.delete_expired_for_user = AsyncMock(return_value=0)

    uow.otp_codes = MagicMock()
    uow.otp_codes.create = AsyncMock(side_effect=lambda otp: otp)
    uow.otp_codes.get_unused = AsyncMock()
    uow.otp_codes.update = AsyncMock(side_effect=lambda otp: otp)
    uow.otp_codes.delete_by_email = AsyncMock(return_value=0)
    uow.otp_codes.delete_expired_or_used = AsyncMock(return_value=0)

    uow.profiles = MagicMock()
    uow.profiles.get_doctor_by_user_id = AsyncMock(return_value=None)
    uow.profiles.get_pharmacist_by_user_id = AsyncMock(return_value=None)
    return uow
