from datetime import timedelta

import pytest
from sqlmodel import select

from config import ApplicationConfig
from src.domain.base import utcnow
from src.domain.entities import OtpCode, UserSession


@pytest.mark.asyncio
async def test_cleanup_removes_expired_state(client, users, create_session, session_factory):
    live = await create_session(users["doctor"]["id"])
    await create_session(users["doctor"]["id"], expires_in=timedelta(hours=-2))
    await create_session(users["patient"]["id"], expires_in=timedelta(days=-1))

    email = users["patient"]["email"]
    async with session_factory() as session:
        session.add(OtpCode(email=email, code="111111", expires_at=utcnow() - timedelta(minutes=1)))
        session.add(
            OtpCode(email=email, code="222222", is_used=True, expires_at=utcnow() + timedelta(minutes=5))
        )
        session.add(OtpCode(email=email, code="333333", expires_at=utcnow() + timedelta(minutes=5)))
        await session.commit()

    response = await client.post("/auth/cleanup")

    assert response.status_code == 200
    assert response.json() == {"success": True, "cleaned": {"sessions": 2, "otp_codes": 2}}

    async with session_factory() as session:
        tokens = [s.session_token for s in (await session.exec(select(UserSession))).all()]
        codes = [c.code for c in (await session.exec(select(OtpCode))).all()]
    assert tokens == [live]
    assert codes == ["333333"]

    again = await client.post("/auth/cleanup")
    assert again.json()["cleaned"] == {"sessions": 0, "otp_codes": 0}


@pytest.mark.asyncio
async def test_cleanup_requires_configured_secret(client, monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "CLEANUP_SECRET", "s3cret")

    missing = await client.post("/auth/cleanup")
    wrong = await client.post("/auth/cleanup", params={"secret": "nope"})
    right = await client.post("/auth/cleanup", params={"secret": "s3cret"})

    assert missing.status_code == 401
    assert wrong.status_code == 401
    assert right.status_code == 200
