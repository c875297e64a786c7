import asyncio

import pytest

from config import ApplicationConfig
from src.adapter.services.rate_limit_store import InMemoryRateLimitStore
from src.api.app import create_app


@pytest.mark.asyncio
async def test_lifespan_sweeps_idle_rate_limit_keys(monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "AUTO_CREATE_TABLES", False)
    monkeypatch.setattr(ApplicationConfig, "RATE_LIMIT_SWEEP_INTERVAL_SECONDS", 0.01)
    monkeypatch.setattr(ApplicationConfig, "SESSION_CLEANUP_INTERVAL_SECONDS", 0)

    store = InMemoryRateLimitStore()
    store.set_window("login:1.2.3.4", [0.0], 1000)
    app = create_app(ApplicationConfig, rate_limit_store=store)

    async with app.router.lifespan_context(app):
        assert app.state.rate_limiters.login.store is store
        await asyncio.sleep(0.05)
        assert len(store) == 0


def test_each_app_gets_its_own_store():
    first = create_app(ApplicationConfig)
    second = create_app(ApplicationConfig)

    assert first.state.rate_limit_store is not second.state.rate_limit_store
