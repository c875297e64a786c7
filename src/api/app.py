import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel

from src.adapter.services.periodic_task import PeriodicTask
from src.adapter.services.rate_limit_store import InMemoryRateLimitStore
from src.app.services.rate_limiter import RateLimitStore, wall_clock_ms
from .error import ClientError, ServerError
from .utils.rate_limit import RateLimiters

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(
        status_code=exc.status_code, content={"error": error_dict}, headers=exc.headers
    )


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def _build_background_tasks(app: FastAPI, ApplicationConfig) -> list:
    store: RateLimitStore = app.state.rate_limit_store

    async def sweep_rate_limits():
        removed = store.sweep(wall_clock_ms())
        if removed:
            logger.debug(f"Rate limit sweep removed {removed} idle key(s)")

    tasks = [
        PeriodicTask(
            "rate-limit-sweep",
            ApplicationConfig.RATE_LIMIT_SWEEP_INTERVAL_SECONDS,
            sweep_rate_limits,
        )
    ]

    if ApplicationConfig.SESSION_CLEANUP_INTERVAL_SECONDS:
        from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
        from src.app.use_cases.auth import CleanupExpiredStateUseCase
        from src.depends import AsyncSessionLocal

        async def cleanup_expired_state():
            async with AsyncSessionLocal() as session:
                result = await CleanupExpiredStateUseCase(SqlAlchemyUnitOfWork(session)).execute()
            if result.is_err():
                logger.error(f"Scheduled cleanup failed: {result.error.code}")

        tasks.append(
            PeriodicTask(
                "expired-state-cleanup",
                ApplicationConfig.SESSION_CLEANUP_INTERVAL_SECONDS,
                cleanup_expired_state,
            )
        )

    return tasks


def create_app(ApplicationConfig, rate_limit_store: Optional[RateLimitStore] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.AUTO_CREATE_TABLES:
            from src.depends import engine

            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

        tasks = _build_background_tasks(app, ApplicationConfig)
        for task in tasks:
            task.start()
        try:
            yield
        finally:
            for task in tasks:
                await task.stop()

    app = FastAPI(title="Clinic Auth API", version="0.1.0", lifespan=lifespan)

    app.state.rate_limit_store = rate_limit_store or InMemoryRateLimitStore()
    app.state.rate_limiters = RateLimiters(app.state.rate_limit_store, ApplicationConfig)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def no_store_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        return response

    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"({elapsed_ms:.1f} ms)"
            )
            return response

    from src.api.routes import auth, health_check, sessions, user

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(user.router, tags=["User"])
    app.include_router(sessions.router, tags=["Sessions"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
