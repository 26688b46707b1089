from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from session_service.app.services.sweep_scheduler import SweepScheduler
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def build_sweep_scheduler(ApplicationConfig) -> Optional[SweepScheduler]:
    if not ApplicationConfig.ENABLE_SWEEPER:
        return None

    from session_service.adapter.services.sweep_scheduler import APSchedulerSweepScheduler
    from session_service.depends import unit_of_work_scope

    return APSchedulerSweepScheduler(
        unit_of_work_scope, interval_seconds=ApplicationConfig.SWEEP_INTERVAL_SECONDS
    )


def create_app(ApplicationConfig, sweep_scheduler: Optional[SweepScheduler] = None) -> FastAPI:
    logging.getLogger("session_service").setLevel(ApplicationConfig.LOG_LEVEL.upper())

    scheduler = sweep_scheduler or build_sweep_scheduler(ApplicationConfig)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.AUTO_CREATE_TABLES:
            from session_service.depends import create_tables

            await create_tables()
        if scheduler is not None:
            scheduler.start()
        app.state.sweep_scheduler = scheduler
        yield
        if scheduler is not None:
            scheduler.shutdown()

    app = FastAPI(title="Session Service", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from session_service.api.routes import admin, health_check, proposals, sessions

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(proposals.router, tags=["Proposals"])
    app.include_router(sessions.router, tags=["Sessions"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
