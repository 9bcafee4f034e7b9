import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from services.common.http_errors import register_exception_handlers
from services.common.logging_config import (
    create_request_logging_middleware,
    get_logger,
    log_service_shutdown,
    log_service_startup,
    setup_service_logging,
)
from services.contacts.database import (
    create_tables,
    dispose_engine,
    get_async_session_factory,
)
from services.contacts.routers.contacts import router as contacts_router
from services.contacts.settings import get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    settings = get_settings()

    setup_service_logging(
        service_name="contacts",
        log_level=settings.LOG_LEVEL,
        log_format=settings.LOG_FORMAT,
    )

    log_service_startup(
        "contacts",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
    )

    if settings.DB_CREATE_TABLES:
        await create_tables()

    yield

    await dispose_engine()
    log_service_shutdown("contacts")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Contact Manager Service",
        description="CRUD API for a contact list with search, sorting and pagination",
        version=settings.APP_VERSION,
        openapi_tags=[
            {
                "name": "contacts",
                "description": "Contact management: create, list, retrieve, update, delete",
            },
        ],
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(create_request_logging_middleware())

    register_exception_handlers(app)

    app.include_router(contacts_router, prefix=settings.API_PREFIX)

    @app.get("/health")
    async def health_check() -> Dict[str, Any]:
        """
        Health check endpoint for load balancers and monitoring.
        Checks database connectivity.
        """
        start_time = time.time()

        db_status = "ok"
        db_error = None
        db_response_time = None

        try:
            async with get_async_session_factory()() as session:
                db_start = time.time()
                await session.execute(text("SELECT 1"))
                db_response_time = round((time.time() - db_start) * 1000, 2)
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            db_status = "error"
            db_error = str(e) if get_settings().DEBUG else "Database unavailable"

        total_duration = round((time.time() - start_time) * 1000, 2)

        return {
            "status": db_status,
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {
                "database": {
                    "status": db_status,
                    "response_time_ms": db_response_time,
                    "error": db_error,
                },
            },
            "performance": {"total_check_time_ms": total_duration},
        }

    @app.get("/ready")
    async def ready_check() -> Dict[str, str]:
        """
        Simple readiness check.
        """
        return {
            "status": "ok",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


app = create_app()


def run() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "services.contacts.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
