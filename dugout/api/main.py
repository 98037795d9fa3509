"""
Team roster API server.

FastAPI application exposing authentication, team roster management and
membership-scoped team data.
"""

from contextlib import asynccontextmanager
from typing import Optional
import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler  # type: ignore
from slowapi.errors import RateLimitExceeded  # type: ignore
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from dugout.api.routes import configure_rate_limits, router, limiter as routes_limiter
from dugout.config import Settings, get_settings
from dugout.database import db
from dugout.database.init_defaults import seed_demo_data
from dugout.services.errors import ServiceError, ServiceUnavailable, Unauthenticated, ValidationError
from dugout.services.password_hasher import PasswordHasher
from dugout.utils.datetime_utils import utcnow

# Set up logging
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
numeric_level = getattr(logging, log_level, logging.INFO)
logging.basicConfig(
    level=numeric_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler for startup and shutdown events."""
    settings: Settings = app.state.settings
    logger.info("Starting up team roster API...")

    engine = db.build_engine(settings)
    app.state.engine = engine
    app.state.session_factory = db.build_session_factory(engine)

    if not await db.wait_for_database(
        engine, settings.db_connect_retries, settings.db_connect_retry_delay
    ):
        await engine.dispose()
        raise RuntimeError("Database is not reachable")

    if settings.run_migrations:
        from dugout.alembic.env import run_migrations_programmatic

        await run_migrations_programmatic(settings.database_url)
    else:
        await db.init_database(engine)
        logger.info("Database initialized")

    if settings.seed_demo_data:
        try:
            await seed_demo_data(
                app.state.session_factory, PasswordHasher(rounds=settings.bcrypt_rounds)
            )
        except Exception as e:
            logger.error(f"Demo data setup failed: {e}", exc_info=True)

    yield  # App is running

    logger.info("Shutting down team roster API...")
    await engine.dispose()


def _error_response(error: ServiceError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(error, Unauthenticated) else None
    return JSONResponse(status_code=error.status_code, content=error.to_dict(), headers=headers)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return _error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report every invalid field as a 400, not FastAPI's default 422."""
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(location) or "body", "message": error.get("msg", "")})
    return _error_response(ValidationError(errors))


async def storage_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Storage unavailable during {request.method} {request.url.path}: {exc}", exc_info=True)
    return _error_response(ServiceUnavailable())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        content = {"error": "Route not found", "code": "not_found"}
    else:
        content = {"error": str(exc.detail), "code": "http_error"}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error during {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500, content={"error": "Something went wrong", "code": "internal_error"}
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application for the given settings."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Team Roster API",
        description="Invite-code team enrollment, roster management and team data",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Setup rate limiter
    app.state.limiter = routes_limiter
    configure_rate_limits(settings)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(OperationalError, storage_unavailable_handler)
    app.add_exception_handler(InterfaceError, storage_unavailable_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.get("/health")
    async def health():
        """Liveness probe."""
        return {"status": "OK", "timestamp": utcnow().isoformat()}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
