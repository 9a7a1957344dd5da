# 📄 File: app/main.py
#
# 🧭 Purpose (Layman Explanation):
# The control center that starts the menu service, connects all its parts together,
# and makes sure everything is ready before the first request arrives.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: lifespan (logging, database, role seeding,
# admin bootstrap), middleware stack, envelope-rendering exception handlers and router
# registration for the modular monolith.
#
# 🔗 Dependencies:
# - FastAPI framework, slowapi, uvicorn
# - app.shared.config.settings
# - app.shared.infrastructure.database.connection
# - app.api.v1.router (every module router)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup (menu-api script)
# - tests (TestClient over create_application)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.middleware.error_handling import ErrorHandlingMiddleware
from app.api.middleware.logging import RequestLoggingMiddleware
from app.api.v1.health import health_router
from app.api.v1.realtime import websocket_router
from app.api.v1.router import api_v1_router
from app.modules.user_management.domain.services.auth_service import AuthService
from app.modules.user_management.domain.services.role_service import RoleService
from app.shared.config.settings import get_settings
from app.shared.core.exceptions import MenuAPIException
from app.shared.core.rate_limiter import limiter, rate_limit_exceeded_handler
from app.shared.core.responses import error_response
from app.shared.infrastructure.database.connection import close_database, init_database
from app.shared.infrastructure.database.session import database_session
from app.shared.utils.logging import setup_logging

logger = logging.getLogger(__name__)

# Request locations FastAPI prefixes onto validation error paths
_LOCATION_PREFIXES = {"body", "query", "path", "header"}


async def _seed_store() -> None:
    settings = get_settings()
    async with database_session() as session:
        if settings.SEED_DEFAULT_ROLES:
            await RoleService(session).seed_default_roles()
        if await AuthService(session).bootstrap_admin(settings):
            logger.info(f"Admin account {settings.ADMIN_EMAIL} created")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup: logging, database connection, default roles and admin account.
    Shutdown: database pool disposal.
    """
    settings = get_settings()
    setup_logging(settings)
    logger.info(f"{settings.APP_NAME} starting up ({settings.ENVIRONMENT})...")

    try:
        await init_database(settings)
        logger.info("Database connection initialized")

        await _seed_store()
        logger.info(f"{settings.APP_NAME} startup complete")
    except Exception as e:
        logger.error(f"Startup failed: {e}", exc_info=True)
        await close_database()
        raise

    try:
        yield
    finally:
        logger.info(f"{settings.APP_NAME} shutting down...")
        await close_database()
        logger.info("Database connections closed")


# =========================================================================
# EXCEPTION HANDLERS
# =========================================================================

async def menu_exception_handler(request: Request, exc: MenuAPIException) -> JSONResponse:
    """Render domain exceptions as the error envelope."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as a 400 envelope listing each bad field."""
    problems = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
        problems.append({"field": ".".join(location) or None, "message": error.get("msg", "Invalid value")})
    return error_response(400, "Validation failed", problems)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), None, headers=getattr(exc, "headers", None))


def create_application() -> FastAPI:
    """
    Application factory function.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION (last added runs first)
    # =========================================================================

    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.state.limiter = limiter

    app.add_exception_handler(MenuAPIException, menu_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(health_router)
    app.include_router(websocket_router, tags=["Real-time"])
    app.include_router(api_v1_router, prefix=settings.API_PREFIX)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint with service information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "environment": settings.ENVIRONMENT,
            "health_check": "/health",
            "api_base": settings.API_PREFIX,
            "realtime": "/ws",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


app = create_application()


def main():
    """
    Run the application with uvicorn.

    Used by the ``menu-api`` script and ``python -m app.main``.
    """
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
        workers=1 if settings.RELOAD else settings.WORKERS,
    )


if __name__ == "__main__":
    main()
