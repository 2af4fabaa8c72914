# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Spaces Upload API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.dependencies import AppServices
from app.exceptions import UploadAPIException, upload_api_exception_handler
from app.routers import health, upload, users
from core.services import StorageService, UploadService, UserService
from lib.database import init_database
from lib.spaces_client import create_spaces_client

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def build_services(settings: Settings) -> AppServices:
    """
    Wire the services from one Settings object.

    Raises:
        DatabaseInitError: If the database can't be reached or bootstrapped
    """
    engine = init_database(settings)

    user_service = UserService(engine, default_image_uri=settings.DEFAULT_IMAGE_URI)
    storage_service = StorageService(
        create_spaces_client(settings),
        bucket=settings.DO_SPACE_NAME,
        region=settings.DO_SPACE_REGION,
        domain=settings.SPACE_DOMAIN,
    )
    upload_service = UploadService(
        users=user_service,
        storage=storage_service,
        bucket=settings.DO_SPACE_NAME,
        max_upload_size_bytes=settings.max_upload_size_bytes,
    )

    return AppServices(
        settings=settings,
        users=user_service,
        storage=storage_service,
        uploads=upload_service,
    )


def create_app(settings: Settings | None = None, services: AppServices | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings (loaded from the environment if omitted)
        services: Pre-built services; when given, startup skips the database
            and storage bootstrap

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        - Startup: connect to the database, bootstrap the schema, build services.
          A DatabaseInitError propagates and aborts startup.
        - Shutdown: release database connections
        """
        logger.info(f"Starting Spaces Upload API in {settings.ENVIRONMENT} mode")

        engine = None
        if getattr(app.state, "services", None) is None:
            app.state.services = build_services(settings)
            engine = app.state.services.users.engine

        yield

        logger.info("Shutting down Spaces Upload API")
        if engine is not None:
            engine.dispose()

    app = FastAPI(
        title="Spaces Upload API",
        description="""
## Users and Profile Images

Create users and attach a profile image stored in a DigitalOcean Space.

### Quick Start

```bash
# 1. Create a user
curl -X POST http://localhost:8080/api/v1/users \\
  -H "Content-Type: application/json" \\
  -d '{"full_name": "Ada Lovelace", "email": "ada@x.io", "password": "p"}'

# 2. Upload a profile image
curl -X POST http://localhost:8080/api/v1/users/{id}/profile-image \\
  -F "file=@avatar.png"

# 3. List users
curl http://localhost:8080/api/v1/users
```
""",
        version=health.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Users",
                "description": "Create and list users",
            },
            {
                "name": "Upload",
                "description": "Upload profile images",
            },
            {
                "name": "Health",
                "description": "API health and readiness checks",
            },
        ],
    )
    app.state.services = services

    # =========================================================================
    # Middleware
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(UploadAPIException)
    async def handle_upload_api_exception(request: Request, exc: UploadAPIException):
        """Handle custom API exceptions."""
        return await upload_api_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def handle_general_exception(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            }
        )

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(
        health.router,
        prefix="/api/v1",
        tags=["Health"]
    )

    app.include_router(
        users.router,
        prefix="/api/v1/users",
        tags=["Users"]
    )

    app.include_router(
        upload.router,
        prefix="/api/v1/users",
        tags=["Upload"]
    )

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "Spaces Upload API",
            "version": health.API_VERSION,
            "docs": "/docs",
            "health": "/api/v1/health",
        }

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on API_HOST:PORT."""
    import uvicorn

    settings = get_settings()
    logger.info(f"Listening on http://{settings.API_HOST}:{settings.PORT}/")
    uvicorn.run(app, host=settings.API_HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
