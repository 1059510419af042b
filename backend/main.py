"""
Nutshell - Main Application Entry Point

Personal task planner: staging area, daily plans and 15-minute time blocks.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nutshell.core.config import get_settings
from nutshell.core.exceptions import (
    ErrorCode,
    IllegalArgumentError,
    InfrastructureError,
    NutshellError,
)
from nutshell.core.logger import setup_logger

logger = setup_logger(__name__)

DATE_ERROR_PREFIXES = ("date_", "datetime_", "time_")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting Nutshell in {settings.ENVIRONMENT} mode...")

    if settings.is_local:
        from nutshell.infrastructure.local.database import init_db

        await init_db()

    yield

    # Shutdown
    logger.info("Shutting down Nutshell...")


def _validation_error(exc: RequestValidationError) -> NutshellError:
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    if any(str(d["type"]).startswith(DATE_ERROR_PREFIXES) for d in details):
        return IllegalArgumentError(ErrorCode.INVALID_DATE_FORMAT, details=details)
    return IllegalArgumentError(ErrorCode.INVALID_ARGUMENTS, details=details)


def register_exception_handlers(app: FastAPI) -> None:
    """Translate errors into (kind, status, code, message) responses."""

    @app.exception_handler(NutshellError)
    async def nutshell_error_handler(request: Request, exc: NutshellError):
        logger.error(
            f"catch {type(exc).__name__} on {request.method} {request.url.path}: "
            f"{exc.code.value} {exc.message}"
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        error = _validation_error(exc)
        logger.error(
            f"catch RequestValidationError on {request.method} {request.url.path}: "
            f"{error.code.value} {error.details}"
        )
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(
            f"catch {type(exc).__name__} on {request.method} {request.url.path}"
        )
        error = InfrastructureError(ErrorCode.INTERNAL_SERVER_ERROR)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Nutshell",
        description="Daily planner with 15-minute time blocks",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    from nutshell.api import tasks, time_blocks, users

    app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(time_blocks.router, prefix="/api/time-blocks", tags=["time_blocks"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": "0.1.0",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
