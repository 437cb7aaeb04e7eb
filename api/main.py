"""
FastAPI main application for the Book Directory API.
"""

import traceback
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.database import BookDatabaseService
from api.docs import API_VERSION, install_docs
from api.errors import BookDirectoryError, BookValidationError
from api.models import ErrorResponse, HealthResponse
from api.routes import router as book_router
from utilities.config import BookDirectoryConfig, config
from utilities.logger import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(app_config: Optional[BookDirectoryConfig] = None) -> FastAPI:
    """Build the application around ``app_config`` (defaults to the environment)."""
    app_config = app_config or config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the MongoDB connection for the lifetime of the server."""
        setup_logging(
            log_level=app_config.log_level,
            log_format=app_config.log_format,
            log_file=app_config.get_log_file_path(),
            debug=app_config.debug
        )
        logger.info("Starting Book Directory API", port=app_config.port)

        client = AsyncIOMotorClient(app_config.mongodb_url, tz_aware=True)
        try:
            database = client[app_config.mongodb_database]
            await database.command("ping")
            logger.info("Database connection established", database=app_config.mongodb_database)
        except PyMongoError as e:
            logger.error("Failed to connect to database", error=str(e))
            client.close()
            raise

        app.state.db_service = BookDatabaseService(database, app_config.mongodb_collection)

        yield

        logger.info("Shutting down Book Directory API")
        app.state.db_service = None
        client.close()

    app = FastAPI(
        title="Book Directory API",
        version=API_VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.db_service = None

    def error_response(
        exc: Exception,
        status_code: int,
        message: str,
        headers: Optional[Dict[str, str]] = None
    ) -> JSONResponse:
        stack = None
        if app_config.debug:
            stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(message=message, stack=stack).model_dump(exclude_none=True),
            headers=headers,
        )

    # Exception handlers
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Reject invalid request bodies with 400."""
        error = BookValidationError.from_errors(exc.errors())
        logger.info("Rejected invalid request", path=request.url.path, error=error.message)
        return error_response(exc, error.status_code, error.message)

    @app.exception_handler(BookDirectoryError)
    async def book_directory_exception_handler(request: Request, exc: BookDirectoryError):
        """Render typed errors with their own status code."""
        if exc.status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=exc.message)
        else:
            logger.info("Request failed", path=request.url.path, error=exc.message)
        return error_response(exc, exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions, including unmatched routes."""
        return error_response(exc, exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error("Unhandled exception", error=str(exc), path=request.url.path)
        return error_response(
            exc, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        )

    # Health check endpoint
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request):
        """Health check endpoint."""
        db_status = "unavailable"
        db_service = request.app.state.db_service
        if db_service is not None:
            health_info = await db_service.health_check()
            db_status = health_info.get("status", "unknown")

        return HealthResponse(
            status="healthy" if db_status == "healthy" else "degraded",
            timestamp=datetime.now(timezone.utc),
            version=API_VERSION,
            database_status=db_status
        )

    app.include_router(book_router, prefix="/api")
    install_docs(app, app_config.get_server_url())

    return app


app = create_app()
