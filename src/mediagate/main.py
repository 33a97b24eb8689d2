"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api import router
from .config import Settings, get_settings
from .exceptions import (
    InvalidRequestException,
    MediaGatewayException,
    MissingFileException,
)
from .logging_config import get_logger, setup_logging
from .models.errors import ErrorCode, ErrorResponse
from .services.image_service import ImageService
from .services.validation import UploadPolicy
from .storage import Catalog, CloudinaryStore, InMemoryRemoteStore, RemoteStoreProtocol

logger = get_logger(__name__)


def build_remote_store(settings: Settings) -> RemoteStoreProtocol:
    """Create the remote store selected by configuration."""
    if settings.remote_store == "memory":
        return InMemoryRemoteStore()
    if not settings.has_cloudinary_credentials:
        logger.warning("cloudinary_not_configured")
    return CloudinaryStore(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        base_url=settings.cloudinary_base_url,
        timeout=settings.remote_timeout_seconds,
    )


def create_app(
    settings: Settings | None = None,
    store: RemoteStoreProtocol | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use; defaults to the cached environment settings.
        store: Remote store to use instead of the one selected by settings.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Own the catalog and remote store for the lifetime of the process."""
        setup_logging(settings.log_level, json_format=settings.log_json)
        remote_store = store if store is not None else build_remote_store(settings)
        app.state.settings = settings
        app.state.image_service = ImageService(
            catalog=Catalog(),
            store=remote_store,
            policy=UploadPolicy.from_settings(settings),
            folder=settings.storage_folder,
        )
        logger.info(
            "server_started",
            version=__version__,
            remote_store=settings.remote_store,
            cloudinary_configured=settings.has_cloudinary_credentials,
            storage_folder=settings.storage_folder,
            max_upload_bytes=settings.max_upload_bytes,
            category_required=settings.category_required,
            routes=[
                "POST /upload",
                "GET /images",
                "DELETE /images/{id}",
                "GET /test",
                "GET /health",
            ],
        )
        yield
        await remote_store.aclose()
        logger.info("server_stopped", images_count=app.state.image_service.count())

    app = FastAPI(
        title="MediaGate API",
        description="Image ingestion gateway with a remote object store and in-memory catalog",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials="*" not in settings.cors_allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.exception_handler(MediaGatewayException)
    async def media_gateway_exception_handler(
        request: Request,
        exc: MediaGatewayException,
    ) -> JSONResponse:
        """Handle all MediaGatewayException subclasses with a proper error response."""
        if exc.status_code >= 500:
            logger.error(
                "request_failed",
                path=request.url.path,
                code=exc.error_code.value,
                message=exc.message,
                details=exc.details,
            )
            details = exc.details if settings.expose_error_details else None
        else:
            logger.warning(
                "request_rejected",
                path=request.url.path,
                code=exc.error_code.value,
                message=exc.message,
            )
            details = exc.details

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                detail=exc.message,
                code=exc.error_code.value,
                details=details,
            ).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Map request parsing failures onto the validation error codes."""
        fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
        if "body.image" in fields:
            # A text value in the image field carries no file part
            error: MediaGatewayException = MissingFileException("No file was uploaded")
        else:
            error = InvalidRequestException("Invalid request", details={"fields": fields})
        return await media_gateway_exception_handler(request, error)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Convert unexpected errors into a 500 response."""
        logger.exception("unhandled_error", path=request.url.path)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                detail="Internal server error",
                code=ErrorCode.INTERNAL_ERROR.value,
                details={"error": str(exc)} if settings.expose_error_details else None,
            ).model_dump(),
        )

    return app
