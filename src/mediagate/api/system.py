"""Diagnostic endpoints."""

from fastapi import APIRouter

from .. import __version__
from .dependencies import ImageServiceDep, SettingsDep
from .schemas import HealthResponse, StatusResponse

router = APIRouter(tags=["system"])


@router.get("/test", response_model=StatusResponse)
async def test_status(service: ImageServiceDep, settings: SettingsDep) -> StatusResponse:
    """Report that the server is up along with catalog statistics."""
    return StatusResponse(
        images_count=service.count(),
        storage_folder=settings.storage_folder,
        remote_store=settings.remote_store,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(version=__version__)
