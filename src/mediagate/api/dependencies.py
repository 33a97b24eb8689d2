"""Shared dependencies for API endpoints."""

from typing import Annotated

from fastapi import Depends, Request

from ..config import Settings
from ..services.image_service import ImageService


def get_image_service(request: Request) -> ImageService:
    """Get the image service created by the application lifespan."""
    return request.app.state.image_service


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


# Type aliases for cleaner endpoint signatures
ImageServiceDep = Annotated[ImageService, Depends(get_image_service)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
