"""API router registration."""

from fastapi import APIRouter

from . import images, system

router = APIRouter()

router.include_router(images.router)
router.include_router(system.router)

__all__ = ["router"]
