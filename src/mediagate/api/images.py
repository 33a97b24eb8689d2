"""Image API endpoints."""

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from ..models.errors import ErrorResponse
from ..services.validation import UploadCandidate
from .dependencies import ImageServiceDep, SettingsDep
from .schemas import DeleteResponse, ImageResponse

router = APIRouter(tags=["images"])


async def _read_upload(file: UploadFile, limit: int) -> tuple[bytes, int]:
    """Read at most limit + 1 bytes so oversized uploads are never read into memory in full."""
    data = await file.read(limit + 1)
    size = file.size if file.size is not None else len(data)
    return data, max(size, len(data))


@router.post(
    "/upload",
    response_model=ImageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Upload rejected by validation"},
        500: {"model": ErrorResponse, "description": "Remote store upload failed"},
    },
    summary="Upload an image",
)
async def upload_image(
    service: ImageServiceDep,
    settings: SettingsDep,
    image: Annotated[UploadFile | None, File()] = None,
    category: Annotated[str | None, Form()] = None,
) -> ImageResponse:
    """Validate an image, store it remotely and add it to the catalog."""
    if image is None:
        candidate = UploadCandidate(
            filename="", content_type=None, data=None, size=0, category=category
        )
    else:
        try:
            data, size = await _read_upload(image, settings.max_upload_bytes)
        finally:
            await image.close()
        candidate = UploadCandidate(
            filename=image.filename or "upload",
            content_type=image.content_type,
            data=data,
            size=size,
            category=category,
        )

    record = await service.upload(candidate)
    return ImageResponse.from_record(record)


@router.get(
    "/images",
    response_model=list[ImageResponse],
    summary="List uploaded images",
)
async def list_images(service: ImageServiceDep) -> list[ImageResponse]:
    """Get all catalogued images in upload order."""
    return [ImageResponse.from_record(record) for record in service.list_images()]


@router.delete(
    "/images/{image_id:path}",
    response_model=DeleteResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Image not found"},
        500: {"model": ErrorResponse, "description": "Remote store delete failed"},
    },
    summary="Delete an image",
)
async def delete_image(image_id: str, service: ImageServiceDep) -> DeleteResponse:
    """Delete an image from the remote store, then from the catalog."""
    await service.delete(image_id)
    return DeleteResponse()
