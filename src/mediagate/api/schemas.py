"""Pydantic request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..models.image import ImageRecord


class ImageResponse(BaseModel):
    """Catalogued image."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    url: str
    filename: str
    category: str | None = None
    size: int
    format: str | None = None
    uploaded_at: datetime = Field(serialization_alias="uploadedAt")

    @classmethod
    def from_record(cls, record: ImageRecord) -> "ImageResponse":
        return cls(
            id=record.id,
            url=record.url,
            filename=record.filename,
            category=record.category,
            size=record.size,
            format=record.format,
            uploaded_at=record.uploaded_at,
        )


class DeleteResponse(BaseModel):
    """Delete image response."""

    success: bool = True
    message: str = "Image deleted"


class StatusResponse(BaseModel):
    """Diagnostic status response."""

    status: str = "OK"
    message: str = "Server is running"
    images_count: int = Field(serialization_alias="imagesCount")
    storage_folder: str = Field(serialization_alias="storageFolder")
    remote_store: str = Field(serialization_alias="remoteStore")


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str = "healthy"
    version: str
