"""Upload validation.

Checks run in a fixed order and stop at the first failure. Validation has no
side effects and happens before any remote I/O.
"""

from dataclasses import dataclass

from mediagate.config import Settings
from mediagate.exceptions import (
    EmptyFileException,
    FileTooLargeException,
    MissingCategoryException,
    MissingFileException,
    UnsupportedTypeException,
)

ALLOWED_CONTENT_TYPES = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}
)


@dataclass(frozen=True)
class UploadPolicy:
    """Configurable upload limits."""

    max_upload_bytes: int = 10 * 1024 * 1024
    category_required: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadPolicy":
        return cls(
            max_upload_bytes=settings.max_upload_bytes,
            category_required=settings.category_required,
        )


@dataclass(frozen=True)
class UploadCandidate:
    """An incoming upload as seen by the gateway.

    ``data`` is None when the request had no file part. ``size`` is the byte
    length of the upload, which may exceed ``len(data)`` when the reader
    stopped early on an oversized body.
    """

    filename: str
    content_type: str | None
    data: bytes | None
    size: int
    category: str | None = None


def normalize_content_type(content_type: str | None) -> str:
    """Lower-case a MIME type and drop any parameters."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def _format_limit(num_bytes: int) -> str:
    if num_bytes % (1024 * 1024) == 0:
        return f"{num_bytes // (1024 * 1024)}MB"
    return f"{num_bytes} bytes"


def validate_upload(candidate: UploadCandidate, policy: UploadPolicy) -> None:
    """
    Accept or reject an upload.

    Args:
        candidate: The upload to check.
        policy: Size limit and category requirement.

    Raises:
        MissingFileException: No file part was supplied.
        EmptyFileException: The file is empty.
        FileTooLargeException: The file exceeds the size limit.
        MissingCategoryException: A required category is absent.
        UnsupportedTypeException: The content type is not an allowed image type.
    """
    if candidate.data is None:
        raise MissingFileException("No file was uploaded")

    if candidate.size == 0:
        raise EmptyFileException("Uploaded file is empty")

    if candidate.size > policy.max_upload_bytes:
        raise FileTooLargeException(
            f"File exceeds the {_format_limit(policy.max_upload_bytes)} limit",
            details={"size": candidate.size, "limit": policy.max_upload_bytes},
        )

    if policy.category_required and not (candidate.category and candidate.category.strip()):
        raise MissingCategoryException("Category is required")

    content_type = normalize_content_type(candidate.content_type)
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise UnsupportedTypeException(
            "Only images are allowed (JPEG, PNG, GIF, WebP)",
            details={"content_type": content_type or None},
        )
