"""Service layer."""

from .image_service import ImageService
from .validation import UploadCandidate, UploadPolicy, validate_upload

__all__ = ["ImageService", "UploadCandidate", "UploadPolicy", "validate_upload"]
