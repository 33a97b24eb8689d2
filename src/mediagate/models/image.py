"""Image domain models."""

from dataclasses import dataclass, field
from datetime import UTC, datetime


def _utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


@dataclass(frozen=True)
class StoredObject:
    """Object acknowledged by the remote store."""

    id: str
    url: str
    format: str | None = None
    size: int | None = None


@dataclass(frozen=True)
class ImageRecord:
    """Catalog entry for one ingested image."""

    id: str
    url: str
    filename: str
    size: int
    category: str | None = None
    format: str | None = None
    uploaded_at: datetime = field(default_factory=_utc_now)

    @classmethod
    def from_stored(
        cls,
        stored: StoredObject,
        filename: str,
        size: int,
        category: str | None = None,
    ) -> "ImageRecord":
        """Build a record from a remote store acknowledgement and request metadata."""
        return cls(
            id=stored.id,
            url=stored.url,
            filename=filename,
            size=size,
            category=category,
            format=stored.format,
        )
