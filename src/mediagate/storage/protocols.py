"""Storage layer protocols for abstraction and testability.

These protocols define the interfaces the image service depends on:
- the remote object store that holds image bytes
- the catalog that indexes what has been stored
"""

from typing import Protocol, runtime_checkable

from mediagate.models.image import ImageRecord, StoredObject


@runtime_checkable
class RemoteStoreProtocol(Protocol):
    """Protocol for remote object storage.

    Implementations raise RemoteStoreError on any failure.
    """

    async def put(self, data: bytes, folder: str, filename: str) -> StoredObject:
        """Upload a payload.

        Args:
            data: Raw file bytes
            folder: Namespace the object is stored under
            filename: Original client file name

        Returns:
            StoredObject with the assigned id and retrieval URL
        """
        ...

    async def delete(self, object_id: str) -> None:
        """Delete a previously stored object.

        Deleting an unknown id is an error, not a no-op.
        """
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...


@runtime_checkable
class CatalogProtocol(Protocol):
    """Protocol for the catalog of ingested images.

    Each method must be atomic with respect to other requests. Persistent
    implementations can replace the in-memory one behind this contract.
    """

    def list(self) -> list[ImageRecord]:
        """Return all records in insertion order."""
        ...

    def find(self, image_id: str) -> ImageRecord | None:
        """Return the record for an id, or None."""
        ...

    def insert(self, record: ImageRecord) -> None:
        """Append a record. Raises DuplicateRecordError on an existing id."""
        ...

    def remove(self, image_id: str) -> ImageRecord | None:
        """Remove and return the record for an id, or None if absent."""
        ...

    def __len__(self) -> int: ...
