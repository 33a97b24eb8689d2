"""Image upload and deletion service."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mediagate.exceptions import (
    ImageNotFoundException,
    RemoteStoreError,
    StoreDeleteFailedException,
    StoreUploadFailedException,
    ValidationException,
)
from mediagate.logging_config import get_logger
from mediagate.models.image import ImageRecord
from mediagate.services.validation import UploadCandidate, UploadPolicy, validate_upload
from mediagate.storage.protocols import CatalogProtocol, RemoteStoreProtocol

logger = get_logger(__name__)


def _retrieve_exception(task: asyncio.Future) -> None:
    # Marks a failure as seen when the cancelled caller is no longer awaiting it
    if not task.cancelled():
        task.exception()


class _KeyedLocks:
    """Per-key asyncio locks that are discarded once nobody holds or awaits them."""

    def __init__(self) -> None:
        self._locks: dict[str, tuple[asyncio.Lock, int]] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock, users = self._locks.get(key, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[key] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._locks[key]
            if users == 1:
                del self._locks[key]
            else:
                self._locks[key] = (lock, users - 1)


class ImageService:
    """Orchestrates validation, remote storage and the catalog.

    For both upload and delete the remote call completes before the catalog
    changes, so a remote failure never leaves a catalog trace.
    """

    def __init__(
        self,
        catalog: CatalogProtocol,
        store: RemoteStoreProtocol,
        policy: UploadPolicy,
        folder: str = "my_images",
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.policy = policy
        self.folder = folder
        self._deletions = _KeyedLocks()

    async def upload(self, candidate: UploadCandidate) -> ImageRecord:
        """
        Validate an upload, store it remotely and record it in the catalog.

        The record is visible to list_images() by the time this returns.

        Raises:
            ValidationException: The upload was rejected; no remote call was made.
            StoreUploadFailedException: The remote store failed; catalog unchanged.
        """
        log = logger.bind(
            filename=candidate.filename,
            category=candidate.category,
            size=candidate.size,
            content_type=candidate.content_type,
        )
        log.info("upload_received")

        try:
            validate_upload(candidate, self.policy)
        except ValidationException as e:
            log.warning("upload_rejected", code=e.error_code.value, reason=e.message)
            raise

        # Shielded so a client disconnect cannot split the remote put from the commit
        commit = asyncio.ensure_future(self._store_and_record(candidate, candidate.data or b""))
        commit.add_done_callback(_retrieve_exception)
        return await asyncio.shield(commit)

    async def _store_and_record(self, candidate: UploadCandidate, data: bytes) -> ImageRecord:
        try:
            stored = await self.store.put(data, self.folder, candidate.filename)
        except RemoteStoreError as e:
            logger.error("remote_upload_failed", filename=candidate.filename, error=str(e))
            raise StoreUploadFailedException(
                "Failed to upload image to remote store",
                details={"error": str(e)},
            ) from e

        record = ImageRecord.from_stored(
            stored,
            filename=candidate.filename,
            size=candidate.size,
            category=candidate.category,
        )
        self.catalog.insert(record)
        logger.info(
            "upload_stored",
            image_id=record.id,
            url=record.url,
            catalog_size=len(self.catalog),
        )
        return record

    async def delete(self, image_id: str) -> ImageRecord:
        """
        Delete an image remotely, then drop it from the catalog.

        Concurrent deletes of one id are serialized; only the first reaches the
        remote store and the rest observe NotFound.

        Raises:
            ImageNotFoundException: The id is not catalogued; no remote call was made.
            StoreDeleteFailedException: The remote delete failed; the record is kept.
        """
        logger.info("delete_requested", image_id=image_id)

        async with self._deletions.hold(image_id):
            record = self.catalog.find(image_id)
            if record is None:
                logger.warning("delete_not_found", image_id=image_id)
                raise ImageNotFoundException(f"Image '{image_id}' not found")

            try:
                await self.store.delete(record.id)
            except RemoteStoreError as e:
                logger.error("remote_delete_failed", image_id=image_id, error=str(e))
                raise StoreDeleteFailedException(
                    f"Failed to delete image '{image_id}' from remote store",
                    details={"error": str(e)},
                ) from e

            self.catalog.remove(image_id)

        logger.info("delete_completed", image_id=image_id, catalog_size=len(self.catalog))
        return record

    def list_images(self) -> list[ImageRecord]:
        """Return all catalogued images in upload order."""
        images = self.catalog.list()
        logger.debug("images_listed", count=len(images))
        return images

    def count(self) -> int:
        """Return the number of catalogued images."""
        return len(self.catalog)
