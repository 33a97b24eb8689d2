"""In-memory catalog of ingested images."""

from collections import OrderedDict

from mediagate.models.image import ImageRecord


class DuplicateRecordError(ValueError):
    """Raised when inserting a record whose id is already catalogued."""


class Catalog:
    """Insertion-ordered index of images believed to exist in the remote store.

    State lives only as long as the process. None of the methods await, so
    each one runs to completion without interleaving on the event loop.
    """

    def __init__(self) -> None:
        self._records: OrderedDict[str, ImageRecord] = OrderedDict()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, image_id: object) -> bool:
        return image_id in self._records

    def find(self, image_id: str) -> ImageRecord | None:
        """Return the record for an id, or None."""
        return self._records.get(image_id)

    def insert(self, record: ImageRecord) -> None:
        """Append a record.

        Raises:
            DuplicateRecordError: If the id is already present
        """
        if record.id in self._records:
            raise DuplicateRecordError(f"Image '{record.id}' is already catalogued")
        self._records[record.id] = record

    def remove(self, image_id: str) -> ImageRecord | None:
        """Remove and return the record for an id, or None if absent."""
        return self._records.pop(image_id, None)

    def list(self) -> list[ImageRecord]:
        """Return a snapshot of all records in insertion order."""
        return list(self._records.values())
