"""In-process remote store for local development."""

from pathlib import PurePosixPath
from uuid import uuid4

from mediagate.exceptions import RemoteStoreError
from mediagate.models.image import StoredObject


class InMemoryRemoteStore:
    """Remote store that keeps objects in a dict.

    Mirrors the behavior of a real provider closely enough for development:
    ids are namespaced by folder and deleting an unknown id fails.
    """

    def __init__(self, base_url: str = "memory://images") -> None:
        self.base_url = base_url.rstrip("/")
        self._objects: dict[str, bytes] = {}

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._objects

    async def put(self, data: bytes, folder: str, filename: str) -> StoredObject:
        object_id = f"{folder}/{uuid4().hex}" if folder else uuid4().hex
        suffix = PurePosixPath(filename).suffix.lower().lstrip(".")
        image_format = {"jpeg": "jpg"}.get(suffix, suffix) or None

        self._objects[object_id] = bytes(data)
        url = f"{self.base_url}/{object_id}"
        if image_format:
            url = f"{url}.{image_format}"
        return StoredObject(id=object_id, url=url, format=image_format, size=len(data))

    async def delete(self, object_id: str) -> None:
        if self._objects.pop(object_id, None) is None:
            raise RemoteStoreError(f"Object '{object_id}' not found")

    async def aclose(self) -> None:
        """Nothing to release."""
