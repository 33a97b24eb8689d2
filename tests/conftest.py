"""Pytest configuration and fixtures."""

import asyncio
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from mediagate.config import Settings
from mediagate.exceptions import RemoteStoreError
from mediagate.main import create_app
from mediagate.models.image import StoredObject
from mediagate.services.image_service import ImageService
from mediagate.services.validation import UploadCandidate, UploadPolicy
from mediagate.storage import Catalog, InMemoryRemoteStore

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64 + b"\xff\xd9"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeRemoteStore(InMemoryRemoteStore):
    """In-memory store with failure injection and call recording."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_put = False
        self.fail_delete = False
        self.put_calls = 0
        self.delete_calls: list[str] = []
        self.gate: asyncio.Event | None = None

    async def put(self, data: bytes, folder: str, filename: str) -> StoredObject:
        self.put_calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_put:
            raise RemoteStoreError("simulated upload outage")
        return await super().put(data, folder, filename)

    async def delete(self, object_id: str) -> None:
        self.delete_calls.append(object_id)
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_delete:
            raise RemoteStoreError("simulated delete outage")
        await super().delete(object_id)


def make_candidate(
    data: bytes | None = JPEG_BYTES,
    filename: str = "cat.jpg",
    content_type: str | None = "image/jpeg",
    category: str | None = "animals",
    size: int | None = None,
) -> UploadCandidate:
    """Build an upload candidate with sensible defaults."""
    if size is None:
        size = len(data) if data is not None else 0
    return UploadCandidate(
        filename=filename,
        content_type=content_type,
        data=data,
        size=size,
        category=category,
    )


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        remote_store="memory",
        max_upload_bytes=1024,
        category_required=True,
        storage_folder="test_images",
    )


@pytest.fixture
def store() -> FakeRemoteStore:
    return FakeRemoteStore()


@pytest.fixture
def catalog() -> Catalog:
    return Catalog()


@pytest.fixture
def service(catalog: Catalog, store: FakeRemoteStore) -> ImageService:
    return ImageService(
        catalog=catalog,
        store=store,
        policy=UploadPolicy(max_upload_bytes=1024, category_required=True),
        folder="test_images",
    )


@pytest.fixture
def client(settings: Settings, store: FakeRemoteStore) -> Iterator[TestClient]:
    """Test client whose lifespan owns a fresh catalog."""
    app = create_app(settings=settings, store=store)
    with TestClient(app) as test_client:
        yield test_client
