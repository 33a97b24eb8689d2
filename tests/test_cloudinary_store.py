"""Tests for the Cloudinary remote store."""

import hashlib
from urllib.parse import parse_qs

import httpx
import pytest

from mediagate.exceptions import RemoteStoreError
from mediagate.storage import CloudinaryStore, RemoteStoreProtocol
from mediagate.storage.cloudinary import sign_params


def _make_store(handler) -> CloudinaryStore:
    return CloudinaryStore(
        cloud_name="demo",
        api_key="key-123",
        api_secret="s3cret",
        base_url="https://api.example.test/v1_1",
        transport=httpx.MockTransport(handler),
    )


class TestSignParams:
    """Tests for request signing."""

    def test_sorted_and_joined(self) -> None:
        params = {"timestamp": 1315060510, "public_id": "sample_image", "eager": "w_400"}
        expected = hashlib.sha1(
            b"eager=w_400&public_id=sample_image&timestamp=1315060510abcd"
        ).hexdigest()
        assert sign_params(params, "abcd") == expected

    def test_empty_values_are_skipped(self) -> None:
        assert sign_params({"folder": "", "timestamp": 1}, "x") == sign_params(
            {"timestamp": 1}, "x"
        )


class TestCloudinaryStore:
    """Tests for CloudinaryStore class."""

    def test_satisfies_protocol(self) -> None:
        store = _make_store(lambda request: httpx.Response(200, json={}))
        assert isinstance(store, RemoteStoreProtocol)

    @pytest.mark.asyncio
    async def test_put_returns_stored_object(self) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = request.read()
            return httpx.Response(
                200,
                json={
                    "public_id": "my_images/abc123",
                    "secure_url": "https://res.example.test/demo/image/upload/my_images/abc123.jpg",
                    "format": "jpg",
                    "bytes": 4,
                },
            )

        store = _make_store(handler)
        stored = await store.put(b"\xff\xd8\xff\xd9", "my_images", "cat.jpg")
        await store.aclose()

        assert seen["url"] == "https://api.example.test/v1_1/demo/image/upload"
        assert b'name="folder"' in seen["body"]
        assert b"my_images" in seen["body"]
        assert b'name="signature"' in seen["body"]
        assert b'filename="cat.jpg"' in seen["body"]
        assert stored.id == "my_images/abc123"
        assert stored.url.endswith("abc123.jpg")
        assert stored.format == "jpg"
        assert stored.size == 4

    @pytest.mark.asyncio
    async def test_put_http_error(self) -> None:
        store = _make_store(
            lambda request: httpx.Response(401, json={"error": {"message": "Invalid Signature"}})
        )
        with pytest.raises(RemoteStoreError, match="Invalid Signature"):
            await store.put(b"data", "my_images", "cat.jpg")

    @pytest.mark.asyncio
    async def test_put_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        store = _make_store(handler)
        with pytest.raises(RemoteStoreError, match="connection refused"):
            await store.put(b"data", "my_images", "cat.jpg")

    @pytest.mark.asyncio
    async def test_put_missing_fields(self) -> None:
        store = _make_store(lambda request: httpx.Response(200, json={"format": "jpg"}))
        with pytest.raises(RemoteStoreError, match="missing"):
            await store.put(b"data", "my_images", "cat.jpg")

    @pytest.mark.asyncio
    async def test_delete_ok(self) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["form"] = parse_qs(request.read().decode())
            return httpx.Response(200, json={"result": "ok"})

        store = _make_store(handler)
        await store.delete("my_images/abc123")

        assert seen["url"] == "https://api.example.test/v1_1/demo/image/destroy"
        form = seen["form"]
        assert form["public_id"] == ["my_images/abc123"]
        assert form["api_key"] == ["key-123"]
        expected = sign_params(
            {"public_id": "my_images/abc123", "timestamp": form["timestamp"][0]}, "s3cret"
        )
        assert form["signature"] == [expected]

    @pytest.mark.asyncio
    async def test_delete_not_found_is_an_error(self) -> None:
        store = _make_store(lambda request: httpx.Response(200, json={"result": "not found"}))
        with pytest.raises(RemoteStoreError, match="not found"):
            await store.delete("my_images/missing")
