"""Cloudinary remote store using the REST upload API."""

import hashlib
import time
from typing import Any

import httpx

from mediagate.exceptions import RemoteStoreError
from mediagate.logging_config import get_logger
from mediagate.models.image import StoredObject

logger = get_logger(__name__)


def sign_params(params: dict[str, Any], api_secret: str) -> str:
    """
    Compute a Cloudinary request signature.

    Args:
        params: Parameters to sign (excluding file, api_key, resource_type).
        api_secret: Account API secret.

    Returns:
        SHA-1 hex digest of the sorted, '&'-joined params followed by the secret.
    """
    to_sign = "&".join(
        f"{key}={value}" for key, value in sorted(params.items()) if value not in (None, "")
    )
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


class CloudinaryStore:
    """Cloudinary image store over direct HTTP requests."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        base_url: str = "https://api.cloudinary.com/v1_1",
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the Cloudinary client.

        Args:
            cloud_name: Cloudinary account (cloud) name.
            api_key: Account API key.
            api_secret: Account API secret, used only for signing.
            base_url: API base URL.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport, used by tests.
        """
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = f"{base_url.rstrip('/')}/{cloud_name}/image"
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    def _signed(self, params: dict[str, Any]) -> dict[str, Any]:
        params = {**params, "timestamp": str(int(time.time()))}
        return {
            **params,
            "api_key": self.api_key,
            "signature": sign_params(params, self.api_secret),
        }

    async def _post(self, action: str, data: dict[str, Any], files: dict | None = None) -> dict:
        try:
            response = await self._client.post(f"{self.base_url}/{action}", data=data, files=files)
        except httpx.HTTPError as e:
            raise RemoteStoreError(f"Cloudinary {action} request failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error:
            error = body.get("error") if isinstance(body, dict) else None
            message = error.get("message") if isinstance(error, dict) else error
            raise RemoteStoreError(
                f"Cloudinary {action} returned {response.status_code}: "
                f"{message or response.text[:200]}"
            )
        if not isinstance(body, dict):
            raise RemoteStoreError(f"Cloudinary {action} returned a malformed response")
        return body

    async def put(self, data: bytes, folder: str, filename: str) -> StoredObject:
        """
        Upload an image.

        Args:
            data: Raw image bytes.
            folder: Cloudinary folder the asset is placed in.
            filename: Original file name, sent as the multipart file name.

        Returns:
            StoredObject built from public_id, secure_url and format.

        Raises:
            RemoteStoreError: If the upload fails or the response lacks an id or URL.
        """
        params = self._signed({"folder": folder} if folder else {})
        body = await self._post("upload", params, files={"file": (filename or "upload", data)})

        public_id = body.get("public_id")
        url = body.get("secure_url") or body.get("url")
        if not public_id or not url:
            raise RemoteStoreError("Cloudinary upload response is missing public_id or url")

        logger.debug("cloudinary_upload_ok", public_id=public_id, bytes=body.get("bytes"))
        return StoredObject(
            id=public_id,
            url=url,
            format=body.get("format"),
            size=body.get("bytes"),
        )

    async def delete(self, object_id: str) -> None:
        """
        Destroy an image by public id.

        Raises:
            RemoteStoreError: If the request fails or the result is not "ok".
        """
        body = await self._post("destroy", self._signed({"public_id": object_id}))
        result = body.get("result")
        if result != "ok":
            raise RemoteStoreError(f"Cloudinary destroy of '{object_id}' returned '{result}'")

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
