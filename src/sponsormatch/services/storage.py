"""Object storage for profile images and company logos.

Two backends are provided:

- `LocalObjectStorage` writes files below a media root that the application
  serves under `/media`.
- `HttpObjectStorage` PUTs bytes to a bucket endpoint with httpx, retrying
  network failures and 5xx responses with exponential backoff.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path, PurePosixPath
from typing import Protocol

import httpx

from sponsormatch.core.errors import StorageError, TransientIOError
from sponsormatch.core.settings import settings

logger = logging.getLogger(__name__)

HTTP_INTERNAL_SERVER_ERROR = 500
HTTP_BAD_REQUEST = 400


class ObjectStorage(Protocol):
    """Upload bytes and resolve public URLs for the stored objects."""

    def upload(self, data: bytes, path: str, content_type: str = "application/octet-stream") -> str:
        """Store `data` at `path` and return an opaque handle."""

    def get_public_url(self, handle: str) -> str:
        """Return the public URL for a handle returned by `upload`."""


def _clean_path(path: str) -> str:
    """Normalise an object path and refuse traversal outside the bucket."""
    pure = PurePosixPath(path.strip("/"))
    if not pure.parts or any(part in ("..", ".") for part in pure.parts):
        raise StorageError(f"Invalid object path: {path!r}")
    return pure.as_posix()


class LocalObjectStorage:
    """Filesystem-backed storage for development and tests."""

    def __init__(self, root: str | Path, base_url: str) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def upload(self, data: bytes, path: str, content_type: str = "application/octet-stream") -> str:
        handle = _clean_path(path)
        target = self.root / handle
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Failed to write {handle}: {exc}") from exc
        logger.debug("Stored %d bytes at %s (%s)", len(data), target, content_type)
        return handle

    def get_public_url(self, handle: str) -> str:
        if not (self.root / handle).is_file():
            raise StorageError(f"Object not found: {handle}")
        return f"{self.base_url}/{handle}"


class HttpObjectStorage:
    """Bucket reached over HTTP.

    Objects are uploaded with `PUT {base_url}/{path}`. The public URL is
    `{public_base_url}/{path}`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        public_base_url: str | None = None,
        timeout_seconds: float = 10.0,
        max_retries: int = 3,
        backoff_seconds: float = 0.5,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.public_base_url = (public_base_url or base_url).rstrip("/")
        self.max_retries = max(0, max_retries)
        self.backoff_seconds = max(0.0, backoff_seconds)
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout_seconds),
            headers=headers,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def upload(self, data: bytes, path: str, content_type: str = "application/octet-stream") -> str:
        handle = _clean_path(path)
        attempt = 0
        while True:
            try:
                response = self._client.put(
                    f"/{handle}",
                    content=data,
                    headers={"Content-Type": content_type},
                )
            except httpx.TransportError as exc:
                error: str = f"network error: {exc}"
            else:
                if response.status_code < HTTP_BAD_REQUEST:
                    return handle
                if response.status_code < HTTP_INTERNAL_SERVER_ERROR:
                    raise StorageError(
                        f"Storage rejected upload of {handle} with {response.status_code}",
                    )
                error = f"storage responded with {response.status_code}"

            if attempt >= self.max_retries:
                raise TransientIOError(
                    f"Upload of {handle} failed after {attempt + 1} attempts: {error}",
                )
            delay = self.backoff_seconds * (2**attempt)
            logger.warning(
                "Upload of %s failed (%s); retrying in %.2fs", handle, error, delay
            )
            time.sleep(delay)
            attempt += 1

    def get_public_url(self, handle: str) -> str:
        return f"{self.public_base_url}/{_clean_path(handle)}"


_storage: ObjectStorage | None = None


def get_object_storage() -> ObjectStorage:
    """Return the process-wide storage backend selected by settings."""
    global _storage
    if _storage is None:
        if settings.storage_backend == "http":
            if not settings.storage_base_url:
                raise StorageError("STORAGE_BASE_URL is required for the http backend")
            _storage = HttpObjectStorage(
                settings.storage_base_url,
                token=settings.storage_token,
                public_base_url=settings.storage_public_base_url,
                timeout_seconds=settings.storage_timeout_seconds,
                max_retries=settings.storage_max_retries,
                backoff_seconds=settings.storage_backoff_seconds,
            )
        else:
            _storage = LocalObjectStorage(settings.media_root, settings.media_base_url)
    return _storage
