"""Blob storage backends for uploaded audio."""

import asyncio
import logging
import posixpath
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlparse

import httpx

from sanctum.config import Settings, get_settings
from sanctum.exceptions import UpstreamError

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def sanitize_filename(filename: str) -> str:
    """Replace everything except letters, digits, dots and dashes with underscores."""
    return _UNSAFE_FILENAME_CHARS.sub("_", filename)


def blob_owner_prefix(user_id: str) -> str:
    """Every blob a user uploads lives under this path."""
    return f"tracks/{user_id}/"


def build_blob_path(user_id: str, track_type: str, filename: str) -> str:
    """Storage path for a new upload: tracks/<user>/<type>/<millis>-<sanitized name>."""
    timestamp = int(time.time() * 1000)
    return f"{blob_owner_prefix(user_id)}{track_type}/{timestamp}-{sanitize_filename(filename)}"


def _normalize_pathname(path: str) -> str | None:
    pathname = posixpath.normpath(unquote(path).lstrip("/"))
    if pathname in (".", "..") or pathname.startswith("../"):
        return None
    return pathname


@dataclass(frozen=True)
class StoredBlob:
    """Where an uploaded blob ended up."""

    url: str
    pathname: str
    size: int


class BlobStorage(ABC):
    """Opaque store-and-retrieve service for binary objects."""

    @abstractmethod
    async def put(self, pathname: str, data: bytes, content_type: str) -> StoredBlob:
        """Durably store data and return its public location."""

    @abstractmethod
    async def delete(self, url: str) -> None:
        """Delete the blob at url."""

    @abstractmethod
    def pathname_for(self, url: str) -> str | None:
        """Storage pathname behind url, or None if url is not one of ours."""

    def is_owned_by(self, url: str, user_id: str) -> bool:
        """Whether url points inside the user's upload prefix."""
        pathname = self.pathname_for(url)
        return pathname is not None and pathname.startswith(blob_owner_prefix(user_id))


class LocalBlobStorage(BlobStorage):
    """Stores blobs on the local filesystem, served by the app under url_prefix."""

    def __init__(self, root: str | Path, url_prefix: str = "/media"):
        self.root = Path(root).expanduser().resolve()
        self.url_prefix = url_prefix.rstrip("/")

    def _path_for(self, pathname: str) -> Path:
        path = (self.root / pathname).resolve()
        if not path.is_relative_to(self.root):
            raise ValueError(f"Blob path escapes storage root: {pathname}")
        return path

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    async def put(self, pathname: str, data: bytes, content_type: str) -> StoredBlob:
        path = self._path_for(pathname)
        try:
            await asyncio.to_thread(self._write, path, data)
        except OSError as e:
            logger.error(f"Failed to write blob {pathname}: {e}")
            raise UpstreamError("Upload failed") from e
        return StoredBlob(url=f"{self.url_prefix}/{pathname}", pathname=pathname, size=len(data))

    def pathname_for(self, url: str) -> str | None:
        parsed = urlparse(url)
        if parsed.scheme or parsed.netloc or not parsed.path.startswith(f"{self.url_prefix}/"):
            return None
        return _normalize_pathname(parsed.path[len(self.url_prefix) :])

    async def delete(self, url: str) -> None:
        pathname = self.pathname_for(url)
        if pathname is None:
            raise ValueError(f"Not a local blob URL: {url}")
        path = self._path_for(pathname)
        await asyncio.to_thread(path.unlink, True)


class VercelBlobStorage(BlobStorage):
    """Client for the Vercel Blob REST API."""

    API_VERSION = "7"

    def __init__(self, token: str, api_url: str, timeout: float = 60.0):
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "authorization": f"Bearer {self.token}",
            "x-api-version": self.API_VERSION,
        }

    async def put(self, pathname: str, data: bytes, content_type: str) -> StoredBlob:
        headers = self._headers()
        headers["x-content-type"] = content_type
        headers["x-add-random-suffix"] = "0"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.put(
                    f"{self.api_url}/{pathname}", content=data, headers=headers
                )
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as e:
            logger.error(f"HTTP error uploading blob {pathname}: {e}")
            raise UpstreamError("Upload failed") from e

        return StoredBlob(url=body["url"], pathname=body.get("pathname", pathname), size=len(data))

    def pathname_for(self, url: str) -> str | None:
        parsed = urlparse(url)
        if parsed.scheme != "https" or not parsed.netloc:
            return None
        return _normalize_pathname(parsed.path)

    async def delete(self, url: str) -> None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.api_url}/delete", json={"urls": [url]}, headers=self._headers()
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamError(f"Blob deletion failed: {e}") from e


def create_blob_storage(settings: Settings) -> BlobStorage:
    """Build the blob backend selected in settings."""
    if settings.blob_backend == "vercel":
        if not settings.blob_read_write_token:
            raise UpstreamError("Blob token not configured")
        return VercelBlobStorage(
            token=settings.blob_read_write_token,
            api_url=settings.blob_api_url,
            timeout=settings.blob_timeout_seconds,
        )
    return LocalBlobStorage(settings.media_root, settings.media_url_prefix)


def get_blob_storage() -> BlobStorage:
    """Get the configured blob storage backend."""
    return create_blob_storage(get_settings())
