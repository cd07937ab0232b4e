"""
Spreadsheet download for the conversion workflow.
"""

from typing import Dict, Optional

import httpx

from .config import get_logger
from .core.remote import build_http_error
from .exceptions import NetworkError, RequestTimeoutError
from .models import DownloadedFile

logger = get_logger("downloader")


def resolve_size_bytes(headers: httpx.Headers, content: bytes) -> int:
    """Size from the content-length header when usable, else the byte count."""
    declared = headers.get("content-length")
    if declared:
        try:
            size = int(declared)
            if size >= 0:
                return size
        except ValueError:
            logger.debug("Ignoring invalid content-length header: %r", declared)
    return len(content)


class FileDownloader:
    """Downloads the source spreadsheet into memory."""

    def __init__(
        self,
        timeout: int = 60,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers=dict(headers or {}),
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self._client.aclose()

    async def download(self, url: str) -> DownloadedFile:
        """Fetch ``url`` and return its bytes with the resolved size."""
        stage = "Failed to download file"
        try:
            response = await self._client.get(url)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                f"{stage}: request timed out after {self.timeout} seconds. URL: {url}",
                {"url": url},
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(f"{stage}: {e}. URL: {url}", {"url": url}) from e

        if not response.is_success:
            raise build_http_error(
                stage, url, response.status_code, response.reason_phrase, response.text
            )

        content = response.content
        downloaded = DownloadedFile(
            content=content,
            size_bytes=resolve_size_bytes(response.headers, content),
            content_type=response.headers.get("content-type"),
        )
        logger.info("File downloaded (size: %.2f MB)", downloaded.size_mb)
        return downloaded
