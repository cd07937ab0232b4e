import time
from typing import Any, Dict, List, Optional

import httpx

from .config import get_logger
from .core.remote import (
    build_http_error,
    build_upload_filename,
    check_parameters_response,
    decode_sequence_response,
    dump_response,
    extract_document_id,
)
from .core.utils import calculate_upload_timeout, strip_endpoint
from .exceptions import (
    NetworkError,
    RequestTimeoutError,
    ResponseFormatError,
)
from .models import XLSX_MIME_TYPE, ExportSpec

logger = get_logger("remote")

HEALTH_CHECK_TIMEOUT = 10
BASE_CHECK_TIMEOUT = 5


class ConversionClient:
    """Client for the XLSX to JSON conversion service API."""

    def __init__(
        self,
        endpoint: str,
        timeout: int = 60,
        auth_headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        debug: bool = False,
    ):
        self.endpoint = strip_endpoint(endpoint)
        self.timeout = timeout
        self.auth_headers = dict(auth_headers or {})
        self.debug = debug

        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        if self._owns_client:
            await self._client.aclose()

    async def verify_endpoint(self) -> bool:
        """Check that the service answers, on ``/health`` or the base URL."""
        logger.info("Verifying API endpoint: %s", self.endpoint)
        for url, timeout in (
            (f"{self.endpoint}/health", HEALTH_CHECK_TIMEOUT),
            (self.endpoint, BASE_CHECK_TIMEOUT),
        ):
            try:
                response = await self._client.get(
                    url, headers=self.auth_headers, timeout=timeout
                )
            except httpx.HTTPError as e:
                logger.info("Endpoint check for %s failed: %s", url, e)
                continue
            if response.is_success:
                logger.info("API verification successful: %d", response.status_code)
                return True
            logger.info("Endpoint check for %s returned %d", url, response.status_code)

        logger.warning(
            "API verification failed for %s. API might be unavailable.", self.endpoint
        )
        return False

    async def upload(self, content: bytes) -> str:
        """Upload spreadsheet bytes and return the service's document id."""
        file_size_mb = len(content) / (1024 * 1024)
        upload_timeout = calculate_upload_timeout(self.timeout, file_size_mb)
        url = f"{self.endpoint}/upload"
        filename = build_upload_filename(file_size_mb, int(time.time() * 1000))

        logger.info(
            "Uploading file (%.2f MB) to %s with timeout of %d seconds",
            file_size_mb,
            url,
            upload_timeout,
        )

        data = await self._request(
            "POST",
            url,
            "Failed to upload file to conversion service",
            files={"file": (filename, content, XLSX_MIME_TYPE)},
            timeout=upload_timeout,
            too_large_message=(
                f"File size ({file_size_mb:.2f} MB) exceeds the conversion service limit. "
                "Please use a smaller file."
            ),
        )

        if self.debug and isinstance(data, dict):
            logger.debug("Upload response fields: %s", ", ".join(data.keys()))

        document_id = extract_document_id(data)
        logger.info("Successfully obtained document ID: %s", document_id)
        return document_id

    async def get_sheets(self, document_id: str) -> List[Any]:
        """List the sheets of an uploaded document."""
        logger.info("Getting sheet names for document ID: %s", document_id)
        url = f"{self.endpoint}/documents/{document_id}/sheets"
        data = await self._request("GET", url, "Failed to get sheets")
        sheets = decode_sequence_response(data, "sheets", "Failed to get sheet names")
        logger.info("Found %d sheets", len(sheets))
        return sheets

    async def get_fields(
        self, document_id: str, sheet_index: int, headers_index: int
    ) -> List[Any]:
        """List the columns of one sheet, named from the headers row."""
        logger.info(
            "Fetching fields from sheet index %d with headers at row %d",
            sheet_index,
            headers_index + 1,
        )
        url = f"{self.endpoint}/documents/{document_id}/fields"
        data = await self._request(
            "GET",
            url,
            "Failed to get fields",
            params={"headersIndex": headers_index, "sheetIndex": sheet_index},
        )
        fields = decode_sequence_response(data, "fields", "Failed to get fields")
        logger.info("Found %d fields", len(fields))
        if self.debug:
            logger.debug("Raw fields data: %s", dump_response(fields))
        return fields

    async def set_parameters(self, document_id: str, export_spec: ExportSpec) -> Dict[str, Any]:
        """Send the sheet, header row, rename mapping and export order."""
        payload = export_spec.to_payload()
        logger.info("Setting conversion parameters")
        logger.debug("Parameters payload: %s", dump_response(payload))

        url = f"{self.endpoint}/documents/{document_id}/parameters"
        data = await self._request("POST", url, "Failed to set parameters", json=payload)
        result = check_parameters_response(data)
        logger.info("Parameters set successfully")
        return result

    async def get_exported_data(self, document_id: str) -> Any:
        """Fetch the exported records, as a list or a single object."""
        logger.info("Fetching exported data for document %s", document_id)
        url = f"{self.endpoint}/documents/{document_id}/export"
        data = await self._request("GET", url, "Failed to get exported data")

        if data is None or data == "":
            raise ResponseFormatError(
                "Failed to get exported data: No response data received", {"url": url}
            )

        count = len(data) if isinstance(data, list) else 1
        logger.info("Successfully retrieved data with %d records", count)
        return data

    async def _request(
        self,
        method: str,
        url: str,
        stage: str,
        too_large_message: Optional[str] = None,
        **kwargs: Any,
    ) -> Any:
        """Send one request and decode its JSON body, classifying failures."""
        headers = dict(self.auth_headers)

        try:
            response = await self._client.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            logger.error("%s: request to %s timed out: %s", stage, url, e)
            raise RequestTimeoutError(
                f"{stage}: connection timed out. URL: {url}. "
                "Please increase the timeout value or check server capacity.",
                {"url": url},
            ) from e
        except httpx.RequestError as e:
            logger.error("%s: cannot connect to %s: %s", stage, url, e)
            raise NetworkError(
                f"{stage}: cannot connect to the conversion service at {url}. "
                f"Please verify the API URL is correct and the service is running. Error: {e}",
                {"url": url},
            ) from e

        if self.debug:
            logger.debug("Response headers from %s: %s", url, dict(response.headers))

        if not response.is_success:
            error = build_http_error(
                stage,
                url,
                response.status_code,
                response.reason_phrase,
                response.text,
                hint=too_large_message if response.status_code == 413 else None,
            )
            logger.error(error.message)
            raise error

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ResponseFormatError(
                f"{stage}: response is not valid JSON. URL: {url}. Response: {response.text}",
                {"url": url, "response": response.text},
            ) from e
