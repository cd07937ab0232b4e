"""
Pure functions for remote API operations.

Functions for building upload metadata, decoding the response shapes the
conversion service is known to return, and building error objects without
I/O dependencies.
"""

import json
from typing import Any, Dict, List, Optional

from ..exceptions import ResponseFormatError, ServiceError

DOCUMENT_ID_FIELDS = ("id", "documentId")


def build_upload_filename(file_size_mb: float, timestamp_ms: int) -> str:
    """Descriptive upload filename carrying the size for server-side logs."""
    return f"xlsx_file_{timestamp_ms}_{file_size_mb:.2f}MB.xlsx"


def dump_response(data: Any) -> str:
    """Render a decoded response body for diagnostics."""
    try:
        return json.dumps(data)
    except (TypeError, ValueError):
        return str(data)


def extract_document_id(data: Any) -> str:
    """Read the document id from an upload response.

    ``id`` is preferred; ``documentId`` is accepted for services that use
    the alternative naming.
    """
    if data is None or data == "":
        raise ResponseFormatError(
            "Failed to get document ID from conversion service: No response data received"
        )

    if not isinstance(data, dict):
        raise ResponseFormatError(
            "Failed to get document ID from conversion service: "
            f"expected JSON object, got: {dump_response(data)}",
            {"response": data},
        )

    for key in DOCUMENT_ID_FIELDS:
        value = data.get(key)
        if value is not None and value != "":
            return str(value)

    raise ResponseFormatError(
        "Failed to get document ID from conversion service: "
        f"response missing id field. Response: {dump_response(data)}",
        {"response": data},
    )


def decode_sequence_response(data: Any, key: str, stage: str) -> List[Any]:
    """Accept either a bare JSON array or an object wrapping one under ``key``."""
    if data is None or data == "":
        raise ResponseFormatError(f"{stage}: No response data received")

    if isinstance(data, list):
        return data

    if isinstance(data, dict) and isinstance(data.get(key), list):
        return data[key]

    raise ResponseFormatError(
        f"{stage}: Unexpected response format. Expected array or object with "
        f"{key} array, got: {dump_response(data)}",
        {"response": data},
    )


def check_parameters_response(data: Any) -> Dict[str, Any]:
    """The parameters call succeeds only with a truthy ``success`` field."""
    if not isinstance(data, dict) or not data.get("success"):
        raise ResponseFormatError(
            f"Failed to set parameters: {dump_response(data)}",
            {"response": data},
        )
    return data


def build_http_error(
    stage: str,
    url: str,
    status_code: int,
    status_text: Optional[str],
    body: Optional[str],
    hint: Optional[str] = None,
) -> ServiceError:
    """Build a ServiceError for a non-2xx response."""
    status_text = status_text or "unknown"
    response_text = body if body else "no data"
    message = (
        f"{stage}: HTTP {status_code} {status_text}. URL: {url}. "
        f"Response: {response_text}"
    )
    if hint:
        message = f"{hint} {message}"
    return ServiceError(
        message,
        status_code=status_code,
        status_text=status_text,
        details={"url": url, "response": body},
    )


def describe_sheet(sheet: Any, position: int) -> str:
    """Display label for a sheet descriptor in logs."""
    if isinstance(sheet, str):
        name = sheet
    elif isinstance(sheet, dict) and sheet.get("name"):
        name = str(sheet["name"])
    else:
        name = f"Sheet {position}"
    return f"{position}: {name}"
