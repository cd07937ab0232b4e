"""
Data models for the conversion workflow.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .core.utils import build_auth_headers

XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class WorkflowStage(str, Enum):
    """Stages of a single workflow run, in execution order."""

    VALIDATING = "validating"
    DOWNLOADING = "downloading"
    UPLOADING = "uploading"
    LISTING_SHEETS = "listing_sheets"
    LISTING_FIELDS = "listing_fields"
    SETTING_PARAMETERS = "setting_parameters"
    FETCHING_EXPORT = "fetching_export"
    EMITTING = "emitting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class CustomFieldOverride:
    """User-supplied display name for the column at ``index``."""

    index: int
    name: str


@dataclass
class WorkflowConfig:
    """
    Configuration for one workflow run.

    Attributes:
        service_endpoint: Base URL of the conversion service API
        file_url: URL of the XLSX file to convert
        sheet_index: Zero-based index of the sheet to export
        headers_index: Zero-based row holding the column headers
        export_field_indexes: Column indexes to export, empty for all
        custom_field_overrides: Display names that replace the column headers
        timeout: Per-request timeout in seconds
        retry_attempts: Attempts per remote call, including the first
        api_key: Optional API key sent with every request
        api_key_header: Header name carrying the API key
        debug: Log response headers and payloads

    Example:
        >>> config = WorkflowConfig(
        ...     service_endpoint="http://localhost:3000/api",
        ...     file_url="https://example.com/prices.xlsx",
        ...     export_field_indexes=[0, 1],
        ... )
    """

    service_endpoint: str
    file_url: str
    sheet_index: int = 0
    headers_index: int = 0
    export_field_indexes: List[int] = field(default_factory=list)
    custom_field_overrides: List[CustomFieldOverride] = field(default_factory=list)
    timeout: int = 60
    retry_attempts: int = 3
    api_key: Optional[str] = None
    api_key_header: str = "X-API-KEY"
    debug: bool = False

    def auth_headers(self) -> Dict[str, str]:
        """Static authentication header, if one is configured."""
        return build_auth_headers(self.api_key, self.api_key_header)


@dataclass
class FieldMappings:
    """Column rename mapping and ordered export indexes."""

    mapping: Dict[str, str]
    export_field_indexes: List[int]


@dataclass
class ExportSpec:
    """Export parameters sent to the service for one document."""

    sheet_index: int
    headers_index: int
    mapping: Dict[str, str]
    export_field_indexes: List[int]

    def to_payload(self) -> Dict[str, Any]:
        return {
            "sheetIndex": self.sheet_index,
            "headers_index": self.headers_index,
            "mapping": dict(self.mapping),
            "export_fields": [str(index) for index in self.export_field_indexes],
        }


@dataclass
class DownloadedFile:
    """Spreadsheet bytes held in memory for the duration of a run."""

    content: bytes
    size_bytes: int
    content_type: Optional[str] = None

    @property
    def size_mb(self) -> float:
        return self.size_bytes / (1024 * 1024)


@dataclass
class OutputItem:
    """One exported record handed to the host pipeline."""

    record: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"json": self.record}
