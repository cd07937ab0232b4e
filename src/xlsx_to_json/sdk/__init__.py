"""
xlsx-to-json SDK

Python client for converting spreadsheets to JSON records through a remote
conversion service.
"""

from .workflow import XlsxToJsonWorkflow
from .remote import ConversionClient
from .downloader import FileDownloader
from .mapping import create_field_mappings, parse_export_fields, parse_field_overrides
from .retry import with_retry
from .validators import is_valid_url
from .models import (
    CustomFieldOverride,
    ExportSpec,
    FieldMappings,
    OutputItem,
    WorkflowConfig,
    WorkflowStage,
)
from .exceptions import (
    ConversionError,
    InvalidInputError,
    NetworkError,
    RequestTimeoutError,
    ServiceError,
    ResponseFormatError,
    FileSizeError,
    WorkflowError,
)

__all__ = [
    "XlsxToJsonWorkflow",
    "ConversionClient",
    "FileDownloader",
    "create_field_mappings",
    "parse_export_fields",
    "parse_field_overrides",
    "with_retry",
    "is_valid_url",
    "CustomFieldOverride",
    "ExportSpec",
    "FieldMappings",
    "OutputItem",
    "WorkflowConfig",
    "WorkflowStage",
    "ConversionError",
    "InvalidInputError",
    "NetworkError",
    "RequestTimeoutError",
    "ServiceError",
    "ResponseFormatError",
    "FileSizeError",
    "WorkflowError",
]
