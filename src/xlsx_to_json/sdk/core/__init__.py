"""
Core pure functions for the SDK.

This package contains I/O-free functions for building requests, decoding
responses and computing retry and timeout values.
"""

from .remote import (
    build_upload_filename,
    dump_response,
    extract_document_id,
    decode_sequence_response,
    check_parameters_response,
    build_http_error,
    describe_sheet,
)

from .utils import (
    build_auth_headers,
    calculate_retry_delay,
    calculate_upload_timeout,
    strip_endpoint,
)

__all__ = [
    # Remote functions
    "build_upload_filename",
    "dump_response",
    "extract_document_id",
    "decode_sequence_response",
    "check_parameters_response",
    "build_http_error",
    "describe_sheet",
    # Utility functions
    "build_auth_headers",
    "calculate_retry_delay",
    "calculate_upload_timeout",
    "strip_endpoint",
]
