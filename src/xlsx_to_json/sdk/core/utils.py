"""
Utility functions for remote SDK operations.
"""

import math
from typing import Dict, Optional


def build_auth_headers(
    api_key: Optional[str], header_name: Optional[str] = "X-API-KEY"
) -> Dict[str, str]:
    """Build the static authentication header."""
    if api_key and header_name:
        return {header_name: api_key}
    return {}


def calculate_retry_delay(attempt: int, base_delay: float) -> float:
    """Backoff delay after failed attempt ``attempt`` (1-based)."""
    return base_delay * (1.5 ** (attempt - 1))


def calculate_upload_timeout(timeout_seconds: int, file_size_mb: float) -> int:
    """At least one minute per started 10 MB of upload."""
    return max(timeout_seconds, math.ceil(file_size_mb / 10) * 60)


def strip_endpoint(endpoint: str) -> str:
    return endpoint.strip().rstrip("/")
