"""
Validation utilities for SDK operations.
"""

import ipaddress
import re
from urllib.parse import urlparse

from .exceptions import InvalidInputError, FileSizeError

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")

# Code points a URL host can never contain.
_FORBIDDEN_HOST_CHARS = frozenset(" \t\n\r#%/:<>?@[\\]^|")


def _is_plausible_host(host: str) -> bool:
    return not any(ch in _FORBIDDEN_HOST_CHARS or ord(ch) < 0x20 for ch in host)


def _is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        return False


class URLValidator:
    """URL validation for the service endpoint and the file URL."""

    ALLOWED_SCHEMES = ("http", "https")

    @classmethod
    def is_valid_url(cls, url: str) -> bool:
        """Check that ``url`` is a well-formed http(s) URL."""
        if not url or not isinstance(url, str) or not url.strip():
            return False

        candidate = url.strip()
        prefixed = not _SCHEME_RE.match(candidate)
        if prefixed:
            candidate = "http://" + candidate

        try:
            parsed = urlparse(candidate)
            port = parsed.port
        except ValueError:
            return False

        if parsed.scheme.lower() not in cls.ALLOWED_SCHEMES:
            return False

        host = parsed.hostname
        if not host:
            return False

        if not (_is_ip_literal(host) or _is_plausible_host(host)):
            return False

        if prefixed:
            # Without an explicit scheme, a bare word is not taken as a host.
            return (
                "." in host
                or host == "localhost"
                or _is_ip_literal(host)
                or port is not None
            )

        return True

    @classmethod
    def validate_url(cls, url: str, label: str = "URL") -> str:
        """Return the stripped URL or raise InvalidInputError."""
        if not cls.is_valid_url(url):
            raise InvalidInputError(f"Invalid {label}: {url}", {"url": url})
        return url.strip()


def is_valid_url(url: str) -> bool:
    """Check that ``url`` is a well-formed http(s) URL."""
    return URLValidator.is_valid_url(url)


class FileSizeValidator:
    """File size validation against the upload limit."""

    DEFAULT_MAX_SIZE_MB = 50

    @classmethod
    def validate_size(cls, size_bytes: int, max_size_mb: int = DEFAULT_MAX_SIZE_MB) -> None:
        """Raise FileSizeError when the file is strictly larger than the limit."""
        limit = max_size_mb * 1024 * 1024
        if size_bytes > limit:
            actual_mb = size_bytes / (1024 * 1024)
            raise FileSizeError(
                f"File size ({actual_mb:.2f} MB) exceeds {max_size_mb} MB limit",
                {"file_size": size_bytes, "limit": limit},
            )
