"""URL validation and normalization utilities."""

import ipaddress
import re
from urllib.parse import urlparse
from typing import Any, Tuple


MAX_URL_LENGTH = 2048
ALLOWED_SCHEMES = ("http", "https")

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_LABEL_RE = re.compile(r"^(?!-)[\w-]{1,63}(?<!-)$")


def normalize_url(url: str) -> str:
    """Prefix ``https://`` when the URL carries no scheme.

    An existing scheme is kept as is, so ``ftp://host`` stays ``ftp://host``
    and is rejected later by validation.

    Args:
        url: Raw URL

    Returns:
        URL with a scheme
    """
    if _SCHEME_RE.match(url):
        return url
    return f"https://{url}"


def _is_valid_host(hostname: str) -> bool:
    if hostname == "localhost":
        return True

    try:
        ipaddress.ip_address(hostname)
        return True
    except ValueError:
        pass

    labels = hostname.rstrip(".").split(".")
    if len(labels) < 2:
        return False
    return all(_LABEL_RE.match(label) for label in labels)


def validate_url(url: Any) -> Tuple[bool, str]:
    """Validate an absolute http(s) URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if any(c.isspace() for c in url):
        return False, "URL must not contain whitespace"

    try:
        result = urlparse(url)

        if result.scheme not in ALLOWED_SCHEMES:
            return False, "URL must use http or https protocol"

        # Accessing .port raises ValueError for junk like "host:alert(1)"
        result.port
        hostname = result.hostname
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    if not result.netloc or not hostname:
        return False, "URL must have a valid domain"

    if not _is_valid_host(hostname):
        return False, "URL must have a valid domain"

    return True, ""


def is_valid_url(url: Any) -> bool:
    """Return True for absolute URLs with an http or https scheme."""
    return validate_url(url)[0]
