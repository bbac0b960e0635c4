"""URL building utilities for short links."""

from typing import Optional


DEFAULT_BASE_URL = "http://localhost:3000"
SHORT_PATH_PREFIX = "/s"


def build_short_url(
    slug: str,
    base_url: Optional[str] = None,
    path_prefix: str = SHORT_PATH_PREFIX,
) -> str:
    """Build complete short URL.

    Args:
        slug: The slug
        base_url: Base URL or bare host (e.g., https://short.ly or short.ly);
            falls back to DEFAULT_BASE_URL
        path_prefix: Path the redirect route is mounted under

    Returns:
        Complete short URL, e.g. https://short.ly/s/abc123
    """
    base = (base_url or DEFAULT_BASE_URL).rstrip("/")
    if not base.startswith(("http://", "https://")):
        base = f"https://{base}"

    prefix = path_prefix.strip("/")
    if prefix:
        return f"{base}/{prefix}/{slug}"
    return f"{base}/{slug}"
