"""URL helpers used before a page is handed to the auditor."""

from typing import Optional
from urllib.parse import urlparse


def validate_url(url: Optional[str]) -> bool:
    """Return True for a well-formed http(s) URL with a host."""
    if not url or not isinstance(url, str):
        return False

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        return False

    if not hostname or any(ch.isspace() for ch in hostname):
        return False
    return parsed.scheme in ("http", "https")


def sanitize_url(url: Optional[str]) -> str:
    """Trim whitespace and default to https:// when no scheme is given."""
    if not url:
        return ""

    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def extract_domain(url: Optional[str]) -> str:
    """Hostname of ``url``, or an empty string if it cannot be parsed."""
    if not url:
        return ""
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""
