"""URL validation and sanitization utilities."""

import re
from typing import Optional, Set
from urllib.parse import urljoin, urlsplit

__all__ = [
    "URLValidationError",
    "sanitize_url",
    "validate_url",
    "resolve_url",
]


class URLValidationError(Exception):
    """Raised when URL validation fails."""


# Dangerous URL schemes to reject
DANGEROUS_SCHEMES = {"javascript", "data", "vbscript", "file"}


def sanitize_url(url: str) -> str:
    """Strip whitespace and control characters from a URL."""
    if not url:
        return ""
    url = url.strip()
    url = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", url)
    return url.replace("%00", "")


def validate_url(url: str, allowed_domains: Optional[Set[str]] = None) -> str:
    """Validate an absolute http(s) URL.

    Args:
        url: URL to validate
        allowed_domains: Optional set of host names the URL must belong to

    Returns:
        Sanitized URL

    Raises:
        URLValidationError: If the URL is empty, relative, not http(s) or
            outside ``allowed_domains``
    """
    if not url:
        raise URLValidationError("URL is empty")

    url = sanitize_url(url)

    try:
        parsed = urlsplit(url)
        # Accessing .port validates the port number
        parsed.port
    except ValueError as e:
        raise URLValidationError(f"Failed to parse URL {url!r}: {e}") from e

    scheme = parsed.scheme.lower()
    if scheme in DANGEROUS_SCHEMES:
        raise URLValidationError(f"Dangerous URL scheme: {scheme}")
    if scheme not in ("http", "https"):
        raise URLValidationError(f"Invalid URL scheme: {scheme or '(none)'} in {url!r}")

    host = parsed.hostname
    if not host:
        raise URLValidationError(f"URL has no host: {url!r}")

    if allowed_domains and host not in allowed_domains:
        raise URLValidationError(
            f"URL domain '{host}' not in allowed domains: {sorted(allowed_domains)}"
        )

    return url


def resolve_url(href: str, base_url: str) -> str:
    """Resolve a possibly relative link against the page it was found on.

    Raises:
        URLValidationError: If the resolved URL is not a valid http(s) URL
    """
    href = sanitize_url(href or "")
    if not href:
        raise URLValidationError("Link has no target")
    try:
        scheme = urlsplit(href).scheme.lower()
        absolute = urljoin(base_url, href)
    except ValueError as e:
        raise URLValidationError(f"Failed to parse link {href!r}: {e}") from e
    if scheme in DANGEROUS_SCHEMES:
        raise URLValidationError(f"Dangerous URL scheme in link: {href!r}")
    return validate_url(absolute)

