"""Deterministic file names for saved page sources.

A page is saved under a name built from its URL so a crawl can be repeated
and the saved files stay readable:

    https://www.climatico.ro/aer-conditionat/vrv?p=2
    -> https__www.climatico.ro__443__slash_aer-conditionat_slash_vrv__p_eq_2.html

Different URLs that escape to the same string map to the same file name.
"""

from urllib.parse import urlsplit

from acscrape.errors import OpaqueOriginError

__all__ = [
    "SLASH_TOKEN",
    "EQUALS_TOKEN",
    "AMPERSAND_TOKEN",
    "url_to_html_file_name",
]

SLASH_TOKEN = "_slash_"
EQUALS_TOKEN = "_eq_"
AMPERSAND_TOKEN = "_"

# Schemes with a (scheme, host, port) origin, and their default ports
DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
}


def url_to_html_file_name(url: str) -> str:
    """Turn a URL into an HTML file name that keeps as much of the URL as possible.

    Args:
        url: Absolute URL of the page

    Returns:
        File name ending in ``.html``

    Raises:
        OpaqueOriginError: If the URL cannot be a base URL or its origin
            cannot be split into scheme, host and port
    """
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise OpaqueOriginError(f"Cannot parse URL {url!r}: {e}") from e

    scheme = parts.scheme.lower()
    if not parts.netloc and not parts.path.startswith("/"):
        raise OpaqueOriginError(f"Cannot name {url!r}: it cannot be a base URL")
    if scheme not in DEFAULT_PORTS or not parts.hostname:
        raise OpaqueOriginError(
            f"Cannot split {url!r} into scheme, host and port: the origin is opaque"
        )

    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    if port is None:
        port = DEFAULT_PORTS[scheme]

    path = (parts.path or "/").replace("/", SLASH_TOKEN)
    name = f"{scheme}__{host}__{port}_{path}"

    if parts.query:
        query = parts.query.replace("=", EQUALS_TOKEN).replace("&", AMPERSAND_TOKEN)
        name = f"{name}__{query}"

    return f"{name}.html"
