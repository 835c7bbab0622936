"""Query string parsing and URL helpers.

Duplicate keys collapse to their last occurrence, the same way the
browser's ``URLSearchParams`` is read into a plain object on the client.
"""

from types import MappingProxyType
from urllib.parse import parse_qsl


def parse_query(query_string: str) -> MappingProxyType[str, str]:
    """Parse *query_string* into a read-only mapping.

    Blank values are kept (``?search=`` yields ``{"search": ""}``).
    """
    pairs = parse_qsl(query_string, keep_blank_values=True)
    return MappingProxyType(dict(pairs))


def split_url(url: str) -> tuple[str, str]:
    """Split *url* into ``(path, query_string)``, dropping any fragment."""
    url, _, _ = url.partition("#")
    path, _, query_string = url.partition("?")
    return path, query_string


def strip_base(url: str, base_path: str) -> str:
    """Map *url* under *base_path* to an app URL starting with ``/``.

    Any query string or fragment is kept. URLs outside *base_path* are
    returned unchanged.
    """
    if base_path == "/":
        return url
    cut = min((i for i in (url.find("?"), url.find("#")) if i != -1), default=len(url))
    path, suffix = url[:cut], url[cut:]
    if path.startswith(base_path):
        return "/" + path[len(base_path) :] + suffix
    if path == base_path.rstrip("/"):
        return "/" + suffix
    return url
