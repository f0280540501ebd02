"""
Shared helpers for building A-Cube request paths.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote, urlencode


def segment(value: str) -> str:
    """Percent-encode a single path segment (slashes included)."""
    return quote(str(value), safe="")


def query_flag(value: bool) -> str:
    return "true" if value else "false"


def with_query(path: str, params: Optional[Dict[str, Any]]) -> str:
    """Append `params` (None values dropped) as a query string."""
    query = {k: v for k, v in (params or {}).items() if v is not None}
    if not query:
        return path
    return f"{path}?{urlencode(query)}"


ACCEPT_TYPES = {
    "json": "application/json",
    "xml": "application/xml",
    "pdf": "application/pdf",
    "html": "text/html",
}
