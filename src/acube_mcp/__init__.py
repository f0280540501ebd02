"""acube_mcp package exports."""

from .client import (
    BASE_URLS,
    TOKEN_TTL_SECONDS,
    AcubeAPIError,
    AcubeAuthenticationError,
    AcubeClient,
    AcubeClientError,
    AcubeResponse,
    SessionToken,
)
from .config import AcubeSettings, create_client_from_env, load_env_config
from .enrich import enrich_invoices
from .registry import discover_tool_modules, register_discovered_tools
from .response import (
    ABSENT,
    error_response,
    format_response,
    pick_fields,
    strip_empty,
    text_response,
)

__all__ = [
    # Client
    "AcubeClient",
    "AcubeResponse",
    "SessionToken",
    "BASE_URLS",
    "TOKEN_TTL_SECONDS",
    # Exceptions
    "AcubeClientError",
    "AcubeAuthenticationError",
    "AcubeAPIError",
    # Response shaping
    "ABSENT",
    "pick_fields",
    "strip_empty",
    "format_response",
    "error_response",
    "text_response",
    "enrich_invoices",
    # Config helpers
    "AcubeSettings",
    "create_client_from_env",
    "load_env_config",
    # Registry helpers
    "discover_tool_modules",
    "register_discovered_tools",
]
