"""
SDI notification tools.

Notification types: NS (rejected by SDI), RC (delivered), MC (delivery
failed), EC (recipient outcome), DT (deadline passed), MT (metadata),
SE/NE (outcome rejection/notification), AT (attestation).
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional

from mcp.types import CallToolResult
from pydantic import Field

from acube_mcp.client import AcubeClient
from acube_mcp.response import error_response, format_response, text_response
from acube_mcp.tools._paths import ACCEPT_TYPES, query_flag, segment, with_query

NotificationType = Literal["NS", "MT", "RC", "MC", "EC", "SE", "NE", "DT", "AT"]


async def list_notifications(
    client: AcubeClient,
    *,
    page: Annotated[int, Field(ge=1, description="Page number")] = 1,
    items_per_page: Annotated[int, Field(ge=1, description="Items per page")] = 30,
    type: Annotated[
        Optional[NotificationType], Field(description="Notification type filter")
    ] = None,
    downloaded: Annotated[
        Optional[bool], Field(description="Filter by downloaded flag")
    ] = None,
) -> CallToolResult:
    """List SDI notifications for sent invoices, optionally filtered by type."""
    try:
        query = {
            "page": page,
            "items_per_page": items_per_page,
            "type": type,
            "downloaded": query_flag(downloaded) if downloaded is not None else None,
        }
        response = await client.get(with_query("/notifications", query))
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def get_notification(
    client: AcubeClient,
    uuid: Annotated[str, Field(description="Notification UUID")],
    format: Annotated[
        Literal["json", "xml"], Field(description="Response format")
    ] = "json",
) -> CallToolResult:
    """Get a specific SDI notification by UUID (JSON or XML)."""
    try:
        response = await client.get(
            f"/notifications/{segment(uuid)}", accept=ACCEPT_TYPES[format]
        )
        if isinstance(response.data, str):
            return text_response(response.data)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def mark_notifications_downloaded(
    client: AcubeClient,
    uuids: Annotated[List[str], Field(description="Notification UUIDs to mark")],
) -> CallToolResult:
    """Mark SDI notifications as downloaded by UUIDs."""
    try:
        response = await client.put("/notifications", uuids)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)
