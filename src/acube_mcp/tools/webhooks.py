"""Webhook (API configuration) tools."""

from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Optional

from mcp.types import CallToolResult
from pydantic import Field

from acube_mcp.client import AcubeClient
from acube_mcp.response import error_response, format_response
from acube_mcp.tools._paths import segment

WebhookEvent = Literal[
    "supplier-invoice",
    "customer-invoice",
    "customer-notification",
    "invoice-status-quarantena",
    "invoice-status-invoice-error",
    "legal-storage-missing-vat",
    "legal-storage-receipt",
    "receipt",
    "receipt-retry",
    "receipt-error",
    "appointee",
    "sistemats-receipt-ready",
    "job",
]


async def list_webhook_configs(client: AcubeClient) -> CallToolResult:
    """List all webhook configurations."""
    try:
        response = await client.get("/api-configurations")
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def create_webhook_config(
    client: AcubeClient,
    event: Annotated[WebhookEvent, Field(description="Event type")],
    target_url: Annotated[
        str, Field(pattern=r"^https?://\S+$", description="Callback URL")
    ],
    authentication_type: Annotated[
        Optional[Literal["header", "query"]], Field(description="Auth method")
    ] = None,
    authentication_key: Annotated[
        Optional[str], Field(description="Auth header/param name")
    ] = None,
    authentication_token: Annotated[
        Optional[str], Field(description="Auth token")
    ] = None,
) -> CallToolResult:
    """Create a webhook for A-Cube events."""
    try:
        body: Dict[str, Any] = {"event": event, "target_url": target_url}
        optional = {
            "authentication_type": authentication_type,
            "authentication_key": authentication_key,
            "authentication_token": authentication_token,
        }
        body.update({k: v for k, v in optional.items() if v is not None})

        response = await client.post("/api-configurations", body)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def get_webhook_config(
    client: AcubeClient,
    id: Annotated[str, Field(description="Webhook config ID")],
) -> CallToolResult:
    """Get a webhook configuration by ID."""
    try:
        response = await client.get(f"/api-configurations/{segment(id)}")
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def update_webhook_config(
    client: AcubeClient,
    id: Annotated[str, Field(description="Webhook config ID")],
    config: Annotated[Dict[str, Any], Field(description="Fields to update")],
) -> CallToolResult:
    """Update a webhook configuration."""
    try:
        response = await client.put(f"/api-configurations/{segment(id)}", config)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def delete_webhook_config(
    client: AcubeClient,
    id: Annotated[str, Field(description="Webhook config ID to delete")],
) -> CallToolResult:
    """Delete a webhook configuration."""
    try:
        response = await client.delete(f"/api-configurations/{segment(id)}")
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)
