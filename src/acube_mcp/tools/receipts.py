"""
Electronic receipt (scontrino elettronico) tools.

The receipt service is unavailable daily from 23:55 to 00:00 Italian time
for Agenzia delle Entrate maintenance.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List

from mcp.types import CallToolResult
from pydantic import Field

from acube_mcp.client import AcubeClient
from acube_mcp.response import error_response, format_response
from acube_mcp.tools._paths import segment


async def send_receipt(
    client: AcubeClient,
    receipt: Annotated[
        Dict[str, Any],
        Field(
            description="Receipt data: fiscal_id, items[], cash_payment_amount, "
            "electronic_payment_amount"
        ),
    ],
) -> CallToolResult:
    """Send an electronic receipt (scontrino). Not available 23:55-00:00 Italian time."""
    try:
        response = await client.post("/receipts", receipt)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def get_receipt_details(
    client: AcubeClient,
    id: Annotated[str, Field(description="Receipt ID")],
) -> CallToolResult:
    """Get receipt details by ID."""
    try:
        response = await client.get(f"/receipts/{segment(id)}/details")
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def void_receipt(
    client: AcubeClient,
    id: Annotated[str, Field(description="Receipt ID to void")],
) -> CallToolResult:
    """Void/cancel a receipt (annullamento scontrino)."""
    try:
        response = await client.delete(f"/receipts/{segment(id)}")
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def return_receipt_items(
    client: AcubeClient,
    id: Annotated[str, Field(description="Original receipt ID")],
    items: Annotated[List[Dict[str, Any]], Field(description="Items to return")],
) -> CallToolResult:
    """Process item returns on a receipt (reso)."""
    try:
        response = await client.post(f"/receipts/{segment(id)}/return", items)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)
