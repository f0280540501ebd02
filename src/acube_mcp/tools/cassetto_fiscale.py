"""
Cassetto Fiscale (tax drawer) download schedule and rejected invoice tools.

Scheduled downloads run daily at 03:00 UTC.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Optional

from mcp.types import CallToolResult
from pydantic import Field

from acube_mcp.client import AcubeClient
from acube_mcp.response import error_response, format_response
from acube_mcp.tools._paths import segment, with_query

FiscalId = Annotated[str, Field(description="P.IVA or codice fiscale")]
IsoDate = Annotated[str, Field(description="Date (YYYY-MM-DD)")]


def _schedule_path(fiscal_id: str) -> str:
    return f"/schedule/invoice-download/{segment(fiscal_id)}"


async def schedule_invoice_download(
    client: AcubeClient,
    fiscal_id: FiscalId,
    options: Annotated[
        Optional[Dict[str, Any]],
        Field(description="Schedule options (e.g. auto_renewal)"),
    ] = None,
) -> CallToolResult:
    """Schedule daily invoice download from Cassetto Fiscale (runs 03:00 UTC)."""
    try:
        response = await client.post(_schedule_path(fiscal_id), options)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def get_download_schedule(
    client: AcubeClient, fiscal_id: FiscalId
) -> CallToolResult:
    """Check invoice download schedule status for a fiscal ID."""
    try:
        response = await client.get(_schedule_path(fiscal_id))
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def update_download_schedule(
    client: AcubeClient,
    fiscal_id: FiscalId,
    options: Annotated[Dict[str, Any], Field(description="Fields to update")],
) -> CallToolResult:
    """Update a Cassetto Fiscale download schedule."""
    try:
        response = await client.put(_schedule_path(fiscal_id), options)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def delete_download_schedule(
    client: AcubeClient, fiscal_id: FiscalId
) -> CallToolResult:
    """Delete a Cassetto Fiscale download schedule."""
    try:
        response = await client.delete(_schedule_path(fiscal_id))
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def download_invoices_once(
    client: AcubeClient,
    fiscal_id: FiscalId,
    from_date: IsoDate,
    to_date: IsoDate,
) -> CallToolResult:
    """One-time invoice download from Cassetto Fiscale by date range."""
    try:
        response = await client.post(
            "/jobs/invoice-download",
            {"fiscal_id": fiscal_id, "from_date": from_date, "to_date": to_date},
        )
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def count_rejected_invoices(
    client: AcubeClient,
    fiscal_id: FiscalId,
    from_date: Annotated[Optional[str], Field(description="Start date (YYYY-MM-DD)")] = None,
    to_date: Annotated[Optional[str], Field(description="End date (YYYY-MM-DD)")] = None,
) -> CallToolResult:
    """Count rejected invoices from Cassetto Fiscale for a fiscal ID."""
    try:
        path = with_query(
            f"/rejected-invoices/{segment(fiscal_id)}/count",
            {"from_date": from_date or None, "to_date": to_date or None},
        )
        response = await client.get(path)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def recover_rejected_invoices(
    client: AcubeClient,
    fiscal_id: FiscalId,
    from_date: IsoDate,
    to_date: IsoDate,
) -> CallToolResult:
    """Recover and reprocess rejected Cassetto Fiscale invoices."""
    try:
        response = await client.post(
            f"/rejected-invoices/{segment(fiscal_id)}/recover",
            {"from_date": from_date, "to_date": to_date},
        )
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)
