"""Italian company and fiscal ID verification tools."""

from __future__ import annotations

from typing import Annotated

from mcp.types import CallToolResult
from pydantic import Field

from acube_mcp.client import AcubeClient
from acube_mcp.response import error_response, format_response
from acube_mcp.tools._paths import segment


async def _verify(client: AcubeClient, kind: str, id: str) -> CallToolResult:
    try:
        response = await client.get(f"/verify/{kind}/{segment(id)}")
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def verify_fiscal_id(
    client: AcubeClient,
    id: Annotated[str, Field(description="Codice fiscale or P.IVA")],
) -> CallToolResult:
    """Verify an Italian codice fiscale or P.IVA with Agenzia delle Entrate."""
    return await _verify(client, "fiscal", id)


async def verify_company(
    client: AcubeClient,
    id: Annotated[str, Field(description="P.IVA or codice fiscale")],
) -> CallToolResult:
    """Full company data by P.IVA/CF: denominazione, PEC, codice destinatario, indirizzo, ATECO, soci."""
    return await _verify(client, "company", id)


async def verify_simple_company(
    client: AcubeClient,
    id: Annotated[str, Field(description="P.IVA or codice fiscale")],
) -> CallToolResult:
    """Basic company info by P.IVA/CF (simplified view)."""
    return await _verify(client, "simple-company", id)


async def verify_split_payment(
    client: AcubeClient,
    id: Annotated[str, Field(description="P.IVA to check")],
) -> CallToolResult:
    """Check split payment (scissione pagamenti) status for a P.IVA."""
    return await _verify(client, "split-payment", id)
