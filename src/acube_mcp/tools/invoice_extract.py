"""
PDF-to-FatturaPA extraction tools.

Workflow: upload with `extract_invoice_from_pdf`, poll
`get_extraction_status` until `completed`, then fetch the document with
`get_extraction_result`.
"""

from __future__ import annotations

from typing import Annotated, Literal

from mcp.types import CallToolResult
from pydantic import Field

from acube_mcp.client import AcubeClient
from acube_mcp.response import error_response, format_response, text_response
from acube_mcp.tools._paths import ACCEPT_TYPES, segment


async def extract_invoice_from_pdf(
    client: AcubeClient,
    pdf_base64: Annotated[str, Field(description="Base64-encoded PDF content")],
) -> CallToolResult:
    """Upload a PDF (base64) for AI extraction to FatturaPA. Returns job UUID."""
    try:
        response = await client.post("/invoice-extract", {"pdf_base64": pdf_base64})
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def get_extraction_status(
    client: AcubeClient,
    uuid: Annotated[str, Field(description="Extraction job UUID")],
) -> CallToolResult:
    """Check PDF extraction job status by UUID."""
    try:
        response = await client.get(f"/invoice-extract/{segment(uuid)}")
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def get_extraction_result(
    client: AcubeClient,
    uuid: Annotated[str, Field(description="Completed extraction job UUID")],
    format: Annotated[
        Literal["json", "xml"], Field(description="Output format")
    ] = "json",
) -> CallToolResult:
    """Get completed extraction result as FatturaPA (JSON or XML)."""
    try:
        response = await client.get(
            f"/invoice-extract/{segment(uuid)}/result",
            accept=ACCEPT_TYPES[format],
        )
        if isinstance(response.data, str):
            return text_response(response.data)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)
