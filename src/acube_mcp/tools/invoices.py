"""
SDI electronic invoicing tools.

`list_invoices` decodes each FatturaPA payload server side and returns a
compact default view (number, date, total, currency, parties, status) so a
page of invoices stays small.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional

from mcp.types import CallToolResult
from pydantic import Field

from acube_mcp.client import AcubeClient
from acube_mcp.enrich import enrich_invoices
from acube_mcp.response import (
    error_response,
    format_response,
    pick_fields,
    text_response,
)
from acube_mcp.tools._paths import ACCEPT_TYPES, query_flag, segment, with_query

LIST_INVOICES_DEFAULT_FIELDS = [
    "uuid",
    "created_at",
    "document_type",
    "marking",
    "notice",
    "invoice_number",
    "invoice_date",
    "total_amount",
    "currency",
    "sender.business_name",
    "sender.business_vat_number_code",
    "recipient.business_name",
    "recipient.business_vat_number_code",
    "notifications",
]

DEFAULT_ITEMS_PER_PAGE = 10
MAX_ITEMS_PER_PAGE = 30

Marking = Literal[
    "waiting",
    "quarantena",
    "sent",
    "invoice-error",
    "received",
    "rejected",
    "delivered",
    "not-delivered",
]
SortOrder = Literal["asc", "desc"]


async def send_invoice(
    client: AcubeClient,
    invoice: Annotated[
        Dict[str, Any],
        Field(
            description="Complete FatturaPA JSON with fattura_elettronica_header "
            "and fattura_elettronica_body"
        ),
    ],
    sign: Annotated[
        Optional[bool],
        Field(description="Digitally sign before sending (X-SignInvoice header)"),
    ] = None,
) -> CallToolResult:
    """Send a FatturaPA invoice to SDI. Returns the assigned UUID (HTTP 202)."""
    try:
        headers: Dict[str, str] = {}
        if sign is not None:
            headers["X-SignInvoice"] = query_flag(sign)
        response = await client.post("/invoices", invoice, headers=headers)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def send_simplified_invoice(
    client: AcubeClient,
    invoice: Annotated[Dict[str, Any], Field(description="Simplified FatturaPA JSON")],
) -> CallToolResult:
    """Send a simplified FatturaPA to SDI (max 400 EUR). Returns UUID."""
    try:
        response = await client.post("/invoices/simplified", invoice)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def list_invoices(
    client: AcubeClient,
    *,
    page: Annotated[int, Field(ge=1, description="Page number")] = 1,
    items_per_page: Annotated[
        int,
        Field(
            ge=1,
            le=MAX_ITEMS_PER_PAGE,
            description="Items per page (default 10, max 30)",
        ),
    ] = DEFAULT_ITEMS_PER_PAGE,
    marking: Annotated[Optional[Marking], Field(description="SDI status")] = None,
    sender_name: Annotated[
        Optional[str], Field(description="Sender business name (partial match)")
    ] = None,
    sender_vat: Annotated[Optional[str], Field(description="Sender P.IVA")] = None,
    sender_fiscal_code: Annotated[
        Optional[str], Field(description="Sender codice fiscale")
    ] = None,
    recipient_name: Annotated[
        Optional[str], Field(description="Recipient business name (partial match)")
    ] = None,
    recipient_vat: Annotated[Optional[str], Field(description="Recipient P.IVA")] = None,
    recipient_fiscal_code: Annotated[
        Optional[str], Field(description="Recipient codice fiscale")
    ] = None,
    invoice_number: Annotated[
        Optional[str], Field(description="Invoice number (partial match)")
    ] = None,
    document_type: Annotated[
        Optional[str], Field(description="FatturaPA type: TD01, TD04, TD05, TD06, TD07...")
    ] = None,
    direction: Annotated[
        Optional[Literal["outgoing", "incoming"]],
        Field(description="outgoing or incoming"),
    ] = None,
    invoice_date_from: Annotated[
        Optional[str], Field(description="Invoice date >= (ISO date)")
    ] = None,
    invoice_date_to: Annotated[
        Optional[str], Field(description="Invoice date <= (ISO date)")
    ] = None,
    created_at_from: Annotated[
        Optional[str], Field(description="Created at >= (ISO date)")
    ] = None,
    created_at_to: Annotated[
        Optional[str], Field(description="Created at <= (ISO date)")
    ] = None,
    order_by_date: Annotated[
        Optional[SortOrder], Field(description="Sort by invoice date")
    ] = None,
    order_by_number: Annotated[
        Optional[SortOrder], Field(description="Sort by invoice number")
    ] = None,
    downloaded: Annotated[
        Optional[bool], Field(description="Filter by download status")
    ] = None,
    signed: Annotated[Optional[bool], Field(description="Filter by signature status")] = None,
    fields: Annotated[
        Optional[List[str]],
        Field(
            description="Fields to return (dot-notation, e.g. 'sender.business_name'). "
            "Defaults to a compact view: uuid, created_at, document_type, marking, "
            "notice, invoice_number, invoice_date, total_amount, currency, "
            "sender/recipient names+VAT, notifications. Use ['*'] only when the "
            "full FatturaPA payload is needed."
        ),
    ] = None,
) -> CallToolResult:
    """List/search SDI invoices with filters; compact view by default."""
    try:
        query: Dict[str, Any] = {
            "page": page,
            "itemsPerPage": items_per_page,
            "marking": marking,
            "sender.business_name": sender_name or None,
            "sender.business_vat_number_code": sender_vat or None,
            "sender.business_fiscal_code": sender_fiscal_code or None,
            "recipient.business_name": recipient_name or None,
            "recipient.business_vat_number_code": recipient_vat or None,
            "recipient.business_fiscal_code": recipient_fiscal_code or None,
            "invoice_number": invoice_number or None,
            "document_type": document_type or None,
        }
        if direction:
            query["type"] = "0" if direction == "outgoing" else "1"
        query.update(
            {
                "invoice_date[after]": invoice_date_from or None,
                "invoice_date[before]": invoice_date_to or None,
                "created_at[after]": created_at_from or None,
                "created_at[before]": created_at_to or None,
                "order[invoice_date]": order_by_date,
                "order[invoice_number]": order_by_number,
            }
        )
        if downloaded is not None:
            query["downloaded"] = query_flag(downloaded)
        if signed is not None:
            query["signed"] = query_flag(signed)

        response = await client.get(with_query("/invoices", query))

        data = enrich_invoices(response.data)
        if fields != ["*"]:
            data = pick_fields(data, fields or LIST_INVOICES_DEFAULT_FIELDS)
        return format_response(data)
    except Exception as exc:
        return error_response(exc)


async def get_invoice(
    client: AcubeClient,
    uuid: Annotated[str, Field(description="Invoice UUID")],
    format: Annotated[
        Literal["json", "xml", "pdf", "html"],
        Field(description="Output format (default: json)"),
    ] = "json",
    print_theme: Annotated[
        Optional[str], Field(description="Print theme for PDF/HTML")
    ] = None,
    fields: Annotated[
        Optional[List[str]],
        Field(description="Fields to return (JSON only, dot-notation). Omit for all."),
    ] = None,
) -> CallToolResult:
    """Get a specific invoice by UUID. Formats: json, xml, pdf (base64), html."""
    try:
        headers: Dict[str, str] = {}
        if print_theme:
            headers["X-PrintTheme"] = print_theme

        response = await client.get(
            f"/invoices/{segment(uuid)}",
            accept=ACCEPT_TYPES[format],
            headers=headers,
        )
        if isinstance(response.data, str):
            return text_response(response.data)

        return format_response(enrich_invoices(response.data), fields)
    except Exception as exc:
        return error_response(exc)
