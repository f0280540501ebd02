"""
Business registry and ADE appointee tools.

Business registries (anagrafiche aziendali) are the company profiles used
for SDI invoicing; appointees (intermediari fiscali) are authorized to act
with the Agenzia delle Entrate on a company's behalf.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict

from mcp.types import CallToolResult
from pydantic import Field

from acube_mcp.client import AcubeClient
from acube_mcp.response import error_response, format_response
from acube_mcp.tools._paths import segment

BUSINESS_REGISTRY_PATH = "/business-registry-configurations"
APPOINTEE_PATH = "/ade-appointees"


async def list_business_registries(client: AcubeClient) -> CallToolResult:
    """List all business registry configurations (anagrafiche aziendali)."""
    try:
        response = await client.get(BUSINESS_REGISTRY_PATH)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def create_business_registry(
    client: AcubeClient,
    config: Annotated[
        Dict[str, Any],
        Field(
            description="Business registry data: fiscal_id, company_name, "
            "supplier_invoice_enabled, etc."
        ),
    ],
) -> CallToolResult:
    """Create a business registry (anagrafica aziendale) for SDI invoicing."""
    try:
        response = await client.post(BUSINESS_REGISTRY_PATH, config)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def get_business_registry(
    client: AcubeClient,
    id: Annotated[str, Field(description="Business registry ID")],
) -> CallToolResult:
    """Get a business registry configuration by ID."""
    try:
        response = await client.get(f"{BUSINESS_REGISTRY_PATH}/{segment(id)}")
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def update_business_registry(
    client: AcubeClient,
    id: Annotated[str, Field(description="Business registry ID")],
    config: Annotated[Dict[str, Any], Field(description="Fields to update")],
) -> CallToolResult:
    """Update a business registry configuration."""
    try:
        response = await client.put(f"{BUSINESS_REGISTRY_PATH}/{segment(id)}", config)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def list_appointees(client: AcubeClient) -> CallToolResult:
    """List all ADE tax appointees (intermediari fiscali)."""
    try:
        response = await client.get(APPOINTEE_PATH)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def create_appointee(
    client: AcubeClient,
    appointee: Annotated[Dict[str, Any], Field(description="Appointee data")],
) -> CallToolResult:
    """Create an ADE appointee (intermediario fiscale)."""
    try:
        response = await client.post(APPOINTEE_PATH, appointee)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def get_appointee(
    client: AcubeClient,
    id: Annotated[str, Field(description="Appointee ID")],
) -> CallToolResult:
    """Get an ADE appointee by ID."""
    try:
        response = await client.get(f"{APPOINTEE_PATH}/{segment(id)}")
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)


async def update_appointee(
    client: AcubeClient,
    id: Annotated[str, Field(description="Appointee ID")],
    appointee: Annotated[Dict[str, Any], Field(description="Fields to update")],
) -> CallToolResult:
    """Update an ADE appointee."""
    try:
        response = await client.put(f"{APPOINTEE_PATH}/{segment(id)}", appointee)
        return format_response(response.data)
    except Exception as exc:
        return error_response(exc)
