"""Read-only smoke test against a live A-Cube environment (sandbox by default)."""

from __future__ import annotations

import asyncio
import os
import sys

from acube_mcp.client import AcubeClientError
from acube_mcp.config import create_client_from_env
from acube_mcp.tools.invoices import list_invoices
from acube_mcp.tools.notifications import list_notifications
from acube_mcp.tools.verify import verify_fiscal_id


def _print_step(title: str) -> None:
    print(f"\n== {title}")


def _fail(msg: str) -> int:
    print(f"FAILED: {msg}")
    return 1


async def run_smoke_test() -> int:
    try:
        client = create_client_from_env()
    except ValueError as exc:
        return _fail(str(exc))

    fiscal_id = os.getenv("TEST_FISCAL_ID")

    print("Config:")
    print(f"  environment: {client.environment}")
    print(f"  api: {client.get_base_url('gov_it')}")
    print(f"  fiscal_id: {fiscal_id}")

    async with client:
        _print_step("Login")
        try:
            await client.login()
        except AcubeClientError as exc:
            return _fail(str(exc))
        print(f"  token expires at {client.token.expires_at:.0f}")

        checks = [
            ("List invoices", lambda: list_invoices(client, items_per_page=3)),
            ("List notifications", lambda: list_notifications(client, items_per_page=3)),
        ]
        if fiscal_id:
            checks.append(("Verify fiscal id", lambda: verify_fiscal_id(client, fiscal_id)))

        for title, call in checks:
            _print_step(title)
            result = await call()
            text = result.content[0].text
            print(f"  {text[:300]}")
            if result.isError:
                return _fail(title)

    print("\nSmoke test passed.")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(run_smoke_test()))
