import inspect
from types import ModuleType

import pytest
from mcp.server.fastmcp import FastMCP

from acube_mcp.client import AcubeClient
from acube_mcp.registry import discover_tool_modules, register_discovered_tools
from acube_mcp.server import create_app


def _make_module(name: str, code: str) -> ModuleType:
    module = ModuleType(name)
    exec(code, module.__dict__)
    return module


@pytest.fixture
def client():
    return AcubeClient(email="user@example.com", password="secret")


class RecordingApp:
    def __init__(self):
        self.registered = []

    def tool(self, name, description=None):
        def decorator(fn):
            self.registered.append((name, description, fn))
            return fn

        return decorator


@pytest.mark.asyncio
async def test_register_discovered_tools_registers_valid_tools_only(client):
    code = '''
async def tool_fn(client, *, foo: int = 1):
    """Do the thing.

    Longer explanation.
    """
    return (client.environment, foo)

async def _private(client):
    return None

async def wrong_first(arg1, client):
    return None

def sync_func(client):
    return None
'''
    mod = _make_module("fake_mod", code)
    app = RecordingApp()

    names = register_discovered_tools(app, client, modules=[mod])

    assert names == ["tool_fn"]
    name, description, wrapped = app.registered[0]
    assert description == "Do the thing."
    # wrapper signature should not expose client
    assert "client" not in inspect.signature(wrapped).parameters
    assert await wrapped(foo=5) == ("sandbox", 5)


def test_register_discovered_tools_duplicate_names_raise(client):
    mod1 = _make_module("mod1", "async def tool_fn(client): return None")
    mod2 = _make_module("mod2", "async def tool_fn(client): return None")

    with pytest.raises(ValueError):
        register_discovered_tools(FastMCP("test"), client, modules=[mod1, mod2])


def test_register_requires_tool_decorator(client):
    with pytest.raises(TypeError):
        register_discovered_tools(object(), client, modules=[])


def test_discover_tool_modules_skips_import_failures(monkeypatch, caplog):
    import importlib
    import pkgutil

    class Info:
        def __init__(self, name):
            self.name = name

    def fake_iter_modules(path, prefix):
        return [Info(prefix + "good"), Info(prefix + "bad")]

    good_mod = _make_module("acube_mcp.tools.good", "async def tool_fn(client): return None")
    real_import_module = importlib.import_module

    def fake_import_module(name, *args, **kwargs):
        if name == "acube_mcp.tools.bad":
            raise ImportError("boom")
        if name == "acube_mcp.tools.good":
            return good_mod
        return real_import_module(name, *args, **kwargs)

    monkeypatch.setattr(pkgutil, "iter_modules", fake_iter_modules)
    monkeypatch.setattr(importlib, "import_module", fake_import_module)

    with caplog.at_level("ERROR"):
        modules = discover_tool_modules()

    assert [m.__name__ for m in modules] == ["acube_mcp.tools.good"]
    assert any("Cannot import tool module" in rec.message for rec in caplog.records)


@pytest.mark.asyncio
async def test_create_app_exposes_all_tools_without_client(client):
    app = create_app(client)

    tools = {tool.name: tool for tool in await app.list_tools()}

    assert len(tools) == 38
    assert {
        "send_invoice",
        "list_invoices",
        "get_invoice",
        "extract_invoice_from_pdf",
        "mark_notifications_downloaded",
        "verify_split_payment",
        "return_receipt_items",
        "create_webhook_config",
        "update_appointee",
        "recover_rejected_invoices",
    } <= set(tools)
    for tool in tools.values():
        assert "client" not in tool.inputSchema.get("properties", {})
        assert tool.description

    list_schema = tools["list_invoices"].inputSchema["properties"]
    assert list_schema["items_per_page"]["maximum"] == 30
    assert "dot-notation" in list_schema["fields"]["description"]
    assert tools["get_invoice"].inputSchema["required"] == ["uuid"]
