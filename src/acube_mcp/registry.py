from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Callable, Iterable, List, Set, get_type_hints

from .client import AcubeClient

log = logging.getLogger("acube_mcp.registry")


# Module discovery


def discover_tool_modules(package_name: str = "acube_mcp.tools") -> List[ModuleType]:
    """
    Import every module of the tools package.

    A module that fails to import is logged and left out.
    """
    modules: List[ModuleType] = []
    base_pkg = importlib.import_module(package_name)

    for finder in pkgutil.iter_modules(base_pkg.__path__, base_pkg.__name__ + "."):
        name = finder.name
        try:
            module = importlib.import_module(name)
            modules.append(module)
        except Exception as exc:
            log.error("Cannot import tool module %s: %s", name, exc)
            continue

    return modules


def iter_tool_functions(module: ModuleType) -> Iterable[Callable]:
    """Yield public coroutine functions whose first parameter is `client`."""
    for _, func in inspect.getmembers(module, inspect.iscoroutinefunction):
        if func.__name__.startswith("_"):
            continue
        if func.__module__ != module.__name__:
            # helpers imported from other modules
            continue

        params = list(inspect.signature(func).parameters.values())
        if not params or params[0].name != "client":
            log.debug(
                "Skipping %s.%s: first parameter must be 'client'",
                module.__name__,
                func.__name__,
            )
            continue

        yield func


# Registration


def _wrap_tool(func: Callable, client_provider: Callable[[], AcubeClient]) -> Callable:
    """Bind `client` from the provider so FastMCP only sees the tool arguments."""
    original_sig = inspect.signature(func)
    # Keep Annotated[...] metadata so Field descriptions reach the tool schema.
    type_hints = get_type_hints(func, include_extras=True)

    new_params = []
    for i, (name, param) in enumerate(original_sig.parameters.items()):
        if i == 0 and name == "client":
            continue
        ann = type_hints.get(name, param.annotation)
        new_params.append(param.replace(annotation=ann))

    return_ann = type_hints.get("return", original_sig.return_annotation)
    new_sig = inspect.Signature(parameters=new_params, return_annotation=return_ann)

    async def wrapped(*args, **kwargs):
        client = client_provider()
        return await func(client, *args, **kwargs)

    wrapped.__name__ = func.__name__
    wrapped.__doc__ = func.__doc__
    wrapped.__module__ = func.__module__
    wrapped.__signature__ = new_sig  # type: ignore[attr-defined]
    return wrapped


def _first_doc_line(func: Callable) -> str | None:
    doc = inspect.getdoc(func)
    return doc.splitlines()[0] if doc else None


def register_discovered_tools(
    app,
    client_provider: Callable[[], AcubeClient] | AcubeClient,
    modules: List[ModuleType] | None = None,
) -> List[str]:
    """Register the tools of `modules` (default: all discovered) and return their names."""
    if isinstance(client_provider, AcubeClient):
        _client = client_provider

        def client_provider():
            return _client

    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    modules = modules if modules is not None else discover_tool_modules()
    seen_names: Set[str] = set()
    registered: List[str] = []

    for module in modules:
        for func in iter_tool_functions(module):
            name = func.__name__
            if name in seen_names:
                raise ValueError(f"Duplicate tool name detected: {name}")

            wrapped = _wrap_tool(func, client_provider)
            app.tool(name=name, description=_first_doc_line(func))(wrapped)
            seen_names.add(name)
            registered.append(name)
            log.info("Registered tool: %s (%s)", name, module.__name__)

    return registered


__all__ = ["discover_tool_modules", "iter_tool_functions", "register_discovered_tools"]
