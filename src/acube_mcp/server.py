from __future__ import annotations

import asyncio
import logging

from mcp.server.fastmcp import FastMCP

from .client import AcubeClient
from .config import create_client_from_env, load_env_config
from .logging import setup_logging
from .registry import register_discovered_tools

SERVER_NAME = "mcp-server-acube"

log = logging.getLogger("acube_mcp.server")


def create_app(client: AcubeClient) -> FastMCP:
    app = FastMCP(SERVER_NAME)
    names = register_discovered_tools(app, client)
    log.info("Registered %d tools", len(names))
    return app


# --- Entry point ----------------------------------------------------------- #


async def main() -> None:
    settings = load_env_config(use_dotenv=True)
    setup_logging(settings.log_level)

    client = create_client_from_env(use_dotenv=False)
    log.info("Starting %s (environment=%s)", SERVER_NAME, client.environment)

    async with client:
        app = create_app(client)
        await app.run_stdio_async()


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
