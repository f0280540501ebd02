"""A-Cube MCP tools. Every public coroutine taking `client` first is registered."""
