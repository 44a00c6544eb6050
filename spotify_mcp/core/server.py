import json
import logging
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from spotify_mcp.services.spotify import SpotifyError
from spotify_mcp.tools.registry import ToolError, ToolRegistry
from spotify_mcp.tools.translator import to_json_schema

logger = logging.getLogger(__name__)


def _to_text(result: Any) -> str:
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2, default=str)


def _error_result(error: Exception) -> types.CallToolResult:
    message = str(error) or type(error).__name__
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=message)],
        isError=True,
    )


class ToolServer:
    """Serves the tool registry over MCP: tools/list and tools/call."""

    def __init__(
        self,
        registry: ToolRegistry,
        name: str,
        version: str,
        instructions: str | None = None,
    ) -> None:
        self._registry = registry
        self._server = Server(name, version=version, instructions=instructions)
        self._bind()

    @property
    def server(self) -> Server:
        return self._server

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def _bind(self) -> None:
        @self._server.list_tools()
        async def handle_list_tools() -> list[types.Tool]:
            return await self.list_tools()

        async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
            result = await self.call_tool(request.params.name, request.params.arguments)
            return types.ServerResult(result)

        # Registered directly so our own isError results reach the client untouched
        self._server.request_handlers[types.CallToolRequest] = handle_call_tool

    async def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(
                name=entry.name,
                title=entry.title,
                description=entry.description,
                inputSchema=to_json_schema(entry.schema),
            )
            for entry in self._registry.list_tools()
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        """Run a tool. Errors of any kind come back as an isError result, never raised."""
        try:
            handler = self._registry.build_handler(name)
            result = await handler(arguments or {})
        except (ToolError, SpotifyError) as e:
            logger.warning(f"Tool '{name}' failed: {e}")
            return _error_result(e)
        except Exception as e:
            logger.exception(f"Tool '{name}' raised unexpected error")
            return _error_result(e)

        logger.info(f"Tool '{name}' completed")
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=_to_text(result))],
            isError=False,
        )

    async def run(self) -> None:
        """Serve MCP over stdin/stdout until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            await self._server.run(
                read_stream,
                write_stream,
                self._server.create_initialization_options(),
            )
