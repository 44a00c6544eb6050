import argparse
import asyncio
import logging
from pathlib import Path

from spotify_mcp.config.loader import load_config
from spotify_mcp.config.schema import AppConfig
from spotify_mcp.core.server import ToolServer
from spotify_mcp.services.spotify import SpotifyService
from spotify_mcp.tools.catalog import builtin_handlers, load_catalog
from spotify_mcp.tools.registry import ToolRegistry
from spotify_mcp.util.logging import setup_logging
from spotify_mcp.util.prompt_loader import PromptLoader

logger = logging.getLogger(__name__)


def build_server(config: AppConfig) -> ToolServer:
    """Composition root: build the service, registry and transport once."""
    service = SpotifyService(
        base_url=config.spotify.base_url,
        timeout=config.spotify.timeout_seconds,
    )
    registry = ToolRegistry.from_catalog(load_catalog(), builtin_handlers(), service)
    return ToolServer(
        registry,
        name=config.server.name,
        version=config.server.version,
        instructions=PromptLoader.load_instructions(registry),
    )


def print_tools(server: ToolServer) -> None:
    for category, names in server.registry.categories().items():
        print(f"{category}:")
        for name in names:
            print(f"  {name}")


async def serve(server: ToolServer) -> None:
    logger.info("Spotify MCP Server starting...")
    try:
        await server.run()
    finally:
        logger.info("Spotify MCP Server closed.")


def main() -> None:
    parser = argparse.ArgumentParser(description="Spotify Web API tools over MCP (stdio)")
    parser.add_argument("--config", type=Path, default=Path("config.yaml"), help="Path to the YAML config file")
    parser.add_argument("--list-tools", action="store_true", help="Print the registered tools and exit")
    args = parser.parse_args()

    config = load_config(config_path=args.config)
    setup_logging(config.logging)

    server = build_server(config)

    if args.list_tools:
        print_tools(server)
        return

    try:
        asyncio.run(serve(server))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
