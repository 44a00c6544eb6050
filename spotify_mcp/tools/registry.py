import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any

from spotify_mcp.services.spotify import SpotifyService
from spotify_mcp.tools.base import ToolDescriptor, ToolEntry, ToolHandler
from spotify_mcp.tools.schema import Issue, SchemaValidationError

logger = logging.getLogger(__name__)


class ToolError(Exception):
    pass


class ToolNotFoundError(ToolError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool '{name}' not found")


class ToolValidationError(ToolError):
    def __init__(self, name: str, issues: list[Issue]) -> None:
        self.name = name
        self.issues = list(issues)
        details = "; ".join(str(issue) for issue in self.issues)
        super().__init__(f"Invalid arguments for tool '{name}': {details}")


def _redact(arguments: Any) -> Any:
    """Hide access tokens before arguments reach the logs."""
    if not isinstance(arguments, dict):
        return arguments
    return {key: ("***" if key == "token" else value) for key, value in arguments.items()}


class ToolRegistry:
    """Registry mapping tool names to their schema and handler."""

    def __init__(self, service: SpotifyService) -> None:
        self._service = service
        self._tools: dict[str, ToolEntry] = {}

    @classmethod
    def from_catalog(
        cls,
        descriptors: Iterable[ToolDescriptor],
        handlers: Mapping[str, ToolHandler],
        service: SpotifyService,
    ) -> "ToolRegistry":
        """Build a registry from catalog descriptors. Tools without a handler are skipped."""
        registry = cls(service)
        for descriptor in descriptors:
            handler = handlers.get(descriptor.name)
            if handler is None:
                logger.warning(f"No handler found for tool '{descriptor.name}', skipping")
                continue
            registry.register(ToolEntry.from_descriptor(descriptor, handler))
        logger.info(f"Total tools registered: {len(registry)}")
        return registry

    def register(self, entry: ToolEntry) -> None:
        """Register a tool. Raises ValueError if name already taken."""
        if entry.name in self._tools:
            raise ValueError(f"Tool already registered: {entry.name}")
        self._tools[entry.name] = entry
        logger.debug(f"Registered tool: {entry.name}")

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def get(self, name: str) -> ToolEntry | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[ToolEntry]:
        return list(self._tools.values())

    def categories(self) -> dict[str, list[str]]:
        """Group tool names by category, keeping registration order."""
        grouped: dict[str, list[str]] = {}
        for entry in self._tools.values():
            grouped.setdefault(entry.category or "other", []).append(entry.name)
        return grouped

    def build_handler(self, name: str) -> Callable[[Any], Awaitable[Any]]:
        """
        Return a callable that validates raw arguments and runs the tool.
        Raises ToolNotFoundError right away for unknown names.
        """
        entry = self.get(name)
        if entry is None:
            raise ToolNotFoundError(name)

        async def handle(arguments: Any) -> Any:
            try:
                args = entry.schema.parse(arguments)
            except SchemaValidationError as e:
                raise ToolValidationError(name, e.issues) from e
            logger.info(f"Calling tool '{name}' with args: {_redact(args)}")
            return await entry.handler(args, self._service)

        return handle
