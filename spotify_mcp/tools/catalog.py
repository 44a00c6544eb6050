import logging
from pathlib import Path
from typing import Any

import yaml

from spotify_mcp.tools.base import ArgumentSpec, ToolDescriptor, ToolHandler
from spotify_mcp.tools.builtin import albums, artists, playback, playlists, search, tracks, user

logger = logging.getLogger(__name__)

CATALOG_PATH = Path(__file__).parent / "catalog.yaml"

_BUILTIN_MODULES = (albums, artists, tracks, playlists, playback, user, search)


def _parse_argument(key: str, raw: dict[str, Any]) -> ArgumentSpec:
    values = raw.get("values")
    return ArgumentSpec(
        key=key,
        kind=raw["kind"],
        description=raw.get("description", ""),
        required=raw.get("required", "default" not in raw),
        default=raw.get("default"),
        minimum=raw.get("minimum"),
        maximum=raw.get("maximum"),
        enum=tuple(values) if values else None,
    )


def parse_catalog(data: dict[str, Any]) -> list[ToolDescriptor]:
    """Turn the catalog mapping into descriptors, in file order."""
    descriptors: list[ToolDescriptor] = []
    for category, tools in (data.get("categories") or {}).items():
        for name, raw in (tools or {}).items():
            arguments = tuple(
                _parse_argument(key, spec) for key, spec in (raw.get("arguments") or {}).items()
            )
            descriptors.append(ToolDescriptor(
                name=name,
                title=raw.get("title", name),
                description=raw.get("description", "").strip(),
                category=category,
                arguments=arguments,
            ))
    return descriptors


def load_catalog(path: Path = CATALOG_PATH) -> list[ToolDescriptor]:
    """Load tool descriptors from the YAML catalog."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    descriptors = parse_catalog(data)
    logger.info(f"Loaded {len(descriptors)} tool descriptors from {path.name}")
    return descriptors


def builtin_handlers() -> dict[str, ToolHandler]:
    handlers: dict[str, ToolHandler] = {}
    for module in _BUILTIN_MODULES:
        handlers.update(module.HANDLERS)
    return handlers
