from dataclasses import dataclass, field
from typing import Any, Awaitable, Protocol

from spotify_mcp.services.spotify import SpotifyService
from spotify_mcp.tools.schema import (
    ArrayType,
    BooleanType,
    EnumType,
    NumberType,
    ObjectSchema,
    Optional,
    SchemaNode,
    StringType,
    WithDefault,
)

ARGUMENT_KINDS = ("string", "number", "boolean", "array", "enum")


@dataclass(frozen=True)
class ArgumentSpec:
    key: str
    kind: str
    description: str = ""
    required: bool = True
    default: Any = None
    minimum: float | None = None
    maximum: float | None = None
    enum: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.kind not in ARGUMENT_KINDS:
            raise ValueError(f"Unknown argument kind for '{self.key}': {self.kind}")
        if self.kind == "enum" and not self.enum:
            raise ValueError(f"Enum argument '{self.key}' declares no values")
        if self.has_default and self.required:
            raise ValueError(f"Argument '{self.key}' has a default and cannot be required")

    @property
    def has_default(self) -> bool:
        return self.default is not None


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    title: str
    description: str
    category: str = ""
    arguments: tuple[ArgumentSpec, ...] = field(default_factory=tuple)


class ToolHandler(Protocol):
    def __call__(self, args: dict[str, Any], service: SpotifyService) -> Awaitable[Any]: ...


@dataclass(frozen=True)
class ToolEntry:
    name: str
    title: str
    description: str
    category: str
    schema: ObjectSchema
    handler: ToolHandler

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor, handler: ToolHandler) -> "ToolEntry":
        return cls(
            name=descriptor.name,
            title=descriptor.title,
            description=descriptor.description,
            category=descriptor.category,
            schema=build_schema(descriptor),
            handler=handler,
        )


def _base_node(spec: ArgumentSpec) -> SchemaNode:
    if spec.kind == "string":
        return StringType(
            description=spec.description,
            min_length=int(spec.minimum) if spec.minimum is not None else None,
            max_length=int(spec.maximum) if spec.maximum is not None else None,
        )
    if spec.kind == "number":
        return NumberType(description=spec.description, minimum=spec.minimum, maximum=spec.maximum)
    if spec.kind == "boolean":
        return BooleanType(description=spec.description)
    if spec.kind == "enum":
        return EnumType(values=tuple(spec.enum), description=spec.description)
    return ArrayType(items=StringType(), description=spec.description)


def build_node(spec: ArgumentSpec) -> SchemaNode:
    """Wrap the argument's base type in the modifiers its ArgumentSpec asks for."""
    node = _base_node(spec)
    if spec.has_default:
        return WithDefault(inner=node, value=spec.default)
    if not spec.required:
        return Optional(inner=node)
    return node


def build_schema(descriptor: ToolDescriptor) -> ObjectSchema:
    return ObjectSchema(fields={spec.key: build_node(spec) for spec in descriptor.arguments})
