"""
Converts tool validation schemas into plain JSON-Schema objects.

MCP clients only understand JSON Schema, so every ObjectSchema is advertised
through to_json_schema(). A broken schema must never break tools/list: on any
failure the translator logs and falls back to an empty object schema.
"""
import logging
from typing import Any

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

logger = logging.getLogger(__name__)


def empty_object_schema() -> dict[str, Any]:
    return {"type": "object", "properties": {}, "required": []}


def translate_node(node: SchemaNode) -> dict[str, Any]:
    """Translate a single field node into its JSON-Schema property."""
    match node:
        case WithDefault(inner=inner, value=value):
            prop = translate_node(inner)
            prop["default"] = value
            return prop

        case Optional(inner=inner):
            return translate_node(inner)

        case StringType(description=description, min_length=min_length, max_length=max_length):
            prop: dict[str, Any] = {"type": "string"}
            if min_length is not None:
                prop["minLength"] = min_length
            if max_length is not None:
                prop["maxLength"] = max_length
            prop["description"] = description
            return prop

        case NumberType(description=description, minimum=minimum, maximum=maximum):
            prop = {"type": "number"}
            if minimum is not None:
                prop["minimum"] = minimum
            if maximum is not None:
                prop["maximum"] = maximum
            prop["description"] = description
            return prop

        case BooleanType(description=description):
            return {"type": "boolean", "description": description}

        case ArrayType(items=items, description=description):
            return {"type": "array", "items": translate_node(items), "description": description}

        case EnumType(values=values, description=description):
            return {"type": "string", "enum": list(values), "description": description}

    logger.warning(f"Unrecognized schema node {type(node).__name__}, advertising as string")
    return {"type": "string", "description": getattr(node, "description", "") or ""}


def is_required(node: SchemaNode) -> bool:
    """
    A field is required unless an Optional or WithDefault appears anywhere in its
    modifier chain. Modifiers only wrap other nodes, so the outermost layer decides
    it for either nesting order.
    """
    return not isinstance(node, (Optional, WithDefault))


def to_json_schema(schema: Any) -> dict[str, Any]:
    """Translate an ObjectSchema into {type: object, properties, required}."""
    if not isinstance(schema, ObjectSchema):
        logger.warning(f"Cannot translate {type(schema).__name__} to JSON schema, advertising empty object")
        return empty_object_schema()

    try:
        properties: dict[str, Any] = {}
        required: list[str] = []
        for key, node in schema.fields.items():
            properties[key] = translate_node(node)
            if is_required(node):
                required.append(key)
        return {"type": "object", "properties": properties, "required": required}
    except Exception:
        logger.exception("Error converting validation schema to JSON schema")
        return empty_object_schema()
