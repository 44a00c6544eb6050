import copy
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Issue:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class SchemaValidationError(ValueError):
    """Raised when an argument bag fails validation. Carries every issue found."""

    def __init__(self, issues: list[Issue]) -> None:
        self.issues = list(issues)
        super().__init__("; ".join(str(issue) for issue in self.issues))


@dataclass(frozen=True)
class StringType:
    description: str = ""
    min_length: int | None = None
    max_length: int | None = None


@dataclass(frozen=True)
class NumberType:
    description: str = ""
    minimum: float | None = None
    maximum: float | None = None


@dataclass(frozen=True)
class BooleanType:
    description: str = ""


@dataclass(frozen=True)
class ArrayType:
    items: "SchemaNode"
    description: str = ""


@dataclass(frozen=True)
class EnumType:
    values: tuple[str, ...]
    description: str = ""


@dataclass(frozen=True)
class Optional:
    inner: "SchemaNode"


@dataclass(frozen=True)
class WithDefault:
    inner: "SchemaNode"
    value: Any


SchemaNode = StringType | NumberType | BooleanType | ArrayType | EnumType | Optional | WithDefault


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _expected_type(node: SchemaNode) -> str:
    match node:
        case StringType() | EnumType():
            return "string"
        case NumberType():
            return "number"
        case BooleanType():
            return "boolean"
        case ArrayType():
            return "array"
    return "value"


def _parse_node(node: SchemaNode, value: Any, path: str, issues: list[Issue]) -> Any:
    """Parse a single value against a node, appending any problems to issues."""
    match node:
        case WithDefault(inner=inner, value=default):
            if value is None:
                return copy.deepcopy(default)
            return _parse_node(inner, value, path, issues)

        case Optional(inner=inner):
            if value is None:
                return None
            return _parse_node(inner, value, path, issues)

        case _ if value is None:
            issues.append(Issue(path, "required"))
            return None

        case StringType(min_length=min_length, max_length=max_length):
            if not isinstance(value, str):
                issues.append(Issue(path, f"expected string, received {_type_name(value)}"))
                return None
            if min_length is not None and len(value) < min_length:
                issues.append(Issue(path, f"must contain at least {min_length} character(s)"))
            if max_length is not None and len(value) > max_length:
                issues.append(Issue(path, f"must contain at most {max_length} character(s)"))
            return value

        case NumberType(minimum=minimum, maximum=maximum):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                issues.append(Issue(path, f"expected number, received {_type_name(value)}"))
                return None
            if minimum is not None and value < minimum:
                issues.append(Issue(path, f"must be greater than or equal to {minimum:g}"))
            if maximum is not None and value > maximum:
                issues.append(Issue(path, f"must be less than or equal to {maximum:g}"))
            return value

        case BooleanType():
            if not isinstance(value, bool):
                issues.append(Issue(path, f"expected boolean, received {_type_name(value)}"))
                return None
            return value

        case EnumType(values=values):
            if value not in values:
                allowed = ", ".join(f"'{v}'" for v in values)
                issues.append(Issue(path, f"invalid value {value!r}, expected one of {allowed}"))
                return None
            return value

        case ArrayType(items=items):
            if not isinstance(value, (list, tuple)):
                issues.append(Issue(path, f"expected array, received {_type_name(value)}"))
                return None
            parsed = []
            for index, item in enumerate(value):
                item_path = f"{path}[{index}]"
                if item is None and not isinstance(items, (Optional, WithDefault)):
                    issues.append(Issue(item_path, f"expected {_expected_type(items)}, received null"))
                    parsed.append(None)
                    continue
                parsed.append(_parse_node(items, item, item_path, issues))
            return parsed

    raise TypeError(f"Unsupported schema node: {node!r}")


@dataclass(frozen=True)
class ObjectSchema:
    """Validation schema for a tool's argument object."""

    fields: dict[str, SchemaNode] = field(default_factory=dict)

    def parse(self, raw: Any) -> dict[str, Any]:
        """
        Validate raw arguments and return a typed dict with every declared key.
        Unknown keys are dropped. Raises SchemaValidationError listing all issues.
        """
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise SchemaValidationError([Issue("(root)", f"expected object, received {_type_name(raw)}")])

        issues: list[Issue] = []
        parsed: dict[str, Any] = {}
        for key, node in self.fields.items():
            parsed[key] = _parse_node(node, raw.get(key), key, issues)

        if issues:
            raise SchemaValidationError(issues)
        return parsed
