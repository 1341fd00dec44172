"""
Method and argument descriptors.

Descriptors are immutable and are built once, when modules are registered.
They can be written directly or parsed from the loose definition format used
by storage module configs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping

from ..exceptions import SchemaError
from .shapes import VOID, ReturnShape, ValueShape, is_value_shape, parse_value_shape

_SHAPE_KEYS = ("collection", "array")


class MethodKind(str, Enum):
    """Whether a method reads or writes."""

    QUERY = "query"
    MUTATION = "mutation"


@dataclass(frozen=True)
class ArgumentDescriptor:
    """Declared argument of a remote method."""

    shape: ValueShape
    positional: bool = False
    optional: bool = False

    @classmethod
    def from_definition(cls, definition: Any) -> "ArgumentDescriptor":
        """
        Parse a loose argument definition.

        Either a bare shape definition (``"string"``, ``{"collection": "user"}``)
        or a detailed one: ``{"type": "string", "positional": True}``.
        """
        if isinstance(definition, ArgumentDescriptor):
            return definition
        if is_value_shape(definition) or isinstance(definition, str):
            return cls(shape=parse_value_shape(definition))
        if not isinstance(definition, Mapping):
            raise SchemaError(f"Cannot parse argument definition: {definition!r}")

        if "type" in definition:
            shape = parse_value_shape(definition["type"])
        elif any(key in definition for key in _SHAPE_KEYS):
            shape = parse_value_shape(definition)
        else:
            raise SchemaError(
                f"Argument definition has no type: {definition!r}",
                definition=dict(definition),
            )

        return cls(
            shape=shape,
            positional=bool(definition.get("positional", False)),
            optional=bool(definition.get("optional", False)),
        )


@dataclass(frozen=True)
class MethodDescriptor:
    """
    Declared remote method.

    Attributes:
        kind: Query or mutation
        arguments: Arguments in declaration order
        returns: Return shape, ``VOID`` for methods without a result
    """

    kind: MethodKind = MethodKind.QUERY
    arguments: Mapping[str, ArgumentDescriptor] = field(default_factory=dict)
    returns: ReturnShape = VOID

    def __post_init__(self) -> None:
        # Freeze the argument mapping; insertion order is declaration order
        object.__setattr__(self, "kind", MethodKind(self.kind))
        object.__setattr__(self, "arguments", MappingProxyType(dict(self.arguments)))

    @property
    def positional_arguments(self) -> Dict[str, ArgumentDescriptor]:
        return {name: arg for name, arg in self.arguments.items() if arg.positional}

    @classmethod
    def from_definition(cls, definition: Any) -> "MethodDescriptor":
        """
        Parse a loose method definition.

        Example:
            ```python
            MethodDescriptor.from_definition({
                "type": "query",
                "args": {"name": "string", "user": {"collection": "user"}},
                "returns": {"array": "int"},
            })
            ```

        Raises:
            SchemaError: If the definition is malformed
        """
        if isinstance(definition, MethodDescriptor):
            return definition
        if not isinstance(definition, Mapping):
            raise SchemaError(f"Cannot parse method definition: {definition!r}")

        try:
            kind = MethodKind(definition.get("type", MethodKind.QUERY))
        except ValueError:
            raise SchemaError(
                f"Unknown method type: {definition.get('type')!r}",
                definition=dict(definition),
            )

        args = definition.get("args") or {}
        if not isinstance(args, Mapping):
            raise SchemaError(f"Method args must be a mapping, got {args!r}")

        return cls(
            kind=kind,
            arguments={
                name: ArgumentDescriptor.from_definition(arg) for name, arg in args.items()
            },
            returns=parse_value_shape(definition.get("returns", VOID)),
        )
