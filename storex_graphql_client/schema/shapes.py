"""
Value shapes used by method descriptors.

A value shape is a closed tagged variant: a scalar wire type, a reference to
a collection in the catalog, or an array of another shape. Every consumer
matches on these three classes exhaustively and raises
``UnsupportedShapeError`` on anything else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

from ..exceptions import SchemaError


@dataclass(frozen=True)
class ScalarShape:
    """Primitive wire type such as ``string`` or ``int``."""

    name: str

    @property
    def is_void(self) -> bool:
        return self.name == VOID_TYPE_NAME


@dataclass(frozen=True)
class CollectionShape:
    """Structured record type declared in the collection catalog."""

    collection: str


@dataclass(frozen=True)
class ArrayShape:
    """List of values of another shape."""

    element: "ValueShape"
    optional_elements: bool = False


ValueShape = Union[ScalarShape, CollectionShape, ArrayShape]

VOID_TYPE_NAME = "void"
VOID = ScalarShape(VOID_TYPE_NAME)

# Return shapes are either VOID or any value shape
ReturnShape = ValueShape

_SHAPE_TYPES = (ScalarShape, CollectionShape, ArrayShape)


def is_value_shape(value: Any) -> bool:
    """Check whether a value is already a parsed shape."""
    return isinstance(value, _SHAPE_TYPES)


def parse_value_shape(definition: Any) -> ValueShape:
    """
    Parse a loose shape definition.

    Accepted forms:
        - ``"string"``, ``"int"``, ``"void"``, ... for scalars
        - ``{"collection": "user"}`` for collections
        - ``{"array": <definition>}`` for arrays, optionally with
          ``"optionalElements": True``
        - an already parsed shape, returned unchanged

    Args:
        definition: Loose shape definition

    Returns:
        Parsed value shape

    Raises:
        SchemaError: If the definition cannot be interpreted
    """
    if is_value_shape(definition):
        return definition

    if isinstance(definition, str):
        if not definition:
            raise SchemaError("Empty scalar type name")
        return ScalarShape(definition)

    if isinstance(definition, Mapping):
        if "collection" in definition:
            collection = definition["collection"]
            if not isinstance(collection, str) or not collection:
                raise SchemaError(
                    f"Invalid collection reference: {collection!r}",
                    definition=definition,
                )
            return CollectionShape(collection)

        if "array" in definition:
            optional_elements = definition.get(
                "optionalElements", definition.get("optional_elements", False)
            )
            return ArrayShape(
                element=parse_value_shape(definition["array"]),
                optional_elements=bool(optional_elements),
            )

    raise SchemaError(f"Cannot parse value shape: {definition!r}", definition=definition)


def describe_shape(shape: Any) -> str:
    """Short human-readable rendering, used in error messages and logs."""
    if isinstance(shape, ScalarShape):
        return shape.name
    if isinstance(shape, CollectionShape):
        return f"collection:{shape.collection}"
    if isinstance(shape, ArrayShape):
        return f"[{describe_shape(shape.element)}]"
    return repr(shape)
