"""
Argument classification and extraction.

Each declared argument is either inlined into the document as a JSON literal
or promoted to a ``$name`` variable sent alongside the document. Only
collection-shaped values (or arrays of them) are promoted: they have to match
a generated ``<Collection>Input`` type on the server.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import UnsupportedShapeError
from ..schema import ArgumentDescriptor, ArrayShape, CollectionShape, MethodDescriptor, ScalarShape
from ..schema.shapes import describe_shape

# Marker for an optional named argument the caller did not pass
_MISSING = object()

CallVariables = Dict[str, Any]


def is_promoted(shape: Any) -> bool:
    """
    Decide whether values of a shape travel as variables.

    Raises:
        UnsupportedShapeError: If the shape is not a known variant
    """
    match shape:
        case CollectionShape():
            return True
        case ArrayShape(element=CollectionShape()):
            return True
        case ArrayShape(element=ScalarShape() | ArrayShape()):
            return False
        case ScalarShape():
            return False
        case _:
            raise UnsupportedShapeError(
                f"Unsupported argument shape: {describe_shape(shape)}", shape=shape
            )


def split_call_arguments(
    method: MethodDescriptor,
    args: Sequence[Any],
    kwargs: Optional[Mapping[str, Any]] = None,
) -> Tuple[List[Any], Mapping[str, Any]]:
    """
    Split a stub call into its positional prefix and the options object.

    Positional arguments come first; named arguments come from exactly one
    trailing mapping, or from Python keyword arguments.

    Returns:
        Tuple of (positional values, options mapping)

    Raises:
        TypeError: If the call mixes a trailing mapping with keyword
            arguments, or passes more values than the method accepts
    """
    positional_count = len(method.positional_arguments)
    values = list(args)
    options: Mapping[str, Any] = {}

    if len(values) > positional_count:
        trailing = values[positional_count:]
        if len(trailing) > 1 or not isinstance(trailing[0], Mapping):
            raise TypeError(
                f"Expected {positional_count} positional argument(s) and at most "
                f"one options mapping, got {len(values)} value(s)"
            )
        options = trailing[0]
        values = values[:positional_count]

    if kwargs:
        if options:
            raise TypeError("Pass named arguments either as a mapping or as keywords, not both")
        options = kwargs

    return values, options


def iter_argument_values(
    method: MethodDescriptor,
    args: Sequence[Any],
    options: Mapping[str, Any],
) -> Iterator[Tuple[str, ArgumentDescriptor, Any]]:
    """
    Walk the declared arguments and pair each with its call value.

    Positional arguments consume a cursor over a fresh copy of ``args`` in
    declaration order; the rest are read from ``options`` by name. Optional
    named arguments that were not passed are skipped.
    """
    cursor = iter(list(args))
    for name, argument in method.arguments.items():
        if argument.positional:
            try:
                value = next(cursor)
            except StopIteration:
                raise IndexError(f"Missing positional argument '{name}'") from None
        else:
            value = options.get(name, _MISSING)
            if value is _MISSING:
                if argument.optional:
                    continue
                value = options[name]
        yield name, argument, value


def collect_variables(
    method: MethodDescriptor,
    args: Sequence[Any],
    options: Mapping[str, Any],
) -> CallVariables:
    """Build the variable map holding the values of promoted arguments."""
    return {
        name: value
        for name, argument, value in iter_argument_values(method, args, options)
        if is_promoted(argument.shape)
    }


def promoted_arguments(
    method: MethodDescriptor,
    args: Sequence[Any],
    options: Mapping[str, Any],
) -> List[Tuple[str, ArgumentDescriptor]]:
    """List the promoted arguments present in a call, in declaration order."""
    return [
        (name, argument)
        for name, argument, _ in iter_argument_values(method, args, options)
        if is_promoted(argument.shape)
    ]


def to_json_literal(value: Any) -> str:
    """Compact JSON encoding used for inlined values and request bodies."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def render_argument_list(
    method: MethodDescriptor,
    args: Sequence[Any],
    options: Mapping[str, Any],
) -> str:
    """
    Render ``(name: value, ...)`` for a call.

    Returns:
        The parenthesised argument list, or an empty string without arguments
    """
    pairs = []
    for name, argument, value in iter_argument_values(method, args, options):
        rendered = f"${name}" if is_promoted(argument.shape) else to_json_literal(value)
        pairs.append(f"{name}: {rendered}")

    if not pairs:
        return ""
    return f"({', '.join(pairs)})"
