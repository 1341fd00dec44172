"""
Query compiler.

Turns one method call into a GraphQL document plus its variables:

    <kind> [MethodCall($var: Type, ...) ]{ <module> { <method>(<args>) <selection> } }

The same collection catalog that drives the selection sets is used by the
server-side schema generator, so field order and the ``<Collection>Input``
type names must stay in step with it.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..exceptions import UnsupportedShapeError
from ..models import GraphQLRequest
from ..schema import (
    ArgumentDescriptor,
    ArrayShape,
    CollectionCatalog,
    CollectionShape,
    MethodDescriptor,
    ScalarShape,
)
from ..schema.shapes import describe_shape
from .arguments import collect_variables, promoted_arguments, render_argument_list

logger = logging.getLogger(__name__)

VOID_SELECTION = "{ void }"
VARIABLE_OPERATION_NAME = "MethodCall"


def capitalize(name: str) -> str:
    """Upper-case the first character only (``userProfile`` -> ``UserProfile``)."""
    return name[:1].upper() + name[1:]


def input_type_name(collection: str) -> str:
    """Name of the server-side input type generated for a collection."""
    return f"{capitalize(collection)}Input"


def render_variable_type(argument: ArgumentDescriptor) -> str:
    """
    Render the GraphQL type of a promoted argument.

    Raises:
        UnsupportedShapeError: If the argument shape cannot be promoted
    """
    required = "" if argument.optional else "!"
    match argument.shape:
        case CollectionShape(collection=collection):
            return f"{input_type_name(collection)}{required}"
        case ArrayShape(element=CollectionShape(collection=collection), optional_elements=optional_elements):
            element_required = "" if optional_elements else "!"
            return f"[{input_type_name(collection)}{element_required}]{required}"
        case _:
            raise UnsupportedShapeError(
                f"Cannot declare a variable of shape {describe_shape(argument.shape)}",
                shape=argument.shape,
            )


class QueryCompiler:
    """
    Compiles method calls into GraphQL requests.

    The compiler holds only the read-only catalog; every call builds its own
    document and variables, so one compiler can serve concurrent calls.

    Examples:
        ```python
        compiler = QueryCompiler(catalog)
        request = compiler.compile("users", "getUser", descriptor, [], {"name": "Joe"})
        request.query  # 'query { users { getUser(name: "Joe") { displayName, age } } }'
        ```
    """

    def __init__(self, catalog: Optional[CollectionCatalog] = None) -> None:
        self.catalog = catalog if catalog is not None else CollectionCatalog()

    def render_selection(self, returns: Any) -> str:
        """
        Render the selection set for a return shape.

        Returns:
            ``{ void }`` for void methods, ``{ field, ... }`` for collection
            results and an empty string for scalar results

        Raises:
            UnsupportedShapeError: For unknown shapes
            SchemaError: If the collection is not in the catalog
        """
        match returns:
            case ScalarShape(is_void=True):
                return VOID_SELECTION
            case ScalarShape():
                return ""
            case CollectionShape(collection=collection) | ArrayShape(
                element=CollectionShape(collection=collection)
            ):
                return f"{{ {', '.join(self.catalog.field_names(collection))} }}"
            case ArrayShape(element=ScalarShape(is_void=False)):
                return ""
            case _:
                raise UnsupportedShapeError(
                    f"Unsupported return shape: {describe_shape(returns)}", shape=returns
                )

    def check_argument_collections(self, method: MethodDescriptor) -> None:
        """
        Ensure every collection named by an argument is in the catalog.

        Raises:
            SchemaError: If an argument names an unknown collection
        """
        for argument in method.arguments.values():
            match argument.shape:
                case CollectionShape(collection=collection) | ArrayShape(
                    element=CollectionShape(collection=collection)
                ):
                    self.catalog.field_names(collection)

    def render_variable_header(
        self,
        method: MethodDescriptor,
        args: Sequence[Any],
        options: Mapping[str, Any],
    ) -> str:
        """Render ``MethodCall($a: AInput!) `` or an empty string without variables."""
        declarations = [
            f"${name}: {render_variable_type(argument)}"
            for name, argument in promoted_arguments(method, args, options)
        ]
        if not declarations:
            return ""
        return f"{VARIABLE_OPERATION_NAME}({', '.join(declarations)}) "

    def compile(
        self,
        module_name: str,
        method_name: str,
        method: MethodDescriptor,
        args: Sequence[Any] = (),
        options: Optional[Mapping[str, Any]] = None,
    ) -> GraphQLRequest:
        """
        Compile one call.

        Args:
            module_name: Remote module name
            method_name: Remote method name
            method: Descriptor of the method
            args: Positional argument values
            options: Named argument values

        Returns:
            GraphQLRequest with the document and the promoted variables

        Raises:
            UnsupportedShapeError: If a shape cannot be rendered
            SchemaError: If a referenced collection is unknown
        """
        options = options if options is not None else {}

        self.check_argument_collections(method)
        selection = self.render_selection(method.returns)
        arg_list = render_argument_list(method, args, options)
        header = self.render_variable_header(method, args, options)
        variables = collect_variables(method, args, options)

        call = f"{method_name}{arg_list}"
        if selection:
            call = f"{call} {selection}"
        query = f"{method.kind.value} {header}{{ {module_name} {{ {call} }} }}"

        logger.debug("Compiled %s.%s: %s", module_name, method_name, query)
        return GraphQLRequest(query=query, variables=variables, operation_type=method.kind)
