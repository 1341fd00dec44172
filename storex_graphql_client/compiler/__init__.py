"""
Call-to-request compiler: argument classification and document rendering.
"""

from .arguments import (
    CallVariables,
    collect_variables,
    is_promoted,
    iter_argument_values,
    render_argument_list,
    split_call_arguments,
    to_json_literal,
)
from .query import QueryCompiler, capitalize, input_type_name, render_variable_type

__all__ = [
    "QueryCompiler",
    "CallVariables",
    "is_promoted",
    "split_call_arguments",
    "iter_argument_values",
    "collect_variables",
    "render_argument_list",
    "render_variable_type",
    "input_type_name",
    "capitalize",
    "to_json_literal",
]
