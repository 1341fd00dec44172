"""
Schema model: value shapes, method descriptors, collections and modules.
"""

from .catalog import CollectionCatalog, CollectionDefinition
from .descriptors import ArgumentDescriptor, MethodDescriptor, MethodKind
from .registry import MethodRegistry, ModuleConfig, StaticModule, StorageModule, module_config
from .shapes import (
    VOID,
    ArrayShape,
    CollectionShape,
    ReturnShape,
    ScalarShape,
    ValueShape,
    describe_shape,
    parse_value_shape,
)

__all__ = [
    # Shapes
    "ScalarShape",
    "CollectionShape",
    "ArrayShape",
    "ValueShape",
    "ReturnShape",
    "VOID",
    "parse_value_shape",
    "describe_shape",
    # Descriptors
    "MethodKind",
    "ArgumentDescriptor",
    "MethodDescriptor",
    # Collections
    "CollectionCatalog",
    "CollectionDefinition",
    # Modules
    "ModuleConfig",
    "StorageModule",
    "StaticModule",
    "MethodRegistry",
    "module_config",
]
