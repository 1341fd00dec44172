"""
Storage module configs and the method registry.

Modules expose their methods and collections through ``get_config()``. The
registry reads every module once and keeps a flat, read-only table from
``(module_name, method_name)`` to the parsed method descriptor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Protocol, Tuple, Union, runtime_checkable

from ..exceptions import SchemaError, UnknownMethodError
from .descriptors import MethodDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModuleConfig:
    """Methods and collections declared by one storage module."""

    methods: Mapping[str, Any] = field(default_factory=dict)
    collections: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_value(cls, value: Union["ModuleConfig", Mapping[str, Any]]) -> "ModuleConfig":
        if isinstance(value, ModuleConfig):
            return value
        if isinstance(value, Mapping):
            return cls(
                methods=value.get("methods") or {},
                collections=value.get("collections") or {},
            )
        raise SchemaError(f"Cannot read module config: {value!r}")


@runtime_checkable
class StorageModule(Protocol):
    """Anything that can describe its public methods and collections."""

    def get_config(self) -> Union[ModuleConfig, Mapping[str, Any]]:
        ...


class StaticModule:
    """Storage module backed by a fixed config, used on the client side."""

    def __init__(self, config: Union[ModuleConfig, Mapping[str, Any]]) -> None:
        self._config = ModuleConfig.from_value(config)

    def get_config(self) -> ModuleConfig:
        return self._config


def module_config(module: Any) -> ModuleConfig:
    """Read the config of a storage module or accept a bare config."""
    if isinstance(module, StorageModule):
        return ModuleConfig.from_value(module.get_config())
    return ModuleConfig.from_value(module)


class MethodRegistry(Mapping[Tuple[str, str], MethodDescriptor]):
    """
    Read-only table of method descriptors keyed by ``(module, method)``.

    Examples:
        ```python
        registry = MethodRegistry.from_modules({"test": StaticModule({
            "methods": {"greet": {"type": "query", "args": {"name": "string"}, "returns": "string"}},
        })})
        registry.get_method("test", "greet").kind  # MethodKind.QUERY
        ```
    """

    def __init__(
        self,
        methods: Mapping[Tuple[str, str], MethodDescriptor],
        module_names: Optional[List[str]] = None,
    ) -> None:
        self._methods: Mapping[Tuple[str, str], MethodDescriptor] = MappingProxyType(dict(methods))
        self._module_names = list(module_names or [])
        for module_name, _ in self._methods:
            if module_name not in self._module_names:
                self._module_names.append(module_name)

    def __getitem__(self, key: Tuple[str, str]) -> MethodDescriptor:
        return self._methods[key]

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)

    @property
    def module_names(self) -> List[str]:
        """Module names in registration order, including modules without methods."""
        return list(self._module_names)

    def methods_of(self, module_name: str) -> Dict[str, MethodDescriptor]:
        """Get the descriptors of one module, in declaration order."""
        return {
            method_name: descriptor
            for (owner, method_name), descriptor in self._methods.items()
            if owner == module_name
        }

    def get_method(self, module_name: str, method_name: str) -> MethodDescriptor:
        """
        Look up one method descriptor.

        Raises:
            UnknownMethodError: If the module or method is not registered
        """
        try:
            return self._methods[(module_name, method_name)]
        except KeyError:
            raise UnknownMethodError(
                f"Unknown method '{module_name}.{method_name}'",
                module=module_name,
                method=method_name,
            )

    @classmethod
    def from_modules(cls, modules: Mapping[str, Any]) -> "MethodRegistry":
        """
        Build the registry from storage modules.

        Args:
            modules: Storage modules (or bare module configs) by name

        Raises:
            SchemaError: If a method definition is malformed
        """
        methods: Dict[Tuple[str, str], MethodDescriptor] = {}
        for module_name, module in modules.items():
            for method_name, definition in module_config(module).methods.items():
                try:
                    methods[(module_name, method_name)] = MethodDescriptor.from_definition(
                        definition
                    )
                except SchemaError as e:
                    raise SchemaError(
                        f"Invalid definition of '{module_name}.{method_name}': {e.message}",
                        module=module_name,
                        method=method_name,
                    ) from e

        logger.debug("Registered %d methods from %d modules", len(methods), len(modules))
        return cls(methods, module_names=list(modules))
