"""
Collection catalog.

Maps collection names to their ordered field lists. Only field names matter
to the compiler: they become the selection set of collection-valued returns,
in declaration order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Iterator, Mapping, Optional, Tuple

from ..exceptions import SchemaError

if TYPE_CHECKING:
    from .registry import StorageModule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionDefinition:
    """Declared collection: its name and fields in declaration order."""

    name: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(self.fields)

    @classmethod
    def from_definition(cls, name: str, definition: Any) -> "CollectionDefinition":
        """
        Parse a storage module collection definition.

        Accepts ``{"fields": {"displayName": {"type": "string"}, ...}}``, a
        bare field mapping, or a sequence of field names.
        """
        if isinstance(definition, CollectionDefinition):
            return definition
        if isinstance(definition, Mapping):
            fields = definition.get("fields", definition)
            if not isinstance(fields, Mapping):
                raise SchemaError(
                    f"Fields of collection '{name}' must be a mapping",
                    collection=name,
                )
            return cls(name=name, fields=fields)
        if isinstance(definition, (list, tuple)):
            return cls(name=name, fields={field_name: None for field_name in definition})
        raise SchemaError(
            f"Cannot parse definition of collection '{name}': {definition!r}",
            collection=name,
        )

    def with_field(self, name: str, definition: Any = None) -> "CollectionDefinition":
        """Return a copy with an extra trailing field, unless already declared."""
        if name in self.fields:
            return self
        fields = dict(self.fields)
        fields[name] = definition
        return CollectionDefinition(name=self.name, fields=fields)


class CollectionCatalog(Mapping[str, CollectionDefinition]):
    """
    Read-only mapping from collection name to collection definition.

    Examples:
        ```python
        catalog = CollectionCatalog({
            "user": {"fields": {"displayName": {"type": "string"}, "age": {"type": "int"}}},
        })
        catalog.field_names("user")  # ("displayName", "age")
        ```
    """

    def __init__(self, collections: Optional[Mapping[str, Any]] = None) -> None:
        self._collections: Dict[str, CollectionDefinition] = {
            name: CollectionDefinition.from_definition(name, definition)
            for name, definition in (collections or {}).items()
        }

    def __getitem__(self, name: str) -> CollectionDefinition:
        return self._collections[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._collections)

    def __len__(self) -> int:
        return len(self._collections)

    def __repr__(self) -> str:
        return f"CollectionCatalog({list(self._collections)!r})"

    def field_names(self, name: str) -> Tuple[str, ...]:
        """
        Get the ordered field names of a collection.

        Raises:
            SchemaError: If the collection is not in the catalog
        """
        try:
            return self._collections[name].field_names
        except KeyError:
            raise SchemaError(f"Unknown collection '{name}'", collection=name)

    @classmethod
    def from_modules(
        cls,
        modules: Mapping[str, "StorageModule"],
        auto_pk_field: Optional[str] = None,
    ) -> "CollectionCatalog":
        """
        Merge the collections declared by every module.

        Args:
            modules: Storage modules by name
            auto_pk_field: Field appended to every collection that does not
                declare it, as the storage registry does for auto primary keys

        Raises:
            SchemaError: If two modules declare the same collection differently
        """
        from .registry import module_config

        merged: Dict[str, CollectionDefinition] = {}
        for module_name, module in modules.items():
            for name, definition in module_config(module).collections.items():
                collection = CollectionDefinition.from_definition(name, definition)
                if auto_pk_field:
                    collection = collection.with_field(auto_pk_field, {"type": "auto-pk"})

                existing = merged.get(name)
                if existing is not None and existing.field_names != collection.field_names:
                    raise SchemaError(
                        f"Collection '{name}' of module '{module_name}' conflicts "
                        f"with an earlier definition",
                        collection=name,
                        module=module_name,
                    )
                merged[name] = collection

        logger.debug("Registered %d collections from %d modules", len(merged), len(modules))
        return cls(merged)
