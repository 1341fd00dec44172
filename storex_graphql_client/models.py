"""
Wire-level request model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from .schema import MethodKind


@dataclass
class GraphQLRequest:
    """Compiled GraphQL document with its variables."""

    query: str
    variables: Dict[str, Any] = field(default_factory=dict)
    operation_type: MethodKind = MethodKind.QUERY

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the request body; ``variables`` is always present."""
        return {
            "query": self.query,
            "variables": self.variables,
        }
