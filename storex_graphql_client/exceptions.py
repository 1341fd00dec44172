"""
Exception hierarchy for storex_graphql_client.

Errors raised while compiling a call, and errors reported by the remote
server, are classified here. Failures raised by the injected fetch function
(network errors, malformed response bodies) are deliberately not part of this
hierarchy: they propagate to the caller unchanged.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class StorexGraphQLError(Exception):
    """
    Base exception for all errors raised by the client.

    Attributes:
        message: Human-readable error message
        details: Additional error details as keyword arguments
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = kwargs

    def __str__(self) -> str:
        return self.message


class SchemaError(StorexGraphQLError):
    """
    Raised when a module, method or collection definition cannot be used.

    Covers malformed loose definitions and references to collections that are
    missing from the collection catalog.
    """

    pass


class UnsupportedShapeError(SchemaError):
    """
    Raised when a value or return shape falls outside the supported variants.

    Raised at compile time, before any request is sent.

    Attributes:
        shape: The offending shape
    """

    def __init__(self, message: str, shape: Any = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.shape = shape


class RemoteError(StorexGraphQLError):
    """
    Raised when the response envelope carries a non-empty ``errors`` list.

    Attributes:
        errors: The error objects exactly as reported by the server
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors = list(errors or [])

    @property
    def messages(self) -> List[str]:
        """Get the server-reported error messages."""
        return error_messages(self.errors)


class EnvelopeShapeError(StorexGraphQLError, KeyError):
    """
    Raised when ``data.<module>.<method>`` is missing from an error-free response.

    Subclasses ``KeyError`` so code written against a bare lookup failure
    keeps working.
    """

    def __init__(self, message: str, path: Optional[List[str]] = None, **kwargs: Any) -> None:
        StorexGraphQLError.__init__(self, message, **kwargs)
        self.path = list(path or [])

    def __str__(self) -> str:
        return self.message


class UnknownMethodError(StorexGraphQLError, AttributeError):
    """Raised when a module or method name is not in the registry."""

    def __init__(self, message: str, module: str, method: Optional[str] = None) -> None:
        StorexGraphQLError.__init__(self, message, module=module, method=method)
        self.module = module
        self.method = method

    def __str__(self) -> str:
        return self.message


def error_messages(errors: List[Any]) -> List[str]:
    """Get the messages of server-reported error objects."""
    return [
        error.get("message", "Unknown error") if isinstance(error, dict) else str(error)
        for error in errors
    ]
