"""
Response unwrapping.

A response envelope is a failure as soon as it carries a non-empty
``errors`` list, whatever ``data`` holds; the messages are joined into one
``RemoteError`` that keeps the original error objects.

A successful envelope must contain ``data.<module>.<method>``. When that
path is missing or runs through a non-mapping, ``EnvelopeShapeError`` is
raised. It subclasses ``KeyError`` so callers catching the plain lookup
failure keep working.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .exceptions import EnvelopeShapeError, RemoteError, error_messages

logger = logging.getLogger(__name__)


def unwrap_response(envelope: Mapping[str, Any], module_name: str, method_name: str) -> Any:
    """
    Extract ``data.<module>.<method>`` from a response envelope.

    Errors take precedence: an envelope with a non-empty ``errors`` list is
    a failure even when it also carries ``data``.

    Raises:
        RemoteError: If the server reported errors
        EnvelopeShapeError: If the result path is missing
    """
    errors = envelope.get("errors")
    if errors:
        message = f"GraphQL execution errors: {'; '.join(error_messages(errors))}"
        logger.debug("%s.%s failed: %s", module_name, method_name, message)
        raise RemoteError(message, errors=errors, module=module_name, method=method_name)

    try:
        return envelope["data"][module_name][method_name]
    except (KeyError, TypeError) as e:
        raise EnvelopeShapeError(
            f"Response has no data at '{module_name}.{method_name}'",
            path=["data", module_name, method_name],
        ) from e
