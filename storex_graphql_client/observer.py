"""
Observer hook.

An observer is any callable that accepts one event. It is called
synchronously at each step of a method call, in this order:

    preparing-request -> request-prepared -> response-received -> call-processed

Its return value is ignored, and exceptions it raises are not caught.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class MethodCallStarted:
    """A generated method stub was called."""

    module: str
    method: str
    args: Tuple[Any, ...] = ()
    type: str = field(default="preparing-request", init=False)


@dataclass(frozen=True)
class RequestCompiled:
    """The call was compiled and serialized."""

    query: str
    variables: Dict[str, Any]
    body: str
    type: str = field(default="request-prepared", init=False)


@dataclass(frozen=True)
class ResponseReceived:
    """The response body was parsed."""

    parsed_body: Any
    type: str = field(default="response-received", init=False)


@dataclass(frozen=True)
class CallProcessed:
    """The result was unwrapped and is about to be returned."""

    module: str
    method: str
    args: Tuple[Any, ...]
    return_value: Any
    type: str = field(default="call-processed", init=False)


ObserverEvent = Union[MethodCallStarted, RequestCompiled, ResponseReceived, CallProcessed]
Observer = Callable[[ObserverEvent], Any]


def notify(observer: Optional[Observer], event: ObserverEvent) -> None:
    """Send an event to the observer, if there is one."""
    if observer is not None:
        observer(event)


class LoggingObserver:
    """
    Observer that writes every event to a logger.

    Event fields are attached to the log record as ``extra``, so a
    ``StructuredFormatter`` emits them as JSON keys.

    Examples:
        ```python
        client = StorexGraphQLClient(config, modules, observer=LoggingObserver())
        ```
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.logger = logger or logging.getLogger("storex_graphql_client.calls")
        self.level = level

    def __call__(self, event: ObserverEvent) -> None:
        if not self.logger.isEnabledFor(self.level):
            return
        event_type = event.type
        values = {f.name: getattr(event, f.name) for f in fields(event) if f.name != "type"}
        self.logger.log(
            self.level,
            "%s %s",
            event_type,
            ", ".join(f"{key}={value!r}" for key, value in values.items()),
            extra={"event": event_type, "event_fields": values},
        )


class RecordingObserver:
    """Observer that keeps every event, mostly useful in tests."""

    def __init__(self) -> None:
        self.events: List[ObserverEvent] = []

    def __call__(self, event: ObserverEvent) -> None:
        self.events.append(event)

    @property
    def types(self) -> List[str]:
        return [event.type for event in self.events]
