"""
Test helpers.

``create_test_client`` builds a client whose ``execute_request`` is replaced
by a responder, recording every compiled request:

    client, requests = create_test_client(modules, respond=lambda request: {
        "data": {"test": {"testMethod": 5}},
    })
    assert await client.get_module("test").testMethod(name="John") == 5
    assert requests[0].query == 'query { test { testMethod(name: "John") } }'
"""

from __future__ import annotations

import inspect
import json
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .client import StorexGraphQLClient
from .config import ClientConfig
from .models import GraphQLRequest
from .observer import Observer
from .transport import BufferedResponse, RequestInit

TEST_ENDPOINT = "http://testserver/graphql"

Responder = Callable[[GraphQLRequest], Any]


def json_response(payload: Any, status: int = 200) -> BufferedResponse:
    """Fake fetch response carrying a JSON payload."""
    return BufferedResponse(json.dumps(payload), status=status)


class RecordingFetch:
    """Fetch function that records its calls and answers with fixed payloads."""

    def __init__(self, *payloads: Any) -> None:
        self.payloads = list(payloads)
        self.calls: List[Tuple[str, RequestInit]] = []

    async def __call__(self, url: str, init: RequestInit) -> BufferedResponse:
        self.calls.append((url, init))
        if not self.payloads:
            raise AssertionError(f"Unexpected request to {url}")
        payload = self.payloads.pop(0) if len(self.payloads) > 1 else self.payloads[0]
        return json_response(payload)

    @property
    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(init["body"]) for _, init in self.calls]


def create_test_client(
    modules: Mapping[str, Any],
    respond: Optional[Responder] = None,
    config: Optional[ClientConfig] = None,
    observer: Optional[Observer] = None,
    fetch: Optional[Callable[..., Any]] = None,
) -> Tuple[StorexGraphQLClient, List[GraphQLRequest]]:
    """
    Create a client for tests.

    Args:
        modules: Client-side storage modules
        respond: Called with each compiled request; its (possibly awaitable)
            return value is used as the response envelope
        config: Client configuration, defaults to a dummy endpoint
        observer: Observer for the client
        fetch: Fetch function used when no responder is given

    Returns:
        Tuple of (client, list of executed requests)
    """
    client = StorexGraphQLClient(
        config or ClientConfig(endpoint=TEST_ENDPOINT),
        modules,
        fetch=fetch,
        observer=observer,
    )
    requests: List[GraphQLRequest] = []

    if respond is not None:

        async def execute_request(request: GraphQLRequest) -> Any:
            requests.append(request)
            response = respond(request)
            if inspect.isawaitable(response):
                response = await response
            return response

        client.execute_request = execute_request  # type: ignore[method-assign]

    return client, requests
