"""
Request transport.

Performs exactly one exchange per call through an injected fetch function:

    response = await fetch(endpoint, {"method": "POST", "headers": ..., "body": ...})
    parsed = await response.json()

There is no retry, timeout or error translation here; whatever the fetch
function or the JSON decoding raises reaches the caller unchanged.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol

import aiohttp

from .compiler import to_json_literal
from .models import GraphQLRequest

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


class FetchResponse(Protocol):
    """Minimal response interface consumed by the transport."""

    async def json(self) -> Any:
        ...


RequestInit = Dict[str, Any]
Fetch = Callable[[str, RequestInit], Awaitable[FetchResponse]]


class BufferedResponse:
    """Response whose body has already been read."""

    def __init__(self, body: str, status: int = 200, headers: Optional[Dict[str, str]] = None):
        self.body = body
        self.status = status
        self.headers = headers or {}

    async def json(self) -> Any:
        return json.loads(self.body)

    async def text(self) -> str:
        return self.body


def aiohttp_fetch(session: aiohttp.ClientSession, raise_for_status: bool = False) -> Fetch:
    """
    Create a fetch function backed by an aiohttp session.

    GraphQL servers report query errors with 4xx statuses and an ``errors``
    body, so status codes are not checked unless ``raise_for_status`` is set.

    Args:
        session: Session used for every request
        raise_for_status: Raise ``aiohttp.ClientResponseError`` for 4xx/5xx

    Returns:
        Fetch function for ``RequestTransport``
    """

    async def fetch(url: str, init: RequestInit) -> BufferedResponse:
        async with session.request(
            init.get("method", "POST"),
            url,
            headers=init.get("headers"),
            data=init.get("body"),
        ) as response:
            if raise_for_status:
                response.raise_for_status()
            body = await response.text()
            return BufferedResponse(body, status=response.status, headers=dict(response.headers))

    return fetch


class RequestTransport:
    """
    Sends compiled requests to one endpoint.

    Examples:
        ```python
        async with aiohttp.ClientSession() as session:
            transport = RequestTransport("https://my.api/graphql", aiohttp_fetch(session))
            body = await transport.send(GraphQLRequest(query="{ hello }"))
        ```
    """

    def __init__(self, endpoint: str, fetch: Fetch) -> None:
        self.endpoint = endpoint
        self.fetch = fetch

    @staticmethod
    def serialize(request: GraphQLRequest) -> str:
        """Serialize the request body as compact JSON."""
        return to_json_literal(request.to_dict())

    def build_request_init(self, request: GraphQLRequest, body: Optional[str] = None) -> RequestInit:
        """Build the ``(endpoint, init)`` payload handed to the fetch function."""
        return {
            "method": "POST",
            "headers": {
                "Content-Type": JSON_MEDIA_TYPE,
                "Accept": JSON_MEDIA_TYPE,
            },
            "body": body if body is not None else self.serialize(request),
        }

    async def send(self, request: GraphQLRequest, body: Optional[str] = None) -> Any:
        """
        Perform the exchange and parse the JSON response body.

        Args:
            request: Compiled request
            body: Pre-serialized body, to avoid serializing twice

        Returns:
            Parsed response envelope
        """
        init = self.build_request_init(request, body)
        logger.debug("POST %s (%d bytes)", self.endpoint, len(init["body"]))
        response = await self.fetch(self.endpoint, init)
        return await response.json()
