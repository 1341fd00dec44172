"""
Tests for the request transport and the aiohttp fetch adapter.
"""

import json

import aiohttp
import pytest
from aioresponses import aioresponses

from storex_graphql_client import BufferedResponse, GraphQLRequest, RequestTransport, aiohttp_fetch
from storex_graphql_client.testing import RecordingFetch

ENDPOINT = "https://my.api/graphql"


class TestRequestTransport:
    """Test the single request/response exchange."""

    @pytest.mark.asyncio
    async def test_execute_request(self):
        """One fetch call with the exact init payload."""
        fake_response = {"data": {"hello": "Hello world!"}}
        fetch = RecordingFetch(fake_response)
        transport = RequestTransport(ENDPOINT, fetch)

        result = await transport.send(GraphQLRequest(query="{ hello }", variables={"foo": "bar"}))

        assert fetch.calls == [
            (
                ENDPOINT,
                {
                    "method": "POST",
                    "headers": {
                        "Content-Type": "application/json",
                        "Accept": "application/json",
                    },
                    "body": '{"query":"{ hello }","variables":{"foo":"bar"}}',
                },
            )
        ]
        assert result == fake_response

    def test_variables_always_present(self):
        """An empty variable map is still serialized."""
        body = RequestTransport.serialize(GraphQLRequest(query="{ hello }"))
        assert body == '{"query":"{ hello }","variables":{}}'

    @pytest.mark.asyncio
    async def test_prebuilt_body(self):
        """A body serialized by the caller is sent as is."""
        fetch = RecordingFetch({"data": {}})
        transport = RequestTransport(ENDPOINT, fetch)

        await transport.send(GraphQLRequest(query="{ hello }"), body='{"query":"{ hello }","variables":{}}')

        assert fetch.bodies == [{"query": "{ hello }", "variables": {}}]

    @pytest.mark.asyncio
    async def test_fetch_errors_propagate(self):
        """Transport failures reach the caller unchanged."""
        error = aiohttp.ClientConnectionError("connection refused")

        async def failing_fetch(url, init):
            raise error

        transport = RequestTransport(ENDPOINT, failing_fetch)
        with pytest.raises(aiohttp.ClientConnectionError) as exc_info:
            await transport.send(GraphQLRequest(query="{ hello }"))
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_invalid_json_propagates(self):
        """Bodies that are not JSON raise the decoder's own error."""

        async def fetch(url, init):
            return BufferedResponse("<html>oops</html>")

        transport = RequestTransport(ENDPOINT, fetch)
        with pytest.raises(json.JSONDecodeError):
            await transport.send(GraphQLRequest(query="{ hello }"))


class TestAiohttpFetch:
    """Test the aiohttp-backed fetch function."""

    @pytest.mark.asyncio
    async def test_posts_body(self):
        """The adapter posts the body and exposes the parsed JSON."""
        with aioresponses() as m:
            m.post(ENDPOINT, payload={"data": {"test": {"testMethod": 5}}}, status=200)

            async with aiohttp.ClientSession() as session:
                transport = RequestTransport(ENDPOINT, aiohttp_fetch(session))
                result = await transport.send(GraphQLRequest(query="{ hello }"))

            assert result == {"data": {"test": {"testMethod": 5}}}
            ((method, url), calls) = next(iter(m.requests.items()))
            assert method == "POST"
            assert str(url) == ENDPOINT
            assert calls[0].kwargs["data"] == '{"query":"{ hello }","variables":{}}'
            assert calls[0].kwargs["headers"]["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_error_status_keeps_body(self):
        """GraphQL error bodies on 4xx responses are still returned."""
        payload = {"errors": [{"message": "Cannot query field"}]}
        with aioresponses() as m:
            m.post(ENDPOINT, payload=payload, status=400)

            async with aiohttp.ClientSession() as session:
                response = await aiohttp_fetch(session)(ENDPOINT, {"method": "POST", "body": "{}"})

        assert response.status == 400
        assert await response.json() == payload

    @pytest.mark.asyncio
    async def test_raise_for_status(self):
        """Status checking can be switched on."""
        with aioresponses() as m:
            m.post(ENDPOINT, status=500)

            async with aiohttp.ClientSession() as session:
                fetch = aiohttp_fetch(session, raise_for_status=True)
                with pytest.raises(aiohttp.ClientResponseError):
                    await fetch(ENDPOINT, {"method": "POST", "body": "{}"})
