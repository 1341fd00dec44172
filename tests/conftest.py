"""
Shared test fixtures and configuration for the storex_graphql_client test suite.
"""

from typing import Any, Callable, Dict, Optional

import pytest

from storex_graphql_client import ClientConfig, StaticModule
from storex_graphql_client.testing import TEST_ENDPOINT, RecordingFetch


@pytest.fixture
def user_collections() -> Dict[str, Any]:
    """A single ``user`` collection with two fields."""
    return {
        "user": {
            "version": "2019-01-01",
            "fields": {
                "displayName": {"type": "string"},
                "age": {"type": "int"},
            },
        }
    }


@pytest.fixture
def make_modules() -> Callable[..., Dict[str, StaticModule]]:
    """Build a ``test`` module exposing one ``testMethod``."""

    def factory(method_definition: Dict[str, Any], collections: Optional[Dict[str, Any]] = None):
        return {
            "test": StaticModule({
                "collections": collections or {},
                "methods": {"testMethod": method_definition},
            })
        }

    return factory


@pytest.fixture
def test_config() -> ClientConfig:
    """Default client configuration for tests."""
    return ClientConfig(endpoint=TEST_ENDPOINT)


@pytest.fixture
def recording_fetch() -> RecordingFetch:
    """Fetch function answering every request with a fixed envelope."""
    return RecordingFetch({"data": {"test": {"testMethod": 5}}})
