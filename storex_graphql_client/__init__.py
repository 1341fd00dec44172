"""
GraphQL client for storage modules.

Compiles calls to module methods into GraphQL documents, using the same
method and collection descriptors the server-side schema is generated from.

Features:
- Async method stubs generated from module descriptors
- Collection arguments sent as typed variables, scalars inlined
- Selection sets derived from collection field lists
- Pluggable fetch function (aiohttp by default)
- Observer hook for per-call diagnostics
"""

from .client import MethodStub, ModuleProxy, StorexGraphQLClient
from .compiler import QueryCompiler, is_promoted
from .config import ClientConfig, ConfigLoader, LoggingConfig, LogLevel, load_config
from .exceptions import (
    EnvelopeShapeError,
    RemoteError,
    SchemaError,
    StorexGraphQLError,
    UnknownMethodError,
    UnsupportedShapeError,
)
from .models import GraphQLRequest
from .observer import (
    CallProcessed,
    LoggingObserver,
    MethodCallStarted,
    Observer,
    ObserverEvent,
    RecordingObserver,
    RequestCompiled,
    ResponseReceived,
)
from .schema import (
    VOID,
    ArgumentDescriptor,
    ArrayShape,
    CollectionCatalog,
    CollectionShape,
    MethodDescriptor,
    MethodKind,
    MethodRegistry,
    ModuleConfig,
    ScalarShape,
    StaticModule,
    StorageModule,
)
from .transport import BufferedResponse, RequestTransport, aiohttp_fetch
from .unwrap import unwrap_response

__version__ = "0.1.0"

__all__ = [
    # Client
    "StorexGraphQLClient",
    "ModuleProxy",
    "MethodStub",
    # Schema model
    "ScalarShape",
    "CollectionShape",
    "ArrayShape",
    "VOID",
    "ArgumentDescriptor",
    "MethodDescriptor",
    "MethodKind",
    "MethodRegistry",
    "CollectionCatalog",
    "ModuleConfig",
    "StaticModule",
    "StorageModule",
    # Compiler
    "QueryCompiler",
    "is_promoted",
    "GraphQLRequest",
    # Transport
    "RequestTransport",
    "BufferedResponse",
    "aiohttp_fetch",
    "unwrap_response",
    # Observer
    "Observer",
    "ObserverEvent",
    "MethodCallStarted",
    "RequestCompiled",
    "ResponseReceived",
    "CallProcessed",
    "LoggingObserver",
    "RecordingObserver",
    # Configuration
    "ClientConfig",
    "LoggingConfig",
    "LogLevel",
    "ConfigLoader",
    "load_config",
    # Exceptions
    "StorexGraphQLError",
    "SchemaError",
    "UnsupportedShapeError",
    "RemoteError",
    "EnvelopeShapeError",
    "UnknownMethodError",
]
