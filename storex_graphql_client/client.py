"""
Storex GraphQL client.

Exposes the methods declared by storage modules as async callables that
compile each call into a GraphQL request, send it through the transport and
return the unwrapped result.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Mapping, Optional, Union

import aiohttp

from .compiler import QueryCompiler, split_call_arguments
from .config import ClientConfig
from .exceptions import UnknownMethodError
from .models import GraphQLRequest
from .observer import (
    CallProcessed,
    MethodCallStarted,
    Observer,
    RequestCompiled,
    ResponseReceived,
    notify,
)
from .schema import CollectionCatalog, MethodDescriptor, MethodRegistry
from .transport import Fetch, RequestTransport, aiohttp_fetch
from .unwrap import unwrap_response

logger = logging.getLogger(__name__)


class MethodStub:
    """Async callable standing in for one remote method."""

    def __init__(
        self,
        client: "StorexGraphQLClient",
        module_name: str,
        method_name: str,
        descriptor: MethodDescriptor,
    ) -> None:
        self.client = client
        self.module_name = module_name
        self.method_name = method_name
        self.descriptor = descriptor

    def __repr__(self) -> str:
        return f"<MethodStub {self.module_name}.{self.method_name} ({self.descriptor.kind.value})>"

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return await self.client.call(self.module_name, self.method_name, args, kwargs)


class ModuleProxy:
    """
    Method stubs of one module, reachable by attribute or by key.

    Attribute access reaches every remote method, including ones named ``get`` or ``items``.
    """

    def __init__(self, name: str, stubs: Dict[str, MethodStub]) -> None:
        self._name = name
        self._stubs = stubs

    def __getitem__(self, method_name: str) -> MethodStub:
        return self._stubs[method_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._stubs)

    def __len__(self) -> int:
        return len(self._stubs)

    def __contains__(self, method_name: object) -> bool:
        return method_name in self._stubs

    def __getattr__(self, method_name: str) -> MethodStub:
        if method_name.startswith("_"):
            raise AttributeError(method_name)
        try:
            return self._stubs[method_name]
        except KeyError:
            raise UnknownMethodError(
                f"Module '{self._name}' has no method '{method_name}'",
                module=self._name,
                method=method_name,
            )

    def __repr__(self) -> str:
        return f"<ModuleProxy {self._name}: {', '.join(self._stubs)}>"


class StorexGraphQLClient:
    """
    GraphQL client generated from storage module descriptors.

    Examples:
        Calling a module method:
        ```python
        modules = {"users": StaticModule({
            "collections": {"user": {"fields": {"displayName": {"type": "string"}}}},
            "methods": {
                "findUser": {"type": "query", "args": {"name": "string"},
                             "returns": {"collection": "user"}},
            },
        })}

        async with StorexGraphQLClient("https://my.api/graphql", modules) as client:
            user = await client.get_module("users").findUser(name="Joe")
        ```

        With a custom fetch function and an observer:
        ```python
        client = StorexGraphQLClient(
            ClientConfig(endpoint="https://my.api/graphql", auto_pk_field="id"),
            modules,
            fetch=my_fetch,
            observer=LoggingObserver(),
        )
        ```
    """

    def __init__(
        self,
        config: Union[ClientConfig, str],
        modules: Optional[Mapping[str, Any]] = None,
        fetch: Optional[Fetch] = None,
        observer: Optional[Observer] = None,
        catalog: Optional[CollectionCatalog] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration, or just the endpoint URL
            modules: Storage modules (or bare module configs) by name
            fetch: Fetch function used for every request; defaults to one
                backed by an aiohttp session
            observer: Callable notified of every step of every call
            catalog: Collection catalog; built from the modules if omitted
            session: aiohttp session for the default fetch function
        """
        self.config = config if isinstance(config, ClientConfig) else ClientConfig(endpoint=config)
        self.modules: Dict[str, Any] = dict(modules or {})
        self.observer = observer

        self.registry = MethodRegistry.from_modules(self.modules)
        self.catalog = (
            catalog
            if catalog is not None
            else CollectionCatalog.from_modules(
                self.modules, auto_pk_field=self.config.auto_pk_field
            )
        )
        self.compiler = QueryCompiler(self.catalog)

        self._session = session
        self._owns_session = False
        self.transport = RequestTransport(self.config.endpoint, fetch or self._default_fetch)

        self._module_proxies = {
            module_name: ModuleProxy(
                module_name,
                {
                    method_name: MethodStub(self, module_name, method_name, descriptor)
                    for method_name, descriptor in self.registry.methods_of(module_name).items()
                },
            )
            for module_name in self.registry.module_names
        }

    async def __aenter__(self) -> "StorexGraphQLClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the aiohttp session if the client created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
        self._owns_session = False

    async def _default_fetch(self, url: str, init: Dict[str, Any]) -> Any:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return await aiohttp_fetch(self._session)(url, init)

    def get_modules(self) -> Dict[str, ModuleProxy]:
        """Get the method stubs of every module."""
        return dict(self._module_proxies)

    def get_module(self, module_name: str) -> ModuleProxy:
        """
        Get the method stubs of one module.

        Raises:
            UnknownMethodError: If the module is not registered
        """
        try:
            return self._module_proxies[module_name]
        except KeyError:
            raise UnknownMethodError(f"Unknown module '{module_name}'", module=module_name)

    def compile_call(
        self,
        module_name: str,
        method_name: str,
        args: Any = (),
        options: Optional[Mapping[str, Any]] = None,
    ) -> GraphQLRequest:
        """
        Compile a call without sending it.

        Args:
            module_name: Module name
            method_name: Method name
            args: Positional values, optionally followed by the options mapping
            options: Named values passed as keywords

        Raises:
            UnknownMethodError: If the method is not registered
            UnsupportedShapeError: If a shape cannot be rendered
            SchemaError: If a referenced collection is unknown
        """
        descriptor = self.registry.get_method(module_name, method_name)
        positional, named = split_call_arguments(descriptor, args, options)
        return self.compiler.compile(module_name, method_name, descriptor, positional, named)

    async def execute_request(self, request: GraphQLRequest) -> Any:
        """
        Send one compiled request and return the parsed response envelope.

        Transport failures propagate unchanged. Overriding this method
        replaces the network round trip; the observer still sees every event.
        """
        return await self.transport.send(request)

    async def call(
        self,
        module_name: str,
        method_name: str,
        args: Any = (),
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Call a remote method.

        Raises:
            UnsupportedShapeError: If the call cannot be compiled
            RemoteError: If the server reported errors
            EnvelopeShapeError: If the response lacks the method's result
        """
        logger.debug("Calling %s.%s", module_name, method_name)
        call_args = tuple(args)
        if options:
            call_args = call_args + (dict(options),)
        notify(self.observer, MethodCallStarted(module=module_name, method=method_name, args=call_args))

        request = self.compile_call(module_name, method_name, args, options)
        body = self.transport.serialize(request)
        notify(self.observer, RequestCompiled(query=request.query, variables=request.variables, body=body))
        response = await self.execute_request(request)
        notify(self.observer, ResponseReceived(parsed_body=response))

        result = unwrap_response(response, module_name, method_name)
        notify(
            self.observer,
            CallProcessed(module=module_name, method=method_name, args=call_args, return_value=result),
        )
        return result
