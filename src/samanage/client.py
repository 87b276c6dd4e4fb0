"""Client for interacting with the Samanage API."""
import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import httpx
from pydantic import ValidationError

from samanage.config import (
    DEFAULT_API_VERSION,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    ClientConfig,
    ContentType,
    Settings,
    get_settings,
)
from samanage.errors import CapabilityError, ConfigurationError
from samanage.request_builder import Body, HttpTransport, Parameters, RequestBuilder
from samanage.resources import RESOURCES, Handle, build_handle
from samanage.utils.http_client import build_headers, build_transport

logger = logging.getLogger(__name__)


class Samanage:
    """
    Client for the Samanage REST API.

    Every resource in the capability registry is exposed as an attribute,
    e.g. ``client.users.get({"per_page": 1})`` or
    ``client.hardware.update("42", {"hardware": {...}})``.

    Headers are computed once here and sent with each request. When no
    transport is given the client builds its own ``httpx.AsyncClient`` and
    closes it in ``aclose``; an injected transport stays with its owner.
    """

    def __init__(
        self,
        key: str,
        version: str = DEFAULT_API_VERSION,
        content_type: str = ContentType.JSON.value,
        *,
        transport: Optional[HttpTransport] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        encode_query: bool = False,
    ):
        """
        Initialize the client.

        Args:
            key: Samanage API key
            version: Samanage API version
            content_type: ``json`` or ``xml``
            transport: Optional transport; one is built when omitted
            base_url: API host; requests are sent as absolute URLs under it
            timeout: Request timeout in seconds for the built transport.
                Configure an injected transport's timeout on the transport itself.
            encode_query: Percent-encode query string keys and values

        Raises:
            ConfigurationError: If the key is missing or the settings are invalid
        """
        if not key or not isinstance(key, str):
            raise ConfigurationError("An API key is required")
        if transport is not None and timeout is not None:
            raise ConfigurationError(
                "timeout only applies to the transport the client builds; "
                "set it on the injected transport instead",
                details={"timeout": timeout},
            )
        try:
            self.config = ClientConfig(
                api_key=key,
                version=version,
                content_type=content_type,
                base_url=base_url,
                timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
                encode_query=encode_query,
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid client configuration: {e.errors()[0]['msg']}",
                details={"errors": e.errors(include_url=False)},
            ) from e

        self.headers: Mapping[str, str] = MappingProxyType(build_headers(self.config))
        self._owns_transport = transport is None
        self.transport = transport if transport is not None else build_transport(self.config)
        self._builder = RequestBuilder(
            self.transport,
            self.headers,
            content_type=self.config.content_type,
            encode_query=self.config.encode_query,
            base_url=self.config.base_url,
        )

        self._resources: Dict[str, Handle] = {}
        for descriptor in RESOURCES:
            handle = build_handle(descriptor, self._builder)
            self._resources[descriptor.name] = handle
            setattr(self, descriptor.name, handle)

        logger.info(
            f"Initialized Samanage client (version={self.config.version}, "
            f"content_type={self.config.content_type.value}, "
            f"resources={len(self._resources)})"
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs: Any) -> "Samanage":
        """Build a client from SAMANAGE_* environment settings."""
        settings = settings or get_settings()
        if kwargs.get("transport") is None:
            kwargs.setdefault("timeout", settings.timeout)
        return cls(
            settings.key,
            version=settings.api_version,
            content_type=settings.content_type,
            base_url=settings.base_url,
            encode_query=settings.encode_query,
            **kwargs,
        )

    @property
    def content_type(self) -> ContentType:
        return self.config.content_type

    @property
    def resources(self) -> Mapping[str, Handle]:
        return MappingProxyType(self._resources)

    def resource(self, name: str) -> Handle:
        """Return the handle for ``name``, e.g. ``"catalog_items"``."""
        try:
            return self._resources[name]
        except KeyError:
            raise CapabilityError.unknown_resource(name) from None

    # Generic primitives, for segments the registry does not cover

    async def get(self, segment: str, parameters: Optional[Parameters] = None) -> httpx.Response:
        return await self._builder.get(segment, parameters)

    async def create(self, segment: str, data: Body) -> httpx.Response:
        return await self._builder.create(segment, data)

    async def update(self, segment: str, resource_id: Any, data: Body) -> httpx.Response:
        return await self._builder.update(segment, resource_id, data)

    async def delete(self, segment: str, resource_id: Any) -> httpx.Response:
        return await self._builder.delete(segment, resource_id)

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> "Samanage":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"<Samanage version={self.config.version} content_type={self.config.content_type.value}>"
