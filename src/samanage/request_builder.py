"""
Request construction for the Samanage REST API.

Every resource handle funnels through the four primitives defined here:
get, create, update and delete. The builder only shapes paths and bodies;
the transport does the network work and any failure it raises reaches the
caller unchanged.
"""
import logging
import time
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Protocol, Union
from urllib.parse import quote

import httpx

from samanage.config import ContentType

logger = logging.getLogger(__name__)

# create() always posts to the .json endpoint, whatever the content type
CREATE_SUFFIX = ContentType.JSON.value

Parameters = Mapping[str, Any]
Body = Union[str, bytes, Mapping[str, Any], list]


class HttpTransport(Protocol):
    """Verb-level HTTP interface the builder needs. httpx.AsyncClient fits."""

    async def get(self, url: str, **kwargs: Any) -> httpx.Response: ...

    async def post(self, url: str, **kwargs: Any) -> httpx.Response: ...

    async def put(self, url: str, **kwargs: Any) -> httpx.Response: ...

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response: ...


def stringify_value(value: Any) -> str:
    """Render a query value the way the API expects it."""
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def build_query_string(parameters: Optional[Parameters], encode: bool = False) -> str:
    """
    Build a query string from parameters.

    Keys keep the iteration order of ``parameters`` so the same mapping
    always yields the same URL. ``None`` values are skipped. Values are
    interpolated verbatim unless ``encode`` is set, except ``#``, which is
    always escaped since a fragment never reaches the server.

    Args:
        parameters: Ordered key/value pairs
        encode: Percent-encode keys and values

    Returns:
        ``?k=v&k=v`` or an empty string when there is nothing to send
    """
    query_parts = []
    for key, value in (parameters or {}).items():
        if value is None:
            continue
        key_text = str(key)
        value_text = stringify_value(value)
        if encode:
            key_text = quote(key_text, safe="")
            value_text = quote(value_text, safe="")
        else:
            key_text = key_text.replace("#", "%23")
            value_text = value_text.replace("#", "%23")
        query_parts.append(f"{key_text}={value_text}")
    return "?" + "&".join(query_parts) if query_parts else ""


def _body_kwargs(data: Body) -> Dict[str, Any]:
    if isinstance(data, (str, bytes)):
        return {"content": data}
    return {"json": data}


class RequestBuilder:
    """Shapes Samanage paths and issues them through a transport.

    With ``base_url`` set, requests go out as absolute URLs, so the
    transport needs no base URL of its own.
    """

    def __init__(
        self,
        transport: HttpTransport,
        headers: Mapping[str, str],
        content_type: ContentType = ContentType.JSON,
        encode_query: bool = False,
        base_url: str = "",
    ):
        self.transport = transport
        # empty base_url leaves paths relative to the transport's own base_url
        self.base_url = base_url.rstrip("/")
        self.headers = MappingProxyType(dict(headers))
        self.content_type = ContentType(content_type)
        self.encode_query = encode_query

    # Path construction

    def get_path(self, segment: str, parameters: Optional[Parameters] = None) -> str:
        """Path for a read: ``/{segment}[/{id}].{ct}[?query]``.

        ``id`` is taken out of a copy of ``parameters``; the caller's
        mapping is left untouched.
        """
        query = dict(parameters or {})
        resource_id = query.pop("id", None)
        id_part = f"/{resource_id}" if resource_id not in (None, "") else ""
        query_string = build_query_string(query, encode=self.encode_query)
        return f"/{segment}{id_part}.{self.content_type.value}{query_string}"

    def create_path(self, segment: str) -> str:
        return f"/{segment}.{CREATE_SUFFIX}"

    def member_path(self, segment: str, resource_id: Any) -> str:
        return f"/{segment}/{resource_id}.{self.content_type.value}"

    # Primitives

    async def get(self, segment: str, parameters: Optional[Parameters] = None) -> httpx.Response:
        """
        Get a resource collection, or one record when ``parameters`` has an ``id``.

        Args:
            segment: URI segment, e.g. ``hardwares``
            parameters: Query parameters, EX {"per_page": 10} -> ?per_page=10

        Returns:
            The transport's response
        """
        return await self._send("GET", self.get_path(segment, parameters))

    async def create(self, segment: str, data: Body) -> httpx.Response:
        """Create a record. EX data={"user": {"email": "new@domain.com"}}"""
        return await self._send("POST", self.create_path(segment), data)

    async def update(self, segment: str, resource_id: Any, data: Body) -> httpx.Response:
        """Update the record ``resource_id`` with the fields in ``data``."""
        return await self._send("PUT", self.member_path(segment, resource_id), data)

    async def delete(self, segment: str, resource_id: Any) -> httpx.Response:
        """Delete the record ``resource_id``."""
        return await self._send("DELETE", self.member_path(segment, resource_id))

    async def _send(self, method: str, path: str, data: Optional[Body] = None) -> httpx.Response:
        sender = getattr(self.transport, method.lower())
        kwargs: Dict[str, Any] = {"headers": dict(self.headers)}
        if data is not None:
            kwargs.update(_body_kwargs(data))

        logger.debug(f"Making {method} request to {path}")
        start_time = time.time()
        response = await sender(f"{self.base_url}{path}", **kwargs)
        duration = time.time() - start_time
        logger.info(f"{method} {path} completed in {duration:.2f}s with status {response.status_code}")

        # Non-2xx surfaces as httpx.HTTPStatusError
        response.raise_for_status()
        return response
