"""HTTP transport utilities for Samanage API interactions."""
import logging
from typing import Dict, Mapping, Optional

import httpx

from samanage.config import ClientConfig

AUTH_HEADER = "X-Samanage-Authorization"

_REDACTED = "Bearer ***"


def build_headers(config: ClientConfig) -> Dict[str, str]:
    """
    Build the headers every request to Samanage carries.

    Args:
        config: Client configuration

    Returns:
        Authorization, Accept and Content-Type headers
    """
    return {
        AUTH_HEADER: f"Bearer {config.api_key}",
        "Accept": config.accept_header,
        "Content-Type": config.content_type_header,
    }


def redact_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Return a copy of ``headers`` safe to write to logs."""
    safe = dict(headers)
    for name in list(safe):
        if name.lower() == AUTH_HEADER.lower():
            safe[name] = _REDACTED
    return safe


def build_transport(
    config: ClientConfig,
    network: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create an HTTPX client pointed at the Samanage API.

    The client carries no default headers; the Samanage client sends its
    headers with every request.

    Args:
        config: Client configuration
        network: Optional lower-level httpx transport, e.g. httpx.MockTransport

    Returns:
        Configured HTTPX client
    """
    client_logger = logging.getLogger(__name__ + ".HttpClient")
    client_logger.info(
        f"Creating HTTP client for {config.base_url} with timeout={config.timeout}s"
    )

    limits = httpx.Limits(
        max_keepalive_connections=5,
        max_connections=10,
        keepalive_expiry=5.0
    )

    async def log_request(request: httpx.Request) -> None:
        client_logger.debug(
            f"Starting request: {request.method} {request.url} - "
            f"Headers: {redact_headers(request.headers)}"
        )

    async def log_response(response: httpx.Response) -> None:
        client_logger.debug(
            f"Received response: {response.status_code} for "
            f"{response.request.method} {response.request.url}"
        )

    return httpx.AsyncClient(
        base_url=config.base_url,
        timeout=config.timeout,
        verify=True,
        limits=limits,
        transport=network,
        event_hooks={
            "request": [log_request],
            "response": [log_response],
        },
    )
