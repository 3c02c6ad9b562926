"""
HTTP client construction for the task API.

Builds the httpx.AsyncClient that is injected into TaskRemoteSource:
base URL, timeouts, JSON headers, optional bearer auth and request/response
logging hooks.
"""

from typing import Dict, Optional

import httpx
import structlog

from ..config import Settings

logger = structlog.get_logger(__name__)


async def _log_request(request: httpx.Request) -> None:
    logger.debug("http_request", method=request.method, url=str(request.url))


async def _log_response(response: httpx.Response) -> None:
    request = response.request
    log = logger.warning if response.is_error else logger.debug
    log(
        "http_response",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
    )


def build_headers(app_name: str, api_token: Optional[str] = None) -> Dict[str, str]:
    """
    Build the default request headers.

    Args:
        app_name: Application name for the User-Agent header
        api_token: Optional bearer token

    Returns:
        Dictionary of HTTP headers
    """
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": f"{app_name.replace(' ', '-')}/1.0",
    }
    if api_token:
        headers["Authorization"] = f"Bearer {api_token}"
    return headers


def build_http_client(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create the HTTP client for the task API.

    Args:
        settings: Application settings
        transport: Optional transport override (tests use httpx.MockTransport)

    Returns:
        Configured httpx.AsyncClient; the caller owns it
    """
    client = httpx.AsyncClient(
        base_url=settings.TASKS_API_URL,
        timeout=httpx.Timeout(settings.REQUEST_TIMEOUT),
        headers=build_headers(settings.APP_NAME, settings.API_TOKEN),
        limits=httpx.Limits(
            max_keepalive_connections=20,
            max_connections=100,
            keepalive_expiry=30.0,
        ),
        event_hooks={"request": [_log_request], "response": [_log_response]},
        transport=transport,
    )
    logger.info(
        "http_client_created",
        base_url=settings.TASKS_API_URL,
        timeout=settings.REQUEST_TIMEOUT,
        authenticated=bool(settings.API_TOKEN),
    )
    return client
