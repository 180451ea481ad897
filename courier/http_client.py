import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from .config import REQUEST_TIMEOUT_SECONDS
from .errors import RequestTimeout, TransportError
from .models import HttpResponse, RequestSpec
from .parsing import validate_url

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], Awaitable[Any]]


async def perform_http_request(
    spec: RequestSpec,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
    verify_tls: bool = True,
    client_factory: ClientFactory | None = None,
) -> HttpResponse:
    url = _validate_url(spec.url)
    start = asyncio.get_running_loop().time()
    try:
        if client_factory is not None:
            client = await client_factory()
            status, headers, text = await _httpx_request(client, spec, url)
        else:
            async with httpx.AsyncClient(timeout=timeout, verify=verify_tls) as client:
                status, headers, text = await _httpx_request(client, spec, url)
    except httpx.TimeoutException as exc:
        logger.debug("Request to %s timed out: %s", url, exc)
        raise RequestTimeout(timeout) from exc
    except httpx.HTTPError as exc:
        logger.debug("Request to %s failed: %r", url, exc)
        raise TransportError(f"Request failed: {exc}") from exc
    elapsed = (asyncio.get_running_loop().time() - start) * 1000
    return HttpResponse(status=status, headers=headers, body=text, elapsed_ms=elapsed)


async def _httpx_request(client: Any, spec: RequestSpec, url: str) -> tuple[int, tuple[tuple[str, str], ...], str]:
    resp = await client.request(
        spec.method.value,
        url,
        params=spec.params or None,
        headers=spec.headers or None,
        content=spec.body.encode("utf-8") if spec.body else None,
    )
    return resp.status_code, _header_pairs(resp.headers), resp.text


def _header_pairs(headers: Any) -> tuple[tuple[str, str], ...]:
    if hasattr(headers, "multi_items"):
        return tuple(headers.multi_items())
    return tuple((str(k), str(v)) for k, v in dict(headers or {}).items())


def _validate_url(url: str) -> str:
    try:
        return validate_url(url)
    except ValueError as exc:
        raise TransportError(str(exc)) from exc
