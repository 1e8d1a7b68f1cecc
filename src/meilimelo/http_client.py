"""HTTP plumbing: one request per call, status codes mapped to errors."""
from typing import Any

import httpx
import structlog

from meilimelo.errors import SchemaMismatch, TransportError, error_for_status
from meilimelo.logging import get_request_id, get_trace_id

logger = structlog.get_logger(__name__)


def create_http_client(
    base_url: str,
    *,
    timeout: float = 30.0,
    headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create async HTTP client bound to the instance, without retries."""
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(timeout),
        headers=headers,
        transport=transport or httpx.AsyncHTTPTransport(retries=0),
    )


def _decode_body(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text


async def send_request(
    client: httpx.AsyncClient,
    method: str,
    path: str,
    *,
    json: Any = None,
    params: dict[str, Any] | None = None,
) -> Any:
    """Perform a single request and return the decoded JSON body.

    Returns None for empty bodies (e.g. 204). Raises TransportError,
    NotFound, AuthError, ServiceError or SchemaMismatch.
    """
    headers = {}
    request_id = get_request_id()
    if request_id:
        headers["X-Request-ID"] = request_id
    trace_id = get_trace_id()
    if trace_id:
        headers["X-Trace-ID"] = trace_id

    try:
        resp = await client.request(method, path, json=json, params=params, headers=headers)
    except httpx.TransportError as e:
        logger.warning("meili_request_failed", method=method, path=path, error=str(e))
        raise TransportError(f"{method} {path} failed: {e}") from e

    logger.debug("meili_request", method=method, path=path, status=resp.status_code)

    if not resp.is_success:
        body = _decode_body(resp)
        logger.warning(
            "meili_request_failed", method=method, path=path, status=resp.status_code
        )
        raise error_for_status(resp.status_code, body)

    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError as e:
        raise SchemaMismatch(f"{method} {path} returned a non-JSON body", resp.text) from e
