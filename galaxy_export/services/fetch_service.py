import json
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from galaxy_export.config import settings
from galaxy_export.models.schemas import FetchStage, StarSystem
from galaxy_export.utils.errors import FetchError

logger = logging.getLogger(__name__)


def system_url(address: str, path: Optional[str] = None) -> str:
    return f"http://{address}{path or settings.SYSTEM_PATH}"


def build_timeout(seconds: Optional[float]) -> httpx.Timeout:
    if not seconds:
        return httpx.Timeout(None)
    return httpx.Timeout(seconds)


def create_client(timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """Client shared by every fetch of a run.

    The pool is unlimited so the fan-out degree is governed by the collector
    alone.
    """
    if timeout is None:
        timeout = settings.FETCH_TIMEOUT
    return httpx.AsyncClient(
        timeout=build_timeout(timeout),
        limits=httpx.Limits(max_connections=None, max_keepalive_connections=None),
        transport=transport,
    )


async def fetch_system(client: httpx.AsyncClient, address: str, path: Optional[str] = None) -> StarSystem:
    """Fetch and decode one node's system, in a single attempt.

    Raises FetchError tagged with the stage that failed: connect (request
    and headers), read (body), decode (JSON) or validate (record shape).
    """
    url = system_url(address, path)

    try:
        async with client.stream("GET", url) as response:
            try:
                body = await response.aread()
            except httpx.HTTPError as e:
                raise _failure(address, FetchStage.READ, _describe(e)) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise _failure(address, FetchStage.CONNECT, _describe(e)) from e

    try:
        payload = json.loads(body, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise _failure(address, FetchStage.DECODE, f"{e} (HTTP {response.status_code})") from e

    try:
        system = StarSystem.model_validate(payload)
    except ValidationError as e:
        reason = f"{e.error_count()} invalid field(s) (HTTP {response.status_code})"
        raise _failure(address, FetchStage.VALIDATE, reason) from e

    logger.info(f"✓ Fetched: {system.name} ({system.star_type.star_class} {system.star_type.description})")
    return system


def _reject_constant(token: str):
    raise ValueError(f"non-finite number {token} is not valid JSON")


def _failure(address: str, stage: FetchStage, reason: str) -> FetchError:
    error = FetchError(address, stage, reason)
    logger.warning(str(error))
    return error


def _describe(error: Exception) -> str:
    return str(error) or type(error).__name__
