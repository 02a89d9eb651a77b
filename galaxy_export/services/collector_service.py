import asyncio
import logging
from typing import Iterable, Optional

import httpx

from galaxy_export.config import settings
from galaxy_export.models.schemas import CollectionResult, FetchFailure, FetchStage
from galaxy_export.services.fetch_service import create_client, fetch_system
from galaxy_export.utils.errors import EmptyResultError, FetchError

logger = logging.getLogger(__name__)


class Collector:
    """Fans out one fetch per address and joins them all.

    Each fetch task owns its request; the only shared state is the queue
    the tasks put their outcome on, drained once every task has finished.
    """

    def __init__(self, client: httpx.AsyncClient, max_concurrency: Optional[int] = None, path: Optional[str] = None):
        self._client = client
        self._path = path
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency and max_concurrency > 0 else None

    async def collect(self, addresses: Iterable[str]) -> CollectionResult:
        addresses = list(addresses)
        result = CollectionResult(requested=len(addresses))
        if not addresses:
            return result

        outcomes: asyncio.Queue = asyncio.Queue(maxsize=len(addresses))
        tasks = [asyncio.create_task(self._fetch_into(outcomes, address)) for address in addresses]
        await asyncio.gather(*tasks)

        while not outcomes.empty():
            outcome = outcomes.get_nowait()
            if isinstance(outcome, FetchFailure):
                result.failures.append(outcome)
            else:
                result.systems.append(outcome)

        logger.debug(f"Collected {len(result.systems)}/{result.requested} systems")
        return result

    async def _fetch_into(self, outcomes: asyncio.Queue, address: str):
        try:
            if self._semaphore is None:
                system = await fetch_system(self._client, address, self._path)
            else:
                async with self._semaphore:
                    system = await fetch_system(self._client, address, self._path)
        except FetchError as e:
            outcomes.put_nowait(FetchFailure(address=e.address, stage=e.stage, reason=e.reason))
            return
        except Exception as e:
            logger.error(f"Unexpected error fetching from {address}", exc_info=True)
            outcomes.put_nowait(FetchFailure(address=address, stage=FetchStage.UNEXPECTED, reason=repr(e)))
            return
        outcomes.put_nowait(system)


async def collect_systems(
    addresses: Iterable[str],
    timeout: Optional[float] = None,
    max_concurrency: Optional[int] = None,
    path: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CollectionResult:
    if max_concurrency is None:
        max_concurrency = settings.MAX_CONCURRENCY
    async with create_client(timeout=timeout, transport=transport) as client:
        return await Collector(client, max_concurrency=max_concurrency, path=path).collect(addresses)


def require_systems(result: CollectionResult) -> CollectionResult:
    if not result.systems:
        raise EmptyResultError(result.requested)
    return result
