"""Bounded concurrent fetching of repository build statuses.

A fixed number of worker tasks pull repository ids from one shared iterator
and fetch their statuses one at a time. Present statuses are sent through a
bounded queue to a single collector task, so workers wait when the collector
falls behind instead of buffering without limit.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Iterable, Iterator, List, Optional, Tuple

from .errors import StatusFetchError
from .types import BuildStatus, RepoId

logger = logging.getLogger('shub')

DEFAULT_CONCURRENCY = 2
CHANNEL_CAPACITY = 32

StatusFetch = Callable[[RepoId], Awaitable[Optional[BuildStatus]]]
StatusPair = Tuple[RepoId, BuildStatus]

# Sent by the fetcher once every worker has finished
_CLOSED = object()


class StatusFetcher:
    """Fan out status fetches over a bounded pool of workers.

    By default the first failure cancels all outstanding work and is raised
    as StatusFetchError, so a batch either completes fully or yields nothing.
    With isolate_failures the failing repository is logged, recorded in
    `failures` and left out of the results.
    """

    def __init__(
        self,
        fetch_status: StatusFetch,
        concurrency: int = DEFAULT_CONCURRENCY,
        capacity: int = CHANNEL_CAPACITY,
        isolate_failures: bool = False
    ):
        """Initialize status fetcher.

        Args:
            fetch_status: Coroutine function returning the status of one
                repository, or None when it has nothing to report
            concurrency: Maximum number of fetches in flight
            capacity: Maximum number of results waiting for the collector
            isolate_failures: Skip failing repositories instead of aborting
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, was {concurrency}")
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, was {capacity}")

        self.fetch_status = fetch_status
        self.concurrency = concurrency
        self.capacity = capacity
        self.isolate_failures = isolate_failures
        self.failures: List[Tuple[RepoId, BaseException]] = []

    async def run(self, repo_ids: Iterable[RepoId]) -> List[StatusPair]:
        """Fetch the statuses of all repositories.

        Args:
            repo_ids: Repositories to fetch, consumed once

        Returns:
            Pairs for every repository that reported a status, in no
            particular order

        Raises:
            StatusFetchError: If a fetch fails and failures are not isolated
        """
        self.failures = []
        items = iter(repo_ids)
        channel: asyncio.Queue = asyncio.Queue(maxsize=self.capacity)

        collector = asyncio.create_task(self._collect(channel))
        workers = [
            asyncio.create_task(self._work(items, channel))
            for _ in range(self.concurrency)
        ]

        try:
            await asyncio.gather(*workers)
        except BaseException:
            for task in workers + [collector]:
                task.cancel()
            await asyncio.gather(*workers, collector, return_exceptions=True)
            raise

        await channel.put(_CLOSED)
        results = await collector
        logger.info(f"Fetched {len(results)} build statuses")
        return results

    async def _work(self, items: Iterator[RepoId], channel: asyncio.Queue) -> None:
        """Fetch statuses until the shared iterator runs out."""
        for repo_id in items:
            status = await self._fetch_one(repo_id)
            if status is not None:
                await channel.put((repo_id, status))

    async def _fetch_one(self, repo_id: RepoId) -> Optional[BuildStatus]:
        try:
            status = await self.fetch_status(repo_id)
        except Exception as e:
            if not self.isolate_failures:
                if isinstance(e, StatusFetchError):
                    raise
                raise StatusFetchError(repo_id, e) from e
            logger.warning(f"Skipping {repo_id}: {e}")
            self.failures.append((repo_id, e))
            return None

        logger.info(f"Build status of {repo_id}: {status}")
        return status

    async def _collect(self, channel: asyncio.Queue) -> List[StatusPair]:
        """Drain the channel until it is closed."""
        results = []
        while True:
            item = await channel.get()
            if item is _CLOSED:
                return results
            results.append(item)
