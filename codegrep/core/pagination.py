"""Concurrent, order-preserving fetching of result pages."""

import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, Dict

from codegrep.backends.models import SearchParams, SearchResult

logger = logging.getLogger(__name__)

PAGE_SIZE = 10
DEFAULT_CONCURRENCY = 5

Fetcher = Callable[[SearchParams], Awaitable[SearchResult]]


@dataclass(frozen=True)
class PagePlan:
    """How many pages exist and which is the last one to show."""

    total_pages: int
    last_page: int

    @property
    def remaining(self) -> range:
        """Pages still to fetch after the first one."""
        return range(2, self.last_page + 1)


def plan_pages(count: int, page_size: int = PAGE_SIZE, limit: int = 0) -> PagePlan:
    """Compute the page plan for a result count.

    Args:
        count: Total number of hits reported by the service
        page_size: Hits per page
        limit: Maximum number of pages to show, 0 for all of them

    Returns:
        The total number of pages and the last page to fetch

    Raises:
        ValueError: If an argument is out of range
    """
    if page_size <= 0:
        raise ValueError(f"Page size must be positive, got {page_size}")
    if count < 0:
        raise ValueError(f"Hit count cannot be negative, got {count}")
    if limit < 0:
        raise ValueError(f"Page limit cannot be negative, got {limit}")

    total_pages = -(-count // page_size)
    last_page = min(limit, total_pages) if limit > 0 else total_pages
    return PagePlan(total_pages=total_pages, last_page=last_page)


class PageOrchestrator:
    """Fetches the pages after the first with a fixed-width worker pool.

    Workers pull page numbers in ascending order from a shared queue and put
    each result in the slot of its page; the consumer receives a page only
    once every earlier page has been received. The first failed fetch stops
    the whole sequence.
    """

    def __init__(
        self,
        fetch: Fetcher,
        page_size: int = PAGE_SIZE,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        """Initialize page orchestrator.

        Args:
            fetch: Coroutine function performing one search request
            page_size: Hits per page
            concurrency: Maximum number of requests in flight
        """
        if concurrency < 1:
            raise ValueError(f"Concurrency must be at least 1, got {concurrency}")
        self._fetch = fetch
        self.page_size = page_size
        self.concurrency = concurrency

    def plan(self, first: SearchResult, limit: int = 0) -> PagePlan:
        return plan_pages(first.count, self.page_size, limit)

    async def _worker(
        self,
        queue: "asyncio.Queue[int]",
        params: SearchParams,
        slots: Dict[int, "asyncio.Future[SearchResult]"],
        failed: "asyncio.Future[None]",
    ) -> None:
        while not failed.done():
            try:
                page = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            try:
                result = await self._fetch(params.with_page(page))
            except Exception as exc:
                if not failed.done():
                    logger.debug(f"Fetching page {page} failed: {exc}")
                    failed.set_exception(exc)
                return
            slots[page].set_result(result)

    async def pages(
        self, params: SearchParams, first: SearchResult, limit: int = 0
    ) -> AsyncIterator[SearchResult]:
        """Yield the results of pages 2..last_page in page order.

        Args:
            params: Parameters of the first request; only the page changes
            first: Result of the first page
            limit: Maximum number of pages to show, 0 for all of them

        Raises:
            Exception: The first error raised by a page fetch
        """
        plan = self.plan(first, limit)
        pages = plan.remaining
        logger.debug(
            f"Page plan: {plan.total_pages} total, fetching {len(pages)} more "
            f"with {self.concurrency} workers"
        )
        if not pages:
            return

        loop = asyncio.get_running_loop()
        queue: "asyncio.Queue[int]" = asyncio.Queue()
        slots = {}
        for page in pages:
            slots[page] = loop.create_future()
            queue.put_nowait(page)
        failed = loop.create_future()

        workers = [
            asyncio.create_task(self._worker(queue, params, slots, failed))
            for _ in range(min(self.concurrency, len(pages)))
        ]
        try:
            for page in pages:
                slot = slots[page]
                if not slot.done():
                    await asyncio.wait({slot, failed}, return_when=asyncio.FIRST_COMPLETED)
                if failed.done():
                    failed.result()
                yield slot.result()
        finally:
            for worker in workers:
                worker.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            if not failed.done():
                failed.cancel()
