# ABOUTME: Coordinates a full harvest: sequential page fetches fanned out to a traversal thread pool
# ABOUTME: Joins all record work before reporting, and stops at the first fatal store error

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from picture_harvest.core.models import HarvestSummary
from picture_harvest.core.pictures import PictureSet
from picture_harvest.extraction.traversal import DEFAULT_MAX_SEQUENCE_DEPTH, traverse
from picture_harvest.store.base import RawRecord, RecordSource, iter_pages
from picture_harvest.store.dynamodb import decode_record
from picture_harvest.utils.logging import get_logger

PageCallback = Callable[[int, int], None]


class PictureHarvester:
    """Drives a record source to exhaustion and collects every picture id it references.

    Pages are requested one at a time, each on a worker thread so the event loop stays
    free. Every record of a page becomes one decode+traverse job on a thread pool; the
    number of jobs in flight is capped at twice the pool size, which throttles page
    fetching when traversal falls behind.
    """

    def __init__(
        self,
        source: RecordSource,
        table_name: str = "",
        max_workers: int = 8,
        max_sequence_depth: int = DEFAULT_MAX_SEQUENCE_DEPTH,
        decode: Callable[[RawRecord], Any] = decode_record,
        on_page: PageCallback | None = None,
    ):
        """Initialize the harvester.

        Args:
            source: Paginated record source
            table_name: Name reported in the summary
            max_workers: Traversal threads
            max_sequence_depth: List levels walked per record path
            decode: Converts a raw record to a plain mapping, raising StoreError on failure
            on_page: Called with (pages fetched, records fetched) after every page
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.source = source
        self.table_name = table_name
        self.max_workers = max_workers
        self.max_sequence_depth = max_sequence_depth
        self.decode = decode
        self.on_page = on_page
        self.logger = get_logger(__name__)

    def _process_record(self, raw: RawRecord, sink: PictureSet) -> int:
        record = self.decode(raw)
        return traverse(record, sink, self.max_sequence_depth)

    async def run(self, sink: PictureSet | None = None) -> HarvestSummary:
        """Scan every page and traverse every record.

        Args:
            sink: Set to collect into, a fresh one if None

        Returns:
            Summary with the sorted distinct picture ids

        Raises:
            StoreError: If a page fetch or a record decode fails. Queued record jobs
                are cancelled and running ones finish before the error propagates.
        """
        sink = sink if sink is not None else PictureSet()
        loop = asyncio.get_running_loop()
        slots = asyncio.Semaphore(self.max_workers * 2)
        pending: set[asyncio.Future[int]] = set()
        failures: list[BaseException] = []
        pages = scanned_items = 0
        start_time = time.perf_counter()

        def settle(future: asyncio.Future[int]) -> None:
            slots.release()
            if not future.cancelled() and future.exception() is not None:
                failures.append(future.exception())

        page_iter = iter_pages(self.source)

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="picture-harvest") as executor:
            try:
                while not failures:
                    page = await asyncio.to_thread(next, page_iter, None)
                    if page is None:
                        break

                    pages += 1
                    scanned_items += len(page.records)
                    self.logger.info("Scanned items", pages=pages, scanned_items=scanned_items)
                    if self.on_page is not None:
                        self.on_page(pages, scanned_items)

                    for raw in page.records:
                        await slots.acquire()
                        if failures:
                            slots.release()
                            break
                        future = loop.run_in_executor(executor, self._process_record, raw, sink)
                        future.add_done_callback(settle)
                        pending.add(future)

                if failures:
                    raise failures[0]

                results = await asyncio.gather(*pending)
            except Exception:
                await self._abandon(pending)
                raise

        elapsed = time.perf_counter() - start_time
        summary = HarvestSummary(
            table_name=self.table_name,
            pages=pages,
            scanned_items=scanned_items,
            picture_references=sum(results),
            elapsed_seconds=round(elapsed, 3),
            pictures=sink.to_list(),
        )

        self.logger.info(
            "Harvest complete",
            table_name=self.table_name,
            pages=pages,
            scanned_items=scanned_items,
            picture_count=summary.picture_count,
            elapsed_seconds=summary.elapsed_seconds,
        )

        return summary

    async def _abandon(self, pending: set[asyncio.Future[int]]) -> None:
        """Cancel queued record jobs and wait for the running ones to settle."""
        for future in pending:
            future.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self.logger.warning("Harvest aborted", abandoned_jobs=sum(1 for f in pending if f.cancelled()))
