"""
Fan-out of enrichment tasks across all resolved addresses
"""

import asyncio
import logging
from typing import Callable, Optional

from .enrichment import Enricher
from .errors import ChickError, InterruptCancellation, describe
from .models import AddressFamily, EnrichmentRecord, IPAddress


log = logging.getLogger(__name__)


ProgressCallback = Callable[[int, int], None]


class FanOutCoordinator:
    """
    Runs one enrichment task per address and collects the records.

    Every address gets its own task right away (no worker limit).
    Finished records pass through a small bounded queue to a collector
    task. While waiting, progress is reported every `interval` seconds.

    Setting `cancel_event` aborts the run: outstanding tasks are
    cancelled, given `grace` seconds to unwind, and run() raises
    InterruptCancellation instead of returning partial results.
    """

    BUFFER_SIZE = 10
    PROGRESS_INTERVAL = 0.5
    CANCEL_GRACE = 1.0

    def __init__(self, enricher: Enricher,
                 cancel_event: Optional[asyncio.Event] = None,
                 interval: float = PROGRESS_INTERVAL,
                 grace: float = CANCEL_GRACE):
        self.enricher = enricher
        self.cancel_event = cancel_event or asyncio.Event()
        self.interval = interval
        self.grace = grace

    async def _enrich_one(self, address: IPAddress, queue: asyncio.Queue):
        """Enrich one address and hand the record to the collector"""
        try:
            record = await self.enricher.enrich(address)
        except Exception as e:
            # Keep the collector's count intact; the failure stays with this address
            log.debug("Enrichment of %s crashed", address, exc_info=True)
            record = EnrichmentRecord(address=str(address), family=AddressFamily.of(address))
            record.errors.append(ChickError(f"enrichment failed: {describe(e)}"))
        await queue.put(record)

    async def _collect(self, queue: asyncio.Queue, results: list[EnrichmentRecord],
                       total: int):
        """Drain the queue until every launched task has reported"""
        while len(results) < total:
            record = await queue.get()
            results.append(record)
            log.debug("Collected %s (%d/%d)", record.address, len(results), total)

    async def _shutdown(self, tasks: list[asyncio.Task]):
        """Cancel unfinished tasks and wait briefly for them to unwind"""
        pending = [t for t in tasks if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            _, still_running = await asyncio.wait(pending, timeout=self.grace)
            if still_running:
                log.debug("%d task(s) still running after cancel", len(still_running))

    async def run(self, addresses: list[IPAddress],
                  on_progress: Optional[ProgressCallback] = None) -> list[EnrichmentRecord]:
        """
        Enrich all addresses concurrently.

        Args:
            addresses: Addresses to enrich
            on_progress: Called with (collected, total) on every tick

        Returns:
            Records in the order they finished

        Raises:
            InterruptCancellation: cancel_event was set before completion
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.BUFFER_SIZE)
        results: list[EnrichmentRecord] = []

        total = 0
        workers: list[asyncio.Task] = []
        for address in addresses:
            total += 1
            workers.append(asyncio.create_task(self._enrich_one(address, queue)))
        log.debug("Launched %d enrichment task(s)", total)

        collector = asyncio.create_task(self._collect(queue, results, total))
        cancelled = asyncio.create_task(self.cancel_event.wait())

        try:
            while True:
                done, _ = await asyncio.wait(
                    {collector, cancelled},
                    timeout=self.interval,
                    return_when=asyncio.FIRST_COMPLETED
                )
                if cancelled in done:
                    log.debug("Cancelled with %d/%d collected", len(results), total)
                    raise InterruptCancellation()
                if collector in done:
                    collector.result()
                    return results
                if on_progress:
                    on_progress(len(results), total)
        finally:
            await self._shutdown(workers + [collector, cancelled])
