"""Outage poll cycle: fetch → baseline rollover → classify → cache.

The poller is the single owner of the baseline and the cached classification.
At most one fetch cycle runs at a time; callers arriving while a cycle is in
flight await that same cycle instead of starting another upstream request.
"""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from outage_map.errors import PersistError
from outage_map.schemas.outage import Baseline, OutageClassification, OutageSet
from outage_map.services.classifier import classify
from outage_map.services.day_boundary import DayBoundaryPolicy
from outage_map.services.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[OutageSet]]


class OutagePoller:
    def __init__(
        self,
        fetcher: Fetcher,
        store: SnapshotStore,
        policy: DayBoundaryPolicy,
        clock: Callable[[], datetime] | None = None,
    ):
        self._fetch = fetcher
        self._store = store
        self._policy = policy
        self._clock = clock
        self._baseline: OutageSet = {}
        self._cached: OutageClassification | None = None
        self._inflight: asyncio.Task | None = None

    @property
    def cached(self) -> OutageClassification | None:
        return self._cached

    @property
    def baseline(self) -> OutageSet:
        return self._baseline

    @property
    def baseline_date(self):
        return self._policy.last_reset_date

    def load_state(self) -> None:
        """Seed the baseline and last reset date from the snapshot store."""
        saved = self._store.load()
        if saved is None:
            return
        self._baseline = saved.outages
        self._policy.last_reset_date = saved.reset_date

    async def get_outages(self) -> OutageClassification:
        """Cached classification, fetching first if nothing is cached yet."""
        if self._cached is not None:
            return self._cached
        return await self.refresh()

    async def refresh(self) -> OutageClassification:
        """Run a fetch cycle, or join the one already in flight.

        Raises FetchError if the upstream fetch fails; the cache is unchanged.
        """
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._run_cycle())
            self._inflight.add_done_callback(self._clear_inflight)
        return await asyncio.shield(self._inflight)

    async def tick(self) -> None:
        """Timer entry point: failures are logged and the old cache kept."""
        try:
            await self.refresh()
        except Exception as e:
            logger.error("Error fetching data from PSE outage map: %s", e)

    async def close(self) -> None:
        """Cancel a fetch cycle still in flight at shutdown."""
        task = self._inflight
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    def _clear_inflight(self, task: asyncio.Task) -> None:
        self._inflight = None
        if not task.cancelled():
            # mark the exception retrieved; awaiting callers re-raise it
            task.exception()

    async def _run_cycle(self) -> OutageClassification:
        current = await self._fetch()

        # No awaits below: rollover, persist and classify run as one step.
        # The reset date is only recorded once the new baseline is in place,
        # so a cycle that fails mid-rotation leaves the rollover pending.
        today = self._policy.today(self._clock() if self._clock else None)
        if self._policy.rollover_due(today):
            logger.info("Resetting baseline for a new day (%s): %d outages", today, len(current))
            baseline = Baseline(outages=dict(current), reset_date=today)
            try:
                self._store.save(baseline)
            except PersistError as e:
                logger.error("Baseline not persisted, keeping it in memory only: %s", e)
            self._baseline = baseline.outages
            self._policy.mark_reset(today)

        result = classify(current, self._baseline)
        self._cached = result
        logger.info(
            "Outages classified: %d added, %d ended, %d existing",
            len(result.added), len(result.ended), len(result.existing),
        )
        return result
