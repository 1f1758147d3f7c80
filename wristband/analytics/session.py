# -*- coding: utf-8 -*-
"""Analytics session state and refresh cadence.

The session owns the unfiltered batch of the last fetch and exposes one of
three states: ``Loading``, ``Loaded`` (possibly empty) or ``Failed``. All
derived views come from ``reduce_view`` so the filtered view and the
statistics can never drift apart.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple, Union

from ..errors import PersistenceError
from ..readings.models import Reading
from .engine import compute_stats, device_ids, filter_by_device, window_start
from .models import ALL_DEVICES, SummaryStats, TimeWindow
from .sources import ReadingSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Loading:
    window: TimeWindow


@dataclass(frozen=True)
class Loaded:
    window: TimeWindow
    device_filter: str
    batch: Tuple[Reading, ...]
    filtered: Tuple[Reading, ...]
    stats: SummaryStats
    devices: Tuple[str, ...] = field(default=())

    @property
    def is_empty(self) -> bool:
        return not self.batch


@dataclass(frozen=True)
class Failed:
    window: TimeWindow
    reason: str


AnalyticsState = Union[Loading, Loaded, Failed]


def reduce_view(window: TimeWindow, device_filter: str, batch: Tuple[Reading, ...]) -> Loaded:
    batch = tuple(batch)
    filtered = tuple(filter_by_device(batch, device_filter))
    return Loaded(
        window=TimeWindow(window),
        device_filter=device_filter,
        batch=batch,
        filtered=filtered,
        stats=compute_stats(filtered, batch),
        devices=tuple(device_ids(batch)),
    )


def state_name(state: AnalyticsState) -> str:
    if isinstance(state, Loading):
        return "loading"
    if isinstance(state, Failed):
        return "failed"
    return "empty" if state.is_empty else "loaded"


class AnalyticsSession:
    """Single rendering context for the analytics view.

    ``refresh`` is the only operation that touches the source. A newer
    ``refresh`` supersedes any still in flight: results are applied only if
    they belong to the most recently issued request.
    """

    def __init__(
        self,
        source: ReadingSource,
        window: TimeWindow = TimeWindow.H24,
        device_filter: str = ALL_DEVICES,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.source = source
        self.window = TimeWindow(window)
        self.device_filter = device_filter
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.state: AnalyticsState = Loading(self.window)
        self._batch: Optional[Tuple[Reading, ...]] = None
        self._request_seq = 0

    @property
    def batch(self) -> Optional[Tuple[Reading, ...]]:
        return self._batch

    async def refresh(self) -> AnalyticsState:
        self._request_seq += 1
        seq = self._request_seq
        window = self.window
        self.state = Loading(window)

        try:
            fetched: List[Reading] = await self.source.fetch_since(window_start(window, self.clock()))
        except PersistenceError as exc:
            if seq != self._request_seq:
                logger.debug("Discarding failure of superseded fetch #%s", seq)
                return self.state
            logger.error("Analytics fetch failed (window=%s): %s", window.value, exc)
            self.state = Failed(window=window, reason=str(exc))
            return self.state

        if seq != self._request_seq:
            logger.debug("Discarding stale fetch #%s (latest is #%s)", seq, self._request_seq)
            return self.state

        self._batch = tuple(fetched)
        self.state = reduce_view(window, self.device_filter, self._batch)
        return self.state

    async def set_window(self, window: TimeWindow) -> AnalyticsState:
        self.window = TimeWindow(window)
        return await self.refresh()

    def set_device_filter(self, device_filter: str) -> AnalyticsState:
        """Re-derive the view from the retained batch; never fetches."""
        self.device_filter = device_filter
        if isinstance(self.state, Loaded) and self._batch is not None:
            self.state = reduce_view(self.state.window, device_filter, self._batch)
        return self.state


class RefreshScheduler:
    """Re-run ``session.refresh()`` on a fixed interval in a background task."""

    def __init__(
        self,
        session: AnalyticsSession,
        interval_sec: float = 30.0,
        on_update: Optional[Callable[[AnalyticsState], None]] = None,
    ) -> None:
        self.session = session
        self.interval_sec = interval_sec
        self.on_update = on_update
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("Analytics refresh started (every %ss)", self.interval_sec)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Analytics refresh stopped")

    async def _run(self) -> None:
        while True:
            try:
                state = await self.session.refresh()
                if self.on_update is not None:
                    self.on_update(state)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                # The next tick is the retry.
                logger.error("Analytics refresh error: %s", exc)
            await asyncio.sleep(self.interval_sec)
