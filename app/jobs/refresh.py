# app/jobs/refresh.py
from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence, Set

from app.config.board import REFRESH_INTERVAL_SECONDS
from app.jobs.state import RefreshState, RefreshStore
from app.schemas.market import MarketRecord
from app.services.coingecko import fetch_market_records
from app.services.selector import select_display_list
from app.utils.time import local_time_of_day, utcnow

logger = logging.getLogger("crypto_board.refresh")

FetchFn = Callable[[], Awaitable[Sequence[MarketRecord]]]


def _iso_z_from_epoch(ts: Optional[float]) -> Optional[str]:
    if ts is None:
        return None
    dt = datetime.fromtimestamp(float(ts), tz=timezone.utc)
    return dt.isoformat().replace("+00:00", "Z")


def _empty_stats() -> Dict[str, Any]:
    return {
        "started_at_ts": None,
        "last_run_ts": None,
        "last_success_ts": None,
        "last_success_rows": None,
        "last_success_ms": None,
        "last_error_ts": None,
        "last_error": None,
        "consecutive_failures": 0,
        "successes": 0,
        "failures": 0,
    }


class RefreshController:
    """
    Keeps a RefreshStore up to date with the selected market page.

    start() fetches immediately and then once per interval until stop().
    Ticks are fixed-rate: a slow fetch does not delay the next tick, and
    fetches are not serialized, so the most recently completing success
    wins. Failures are logged and leave the published state untouched.
    """

    def __init__(
        self,
        fetch_fn: Optional[FetchFn] = None,
        store: Optional[RefreshStore] = None,
        interval_s: float = REFRESH_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._fetch = fetch_fn or fetch_market_records
        self.store = store if store is not None else RefreshStore()
        self.interval_s = float(interval_s)
        self._clock = clock

        self._stop_event: Optional[asyncio.Event] = None
        self._timer: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()
        self._torn_down = False
        self._stats = _empty_stats()

    @property
    def state(self) -> RefreshState:
        return self.store.state

    @property
    def running(self) -> bool:
        return bool(self._timer is not None and not self._timer.done() and not self._torn_down)

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    # ----------------------------
    # single fetch cycle
    # ----------------------------
    async def refresh_once(self) -> bool:
        self._stats["last_run_ts"] = self._clock().timestamp()
        t0 = time.perf_counter()

        try:
            records = await self._fetch()
            display = select_display_list(records)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            dt_ms = int((time.perf_counter() - t0) * 1000)
            st = self._stats
            st["last_error_ts"] = self._clock().timestamp()
            st["last_error"] = repr(e)[:300]
            st["consecutive_failures"] = int(st["consecutive_failures"]) + 1
            st["failures"] = int(st["failures"]) + 1

            logger.exception("board refresh error | %dms", dt_ms)
            return False

        if self._torn_down:
            logger.debug("board refresh finished after teardown; result dropped")
            return False

        done_at = self._clock()
        self.store.publish(
            RefreshState(
                display_list=tuple(display),
                last_updated=local_time_of_day(done_at),
                last_updated_at=done_at,
            )
        )

        dt_ms = int((time.perf_counter() - t0) * 1000)
        st = self._stats
        st["last_success_ts"] = done_at.timestamp()
        st["last_success_rows"] = len(display)
        st["last_success_ms"] = dt_ms
        st["consecutive_failures"] = 0
        st["successes"] = int(st["successes"]) + 1

        logger.info("board refreshed | rows=%d | %dms", len(display), dt_ms)
        return True

    # ----------------------------
    # timer
    # ----------------------------
    def _spawn_fetch(self) -> None:
        task = asyncio.create_task(self.refresh_once(), name="board-refresh-fetch")
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _timer_loop(self, stop_event: asyncio.Event) -> None:
        next_tick = time.monotonic()  # run immediately once

        while not stop_event.is_set():
            now = time.monotonic()
            if now < next_tick:
                try:
                    await asyncio.wait_for(stop_event.wait(), timeout=(next_tick - now))
                except asyncio.TimeoutError:
                    pass
                continue

            self._spawn_fetch()

            next_tick += self.interval_s
            if next_tick < time.monotonic() - self.interval_s:
                next_tick = time.monotonic() + self.interval_s

    # ----------------------------
    # lifecycle
    # ----------------------------
    def start(self) -> None:
        """Acquire the refresh timer on the running loop. The first fetch starts immediately."""
        if self._torn_down:
            raise RuntimeError("refresh controller has been stopped and cannot be restarted")

        if self.running:
            logger.warning("board refresh already started")
            return

        self._stop_event = asyncio.Event()
        self._stats["started_at_ts"] = self._clock().timestamp()
        self._timer = asyncio.create_task(self._timer_loop(self._stop_event), name="board-refresh-timer")

        logger.info("board refresh started | interval_s=%s", self.interval_s)

    async def stop(self) -> None:
        """Cancel the timer and any in-flight fetch. Safe to call more than once."""
        if self._torn_down:
            return
        self._torn_down = True

        if self._stop_event:
            self._stop_event.set()

        tasks = [t for t in (self._timer, *self._inflight) if t is not None]
        for t in tasks:
            if not t.done():
                t.cancel()

        try:
            await asyncio.gather(*tasks, return_exceptions=True)
        finally:
            self._timer = None
            self._stop_event = None
            self._inflight.clear()

        logger.info("board refresh stopped")

    async def __aenter__(self) -> "RefreshController":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        await self.stop()
        return False

    # ----------------------------
    # status
    # ----------------------------
    def info(self) -> Dict[str, Any]:
        st = dict(self._stats)
        return {
            "running": self.running,
            "torn_down": self._torn_down,
            "interval_s": self.interval_s,
            "inflight": len(self._inflight),
            "rows": len(self.state.display_list),
            "last_updated": self.state.last_updated,
            **st,
            "started_at_iso": _iso_z_from_epoch(st["started_at_ts"]),
            "last_run_iso": _iso_z_from_epoch(st["last_run_ts"]),
            "last_success_iso": _iso_z_from_epoch(st["last_success_ts"]),
            "last_error_iso": _iso_z_from_epoch(st["last_error_ts"]),
        }
