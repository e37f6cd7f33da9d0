"""RestoreGuard: re-entrancy lock for the deselect -> restore -> select cycle.

Programmatic selection on a grid widget can itself emit a deselect event
followed by a select event. Without a guard, the deselect handler would
restore again, which deselects again, and so on.

The guard is held for the duration of a restore plus a short settle window.
Each acquisition bumps a generation counter and the scheduled release only
clears the guard if its generation is still current, so an older release
never cuts a newer hold short. Independently of the scheduler, a hold
expires after ``timeout`` seconds on a monotonic clock, so a lost release
(e.g. a widget destroyed mid-restore) cannot leave restores disabled. When
the scheduler declines the release outright, the hold expires after the
settle window instead.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Callable, Protocol

from loguru import logger

DEFAULT_SETTLE_SECONDS = 0.1
DEFAULT_TIMEOUT_SECONDS = 1.0


class Scheduler(Protocol):
    """The subset of ``asyncio.AbstractEventLoop`` the store relies on.

    Both methods return a handle, or None when nothing was scheduled.
    """

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> Any:
        ...

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Any:
        ...


class RunningLoopScheduler:
    """Schedules on whichever asyncio loop is running at call time.

    Returns None (and schedules nothing) when no loop is running.
    """

    @staticmethod
    def _loop() -> asyncio.AbstractEventLoop | None:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> Any:
        loop = self._loop()
        if loop is None:
            logger.debug("No running event loop; dropping call_soon({})", callback)
            return None
        return loop.call_soon(callback, *args)

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Any:
        loop = self._loop()
        if loop is None:
            logger.debug("No running event loop; dropping call_later({})", callback)
            return None
        return loop.call_later(delay, callback, *args)


class RestoreGuard:
    """Boolean guard with a settle-window release and a hard timeout."""

    def __init__(
        self,
        settle: float = DEFAULT_SETTLE_SECONDS,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if settle < 0:
            raise ValueError(f"settle must be >= 0, got {settle}.")
        if timeout < settle:
            raise ValueError(
                f"timeout ({timeout}) must be at least the settle window ({settle})."
            )
        self._settle = settle
        self._timeout = timeout
        self._clock = clock
        self._held = False
        self._acquired_at = 0.0
        self._generation = 0
        self._self_expiring = False

    @property
    def settle(self) -> float:
        return self._settle

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_set(self) -> bool:
        if not self._held:
            return False
        elapsed = self._clock() - self._acquired_at
        if self._self_expiring and elapsed > self._settle:
            self._held = False
        elif elapsed > self._timeout:
            logger.warning(
                "Restore guard held for more than {}s; forcing release", self._timeout
            )
            self._held = False
        return self._held

    def acquire(self) -> int | None:
        """Set the guard. Returns the new generation, or None if already set."""
        if self.is_set:
            return None
        self._generation += 1
        self._held = True
        self._self_expiring = False
        self._acquired_at = self._clock()
        return self._generation

    def release(self, generation: int | None = None) -> None:
        """Clear the guard; a stale ``generation`` is ignored."""
        if generation is not None and generation != self._generation:
            return
        self._held = False

    def schedule_release(self, scheduler: Scheduler, generation: int) -> None:
        """Release ``generation`` after the settle window.

        If the scheduler declines (returns None), the hold expires on its
        own once the settle window has passed.
        """
        handle = scheduler.call_later(self._settle, self.release, generation)
        if handle is None and generation == self._generation:
            logger.debug("Settle release not scheduled; guard expires after {}s", self._settle)
            self._self_expiring = True

    def __repr__(self) -> str:
        return f"RestoreGuard(set={self._held}, generation={self._generation})"
