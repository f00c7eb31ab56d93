"""Keyed trailing-edge debouncing on the running asyncio loop."""

import asyncio
import logging
from collections.abc import Callable, Hashable
from typing import Any

logger = logging.getLogger(__name__)


class DebounceScheduler:
    """Coalesce bursts of calls into one trailing invocation per key.

    Each key maps to at most one armed timer. Re-scheduling a key cancels the
    armed timer and starts a fresh delay, so only the last call of a burst
    runs. Keys never interact with each other.

    Callbacks run on the event loop thread and must be plain callables;
    anything asynchronous has to be started as a task by the callback itself.
    """

    def __init__(self) -> None:
        self._handles: dict[Hashable, Any] = {}

    def __len__(self) -> int:
        return len(self._handles)

    def pending(self, key: Hashable) -> bool:
        """Return True if a timer is armed for ``key``."""
        return key in self._handles

    def schedule(
        self,
        key: Hashable,
        delay_ms: float,
        fn: Callable[..., Any],
        *args: Any,
    ) -> None:
        """Arm ``fn(*args)`` to run once ``delay_ms`` passes without another call.

        Args:
            key: Stream identifier; timers under other keys are untouched.
            delay_ms: Quiet period in milliseconds.
            fn: Callback invoked with ``args`` when the timer expires.

        Raises:
            ValueError: If ``delay_ms`` is negative.
            RuntimeError: If called without a running event loop.
        """
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")

        loop = asyncio.get_running_loop()
        if self.cancel(key):
            logger.debug("Debounce re-armed", extra={"debounce_key": key})
        self._handles[key] = loop.call_later(delay_ms / 1000.0, self._fire, key, fn, args)

    def cancel(self, key: Hashable) -> bool:
        """Discard the armed timer for ``key`` without running it.

        Returns:
            True if a timer was pending.
        """
        handle = self._handles.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def cancel_all(self) -> None:
        """Discard every armed timer."""
        for key in list(self._handles):
            self.cancel(key)

    def _fire(self, key: Hashable, fn: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self._handles.pop(key, None)
        try:
            fn(*args)
        except Exception:
            logger.exception("Debounced callback failed", extra={"debounce_key": key})
