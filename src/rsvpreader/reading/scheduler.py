"""Timer scheduling used by the session driver.

The driver only needs ``call_later`` and a cancellable handle, which is
exactly what an asyncio event loop offers. Tests substitute a manual
scheduler with a fake clock.
"""

import asyncio
from typing import Callable, Optional, Protocol


class TimerHandle(Protocol):
    """A scheduled callback that can be cancelled."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs a callback once after a delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        """Initialize scheduler.

        Args:
            loop: Event loop to schedule on (default: the running loop)
        """
        self.loop = loop or asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        """Schedule ``callback`` to run ``delay`` seconds from now."""
        return self.loop.call_later(delay, callback)
