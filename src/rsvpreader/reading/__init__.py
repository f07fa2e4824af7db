"""Reading sessions: state, timer-driven driver and keyboard controls."""

from .keys import KeyBindings, handle_key, key_name
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle
from .session import (
    NoReadableTextError,
    ReaderSession,
    SessionDriver,
    SessionState,
    Snapshot,
)

__all__ = [
    "AsyncioScheduler",
    "KeyBindings",
    "NoReadableTextError",
    "ReaderSession",
    "Scheduler",
    "SessionDriver",
    "SessionState",
    "Snapshot",
    "TimerHandle",
    "handle_key",
    "key_name",
]
