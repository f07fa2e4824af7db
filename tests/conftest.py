"""Pytest configuration and shared fixtures.

This module provides fixtures for testing rsvpreader, including a manual
scheduler with a fake clock, a recording renderer and sample settings.
"""

import os
from typing import Callable, Generator, Optional

import pytest

from rsvpreader.config import reset_config
from rsvpreader.pacing import PacingConfig
from rsvpreader.reading import SessionDriver, Snapshot


# ============================================================================
# Scheduling Fixtures
# ============================================================================


class FakeTimer:
    """A timer registered with ManualScheduler."""

    def __init__(self, when: float, delay: float, callback: Callable[[], None]):
        self.when = when
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler that only fires timers when told to."""

    def __init__(self):
        self.now = 0.0
        self.timers: list[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def run_next(self) -> Optional[float]:
        """Fire the earliest pending timer; return its delay in seconds."""
        pending = self.pending
        if not pending:
            return None
        timer = min(pending, key=lambda t: t.when)
        self.now = timer.when
        timer.fired = True
        timer.callback()
        return timer.delay

    def run_all(self, limit: int = 10000) -> list[float]:
        """Fire timers until none are pending; return their delays."""
        delays = []
        while self.pending and len(delays) < limit:
            delays.append(self.run_next())
        return delays


class RecordingRenderer:
    """Renderer that keeps every snapshot."""

    def __init__(self):
        self.snapshots: list[Snapshot] = []

    def render(self, snapshot: Snapshot) -> None:
        self.snapshots.append(snapshot)

    @property
    def last(self) -> Snapshot:
        return self.snapshots[-1]

    @property
    def words(self) -> list[str]:
        """Words shown while visible, consecutive repeats collapsed."""
        shown: list[str] = []
        for snapshot in self.snapshots:
            if snapshot.visible and (not shown or shown[-1] != snapshot.word):
                shown.append(snapshot.word)
        return shown


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Create a manual scheduler."""
    return ManualScheduler()


@pytest.fixture
def renderer() -> RecordingRenderer:
    """Create a recording renderer."""
    return RecordingRenderer()


@pytest.fixture
def flat_config() -> PacingConfig:
    """Pacing without pauses or ramp: every word takes the base duration."""
    return PacingConfig(wpm=300, pause_on_punctuation=False, ramp_enabled=False)


@pytest.fixture
def test_config() -> PacingConfig:
    """Pacing settings used across delay tests."""
    return PacingConfig(
        wpm=300,
        pause_on_punctuation=True,
        comma_pause_factor=1.25,
        sentence_pause_factor=1.75,
        dash_pause_factor=1.2,
        ramp_enabled=True,
        ramp_words=5,
        ramp_start_factor=1.4,
        ramp_end_factor=1.3,
    )


@pytest.fixture
def driver(
    scheduler: ManualScheduler,
    renderer: RecordingRenderer,
    flat_config: PacingConfig,
) -> SessionDriver:
    """Create a session driver wired to the manual scheduler."""
    return SessionDriver(scheduler, renderer, flat_config)


@pytest.fixture
def sample_words() -> list[str]:
    """Two short sentences."""
    return ["Hello", "world.", "Next", "sentence", "here."]


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Remove rsvpreader settings from the environment."""
    for name in list(os.environ):
        if name.startswith("RSVP_") or name.startswith("LOGSEQ_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
