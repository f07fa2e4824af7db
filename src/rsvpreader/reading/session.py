"""Reading session state and the timer-driven session driver.

A session moves through Idle -> Playing <-> Paused -> Stopped. While
playing, exactly one timer is outstanding: each tick advances the index and
schedules the next word, and every (re)schedule cancels the previous timer
first. Callbacks carry a generation number so a tick that was superseded
does nothing even if its timer could not be cancelled in time.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional, Union

from ..pacing import (
    MAX_WPM,
    MIN_WPM,
    Direction,
    PacingConfig,
    compute_delay_ms,
    find_sentence_boundary,
)
from ..utils import clamp, compute_base_ms
from .scheduler import Scheduler, TimerHandle

if TYPE_CHECKING:
    from ..host.base import Renderer

logger = logging.getLogger(__name__)


class NoReadableTextError(ValueError):
    """Raised when a session is started without any words."""

    pass


class SessionState(str, Enum):
    """Lifecycle state of a reading session."""

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    STOPPED = "stopped"


@dataclass(frozen=True)
class Snapshot:
    """What a renderer needs to draw one frame."""

    visible: bool
    word: str
    wpm: int
    index: int
    total: int
    paused: bool
    status: str
    state: SessionState = SessionState.IDLE

    @property
    def progress(self) -> float:
        """Fraction of the session already read (0.0 - 1.0)."""
        if self.total <= 0:
            return 0.0
        return clamp(self.index / self.total, 0.0, 1.0)


@dataclass
class ReaderSession:
    """Words and position of one reading session."""

    words: list[str] = field(default_factory=list)
    index: int = 0
    state: SessionState = SessionState.IDLE
    status: str = "Idle"

    @property
    def total(self) -> int:
        return len(self.words)

    @property
    def active(self) -> bool:
        """Whether the session is playing or paused."""
        return self.state in (SessionState.PLAYING, SessionState.PAUSED)

    @property
    def paused(self) -> bool:
        return self.state is not SessionState.PLAYING

    @property
    def finished(self) -> bool:
        return self.index >= self.total

    def current_word(self) -> str:
        """Get the word at the current index, or '' past the end."""
        if 0 <= self.index < self.total:
            return self.words[self.index]
        return ""


class SessionDriver:
    """Drives a reading session: scheduling, pausing, navigation."""

    def __init__(
        self,
        scheduler: Scheduler,
        renderer: Optional["Renderer"] = None,
        config: Optional[PacingConfig] = None,
        on_config_change: Optional[Callable[[PacingConfig], None]] = None,
    ):
        """Initialize the driver.

        Args:
            scheduler: Provides call_later for word timers
            renderer: Receives a Snapshot whenever the display changes
            config: Pacing settings (default: PacingConfig())
            on_config_change: Called with the new config after a WPM change
        """
        self.scheduler = scheduler
        self.renderer = renderer
        self.config = config or PacingConfig()
        self.on_config_change = on_config_change
        self.session = ReaderSession()
        self._timer: Optional[TimerHandle] = None
        self._generation = 0

    @property
    def active(self) -> bool:
        return self.session.active

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def start(self, words: list[str], status: str = "Playing") -> ReaderSession:
        """Start a new session, replacing any session in progress.

        Args:
            words: Words to read, in order
            status: Label shown while the session plays

        Returns:
            The new ReaderSession

        Raises:
            NoReadableTextError: If words is empty
        """
        if not words:
            raise NoReadableTextError("No readable text found.")

        self._clear_timer()
        self.session = ReaderSession(
            words=list(words),
            index=0,
            state=SessionState.PLAYING,
            status=status,
        )
        logger.debug("Session started with %d words (%s)", len(words), status)
        self._schedule_next()
        return self.session

    def pause(self) -> None:
        """Pause playback, keeping the current position."""
        if not self.active:
            return
        self._clear_timer()
        self.session.state = SessionState.PAUSED
        self.session.status = "Paused"
        self.render()

    def resume(self) -> None:
        """Resume playback; the current word is shown for its full delay."""
        if not self.active:
            return
        self.session.state = SessionState.PLAYING
        self.session.status = "Playing"
        self._schedule_next()

    def toggle(self) -> None:
        """Pause when playing, resume when paused."""
        if self.session.paused:
            self.resume()
        else:
            self.pause()

    def stop(self) -> None:
        """Stop the session and clear its words."""
        self._clear_timer()
        self.session.words = []
        self.session.index = 0
        self.session.state = SessionState.STOPPED
        self.session.status = "Stopped"
        logger.debug("Session stopped")
        self.render()

    # ========================================================================
    # Navigation and speed
    # ========================================================================

    def step_sentence(self, direction: Union[Direction, str]) -> int:
        """Jump to the next or previous sentence start.

        Returns:
            The new index
        """
        if not self.active:
            return self.session.index

        target = find_sentence_boundary(self.session.words, self.session.index, direction)
        self.session.index = clamp(target, 0, max(0, self.session.total - 1))

        if self.session.state is SessionState.PLAYING:
            self._schedule_next()
        else:
            self.render()
        return self.session.index

    def adjust_wpm(self, delta: int) -> PacingConfig:
        """Change the reading speed; applies from the next scheduled word.

        Returns:
            The updated config
        """
        wpm = int(clamp(self.config.wpm + delta, MIN_WPM, MAX_WPM))
        self.config = self.config.model_copy(update={"wpm": wpm})
        if self.on_config_change:
            self.on_config_change(self.config)
        self.render()
        return self.config

    # ========================================================================
    # Display
    # ========================================================================

    def snapshot(self) -> Snapshot:
        """Get the current display state."""
        return Snapshot(
            visible=self.session.active,
            word=self.session.current_word(),
            wpm=self.config.wpm,
            index=self.session.index,
            total=self.session.total,
            paused=self.session.paused,
            status=self.session.status,
            state=self.session.state,
        )

    def render(self) -> None:
        """Push the current snapshot to the renderer."""
        if self.renderer is not None:
            self.renderer.render(self.snapshot())

    # ========================================================================
    # Scheduling
    # ========================================================================

    def _clear_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _schedule_next(self) -> None:
        self._clear_timer()
        session = self.session
        if session.state is not SessionState.PLAYING:
            return

        if session.finished:
            self.stop()
            return

        base_ms = compute_base_ms(self.config.wpm)
        delay = compute_delay_ms(
            session.current_word(), base_ms, self.config, session.index, session.total
        )

        generation = self._generation
        self._timer = self.scheduler.call_later(delay / 1000, lambda: self._tick(generation))
        logger.debug("Word %d/%d scheduled for %d ms", session.index + 1, session.total, delay)
        self.render()

    def _tick(self, generation: int) -> None:
        if generation != self._generation:
            logger.debug("Ignoring stale tick (generation %d)", generation)
            return
        self._timer = None
        self.session.index += 1
        self._schedule_next()
