"""Terminal front end built on Rich.

The session runs on an asyncio event loop. Key presses are read by a
background thread with ``click.getchar`` and handed to the loop thread, so
every driver call happens on one thread.
"""

import asyncio
import logging
import sys
import threading
from typing import Callable, Optional

import click
from rich.align import Align
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.text import Text

from ..pacing import PacingConfig
from ..reading.keys import CTRL_C, KeyBindings, handle_key
from ..reading.scheduler import AsyncioScheduler
from ..reading.session import SessionDriver, Snapshot
from ..utils import compute_orp_index

logger = logging.getLogger(__name__)

FOCUS_COLUMN = 12

PANEL_STYLES = {
    "auto": "",
    "light": "black on grey93",
    "dark": "grey93 on grey11",
}


def build_word(word: str) -> Text:
    """Lay out a word so its recognition point sits on a fixed column."""
    text = Text(no_wrap=True)
    if not word:
        return text

    orp = compute_orp_index(word)
    text.append(word[:orp].rjust(FOCUS_COLUMN))
    text.append(word[orp], style="bold red")
    text.append(word[orp + 1:].ljust(FOCUS_COLUMN))
    return text


def build_view(
    snapshot: Snapshot,
    show_progress: bool = True,
    color_scheme: str = "auto",
) -> Panel:
    """Create the Rich panel for one snapshot."""
    parts = [
        Align.center(Text(snapshot.status, style="dim")),
        Text(""),
        Align.center(build_word(snapshot.word)),
        Text(""),
    ]

    if show_progress:
        # ProgressBar does not end its own line inside a Group
        parts.append(Align.center(ProgressBar(total=100, completed=snapshot.progress * 100)))

    position = min(snapshot.index + 1, snapshot.total)
    parts.append(
        Align.center(
            Text(f"{position} / {snapshot.total} · {snapshot.wpm} WPM", style="dim")
        )
    )

    return Panel(
        Group(*parts),
        title="[bold]RSVP Speed Reader[/bold]",
        subtitle="Space pause · ←/→ sentence · ↑/↓ speed · Esc stop",
        style=PANEL_STYLES.get(color_scheme, ""),
        padding=(1, 2),
    )


class TerminalRenderer:
    """Renderer that redraws a Rich Live display."""

    def __init__(
        self,
        live: Live,
        show_progress: bool = True,
        color_scheme: str = "auto",
        on_hide: Optional[Callable[[], None]] = None,
    ):
        """Initialize renderer.

        Args:
            live: Live display to update
            show_progress: Draw the progress bar
            color_scheme: auto, light or dark
            on_hide: Called when a snapshot says the reader is no longer visible
        """
        self.live = live
        self.show_progress = show_progress
        self.color_scheme = color_scheme
        self.on_hide = on_hide
        self.last_shown: Optional[Snapshot] = None

    def render(self, snapshot: Snapshot) -> None:
        if not snapshot.visible:
            if self.on_hide:
                self.on_hide()
            return
        self.last_shown = snapshot
        self.live.update(
            build_view(snapshot, self.show_progress, self.color_scheme),
            refresh=True,
        )


class KeyReader(threading.Thread):
    """Reads key presses and hands them to the event loop one at a time.

    The thread waits for each key to be handled before reading the next,
    and exits once closed so the terminal is never left in raw mode.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, on_key: Callable[[str], None]):
        super().__init__(name="rsvp-keys", daemon=True)
        self.loop = loop
        self.on_key = on_key
        self._closed = threading.Event()

    def run(self) -> None:
        while not self._closed.is_set():
            try:
                raw = click.getchar()
            except (KeyboardInterrupt, EOFError):
                raw = CTRL_C
            handled = threading.Event()
            self.loop.call_soon_threadsafe(self._dispatch, raw, handled)
            handled.wait()

    def _dispatch(self, raw: str, handled: threading.Event) -> None:
        try:
            self.on_key(raw)
        finally:
            handled.set()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        self._closed.set()


async def _run_session(
    words: list[str],
    config: PacingConfig,
    bindings: KeyBindings,
    console: Console,
    status: str,
    show_progress: bool,
    color_scheme: str,
    interactive: bool,
) -> Optional[Snapshot]:
    loop = asyncio.get_running_loop()
    finished = asyncio.Event()

    with Live(console=console, auto_refresh=False) as live:
        renderer = TerminalRenderer(live, show_progress, color_scheme, on_hide=finished.set)
        driver = SessionDriver(AsyncioScheduler(loop), renderer, config)
        driver.start(words, status)

        reader: Optional[KeyReader] = None
        if interactive:
            def on_key(raw: str) -> None:
                handle_key(driver, raw, bindings)
                if not driver.active:
                    reader.close()
                    finished.set()

            reader = KeyReader(loop, on_key)
            reader.start()

        try:
            await finished.wait()
        finally:
            driver.stop()

    if reader is not None:
        if not reader.closed:
            console.print("[dim]Finished. Press any key to exit.[/dim]")
            reader.close()
        await loop.run_in_executor(None, reader.join)

    last = renderer.last_shown
    logger.debug("Session ended at word %d of %d", last.index + 1 if last else 0, len(words))
    return last


def run_session(
    words: list[str],
    config: PacingConfig,
    bindings: Optional[KeyBindings] = None,
    console: Optional[Console] = None,
    status: str = "Reading",
    show_progress: bool = True,
    color_scheme: str = "auto",
    interactive: Optional[bool] = None,
) -> Optional[Snapshot]:
    """Play words in the terminal until the session stops.

    Args:
        words: Words to read
        config: Pacing settings
        bindings: Keyboard shortcuts (default: KeyBindings())
        console: Rich console to draw on
        status: Label shown while playing
        show_progress: Draw the progress bar
        color_scheme: auto, light or dark
        interactive: Read keys from stdin (default: when stdin is a terminal)

    Returns:
        The last frame shown before the session stopped

    Raises:
        NoReadableTextError: If words is empty
    """
    if interactive is None:
        interactive = sys.stdin.isatty()
    return asyncio.run(
        _run_session(
            words,
            config,
            bindings or KeyBindings(),
            console or Console(),
            status,
            show_progress,
            color_scheme,
            interactive,
        )
    )
