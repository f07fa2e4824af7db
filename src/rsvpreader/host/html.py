"""HTML overlay markup for hosts that embed the reader in a web view."""

from typing import Optional

from ..reading.session import Snapshot
from ..utils import escape_html


def render_template(
    snapshot: Snapshot,
    show_progress: bool = True,
    color_scheme: str = "auto",
) -> str:
    """Render the reader overlay for one snapshot.

    The word and status are escaped; the host supplies the stylesheet.
    """
    progress = snapshot.progress * 100
    scheme = "" if color_scheme == "auto" else escape_html(color_scheme)
    visible = "show" if snapshot.visible else ""
    toggle_label = "Start" if snapshot.paused else "Pause"

    progress_bar = ""
    if show_progress:
        progress_bar = (
            '<div class="rsvp-progress">'
            f'<div class="rsvp-progress-bar" style="width: {progress:.1f}%"></div>'
            "</div>"
        )

    return (
        f'<div id="rsvp-root" class="{visible}">'
        f'<div class="rsvp-panel {scheme}">'
        '<div class="rsvp-header">'
        "<div><strong>RSVP Speed Reader</strong></div>"
        f"<div>{escape_html(snapshot.status)}</div>"
        "</div>"
        f'<div class="rsvp-word">{escape_html(snapshot.word)}</div>'
        '<div class="rsvp-controls">'
        f'<button class="rsvp-button primary" data-on-click="togglePlay">{toggle_label}</button>'
        '<button class="rsvp-button" data-on-click="stop">Stop</button>'
        '<button class="rsvp-button" data-on-click="slower">-50 WPM</button>'
        '<button class="rsvp-button" data-on-click="faster">+50 WPM</button>'
        '<button class="rsvp-button" data-on-click="close">Close</button>'
        "</div>"
        f"{progress_bar}"
        f'<div class="rsvp-meta">{snapshot.index + 1} / {snapshot.total} · {snapshot.wpm} WPM</div>'
        "</div>"
        "</div>"
    )


class HtmlRenderer:
    """Renderer that keeps the latest overlay markup for the host to inject."""

    def __init__(self, show_progress: bool = True, color_scheme: str = "auto"):
        self.show_progress = show_progress
        self.color_scheme = color_scheme
        self.markup: Optional[str] = None

    def render(self, snapshot: Snapshot) -> None:
        self.markup = render_template(snapshot, self.show_progress, self.color_scheme)
