"""Capabilities the reader needs from its host application.

The session driver never talks to a host directly: text comes in through a
DocumentSource and frames go out through a Renderer.
"""

from typing import Optional, Protocol

from ..reading.session import NoReadableTextError, ReaderSession, SessionDriver, Snapshot
from ..text import parse_text_to_words


class DocumentSource(Protocol):
    """Supplies raw text to read."""

    def selected_text(self) -> Optional[str]:
        """Get the text of the current selection, if any."""
        ...

    def page_text(self, name: Optional[str] = None) -> Optional[str]:
        """Get the text of a page (default: the current page)."""
        ...


class Renderer(Protocol):
    """Draws session snapshots.

    Words are plain text; escaping them for the renderer's own markup is
    the renderer's job.
    """

    def render(self, snapshot: Snapshot) -> None: ...


def selection_words(source: DocumentSource) -> tuple[list[str], str]:
    """Get the words of the selected blocks and the status label to show.

    Raises:
        NoReadableTextError: If nothing is selected or the selection has no words
    """
    text = source.selected_text()
    words = parse_text_to_words(text) if text else []
    if not words:
        raise NoReadableTextError("Select blocks first to read them.")
    return words, "Reading selected blocks"


def page_words(source: DocumentSource, name: Optional[str] = None) -> tuple[list[str], str]:
    """Get the words of the selection, falling back to a whole page.

    A named page is read as-is, ignoring any selection.

    Args:
        source: Where the text comes from
        name: Page to read (default: the current page)

    Returns:
        The words and the status label to show

    Raises:
        NoReadableTextError: If neither the selection nor the page has words
    """
    if name:
        text = source.page_text(name)
    else:
        text = source.selected_text() or source.page_text()
    words = parse_text_to_words(text) if text else []
    if not words:
        raise NoReadableTextError("No readable text found on this page.")
    return words, "Reading current page"


def start_from_selection(driver: SessionDriver, source: DocumentSource) -> ReaderSession:
    """Start reading the selected blocks."""
    words, status = selection_words(source)
    return driver.start(words, status)


def start_from_page(
    driver: SessionDriver,
    source: DocumentSource,
    name: Optional[str] = None,
) -> ReaderSession:
    """Start reading the selection or a page (see page_words)."""
    words, status = page_words(source, name)
    return driver.start(words, status)
