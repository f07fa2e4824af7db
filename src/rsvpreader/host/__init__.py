"""Host adapters: document sources and renderers."""

from .base import (
    DocumentSource,
    Renderer,
    page_words,
    selection_words,
    start_from_page,
    start_from_selection,
)
from .files import FileSource
from .html import HtmlRenderer, render_template
from .logseq import LogseqAuthError, LogseqClient, LogseqError, LogseqSource

__all__ = [
    "DocumentSource",
    "FileSource",
    "HtmlRenderer",
    "LogseqAuthError",
    "LogseqClient",
    "LogseqError",
    "LogseqSource",
    "Renderer",
    "page_words",
    "render_template",
    "selection_words",
    "start_from_page",
    "start_from_selection",
]
