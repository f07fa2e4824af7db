"""Tests for choosing what to read from a document source."""

from typing import Optional

import pytest

from rsvpreader.host import page_words, selection_words, start_from_page, start_from_selection
from rsvpreader.reading import NoReadableTextError, SessionState


class FakeSource:
    """In-memory DocumentSource."""

    def __init__(self, selection: Optional[str] = None, pages: Optional[dict] = None):
        self.selection = selection
        self.pages = pages or {}
        self.requested: list = []

    def selected_text(self) -> Optional[str]:
        return self.selection

    def page_text(self, name: Optional[str] = None) -> Optional[str]:
        self.requested.append(name)
        return self.pages.get(name)


class TestSelectionWords:
    """Tests for selection_words."""

    def test_reads_selection(self):
        """Test selected text is cleaned and split."""
        source = FakeSource(selection="**Bold** start.")
        assert selection_words(source) == (["Bold", "start."], "Reading selected blocks")

    @pytest.mark.parametrize("selection", [None, "", "   ", "```\ncode\n```"])
    def test_nothing_selected(self, selection):
        """Test an empty or unreadable selection is an error."""
        with pytest.raises(NoReadableTextError, match="Select blocks first"):
            selection_words(FakeSource(selection=selection, pages={None: "page"}))


class TestPageWords:
    """Tests for page_words."""

    def test_prefers_selection(self):
        """Test the selection wins over the current page."""
        source = FakeSource(selection="picked", pages={None: "whole page"})

        assert page_words(source) == (["picked"], "Reading current page")
        assert source.requested == []

    def test_falls_back_to_page(self):
        """Test the current page is read without a selection."""
        source = FakeSource(pages={None: "# Page\nwhole page"})
        assert page_words(source) == (["Page", "whole", "page"], "Reading current page")

    def test_named_page_ignores_selection(self):
        """Test a named page is read even with a selection."""
        source = FakeSource(selection="picked", pages={"inbox": "inbox text"})

        words, _ = page_words(source, "inbox")
        assert words == ["inbox", "text"]
        assert source.requested == ["inbox"]

    def test_no_text(self):
        """Test an empty page is an error."""
        with pytest.raises(NoReadableTextError, match="No readable text"):
            page_words(FakeSource(pages={None: "<br/>"}))

    def test_missing_named_page(self):
        """Test a missing page is an error."""
        with pytest.raises(NoReadableTextError):
            page_words(FakeSource(selection="picked"), "missing")


class TestStartHelpers:
    """Tests for start_from_selection and start_from_page."""

    def test_start_from_selection(self, driver, renderer):
        """Test the session starts on the selection with its label."""
        session = start_from_selection(driver, FakeSource(selection="one two"))

        assert session.words == ["one", "two"]
        assert session.state == SessionState.PLAYING
        assert renderer.last.status == "Reading selected blocks"

    def test_start_from_page(self, driver, renderer):
        """Test the session starts on the page with its label."""
        session = start_from_page(driver, FakeSource(pages={None: "a b c"}))

        assert session.words == ["a", "b", "c"]
        assert renderer.last.status == "Reading current page"

    def test_failed_start_keeps_driver_idle(self, driver, scheduler):
        """Test nothing is scheduled when there is nothing to read."""
        with pytest.raises(NoReadableTextError):
            start_from_selection(driver, FakeSource())

        assert driver.session.state == SessionState.IDLE
        assert scheduler.pending == []
