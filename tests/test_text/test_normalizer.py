"""Tests for markdown clean-up and word segmentation."""

import pytest

from rsvpreader.text import blocks_to_text, normalize_text, parse_text_to_words


class TestNormalizeText:
    """Tests for normalize_text."""

    def test_removes_markdown(self):
        """Test heading, bold and link markup are removed."""
        text = "# Title\nThis is **bold** and [link](https://example.com)."
        assert normalize_text(text) == "Title This is bold and link."

    def test_html_tags_keep_inner_text(self):
        """Test tags become spaces while the text between them stays."""
        text = "# Title\nThis is **bold** and [link](https://example.com). <b>tag</b>"
        assert normalize_text(text) == "Title This is bold and link. tag"

    def test_html_tags_with_attributes(self):
        """Test tags with attributes and self-closing tags."""
        assert normalize_text('A <span class="x">styled</span> word<br/>next') == (
            "A styled word next"
        )

    def test_fenced_code_block_removed(self):
        """Test multi-line fenced code is dropped entirely."""
        text = 'Before\n```python\nprint("hi")\nx = 1\n```\nAfter'
        assert normalize_text(text) == "Before After"

    def test_inline_code_removed(self):
        """Test inline code spans are dropped."""
        assert normalize_text("Use `npm install` first") == "Use first"

    def test_image_keeps_alt_text(self):
        """Test images are replaced by their alt text."""
        assert normalize_text("See ![a diagram](img/d.png) here") == "See a diagram here"

    def test_image_without_alt_text(self):
        """Test images without alt text disappear."""
        assert normalize_text("![](empty.png) alone") == "alone"

    def test_link_keeps_label(self):
        """Test links are replaced by their label."""
        assert normalize_text("Read [the docs](https://x.y/z) now") == "Read the docs now"

    def test_image_inside_link(self):
        """Test an image used as a link label."""
        assert normalize_text("[link with ![img](i.png)](u)") == "link with img"

    def test_emphasis_variants(self):
        """Test double and single emphasis markers are removed."""
        text = "This is __strong__ and *em* and _under_"
        assert normalize_text(text) == "This is strong and em and under"

    def test_bold_italic(self):
        """Test triple asterisks."""
        assert normalize_text("***both***") == "both"

    def test_underscores_inside_words(self):
        """Test underscores are treated as emphasis even inside words."""
        assert normalize_text("a_b_c snake") == "abc snake"

    def test_unclosed_bold(self):
        """Test an unbalanced marker is handled permissively."""
        assert normalize_text("**unclosed bold") == "unclosed bold"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("# One", "One"),
            ("###### Deep heading", "Deep heading"),
            ("####### seven", "####### seven"),
        ],
    )
    def test_heading_markers(self, text, expected):
        """Test 1-6 hash marks are stripped, more are kept."""
        assert normalize_text(text) == expected

    def test_list_markers(self):
        """Test bullet and numbered list markers are stripped."""
        text = "- first\n* second\n+ third\n12. twelfth"
        assert normalize_text(text) == "first second third twelfth"

    def test_outliner_nesting(self):
        """Test list markers indented up to three spaces are stripped."""
        assert normalize_text("- parent\n  - child") == "parent child"

    def test_marker_needs_whitespace(self):
        """Test a dash glued to a word is not a list marker."""
        assert normalize_text("-not a list") == "-not a list"

    def test_decimal_number_not_list(self):
        """Test numbers that are not list markers survive."""
        assert normalize_text("2.5 million") == "2.5 million"

    def test_blockquote_markers(self):
        """Test blockquote markers with and without a space."""
        assert normalize_text("> quoted line\n>no space") == "quoted line no space"

    def test_collapses_whitespace(self):
        """Test runs of whitespace become single spaces and ends are trimmed."""
        assert normalize_text("  lots   of\t\twhitespace \n\n here  ") == (
            "lots of whitespace here"
        )

    def test_dashes_untouched(self):
        """Test dashes between words are kept."""
        text = "Em—dash and en–dash - hyphen"
        assert normalize_text(text) == text

    def test_empty(self):
        """Test empty input."""
        assert normalize_text("") == ""

    @pytest.mark.parametrize(
        "text",
        [
            "# Title\nThis is **bold** and [link](https://example.com).",
            "Plain prose, with commas; and more.",
            "> quoted\n- item\n1. first",
        ],
    )
    def test_idempotent_on_common_markup(self, text):
        """Test a second pass changes nothing for ordinary markup."""
        once = normalize_text(text)
        assert normalize_text(once) == once

    def test_single_pass_can_leave_residue(self):
        """Test deeply indented list markers survive one pass."""
        once = normalize_text("    - four spaces")
        assert once == "- four spaces"
        assert normalize_text(once) == "four spaces"


class TestParseTextToWords:
    """Tests for parse_text_to_words."""

    def test_splits_into_words(self):
        """Test splitting simple text."""
        assert parse_text_to_words("Hello world!") == ["Hello", "world!"]

    @pytest.mark.parametrize("text", ["", "   ", "\n\t\n"])
    def test_blank_text(self, text):
        """Test blank input yields no words."""
        assert parse_text_to_words(text) == []

    def test_markup_only(self):
        """Test text that is nothing but markup yields no words."""
        assert parse_text_to_words("```\ncode\n```  `x`  <br/>") == []

    def test_end_to_end(self):
        """Test a markdown block becomes display words."""
        words = parse_text_to_words(
            "# Title\nThis is **bold** and [link](https://example.com)."
        )
        assert words == ["Title", "This", "is", "bold", "and", "link."]

    def test_no_empty_words(self):
        """Test irregular whitespace never produces empty words."""
        words = parse_text_to_words("  a \n\n b\t\tc  ")
        assert words == ["a", "b", "c"]


class TestBlocksToText:
    """Tests for blocks_to_text."""

    def test_flat_blocks(self):
        """Test blocks are joined with newlines."""
        blocks = [{"content": "First"}, {"content": "Second"}]
        assert blocks_to_text(blocks) == "First\nSecond"

    def test_nested_blocks_depth_first(self):
        """Test children follow their parent in document order."""
        blocks = [
            {
                "content": "Parent",
                "children": [
                    {"content": "Child one", "children": [{"content": "Grandchild"}]},
                    {"content": "Child two"},
                ],
            },
            {"content": "Sibling"},
        ]
        assert blocks_to_text(blocks) == "Parent\nChild one\nGrandchild\nChild two\nSibling"

    def test_block_without_content_keeps_children(self):
        """Test a block with no content still contributes its children."""
        blocks = [{"children": [{"content": "Inner"}]}, {"content": None}]
        assert blocks_to_text(blocks) == "Inner"

    def test_collapsed_child_references_skipped(self):
        """Test uuid references for collapsed children are ignored."""
        blocks = [{"content": "Parent", "children": [["uuid", "6500-abc"]]}]
        assert blocks_to_text(blocks) == "Parent"

    def test_empty(self):
        """Test no blocks gives empty text."""
        assert blocks_to_text([]) == ""
