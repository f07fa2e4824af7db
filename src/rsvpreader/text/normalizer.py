"""Markdown clean-up and word segmentation.

Outliner pages arrive as markdown with the occasional bit of inline HTML.
The passes below strip that markup with regular expressions rather than a
real parser: unbalanced or nested constructs are handled permissively and
may come out differently than a full markdown renderer would show them.

Pass order matters, each one runs on the output of the previous:

1. fenced code blocks
2. images (keep alt text)
3. links (keep label)
4. inline code
5. bold, then single emphasis (keep inner text)
6. HTML-like tags
7. heading / list markers, then blockquote markers
8. whitespace collapse
"""

import re
from typing import Any, Iterable, Mapping

CODE_FENCE = re.compile(r"```[\s\S]*?```")
MARKDOWN_IMAGE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
MARKDOWN_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
INLINE_CODE = re.compile(r"`[^`]*`")
EMPHASIS_BOLD = re.compile(r"(\*\*|__)(.*?)\1")
EMPHASIS = re.compile(r"(\*|_)(.*?)\1")
HTML_TAG = re.compile(r"</?[^>]+>")
HEADING_OR_LIST = re.compile(r"^\s{0,3}(#{1,6}|\*|-|\+|\d+\.)\s+", re.MULTILINE)
BLOCKQUOTE = re.compile(r"^\s{0,3}>\s?", re.MULTILINE)
WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Strip markdown and HTML artifacts and collapse whitespace.

    Args:
        text: Raw page or block text

    Returns:
        Plain text with single spaces between words

    Example:
        >>> normalize_text("# Title\\nThis is **bold** and [link](https://example.com).")
        'Title This is bold and link.'
    """
    text = CODE_FENCE.sub(" ", text)
    text = MARKDOWN_IMAGE.sub(r"\1", text)
    text = MARKDOWN_LINK.sub(r"\1", text)
    text = INLINE_CODE.sub(" ", text)
    text = EMPHASIS_BOLD.sub(r"\2", text)
    text = EMPHASIS.sub(r"\2", text)
    text = HTML_TAG.sub(" ", text)
    text = HEADING_OR_LIST.sub("", text)
    text = BLOCKQUOTE.sub("", text)
    return WHITESPACE.sub(" ", text).strip()


def parse_text_to_words(text: str) -> list[str]:
    """Split text into the words shown one at a time.

    Example:
        >>> parse_text_to_words("Hello world!")
        ['Hello', 'world!']
        >>> parse_text_to_words("   ")
        []
    """
    normalized = normalize_text(text)
    if not normalized:
        return []
    return WHITESPACE.split(normalized)


def blocks_to_text(blocks: Iterable[Mapping[str, Any]]) -> str:
    """Flatten an outliner block tree into newline-separated text.

    Blocks are visited depth-first in document order. A block without
    string content still contributes its children; entries that are not
    mappings are skipped.

    Args:
        blocks: Block dicts with optional ``content`` and ``children`` keys

    Returns:
        The collected block contents joined by newlines
    """
    lines: list[str] = []

    def walk(items: Iterable[Mapping[str, Any]]) -> None:
        for item in items:
            # Collapsed children come back as ["uuid", "..."] references
            if not isinstance(item, Mapping):
                continue
            content = item.get("content")
            if isinstance(content, str):
                lines.append(content)
            children = item.get("children")
            if isinstance(children, list) and children:
                walk(children)

    walk(blocks)
    return "\n".join(lines)
