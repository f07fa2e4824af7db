"""Utility functions for rsvpreader."""

import re
from bisect import bisect_left
from typing import Union

Number = Union[int, float]

_EDGE_PUNCTUATION = re.compile(r"^[^\w]+|[^\w]+$", re.UNICODE)

# Longest core length for each focus offset: up to 1 letter -> 0,
# 2-5 -> 1, 6-9 -> 2, 10-13 -> 3, longer -> 4
ORP_LENGTH_BOUNDS = (1, 5, 9, 13)

_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def clamp(value: Number, minimum: Number, maximum: Number) -> Number:
    """
    Restrict a value to the closed range [minimum, maximum].

    Args:
        value: The value to restrict
        minimum: Lower bound
        maximum: Upper bound

    Returns:
        The value, or the nearest bound when it lies outside the range

    Example:
        >>> clamp(20, 50, 10000)
        50
        >>> clamp(400, 50, 10000)
        400
    """
    return max(minimum, min(maximum, value))


def compute_base_ms(wpm: Number) -> float:
    """
    Convert a words-per-minute rate into milliseconds per word.

    Args:
        wpm: Target reading speed; anything below 1 is treated as 1

    Returns:
        Milliseconds each word stays on screen before pauses and ramping

    Example:
        >>> compute_base_ms(300)
        200.0
        >>> compute_base_ms(0)
        60000.0
    """
    safe_wpm = max(1, wpm)
    return 60000 / safe_wpm


def escape_html(value: str) -> str:
    """
    Escape a word for embedding in HTML markup.

    Example:
        >>> escape_html('<b>"Tom" & Jerry\\'s</b>')
        '&lt;b&gt;&quot;Tom&quot; &amp; Jerry&#39;s&lt;/b&gt;'
    """
    for char, entity in _HTML_ESCAPES:
        value = value.replace(char, entity)
    return value


def compute_orp_index(word: str) -> int:
    """
    Find the optimal recognition point of a word.

    The eye lands slightly left of a word's centre; longer words shift the
    focus letter further right. Leading punctuation is skipped so that
    quotes and brackets do not steal the focus.

    Args:
        word: A display token

    Returns:
        Index into ``word`` of the letter to highlight (0 for empty words)

    Example:
        >>> compute_orp_index("a")
        0
        >>> compute_orp_index("reading")
        2
        >>> compute_orp_index('"quote"')
        2
    """
    if not word:
        return 0

    core_length = len(_EDGE_PUNCTUATION.sub("", word)) or len(word)
    offset = bisect_left(ORP_LENGTH_BOUNDS, core_length)
    first_letter = next((i for i, char in enumerate(word) if char.isalnum()), len(word))
    return min(first_letter + offset, len(word) - 1)
