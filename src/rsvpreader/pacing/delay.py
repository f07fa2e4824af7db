"""Per-word display durations.

A word's delay starts from the WPM base duration, is stretched by at most
one punctuation pause, then by the start/end speed ramp, and is finally
rounded and floored at MIN_DELAY_MS.
"""

import math
import re
from typing import Optional, Sequence

from ..utils import compute_base_ms
from .schemas import PacingConfig, PauseClass

MIN_DELAY_MS = 10

SENTENCE_END = re.compile(r"[.!?]+$")
CLAUSE_END = re.compile(r"[,;:]+$")
DASH_END = re.compile(r"[—–-]+$")


def classify_pause(word: str) -> Optional[PauseClass]:
    """Classify a word by its trailing punctuation.

    Sentence endings win over commas, commas over dashes.

    Args:
        word: Display token

    Returns:
        The matching PauseClass, or None for a word without trailing
        punctuation
    """
    if SENTENCE_END.search(word):
        return PauseClass.SENTENCE
    if CLAUSE_END.search(word):
        return PauseClass.COMMA
    if DASH_END.search(word):
        return PauseClass.DASH
    return None


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_delay_ms(
    word: str,
    base_ms: float,
    config: PacingConfig,
    index: int,
    total: int,
) -> int:
    """Compute how long a word stays on screen.

    Args:
        word: The word being shown
        base_ms: Milliseconds per word at the configured WPM
        config: Pacing settings
        index: Position of the word in the session
        total: Number of words in the session

    Returns:
        Display time in whole milliseconds, never below MIN_DELAY_MS
        (also for NaN or infinite factors)
    """
    delay = base_ms

    if config.pause_on_punctuation:
        pause = classify_pause(word)
        if pause is not None:
            delay *= config.pause_factor(pause)

    if config.ramp_enabled and total > 0 and config.ramp_words > 0:
        ramp_words = min(config.ramp_words, total)
        start_factor = config.ramp_start_factor
        end_factor = config.ramp_end_factor

        if index < ramp_words:
            progress = index / ramp_words
            delay *= start_factor - (start_factor - 1) * progress
        elif index > total - ramp_words:
            remaining = total - index
            progress = remaining / ramp_words
            delay *= end_factor - (end_factor - 1) * progress

    # NaN or infinite factors show the word for the shortest time
    if not math.isfinite(delay):
        return MIN_DELAY_MS
    return max(MIN_DELAY_MS, _round_half_up(delay))


def estimate_reading_ms(
    words: Sequence[str],
    config: PacingConfig,
    start: int = 0,
) -> int:
    """Estimate the time left to read ``words`` from ``start`` to the end.

    Example:
        >>> estimate_reading_ms(["one", "two"], PacingConfig(wpm=60, ramp_enabled=False))
        2000
    """
    base_ms = compute_base_ms(config.wpm)
    total = len(words)
    return sum(
        compute_delay_ms(words[i], base_ms, config, i, total)
        for i in range(max(start, 0), total)
    )
