"""Pacing engine: per-word delays and sentence navigation."""

from .boundaries import find_sentence_boundary, sentence_start_indices
from .delay import (
    MIN_DELAY_MS,
    classify_pause,
    compute_delay_ms,
    estimate_reading_ms,
)
from .schemas import MAX_WPM, MIN_WPM, Direction, PacingConfig, PauseClass, clamp_wpm

__all__ = [
    "Direction",
    "MAX_WPM",
    "MIN_DELAY_MS",
    "MIN_WPM",
    "PacingConfig",
    "PauseClass",
    "clamp_wpm",
    "classify_pause",
    "compute_delay_ms",
    "estimate_reading_ms",
    "find_sentence_boundary",
    "sentence_start_indices",
]
