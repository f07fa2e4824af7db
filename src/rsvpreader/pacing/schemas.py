"""Pydantic schemas for pacing settings."""

import math
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from ..utils import clamp

MIN_WPM = 50
MAX_WPM = 10000


def clamp_wpm(value) -> int:
    """Convert a WPM value to an int within [MIN_WPM, MAX_WPM].

    Raises:
        ValueError: If value is not a number, or is NaN or infinite
    """
    wpm = float(value)
    if not math.isfinite(wpm):
        raise ValueError(f"WPM must be a finite number (got {value})")
    return int(clamp(int(wpm), MIN_WPM, MAX_WPM))


class Direction(str, Enum):
    """Sentence navigation direction."""

    NEXT = "next"
    PREV = "prev"


class PauseClass(str, Enum):
    """Trailing punctuation classes that stretch a word's display time."""

    SENTENCE = "sentence"  # . ! ?
    COMMA = "comma"  # , ; :
    DASH = "dash"  # em dash, en dash, hyphen


class PacingConfig(BaseModel):
    """Settings read by the delay computation.

    Pause and ramp factors are multipliers on the base duration, values
    above 1 slow reading down. Only the WPM is bounded; everything else is
    taken as given.
    """

    wpm: int = Field(default=400, description="Target words per minute")

    # Punctuation pauses
    pause_on_punctuation: bool = True
    comma_pause_factor: float = Field(default=1.25, description="Multiplier after , ; :")
    sentence_pause_factor: float = Field(default=1.75, description="Multiplier after . ! ?")
    dash_pause_factor: float = Field(default=1.2, description="Multiplier after dashes")

    # Speed ramp at session start and end
    ramp_enabled: bool = True
    ramp_words: int = Field(default=12, description="Ramp length in words")
    ramp_start_factor: float = Field(default=1.4, description="Slow-down on the first word")
    ramp_end_factor: float = Field(default=1.3, description="Slow-down on the last word")

    @field_validator("wpm", mode="before")
    @classmethod
    def validate_wpm(cls, v) -> int:
        """Keep WPM within the supported range."""
        return clamp_wpm(v)

    def pause_factor(self, pause: PauseClass) -> float:
        """Get the multiplier configured for a punctuation class."""
        if pause is PauseClass.SENTENCE:
            return self.sentence_pause_factor
        if pause is PauseClass.COMMA:
            return self.comma_pause_factor
        return self.dash_pause_factor
