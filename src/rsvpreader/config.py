"""Configuration management for rsvpreader.

Loads configuration from environment variables and provides defaults.
"""

import logging
import math
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .host.logseq import DEFAULT_API_URL
from .pacing import PacingConfig, clamp_wpm
from .reading.keys import KeyBindings

# Load .env file if present
load_dotenv()

COLOR_SCHEMES = ("auto", "light", "dark")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


@dataclass
class Config:
    """Application configuration."""

    # Pacing
    wpm: int
    pause_on_punctuation: bool
    comma_pause_factor: float
    sentence_pause_factor: float
    dash_pause_factor: float
    ramp_enabled: bool
    ramp_words: int
    ramp_start_factor: float
    ramp_end_factor: float

    # Display
    show_progress: bool
    color_scheme: str

    # Shortcuts
    shortcut_start_pause: str
    shortcut_stop: str
    shortcut_prev_sentence: str
    shortcut_next_sentence: str
    shortcut_increase_wpm: str
    shortcut_decrease_wpm: str

    # Logseq
    logseq_api_url: str
    logseq_api_token: Optional[str]

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            wpm=clamp_wpm(os.environ.get("RSVP_WPM", "400")),
            pause_on_punctuation=_env_bool("RSVP_PAUSE_ON_PUNCTUATION", True),
            comma_pause_factor=float(os.environ.get("RSVP_COMMA_PAUSE_FACTOR", "1.25")),
            sentence_pause_factor=float(os.environ.get("RSVP_SENTENCE_PAUSE_FACTOR", "1.75")),
            dash_pause_factor=float(os.environ.get("RSVP_DASH_PAUSE_FACTOR", "1.2")),
            ramp_enabled=_env_bool("RSVP_RAMP_ENABLED", True),
            ramp_words=int(os.environ.get("RSVP_RAMP_WORDS", "12")),
            ramp_start_factor=float(os.environ.get("RSVP_RAMP_START_FACTOR", "1.4")),
            ramp_end_factor=float(os.environ.get("RSVP_RAMP_END_FACTOR", "1.3")),
            show_progress=_env_bool("RSVP_SHOW_PROGRESS", True),
            color_scheme=os.environ.get("RSVP_COLOR_SCHEME", "auto").strip().lower(),
            shortcut_start_pause=os.environ.get("RSVP_SHORTCUT_START_PAUSE", "Space"),
            shortcut_stop=os.environ.get("RSVP_SHORTCUT_STOP", "Escape"),
            shortcut_prev_sentence=os.environ.get("RSVP_SHORTCUT_PREV_SENTENCE", "ArrowLeft"),
            shortcut_next_sentence=os.environ.get("RSVP_SHORTCUT_NEXT_SENTENCE", "ArrowRight"),
            shortcut_increase_wpm=os.environ.get("RSVP_SHORTCUT_INCREASE_WPM", "ArrowUp"),
            shortcut_decrease_wpm=os.environ.get("RSVP_SHORTCUT_DECREASE_WPM", "ArrowDown"),
            logseq_api_url=os.environ.get("LOGSEQ_API_URL", DEFAULT_API_URL),
            logseq_api_token=os.environ.get("LOGSEQ_API_TOKEN"),
            log_level=os.environ.get("RSVP_LOG_LEVEL", "WARNING").strip().upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.color_scheme not in COLOR_SCHEMES:
            errors.append(
                f"Unknown color scheme '{self.color_scheme}' "
                f"(expected one of: {', '.join(COLOR_SCHEMES)})"
            )

        if self.ramp_enabled and self.ramp_words <= 0:
            errors.append("Ramp is enabled but ramp length is not positive")

        factors = {
            "comma pause factor": self.comma_pause_factor,
            "sentence pause factor": self.sentence_pause_factor,
            "dash pause factor": self.dash_pause_factor,
            "ramp start factor": self.ramp_start_factor,
            "ramp end factor": self.ramp_end_factor,
        }
        for label, value in factors.items():
            if not math.isfinite(value) or value <= 0:
                errors.append(f"The {label} must be a positive number (got {value})")

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def has_logseq_config(self) -> bool:
        """Check if a Logseq API token is configured."""
        return bool(self.logseq_api_token)

    def pacing(self) -> PacingConfig:
        """Get the pacing settings."""
        return PacingConfig(
            wpm=self.wpm,
            pause_on_punctuation=self.pause_on_punctuation,
            comma_pause_factor=self.comma_pause_factor,
            sentence_pause_factor=self.sentence_pause_factor,
            dash_pause_factor=self.dash_pause_factor,
            ramp_enabled=self.ramp_enabled,
            ramp_words=self.ramp_words,
            ramp_start_factor=self.ramp_start_factor,
            ramp_end_factor=self.ramp_end_factor,
        )

    def key_bindings(self) -> KeyBindings:
        """Get the keyboard shortcuts."""
        return KeyBindings(
            start_pause=self.shortcut_start_pause,
            stop=self.shortcut_stop,
            prev_sentence=self.shortcut_prev_sentence,
            next_sentence=self.shortcut_next_sentence,
            increase_wpm=self.shortcut_increase_wpm,
            decrease_wpm=self.shortcut_decrease_wpm,
        )


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
