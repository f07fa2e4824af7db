"""Text clean-up and segmentation into display words."""

from .normalizer import (
    blocks_to_text,
    normalize_text,
    parse_text_to_words,
)

__all__ = [
    "blocks_to_text",
    "normalize_text",
    "parse_text_to_words",
]
