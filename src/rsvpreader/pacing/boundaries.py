"""Sentence boundary search for jump navigation.

Boundaries are derived from the word list on every call, so they always
match the current session's words.
"""

from typing import Sequence, Union

from .delay import SENTENCE_END
from .schemas import Direction


def sentence_start_indices(words: Sequence[str]) -> list[int]:
    """Get the indices of words that begin a sentence.

    Index 0 is always included, even for an empty list.

    Example:
        >>> sentence_start_indices(["Hello", "world.", "Next", "one."])
        [0, 2]
    """
    indices = {0}
    for i, word in enumerate(words):
        if SENTENCE_END.search(word) and i + 1 < len(words):
            indices.add(i + 1)
    return sorted(indices)


def find_sentence_boundary(
    words: Sequence[str],
    current_index: int,
    direction: Union[Direction, str],
) -> int:
    """Find the sentence start to jump to from ``current_index``.

    Args:
        words: Session words
        current_index: Index of the word currently shown
        direction: Direction.NEXT / "next" or Direction.PREV / "prev"

    Returns:
        For next, the first sentence start after current_index, or the last
        word when there is none. For prev, the last sentence start before
        current_index, or 0.
    """
    boundaries = sentence_start_indices(words)

    if Direction(direction) is Direction.NEXT:
        for idx in boundaries:
            if idx > current_index:
                return idx
        return max(len(words) - 1, 0)

    for idx in reversed(boundaries):
        if idx < current_index:
            return idx
    return 0
