"""Keyboard shortcuts for a running session."""

from dataclasses import dataclass

from ..pacing import Direction
from .session import SessionDriver

WPM_STEP = 50

CTRL_C = "\x03"

# Raw sequences returned by click.getchar() mapped to key names
KEY_NAMES = {
    " ": "Space",
    "\x1b": "Escape",
    "\r": "Enter",
    "\n": "Enter",
    "\x1b[A": "ArrowUp",
    "\x1b[B": "ArrowDown",
    "\x1b[C": "ArrowRight",
    "\x1b[D": "ArrowLeft",
    "\x1bOA": "ArrowUp",
    "\x1bOB": "ArrowDown",
    "\x1bOC": "ArrowRight",
    "\x1bOD": "ArrowLeft",
    "\xe0H": "ArrowUp",
    "\xe0P": "ArrowDown",
    "\xe0M": "ArrowRight",
    "\xe0K": "ArrowLeft",
    "\x00H": "ArrowUp",
    "\x00P": "ArrowDown",
    "\x00M": "ArrowRight",
    "\x00K": "ArrowLeft",
}


def key_name(raw: str) -> str:
    """Translate a raw key sequence into a name like 'ArrowLeft'.

    Printable keys are returned unchanged.
    """
    return KEY_NAMES.get(raw, raw)


def normalize_shortcut(value: str) -> str:
    return value.strip().lower()


def matches_shortcut(key: str, shortcut: str) -> bool:
    """Check a key name against a configured shortcut (case-insensitive).

    An empty shortcut never matches.
    """
    target = normalize_shortcut(shortcut)
    if not target:
        return False
    return normalize_shortcut(key) == target


@dataclass
class KeyBindings:
    """Shortcut names for the session controls."""

    start_pause: str = "Space"
    stop: str = "Escape"
    prev_sentence: str = "ArrowLeft"
    next_sentence: str = "ArrowRight"
    increase_wpm: str = "ArrowUp"
    decrease_wpm: str = "ArrowDown"


def handle_key(driver: SessionDriver, raw: str, bindings: KeyBindings) -> bool:
    """Apply a key press to the driver.

    Keys are ignored unless a session is active. Ctrl-C always stops.

    Args:
        driver: The session driver
        raw: Raw key sequence or key name
        bindings: Configured shortcuts

    Returns:
        True if the key triggered an action
    """
    if not driver.active:
        return False

    if raw == CTRL_C:
        driver.stop()
        return True

    key = key_name(raw)

    if matches_shortcut(key, bindings.start_pause):
        driver.toggle()
    elif matches_shortcut(key, bindings.stop):
        driver.stop()
    elif matches_shortcut(key, bindings.prev_sentence):
        driver.step_sentence(Direction.PREV)
    elif matches_shortcut(key, bindings.next_sentence):
        driver.step_sentence(Direction.NEXT)
    elif matches_shortcut(key, bindings.increase_wpm):
        driver.adjust_wpm(WPM_STEP)
    elif matches_shortcut(key, bindings.decrease_wpm):
        driver.adjust_wpm(-WPM_STEP)
    else:
        return False
    return True
