"""Keyboard routing for the review window."""

from __future__ import annotations

from enum import Enum, auto

from PyQt6.QtCore import Qt, QObject, pyqtSignal
from PyQt6.QtGui import QKeyEvent

from photo_review.gallery.models import VOCABULARY_TAGS


class Action(Enum):
    NEXT_PHOTO = auto()
    PREV_PHOTO = auto()
    QUIT = auto()


_SHIFT = frozenset({Qt.KeyboardModifier.ShiftModifier})

# Mapping: (Qt.Key, frozenset of modifiers) → Action
_KEY_MAP: dict[tuple[int, frozenset], Action] = {
    (Qt.Key.Key_Space, frozenset()): Action.NEXT_PHOTO,
    (Qt.Key.Key_B, frozenset()): Action.PREV_PHOTO,
    (Qt.Key.Key_B, _SHIFT): Action.PREV_PHOTO,
    (Qt.Key.Key_Escape, frozenset()): Action.QUIT,
}

DEFAULT_TAG_BINDINGS: dict[str, str] = {
    str(i + 1): tag for i, tag in enumerate(VOCABULARY_TAGS)
}

# Map for parsing key strings from config (e.g. "Ctrl+1" -> Qt key+modifier)
_KEY_NAME_MAP: dict[str, int] = {
    **{str(i): getattr(Qt.Key, f"Key_{i}") for i in range(10)},
    **{chr(c): getattr(Qt.Key, f"Key_{chr(c).upper()}") for c in range(ord("a"), ord("z") + 1)},
}

_MOD_NAME_MAP: dict[str, Qt.KeyboardModifier] = {
    "ctrl": Qt.KeyboardModifier.ControlModifier,
    "shift": Qt.KeyboardModifier.ShiftModifier,
    "alt": Qt.KeyboardModifier.AltModifier,
}


def parse_key_string(key_str: str) -> tuple[int, frozenset] | None:
    """Parse a key string like 'Ctrl+1' into (Qt.Key, frozenset of modifiers)."""
    parts = [p.strip().lower() for p in str(key_str).split("+")]
    mods: set = set()
    key = None

    for part in parts:
        if part in _MOD_NAME_MAP:
            mods.add(_MOD_NAME_MAP[part])
        elif part in _KEY_NAME_MAP:
            key = _KEY_NAME_MAP[part]
        else:
            return None

    if key is None:
        return None
    return (key, frozenset(mods))


def _event_lookup(event: QKeyEvent) -> tuple[int, frozenset]:
    key = event.key()
    modifiers = event.modifiers()

    # Build modifier set (ignore KeypadModifier)
    mod_set: set = set()
    if modifiers & Qt.KeyboardModifier.ControlModifier:
        mod_set.add(Qt.KeyboardModifier.ControlModifier)
    if modifiers & Qt.KeyboardModifier.ShiftModifier:
        mod_set.add(Qt.KeyboardModifier.ShiftModifier)
    if modifiers & Qt.KeyboardModifier.AltModifier:
        mod_set.add(Qt.KeyboardModifier.AltModifier)
    return (key, frozenset(mod_set))


class KeyHandler(QObject):
    """Routes keyboard events to named actions via signals.

    Tag keys emit ``tag_toggled`` with the bound tag name; everything else
    emits ``action_triggered``.
    """

    action_triggered = pyqtSignal(Action)
    tag_toggled = pyqtSignal(str)

    def __init__(self, tag_bindings: dict[str, str] | None = None, parent=None):
        super().__init__(parent)
        self._tag_bindings: dict[tuple[int, frozenset], str] = {}
        self.set_tag_bindings(
            DEFAULT_TAG_BINDINGS if tag_bindings is None else tag_bindings
        )

    def set_tag_bindings(self, bindings: dict[str, str]) -> None:
        """Replace tag bindings, e.g. {"1": "portrait", "Ctrl+2": "nature"}."""
        self._tag_bindings = {}
        for key_str, tag in bindings.items():
            parsed = parse_key_string(key_str)
            if parsed is None or parsed in _KEY_MAP:
                continue
            self._tag_bindings[parsed] = tag

    def tag_for_key(self, key: int, modifiers: frozenset = frozenset()) -> str | None:
        return self._tag_bindings.get((key, modifiers))

    def handle_key_event(self, event: QKeyEvent) -> bool:
        """Process a key event. Returns True if the key was bound."""
        lookup = _event_lookup(event)

        tag = self._tag_bindings.get(lookup)
        if tag is not None:
            self.tag_toggled.emit(tag)
            return True

        action = _KEY_MAP.get(lookup)
        if action is not None:
            self.action_triggered.emit(action)
            return True
        return False
