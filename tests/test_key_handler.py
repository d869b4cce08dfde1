"""Tests for review keyboard routing (no QApplication needed)."""

from unittest.mock import MagicMock

from PyQt6.QtCore import Qt

from photo_review.viewer.key_handler import Action, KeyHandler, parse_key_string


def _make_key_event(key, modifiers=None):
    """Create a mock QKeyEvent."""
    event = MagicMock()
    event.key.return_value = key
    if modifiers is None:
        modifiers = Qt.KeyboardModifier(0)
    event.modifiers.return_value = modifiers
    return event


def _record(handler):
    actions: list[Action] = []
    tags: list[str] = []
    handler.action_triggered.connect(actions.append)
    handler.tag_toggled.connect(tags.append)
    return actions, tags


class TestKeyHandler:
    def test_digits_toggle_vocabulary(self):
        handler = KeyHandler()
        actions, tags = _record(handler)
        for key in (Qt.Key.Key_1, Qt.Key.Key_2, Qt.Key.Key_3, Qt.Key.Key_4, Qt.Key.Key_5):
            assert handler.handle_key_event(_make_key_event(key)) is True
        assert tags == ["portrait", "nature", "landscape", "urban", "documentary"]
        assert actions == []

    def test_keypad_digit(self):
        handler = KeyHandler()
        actions, tags = _record(handler)
        handler.handle_key_event(
            _make_key_event(Qt.Key.Key_1, Qt.KeyboardModifier.KeypadModifier)
        )
        assert tags == ["portrait"]

    def test_space_next(self):
        handler = KeyHandler()
        actions, tags = _record(handler)
        handler.handle_key_event(_make_key_event(Qt.Key.Key_Space))
        assert actions == [Action.NEXT_PHOTO]

    def test_b_previous_either_case(self):
        handler = KeyHandler()
        actions, tags = _record(handler)
        handler.handle_key_event(_make_key_event(Qt.Key.Key_B))
        handler.handle_key_event(
            _make_key_event(Qt.Key.Key_B, Qt.KeyboardModifier.ShiftModifier)
        )
        assert actions == [Action.PREV_PHOTO, Action.PREV_PHOTO]

    def test_escape_quit(self):
        handler = KeyHandler()
        actions, tags = _record(handler)
        handler.handle_key_event(_make_key_event(Qt.Key.Key_Escape))
        assert actions == [Action.QUIT]

    def test_unmapped_key_returns_false(self):
        handler = KeyHandler()
        assert handler.handle_key_event(_make_key_event(Qt.Key.Key_6)) is False
        assert handler.handle_key_event(_make_key_event(Qt.Key.Key_A)) is False

    def test_ctrl_digit_not_bound(self):
        handler = KeyHandler()
        event = _make_key_event(Qt.Key.Key_1, Qt.KeyboardModifier.ControlModifier)
        assert handler.handle_key_event(event) is False

    def test_custom_bindings(self):
        handler = KeyHandler({"Ctrl+1": "pets", "7": "food"})
        actions, tags = _record(handler)
        handler.handle_key_event(
            _make_key_event(Qt.Key.Key_1, Qt.KeyboardModifier.ControlModifier)
        )
        handler.handle_key_event(_make_key_event(Qt.Key.Key_7))
        assert tags == ["pets", "food"]
        assert handler.handle_key_event(_make_key_event(Qt.Key.Key_1)) is False

    def test_binding_cannot_shadow_navigation(self):
        handler = KeyHandler({"b": "birds"})
        actions, tags = _record(handler)
        handler.handle_key_event(_make_key_event(Qt.Key.Key_B))
        assert actions == [Action.PREV_PHOTO]
        assert tags == []


class TestParseKeyString:
    def test_plain_digit(self):
        assert parse_key_string("3") == (Qt.Key.Key_3, frozenset())

    def test_modifiers(self):
        assert parse_key_string("Ctrl+Shift+x") == (
            Qt.Key.Key_X,
            frozenset({Qt.KeyboardModifier.ControlModifier, Qt.KeyboardModifier.ShiftModifier}),
        )

    def test_invalid(self):
        assert parse_key_string("Ctrl+") is None
        assert parse_key_string("F13") is None
