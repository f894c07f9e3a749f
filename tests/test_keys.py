"""Tests for pi.prompt.keys -- keyboard input parsing and key events."""

from __future__ import annotations

import pytest

from pi.prompt.keys import KeyEvent, normalize_key_id, parse_key, parse_key_event


# ---------------------------------------------------------------------------
# parse_key: legacy sequences
# ---------------------------------------------------------------------------


class TestParseKeyLegacy:
    """Plain bytes and xterm/rxvt escape sequences."""

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            ("\x1b[A", "up"),
            ("\x1b[B", "down"),
            ("\x1b[C", "right"),
            ("\x1b[D", "left"),
            ("\x1b[H", "home"),
            ("\x1b[F", "end"),
            ("\x1bOA", "up"),
            ("\x1bOH", "home"),
            ("\x1b[1~", "home"),
            ("\x1b[4~", "end"),
            ("\x1b[3~", "delete"),
            ("\x1b[5~", "pageUp"),
            ("\x1b[6~", "pageDown"),
            ("\x1b[15~", "f5"),
            ("\x1b[Z", "shift+tab"),
        ],
    )
    def test_named_sequences(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            ("\r", "enter"),
            ("\n", "enter"),
            ("\t", "tab"),
            ("\x1b", "escape"),
            ("\x7f", "backspace"),
            ("\x08", "backspace"),
            (" ", "space"),
            ("\x00", "ctrl+space"),
        ],
    )
    def test_single_bytes(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    def test_ctrl_letters(self) -> None:
        assert parse_key("\x01") == "ctrl+a"
        assert parse_key("\x03") == "ctrl+c"
        assert parse_key("\x04") == "ctrl+d"
        assert parse_key("\x17") == "ctrl+w"

    def test_printable_characters(self) -> None:
        assert parse_key("a") == "a"
        assert parse_key("A") == "A"
        assert parse_key("é") == "é"

    def test_modified_arrows(self) -> None:
        assert parse_key("\x1b[1;5D") == "ctrl+left"
        assert parse_key("\x1b[1;5C") == "ctrl+right"
        assert parse_key("\x1b[1;2A") == "shift+up"
        assert parse_key("\x1b[1;3B") == "alt+down"
        assert parse_key("\x1b[1;6A") == "ctrl+shift+up"

    def test_modified_tilde_keys(self) -> None:
        assert parse_key("\x1b[3;5~") == "ctrl+delete"
        assert parse_key("\x1b[3;3~") == "alt+delete"

    def test_rxvt_sequences(self) -> None:
        assert parse_key("\x1bOd") == "ctrl+left"
        assert parse_key("\x1b[a") == "shift+up"

    def test_alt_prefix(self) -> None:
        assert parse_key("\x1bb") == "alt+b"
        assert parse_key("\x1bB") == "shift+alt+b"
        assert parse_key("\x1b\x7f") == "alt+backspace"
        assert parse_key("\x1b\x01") == "ctrl+alt+a"

    def test_unknown_sequences(self) -> None:
        assert parse_key("") is None
        assert parse_key("\x1b[99~") is None
        assert parse_key("\x1b[200X") is None


# ---------------------------------------------------------------------------
# parse_key: kitty CSI u
# ---------------------------------------------------------------------------


class TestParseKeyKitty:
    """The kitty keyboard protocol's ``CSI codepoint;modifier u`` form."""

    def test_plain_codepoint(self) -> None:
        assert parse_key("\x1b[97u") == "a"

    def test_ctrl_codepoint(self) -> None:
        assert parse_key("\x1b[97;5u") == "ctrl+a"

    def test_named_codepoints(self) -> None:
        assert parse_key("\x1b[13u") == "enter"
        assert parse_key("\x1b[27u") == "escape"
        assert parse_key("\x1b[9;2u") == "shift+tab"

    def test_lock_bits_are_ignored(self) -> None:
        # 1 + ctrl(4) + caps lock(64)
        assert parse_key("\x1b[97;69u") == "ctrl+a"

    def test_release_events_are_ignored(self) -> None:
        assert parse_key("\x1b[97;1:3u") is None


# ---------------------------------------------------------------------------
# KeyEvent
# ---------------------------------------------------------------------------


class TestKeyEvent:
    """KeyEvent construction and canonical identifiers."""

    def test_char_event(self) -> None:
        event = KeyEvent.char("x")
        assert event.kind == "char"
        assert event.text == "x"
        assert event.id == "x"
        assert not event.has_modifier

    def test_space_char_is_named_space(self) -> None:
        event = KeyEvent.char(" ")
        assert event.kind == "char"
        assert event.id == "space"

    def test_from_key_id_control(self) -> None:
        event = KeyEvent.from_key_id("ctrl+a")
        assert event.kind == "control"
        assert event.ctrl
        assert event.name == "a"
        assert event.has_modifier

    def test_from_key_id_named(self) -> None:
        event = KeyEvent.from_key_id("pageDown")
        assert event.kind == "named"
        assert event.id == "pageDown"

    def test_from_key_id_shift_letter_is_uppercase_char(self) -> None:
        event = KeyEvent.from_key_id("shift+a")
        assert event.kind == "char"
        assert event.text == "A"

    def test_from_key_id_space_is_insertable(self) -> None:
        event = KeyEvent.from_key_id("space")
        assert event.kind == "char"
        assert event.text == " "

    def test_from_key_id_plus_key(self) -> None:
        assert KeyEvent.from_key_id("+").text == "+"
        assert KeyEvent.from_key_id("ctrl++").name == "+"

    def test_canonical_modifier_order(self) -> None:
        assert KeyEvent.from_key_id("alt+shift+ctrl+left").id == "ctrl+shift+alt+left"
        assert normalize_key_id("alt+ctrl+x") == "ctrl+alt+x"

    def test_events_are_hashable_values(self) -> None:
        assert KeyEvent.from_key_id("ctrl+c") == KeyEvent.from_key_id("ctrl+c")
        assert len({KeyEvent.char("a"), KeyEvent.char("a")}) == 1

    def test_multi_grapheme_text_has_no_key_id(self) -> None:
        event = KeyEvent.char("escape")
        assert event.kind == "char"
        assert event.text == "escape"
        assert event.id == ""

    def test_combining_mark_is_one_key(self) -> None:
        assert KeyEvent.char("e\u0301").id == "e\u0301"

    def test_paste_never_has_key_id(self) -> None:
        event = KeyEvent.paste("e")
        assert event.text == "e"
        assert event.id == ""
        assert KeyEvent.paste(" ").id == ""


class TestParseKeyEvent:
    """parse_key_event maps raw input to KeyEvent values."""

    def test_arrow(self) -> None:
        event = parse_key_event("\x1b[A")
        assert event is not None
        assert event.kind == "named"
        assert event.name == "up"

    def test_multi_character_text_is_one_char_event(self) -> None:
        event = parse_key_event("héllo")
        assert event == KeyEvent.char("héllo")
        assert event.id == ""

    def test_unknown_escape_sequence(self) -> None:
        assert parse_key_event("\x1b[200X") is None
