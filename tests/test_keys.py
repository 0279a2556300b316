"""Tests for tureng.tui.keys: keyboard input parsing and matching."""

from __future__ import annotations

import pytest

from tureng.tui.keys import Key, is_printable_input, matches_key, normalize_key_id, parse_key


class TestKeyHelpers:
    def test_modifiers(self) -> None:
        assert Key.ctrl("w") == "ctrl+w"
        assert Key.alt(Key.backspace) == "alt+backspace"
        assert Key.shift(Key.tab) == "shift+tab"


class TestParseKey:
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
            ("\x1b[3~", "delete"),
            ("\x1b[4~", "end"),
            ("\x1b[5~", "pageUp"),
            ("\x1b[Z", "shift+tab"),
        ],
    )
    def test_escape_sequences(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            ("\x1b[1;5D", "ctrl+left"),
            ("\x1b[1;3C", "alt+right"),
            ("\x1b[1;2A", "shift+up"),
            ("\x1b[1;8B", "ctrl+shift+alt+down"),
            ("\x1b[3;5~", "ctrl+delete"),
        ],
    )
    def test_modified_sequences(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            ("\x1b", "escape"),
            ("\r", "enter"),
            ("\n", "enter"),
            ("\t", "tab"),
            (" ", "space"),
            ("\x7f", "backspace"),
            ("\x08", "backspace"),
            ("\x03", "ctrl+c"),
            ("\x17", "ctrl+w"),
            ("\x15", "ctrl+u"),
            ("\x00", "ctrl+space"),
        ],
    )
    def test_control_characters(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    def test_printable_maps_to_itself(self) -> None:
        assert parse_key("a") == "a"
        assert parse_key("ğ") == "ğ"

    def test_alt_prefixed(self) -> None:
        assert parse_key("\x1bb") == "alt+b"
        assert parse_key("\x1b\x7f") == "alt+backspace"
        assert parse_key("\x1b\x17") == "ctrl+alt+w"
        assert parse_key("\x1bB") == "shift+alt+b"

    def test_unknown(self) -> None:
        assert parse_key("") is None
        assert parse_key("\x1b[99~") is None
        assert parse_key("abc") is None


class TestNormalizeKeyId:
    def test_modifier_order(self) -> None:
        assert normalize_key_id("alt+ctrl+x") == "ctrl+alt+x"

    def test_aliases(self) -> None:
        assert normalize_key_id("esc") == "escape"
        assert normalize_key_id("return") == "enter"

    def test_unknown_modifier(self) -> None:
        assert normalize_key_id("hyper+x") is None


class TestMatchesKey:
    def test_matches(self) -> None:
        assert matches_key("\x17", "ctrl+w")
        assert matches_key("\x1b[A", "up")
        assert matches_key("\x1b", "esc")

    def test_case_insensitive_modifiers(self) -> None:
        assert matches_key("\x03", "Ctrl+C")

    def test_no_match(self) -> None:
        assert not matches_key("a", "b")
        assert not matches_key("\x1b[A", "down")


class TestIsPrintableInput:
    def test_text(self) -> None:
        assert is_printable_input("a")
        assert is_printable_input("çay")
        assert is_printable_input("世")

    def test_controls(self) -> None:
        assert not is_printable_input("")
        assert not is_printable_input("\x1b[A")
        assert not is_printable_input("\x7f")
        assert not is_printable_input("\r")
