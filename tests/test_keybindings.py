"""Tests for pi.prompt.keybindings -- prompt keybindings manager."""

from __future__ import annotations

from pi.prompt.keybindings import (
    DEFAULT_PROMPT_KEYBINDINGS,
    PromptKeybindingsManager,
    get_prompt_keybindings,
    set_prompt_keybindings,
)
from pi.prompt.keys import KeyEvent, parse_key_event


def key(key_id: str) -> KeyEvent:
    return KeyEvent.from_key_id(key_id)


class TestDefaultPromptKeybindings:
    """DEFAULT_PROMPT_KEYBINDINGS covers every prompt action."""

    def test_lifecycle_actions(self) -> None:
        for action in ("submit", "cancel", "interrupt"):
            assert action in DEFAULT_PROMPT_KEYBINDINGS

    def test_editing_actions(self) -> None:
        for action in (
            "cursorLeft", "cursorRight", "cursorWordLeft", "cursorWordRight",
            "cursorLineStart", "cursorLineEnd",
            "deleteCharBackward", "deleteCharForward",
            "deleteWordBackward", "deleteWordForward",
            "deleteToLineStart", "deleteToLineEnd",
        ):
            assert action in DEFAULT_PROMPT_KEYBINDINGS, f"Missing action: {action}"

    def test_calendar_actions(self) -> None:
        for action in (
            "prevDay", "nextDay", "prevWeek", "nextWeek",
            "prevMonth", "nextMonth", "prevYear", "nextYear",
        ):
            assert action in DEFAULT_PROMPT_KEYBINDINGS, f"Missing action: {action}"


class TestPromptKeybindingsManager:
    def test_default_matches(self) -> None:
        kb = PromptKeybindingsManager()
        assert kb.matches(key("enter"), "submit")
        assert kb.matches(key("escape"), "cancel")
        assert kb.matches(key("ctrl+c"), "interrupt")
        assert kb.matches(key("ctrl+d"), "interrupt")
        assert not kb.matches(key("a"), "submit")

    def test_text_events_never_match(self) -> None:
        kb = PromptKeybindingsManager()
        assert not kb.matches(KeyEvent.paste("escape"), "cancel")
        assert not kb.matches(KeyEvent.paste("enter"), "submit")
        assert not kb.matches(KeyEvent.char("up"), "selectUp")
        assert not kb.matches(KeyEvent.paste("e"), "openEditor")
        assert not kb.matches(KeyEvent.paste("j"), "selectDown", vim_mode=True)

    def test_raw_sequences_match(self) -> None:
        kb = PromptKeybindingsManager()
        assert kb.matches(parse_key_event("\r"), "submit")
        assert kb.matches(parse_key_event("\x1b[1;5D"), "prevMonth")
        assert kb.matches(parse_key_event(" "), "toggleOption")

    def test_vim_keys_only_in_vim_mode(self) -> None:
        kb = PromptKeybindingsManager()
        assert not kb.matches(key("j"), "selectDown")
        assert kb.matches(key("j"), "selectDown", vim_mode=True)
        assert kb.matches(key("h"), "prevDay", vim_mode=True)
        assert kb.matches(key("down"), "selectDown", vim_mode=True)

    def test_user_override_replaces_defaults(self) -> None:
        kb = PromptKeybindingsManager({"submit": "ctrl+s"})
        assert kb.matches(key("ctrl+s"), "submit")
        assert not kb.matches(key("enter"), "submit")
        assert kb.matches(key("escape"), "cancel")

    def test_keys_are_normalized(self) -> None:
        kb = PromptKeybindingsManager({"cancel": ["alt+ctrl+q"]})
        assert kb.get_keys("cancel") == ["ctrl+alt+q"]
        assert kb.matches(key("ctrl+alt+q"), "cancel")

    def test_set_config(self) -> None:
        kb = PromptKeybindingsManager({"submit": "ctrl+s"})
        kb.set_config({})
        assert kb.matches(key("enter"), "submit")


class TestGlobalKeybindings:
    def test_get_returns_same_instance(self) -> None:
        assert get_prompt_keybindings() is get_prompt_keybindings()

    def test_set_replaces_instance(self) -> None:
        custom = PromptKeybindingsManager({"cancel": "ctrl+g"})
        set_prompt_keybindings(custom)
        assert get_prompt_keybindings() is custom
