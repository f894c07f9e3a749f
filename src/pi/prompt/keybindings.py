"""Prompt keybindings manager."""

from __future__ import annotations

from typing import Literal

from pi.prompt.keys import KeyEvent, KeyId, normalize_key_id

PromptAction = Literal[
    # Prompt lifecycle
    "submit",
    "cancel",
    "interrupt",
    # Cursor movement
    "cursorLeft",
    "cursorRight",
    "cursorWordLeft",
    "cursorWordRight",
    "cursorLineStart",
    "cursorLineEnd",
    # Deletion
    "deleteCharBackward",
    "deleteCharForward",
    "deleteWordBackward",
    "deleteWordForward",
    "deleteToLineStart",
    "deleteToLineEnd",
    # Lists and suggestions
    "selectUp",
    "selectDown",
    "selectPageUp",
    "selectPageDown",
    "selectFirst",
    "selectLast",
    "autocomplete",
    # MultiSelect
    "toggleOption",
    "selectAll",
    "clearSelection",
    # Password
    "toggleDisplayMode",
    # Editor
    "openEditor",
    # DateSelect
    "prevDay",
    "nextDay",
    "prevWeek",
    "nextWeek",
    "prevMonth",
    "nextMonth",
    "prevYear",
    "nextYear",
]

PromptKeybindingsConfig = dict[PromptAction, KeyId | list[KeyId]]

DEFAULT_PROMPT_KEYBINDINGS: dict[PromptAction, KeyId | list[KeyId]] = {
    # Prompt lifecycle
    "submit": "enter",
    "cancel": "escape",
    "interrupt": ["ctrl+c", "ctrl+d"],
    # Cursor movement
    "cursorLeft": ["left", "ctrl+b"],
    "cursorRight": ["right", "ctrl+f"],
    "cursorWordLeft": ["alt+left", "ctrl+left", "alt+b"],
    "cursorWordRight": ["alt+right", "ctrl+right", "alt+f"],
    "cursorLineStart": ["home", "ctrl+a"],
    "cursorLineEnd": ["end", "ctrl+e"],
    # Deletion
    "deleteCharBackward": "backspace",
    "deleteCharForward": "delete",
    "deleteWordBackward": ["ctrl+w", "alt+backspace"],
    "deleteWordForward": ["alt+d", "alt+delete", "ctrl+delete"],
    "deleteToLineStart": "ctrl+u",
    "deleteToLineEnd": "ctrl+k",
    # Lists and suggestions
    "selectUp": "up",
    "selectDown": "down",
    "selectPageUp": "pageUp",
    "selectPageDown": "pageDown",
    "selectFirst": "home",
    "selectLast": "end",
    "autocomplete": "tab",
    # MultiSelect
    "toggleOption": "space",
    "selectAll": "right",
    "clearSelection": "left",
    # Password
    "toggleDisplayMode": "ctrl+r",
    # Editor
    "openEditor": "e",
    # DateSelect
    "prevDay": "left",
    "nextDay": "right",
    "prevWeek": "up",
    "nextWeek": ["down", "tab"],
    "prevMonth": "ctrl+left",
    "nextMonth": "ctrl+right",
    "prevYear": "ctrl+up",
    "nextYear": "ctrl+down",
}

# Extra bindings active only when a prompt runs in vim mode.
VIM_KEYBINDINGS: dict[PromptAction, list[KeyId]] = {
    "selectUp": ["k"],
    "selectDown": ["j"],
    "prevDay": ["h"],
    "nextDay": ["l"],
    "prevWeek": ["k"],
    "nextWeek": ["j"],
}


class PromptKeybindingsManager:
    """Manages keybindings for prompts."""

    def __init__(self, config: PromptKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[PromptAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: PromptKeybindingsConfig) -> None:
        self._action_to_keys.clear()

        for source in (DEFAULT_PROMPT_KEYBINDINGS, config):
            for action, keys in source.items():
                key_array = keys if isinstance(keys, list) else [keys]
                self._action_to_keys[action] = [normalize_key_id(k) for k in key_array]

    def matches(
        self, event: KeyEvent, action: PromptAction, *, vim_mode: bool = False
    ) -> bool:
        """Check if *event* triggers *action*."""
        key_id = event.id
        if not key_id:
            return False
        if key_id in self._action_to_keys.get(action, ()):
            return True
        return vim_mode and key_id in VIM_KEYBINDINGS.get(action, ())

    def get_keys(self, action: PromptAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: PromptKeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)


_global_prompt_keybindings: PromptKeybindingsManager | None = None


def get_prompt_keybindings() -> PromptKeybindingsManager:
    global _global_prompt_keybindings
    if _global_prompt_keybindings is None:
        _global_prompt_keybindings = PromptKeybindingsManager()
    return _global_prompt_keybindings


def set_prompt_keybindings(manager: PromptKeybindingsManager) -> None:
    global _global_prompt_keybindings
    _global_prompt_keybindings = manager
