"""Keyboard input parsing for terminal prompts.

Turns raw terminal input (legacy xterm/rxvt sequences, SS3 sequences, the
kitty ``CSI u`` format and plain bytes) into key identifiers such as
``"ctrl+left"`` or ``"enter"``, and into immutable ``KeyEvent`` values that
the prompt state machines consume.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from pi.prompt.utils import grapheme_length

# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

KeyId = str

KeyKind = Literal["char", "control", "named"]

NAMED_KEYS: frozenset[str] = frozenset(
    {
        "up",
        "down",
        "left",
        "right",
        "home",
        "end",
        "pageUp",
        "pageDown",
        "enter",
        "escape",
        "tab",
        "backspace",
        "delete",
        "insert",
        "space",
        "clear",
        *(f"f{n}" for n in range(1, 13)),
    }
)

_MODIFIER_ORDER = ("ctrl", "shift", "alt")

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

# Caps lock / num lock bits reported by the kitty protocol.
LOCK_MASK = 64 + 128


# ---------------------------------------------------------------------------
# KeyEvent
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyEvent:
    """A single decoded key press.

    ``kind`` tags the variant:

    * ``"char"`` -- printable text to insert (``text``). Text that is not a
      single key press (a bracketed paste, an IME commit) has an empty
      ``name`` and so an empty ``id``, which no keybinding matches.
    * ``"control"`` -- a ctrl/alt combination with a character key.
    * ``"named"`` -- arrows, Home/End, PageUp/PageDown, Enter, Esc, Tab,
      Backspace, Delete and function keys, with optional modifiers.
    """

    kind: KeyKind
    name: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    text: str = ""

    @property
    def id(self) -> KeyId:
        """Canonical key identifier, e.g. ``"ctrl+shift+left"``."""
        prefix = ""
        if self.ctrl:
            prefix += "ctrl+"
        if self.shift:
            prefix += "shift+"
        if self.alt:
            prefix += "alt+"
        return prefix + self.name

    @property
    def has_modifier(self) -> bool:
        return self.ctrl or self.alt

    @classmethod
    def char(cls, text: str) -> KeyEvent:
        """Build a printable-text event."""
        if grapheme_length(text) != 1:
            return cls.paste(text)
        return cls(kind="char", name="space" if text == " " else text, text=text)

    @classmethod
    def paste(cls, text: str) -> KeyEvent:
        """Build a text event that never triggers a keybinding."""
        return cls(kind="char", name="", text=text)

    @classmethod
    def named(cls, name: str, **modifiers: bool) -> KeyEvent:
        return cls(kind="named", name=name, **modifiers)

    @classmethod
    def from_key_id(cls, key_id: KeyId) -> KeyEvent:
        """Build an event from a key identifier such as ``"ctrl+a"``."""
        if key_id.endswith("++"):
            parts = key_id[:-2].split("+") + ["+"]
        elif key_id == "+":
            parts = ["+"]
        else:
            parts = key_id.split("+")

        flags = {"ctrl": False, "shift": False, "alt": False}
        while len(parts) > 1 and parts[0].lower() in flags:
            flags[parts.pop(0).lower()] = True
        base = "+".join(parts)

        if base in NAMED_KEYS:
            if base == "space" and not (flags["ctrl"] or flags["alt"]):
                return cls(kind="char", name="space", text=" ", shift=flags["shift"])
            return cls(kind="named", name=base, **flags)

        if flags["ctrl"] or flags["alt"]:
            return cls(kind="control", name=base.lower(), **flags)

        if flags["shift"] and len(base) == 1:
            return cls.char(base.upper())
        return cls.char(base)


def normalize_key_id(key_id: KeyId) -> KeyId:
    """Put the modifiers of *key_id* into canonical ``ctrl+shift+alt`` order."""
    return KeyEvent.from_key_id(key_id).id


# ---------------------------------------------------------------------------
# Escape sequence tables
# ---------------------------------------------------------------------------

# Final byte of ``CSI 1;<mod> X`` / ``CSI X`` and of ``SS3 X``.
_LETTER_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
    "E": "clear",
    "P": "f1",
    "Q": "f2",
    "R": "f3",
    "S": "f4",
}

# Number of ``CSI <n>;<mod> ~``.
_TILDE_KEYS: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    7: "home",
    8: "end",
    15: "f5",
    17: "f6",
    18: "f7",
    19: "f8",
    20: "f9",
    21: "f10",
    23: "f11",
    24: "f12",
}

# rxvt sends modified arrows with lowercase finals.
_RXVT_KEYS: dict[str, str] = {
    "\x1b[a": "shift+up",
    "\x1b[b": "shift+down",
    "\x1b[c": "shift+right",
    "\x1b[d": "shift+left",
    "\x1bOa": "ctrl+up",
    "\x1bOb": "ctrl+down",
    "\x1bOc": "ctrl+right",
    "\x1bOd": "ctrl+left",
    "\x1b[2^": "ctrl+insert",
    "\x1b[3^": "ctrl+delete",
    "\x1b[5^": "ctrl+pageUp",
    "\x1b[6^": "ctrl+pageDown",
    "\x1b[7^": "ctrl+home",
    "\x1b[8^": "ctrl+end",
}

# Kitty codepoints that map to named keys.
_CODEPOINT_KEYS: dict[int, str] = {
    27: "escape",
    9: "tab",
    13: "enter",
    32: "space",
    127: "backspace",
    57414: "enter",
}

_CSI_LETTER_RE = re.compile(r"^\x1b\[(?:1;(\d+)(?::\d+)?)?([ABCDEFHPQRS])$")
_CSI_TILDE_RE = re.compile(r"^\x1b\[(\d+)(?:;(\d+)(?::\d+)?)?~$")
_CSI_U_RE = re.compile(r"^\x1b\[(\d+)(?::\d*)*(?:;(\d+)(?::(\d+))?)?u$")
_SS3_RE = re.compile(r"^\x1bO(\d?)([ABCDEFHPQRS])$")

# Kitty event type 3 is a key release.
_KEY_RELEASE = 3


def _modifier_prefix(modifier: int) -> str:
    mod = (modifier - 1) & ~LOCK_MASK
    prefix = ""
    for name in _MODIFIER_ORDER:
        if mod & MODIFIERS[name]:
            prefix += name + "+"
    return prefix


# ---------------------------------------------------------------------------
# parse_key
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:  # noqa: C901
    """Parse one raw key sequence and return its key identifier, or ``None``.

    The identifier format is the one keybindings use: ``"a"``, ``"A"``,
    ``"ctrl+a"``, ``"shift+tab"``, ``"ctrl+left"``, ``"pageDown"``.
    """
    if not data:
        return None

    if data in _RXVT_KEYS:
        return _RXVT_KEYS[data]

    m = _CSI_U_RE.match(data)
    if m:
        if m.group(3) and int(m.group(3)) == _KEY_RELEASE:
            return None
        codepoint = int(m.group(1))
        prefix = _modifier_prefix(int(m.group(2) or 1))
        name = _CODEPOINT_KEYS.get(codepoint)
        if name is not None:
            return prefix + name
        ch = chr(codepoint)
        if ch.isprintable():
            return prefix + (ch.lower() if prefix else ch)
        return None

    m = _CSI_LETTER_RE.match(data)
    if m:
        return _modifier_prefix(int(m.group(1) or 1)) + _LETTER_KEYS[m.group(2)]

    m = _CSI_TILDE_RE.match(data)
    if m:
        name = _TILDE_KEYS.get(int(m.group(1)))
        if name is None:
            return None
        return _modifier_prefix(int(m.group(2) or 1)) + name

    m = _SS3_RE.match(data)
    if m:
        return _modifier_prefix(int(m.group(1) or 1)) + _LETTER_KEYS[m.group(2)]

    if data == "\x1b[Z":
        return "shift+tab"

    # --- Simple single-byte keys ---
    if data == "\x1b":
        return "escape"
    if data in ("\r", "\n"):
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data in ("\x7f", "\x08"):
        return "backspace"
    if data == "\x00":
        return "ctrl+space"

    # --- Ctrl + letter (0x01 - 0x1a) and ctrl+\ ] ^ _ ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)
    if len(data) == 1 and 28 <= ord(data) <= 31:
        return "ctrl+" + "\\]^_"[ord(data) - 28]

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == "\x1b":
        inner = parse_key(data[1])
        if inner is None:
            return None
        if inner.startswith("ctrl+"):
            return "ctrl+alt+" + inner[len("ctrl+"):]
        if len(inner) == 1 and inner.isupper():
            return "shift+alt+" + inner.lower()
        return "alt+" + inner

    if len(data) == 1 and data.isprintable():
        return data

    return None


def parse_key_event(data: str) -> KeyEvent | None:
    """Parse one raw key sequence into a ``KeyEvent``.

    Printable text that is not a single key (e.g. IME commits) becomes one
    ``"char"`` event. Unknown escape sequences yield ``None``.
    """
    key_id = parse_key(data)
    if key_id is not None:
        return KeyEvent.from_key_id(key_id)
    if "\x1b" not in data and data.isprintable():
        return KeyEvent.char(data)
    return None
