"""Default parsers for typed prompts.

Parsers take the raw input text and return a value, raising ``ValueError``
when the text cannot be parsed.
"""

from __future__ import annotations

_TRUE_WORDS = ("y", "yes")
_FALSE_WORDS = ("n", "no")


def parse_bool(text: str) -> bool:
    """Case-insensitive ``y``/``yes`` -> ``True``, ``n``/``no`` -> ``False``."""
    if len(text) > 3:
        raise ValueError(f"not a yes/no answer: {text!r}")

    word = text.lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"not a yes/no answer: {text!r}")


def parse_int(text: str) -> int:
    return int(text.strip())


def parse_float(text: str) -> float:
    return float(text.strip())
