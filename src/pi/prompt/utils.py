"""Terminal text utilities: grapheme segmentation and width measurement.

Provides functions for measuring the visible terminal width of styled text,
counting the terminal rows a line occupies once wrapped, and classifying
characters for word-wise cursor motion.
"""

from __future__ import annotations

import math
import re
import unicodedata

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Grapheme segmentation
# ---------------------------------------------------------------------------


class _GraphemeSegmenter:
    """Thin wrapper around ``grapheme.graphemes``."""

    @staticmethod
    def segment(text: str) -> list[str]:
        return list(grapheme.graphemes(text))


def get_segmenter() -> _GraphemeSegmenter:
    """Return a grapheme segmenter instance."""
    return _GraphemeSegmenter()


def grapheme_length(text: str) -> int:
    """Number of grapheme clusters in *text*."""
    return grapheme.length(text)


# ---------------------------------------------------------------------------
# Escape sequence patterns
# ---------------------------------------------------------------------------

# CSI (any final byte), OSC and APC sequences are all zero-width.
_STRIP_RE = re.compile(
    r"\x1b\[[0-9;?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"
)

_PUNCTUATION_REGEX = re.compile(r"[(){}\[\]<>.,;:'\"!?\+\-=*/\\|&%\^$#@~`]")


def strip_ansi(text: str) -> str:
    """Remove terminal escape sequences from *text*."""
    return _STRIP_RE.sub("", text)


# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Control characters and lone marks are zero-width, emoji sequences
    (VS16, ZWJ, skin tones, regional indicators) are two columns, anything
    else is measured by ``wcwidth`` on its first codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first = g[0]
    if ord(first) >= 0x1F000:
        return 2

    category = unicodedata.category(first)
    if category.startswith("M") or category == "Cf":
        return 0

    return max(_wcwidth.wcwidth(first), 0)


# ---------------------------------------------------------------------------
# Width measurement
# ---------------------------------------------------------------------------


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    * Escape sequences count as zero columns.
    * Tabs count as 3 columns.
    * Pure printable ASCII takes a fast path; other strings are measured
      per grapheme cluster and cached.
    """
    if not text:
        return 0

    stripped = _STRIP_RE.sub("", text)
    if not stripped:
        return 0

    stripped = stripped.replace("\t", "   ")

    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)


def count_rows(line: str, width: int) -> int:
    """Number of terminal rows *line* occupies when wrapped at *width*.

    An empty line still occupies one row.
    """
    if width <= 0:
        return 1
    return max(1, math.ceil(visible_width(line) / width))


# ---------------------------------------------------------------------------
# Character classes
# ---------------------------------------------------------------------------


def is_whitespace_char(char: str) -> bool:
    """Return ``True`` if *char* is a whitespace character."""
    return char in (" ", "\t", "\n", "\r", "\f", "\v")


def is_punctuation_char(char: str) -> bool:
    """Return ``True`` if *char* is a punctuation character."""
    return bool(_PUNCTUATION_REGEX.match(char))


def is_control_text(text: str) -> bool:
    """Return ``True`` if *text* contains C0/C1 control characters."""
    return any(
        ord(ch) < 32 or ord(ch) == 0x7F or 0x80 <= ord(ch) <= 0x9F
        for ch in text
    )
