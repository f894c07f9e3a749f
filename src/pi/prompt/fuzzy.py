"""Scorers for filtering option lists.

A scorer is called as ``scorer(filter_text, value, label, index)`` and
returns an ``int`` score (higher is better) or ``None`` to hide the option.

``fuzzy_scorer`` matches when every query character appears in order in the
label (not necessarily consecutive), rewarding consecutive runs and matches
at word boundaries. ``contains_scorer`` is a plain case-insensitive
substring predicate.
"""

from __future__ import annotations

import re
from typing import Any, Callable

Scorer = Callable[[str, Any, str, int], int | None]

_WORD_BOUNDARY_RE = re.compile(r"[\s\-_./:]")
_ALPHA_NUM_RE = re.compile(r"^(?P<letters>[a-z]+)(?P<digits>[0-9]+)$")
_NUM_ALPHA_RE = re.compile(r"^(?P<digits>[0-9]+)(?P<letters>[a-z]+)$")

# Penalties are fractional; scale before rounding to an int score.
_SCORE_SCALE = 10


def _penalty(query: str, text: str) -> float | None:
    """Penalty of matching lowercase *query* in lowercase *text*; lower is better."""
    if not query:
        return 0.0
    if len(query) > len(text):
        return None

    query_index = 0
    penalty = 0.0
    last_match = -1
    consecutive = 0

    for i, ch in enumerate(text):
        if query_index >= len(query):
            break
        if ch != query[query_index]:
            continue

        if last_match == i - 1:
            consecutive += 1
            penalty -= consecutive * 5
        else:
            consecutive = 0
            if last_match >= 0:
                penalty += (i - last_match - 1) * 2

        if i == 0 or _WORD_BOUNDARY_RE.match(text[i - 1]):
            penalty -= 10

        penalty += i * 0.1
        last_match = i
        query_index += 1

    if query_index < len(query):
        return None
    return penalty


def fuzzy_score(query: str, text: str) -> int | None:
    """Score *query* against *text*, or ``None`` when it does not match.

    ``"abc12"`` also matches ``"12abc"`` (and vice versa), at a small cost.
    """
    query = query.lower()
    text = text.lower()

    penalty = _penalty(query, text)
    if penalty is None:
        swapped = ""
        alpha_numeric = _ALPHA_NUM_RE.match(query)
        numeric_alpha = _NUM_ALPHA_RE.match(query)
        if alpha_numeric:
            swapped = alpha_numeric.group("digits") + alpha_numeric.group("letters")
        elif numeric_alpha:
            swapped = numeric_alpha.group("letters") + numeric_alpha.group("digits")
        if swapped:
            swapped_penalty = _penalty(swapped, text)
            if swapped_penalty is not None:
                penalty = swapped_penalty + 5

    if penalty is None:
        return None
    return -round(penalty * _SCORE_SCALE)


def fuzzy_scorer(filter_text: str, value: Any, label: str, index: int) -> int | None:
    """Default ranking scorer; whitespace-separated tokens must all match."""
    tokens = filter_text.split()
    if not tokens:
        return 0

    total = 0
    for token in tokens:
        score = fuzzy_score(token, label)
        if score is None:
            return None
        total += score
    return total


def contains_scorer(filter_text: str, value: Any, label: str, index: int) -> int | None:
    """Include options whose label contains the filter text (case-insensitive)."""
    if filter_text.lower() in label.lower():
        return 0
    return None
