"""Validation results, built-in validators and the submit pipeline.

A validator is any callable ``validator(value) -> Validation``. Returning
``Validation.invalid(...)`` means the user can fix the input: the prompt
shows the message and keeps running. Raising an exception is an
operational failure: the prompt stops and the exception propagates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Sequence, TypeVar

from pi.prompt.utils import grapheme_length

T = TypeVar("T")

Validator = Callable[[Any], "Validation"]
Parser = Callable[[str], Any]


@dataclass(frozen=True)
class Validation:
    """Outcome of a validator; ``message=None`` means the default message."""

    is_valid: bool
    message: str | None = None

    @classmethod
    def valid(cls) -> Validation:
        return cls(True)

    @classmethod
    def invalid(cls, message: str | None = None) -> Validation:
        return cls(False, message)


def _length(value: Any) -> int:
    if isinstance(value, str):
        return grapheme_length(value)
    return len(value)


# ---------------------------------------------------------------------------
# Built-in validators
# ---------------------------------------------------------------------------


class ValueRequiredValidator:
    """Rejects empty strings and empty selections."""

    def __init__(self, message: str = "A response is required.") -> None:
        self.message = message

    def __call__(self, value: Any) -> Validation:
        if _length(value) == 0:
            return Validation.invalid(self.message)
        return Validation.valid()


class MaxLengthValidator:
    """Accepts values with at most *limit* characters (or items)."""

    def __init__(self, limit: int, message: str | None = None) -> None:
        self.limit = limit
        self.message = message or f"The length of the response should be at most {limit}"

    def __call__(self, value: Any) -> Validation:
        if _length(value) > self.limit:
            return Validation.invalid(self.message)
        return Validation.valid()


class MinLengthValidator:
    """Accepts values with at least *limit* characters (or items)."""

    def __init__(self, limit: int, message: str | None = None) -> None:
        self.limit = limit
        self.message = message or f"The length of the response should be at least {limit}"

    def __call__(self, value: Any) -> Validation:
        if _length(value) < self.limit:
            return Validation.invalid(self.message)
        return Validation.valid()


class ExactLengthValidator:
    """Accepts values with exactly *length* characters (or items)."""

    def __init__(self, length: int, message: str | None = None) -> None:
        self.length = length
        self.message = message or f"The length of the response should be {length}"

    def __call__(self, value: Any) -> Validation:
        if _length(value) != self.length:
            return Validation.invalid(self.message)
        return Validation.valid()


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PipelineResult(Generic[T]):
    """Parsed value (when parsing succeeded) plus the validation outcome."""

    validation: Validation
    value: T | None = None

    @property
    def is_valid(self) -> bool:
        return self.validation.is_valid


def run_validators(value: Any, validators: Iterable[Validator]) -> Validation:
    """Run *validators* in order; the first invalid result wins."""
    for validator in validators:
        result = validator(value)
        if not result.is_valid:
            return result
    return Validation.valid()


def parse_and_validate(
    text: str,
    parser: Parser | None,
    validators: Sequence[Validator],
    error_message: str | None = None,
) -> PipelineResult[Any]:
    """Parse *text* (when a parser is given), then validate the result.

    A parser signals unparsable input by raising ``ValueError``; that yields
    an invalid result carrying *error_message* and skips the validators.
    """
    if parser is None:
        value: Any = text
    else:
        try:
            value = parser(text)
        except ValueError:
            return PipelineResult(Validation.invalid(error_message))

    validation = run_validators(value, validators)
    if not validation.is_valid:
        return PipelineResult(validation)
    return PipelineResult(validation, value)
