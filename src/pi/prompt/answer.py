"""The outcome of one prompt invocation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

from pi.prompt.errors import OperationCanceledError, OperationInterruptedError

T = TypeVar("T")

AnswerStatus = Literal["submitted", "canceled", "interrupted"]


@dataclass(frozen=True)
class Answer(Generic[T]):
    """A submitted value, or the marker of a canceled/interrupted prompt."""

    status: AnswerStatus
    value: T | None = None

    @classmethod
    def submitted(cls, value: T) -> Answer[T]:
        return cls("submitted", value)

    @classmethod
    def canceled(cls) -> Answer[T]:
        return cls("canceled")

    @classmethod
    def interrupted(cls) -> Answer[T]:
        return cls("interrupted")

    @property
    def is_submitted(self) -> bool:
        return self.status == "submitted"

    def unwrap(self) -> T:
        """Return the submitted value or raise the matching error."""
        if self.status == "canceled":
            raise OperationCanceledError()
        if self.status == "interrupted":
            raise OperationInterruptedError()
        return self.value  # type: ignore[return-value]
