"""Exceptions raised by prompts.

Input the user can correct (a failed validator, an unparsable number) is
never raised: the prompt shows the message and keeps running. Everything
here ends the prompt.
"""

from __future__ import annotations


class PromptError(Exception):
    """Base class for all prompt errors."""


class NotTTYError(PromptError):
    """The input device is not a terminal."""


class InvalidConfigurationError(PromptError, ValueError):
    """The prompt configuration is unusable; raised before raw mode starts."""


class PromptIOError(PromptError):
    """Reading from or writing to the terminal failed."""


class OperationCanceledError(PromptError):
    """The user pressed Esc."""

    def __init__(self, message: str = "Operation was canceled by the user") -> None:
        super().__init__(message)


class OperationInterruptedError(PromptError):
    """The user pressed Ctrl-C (or sent EOF)."""

    def __init__(self, message: str = "Operation was interrupted by the user") -> None:
        super().__init__(message)
