"""Event loop that drives one prompt on a terminal.

The loop blocks on the next key, lets the prompt react, and redraws after
every accepted key until the prompt is submitted, canceled or interrupted.
Terminal mode and cursor visibility are restored on every way out,
including exceptions raised by caller-supplied callbacks.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from pi.prompt.answer import Answer
from pi.prompt.errors import PromptIOError
from pi.prompt.renderer import Renderer
from pi.prompt.terminal import Terminal

if TYPE_CHECKING:
    from pi.prompt.prompts.base import Prompt

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_prompt(prompt: Prompt[T], terminal: Terminal) -> Answer[T]:
    """Run *prompt* until it produces an answer.

    The prompt object must already be constructed, which is where invalid
    configuration is rejected, so raw mode is never entered for it.
    """
    name = type(prompt).__name__
    renderer = Renderer(terminal)

    try:
        terminal.start()
    except OSError as exc:
        raise PromptIOError(f"could not enter raw mode: {exc}") from exc

    logger.debug("%s started", name)
    try:
        return _loop(prompt, terminal, renderer)
    except OSError as exc:
        raise PromptIOError(str(exc)) from exc
    finally:
        try:
            renderer.release()
        finally:
            terminal.stop()


def _loop(prompt: Prompt[T], terminal: Terminal, renderer: Renderer) -> Answer[T]:
    name = type(prompt).__name__
    prompt.setup(terminal)
    needs_redraw = True

    while True:
        if needs_redraw:
            renderer.render(prompt.frame())
            needs_redraw = False

        event = terminal.read_key()
        action = prompt.action_for(event)

        if action == "interrupt":
            logger.debug("%s interrupted", name)
            return Answer.interrupted()

        if action == "cancel":
            if not prompt.pre_cancel():
                needs_redraw = True
                continue
            renderer.render_final(prompt.canceled_frame())
            logger.debug("%s canceled", name)
            return Answer.canceled()

        if action == "submit":
            answer = prompt.submit()
            if answer is None:
                needs_redraw = True
                continue
            renderer.render_final(prompt.answered_frame(answer.value))
            logger.debug("%s submitted", name)
            return answer

        if prompt.error is not None:
            prompt.error = None
            needs_redraw = True
        if prompt.handle(event):
            needs_redraw = True
