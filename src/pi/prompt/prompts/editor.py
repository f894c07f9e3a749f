"""Editor prompt: long-form text collected through an external editor."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
import tempfile
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Sequence

from pi.prompt.answer import Answer
from pi.prompt.formatter import format_editor_answer
from pi.prompt.frame import FrameBuilder
from pi.prompt.keys import KeyEvent
from pi.prompt.prompts.base import Prompt, PromptConfig
from pi.prompt.render_config import RenderConfig
from pi.prompt.terminal import Terminal
from pi.prompt.validator import Validator, run_validators

logger = logging.getLogger(__name__)

DEFAULT_FILE_EXTENSION = ".txt"


def default_editor_command() -> list[str]:
    """Editor command line from ``$VISUAL`` / ``$EDITOR``, else a platform default."""
    for var in ("VISUAL", "EDITOR"):
        value = os.environ.get(var, "").strip()
        if value:
            return shlex.split(value)
    return ["notepad" if sys.platform == "win32" else "nano"]


class ExternalEditor:
    """Runs an editor command on a file and waits for it to exit."""

    def __init__(
        self,
        command: str | None = None,
        args: Sequence[str] = (),
    ) -> None:
        base = [command] if command else default_editor_command()
        self.argv = base + list(args)

    @property
    def name(self) -> str:
        return Path(self.argv[0]).name

    def edit(self, path: str) -> None:
        logger.debug("spawning editor: %s %s", " ".join(self.argv), path)
        result = subprocess.run([*self.argv, path], check=False)
        if result.returncode != 0:
            logger.warning("editor %s exited with status %d", self.name, result.returncode)
        else:
            logger.debug("editor %s exited", self.name)


@dataclass(frozen=True)
class Editor(PromptConfig[str]):
    """Configuration of an external-editor prompt."""

    message: str
    editor_command: str | None = None
    editor_command_args: tuple[str, ...] = ()
    file_extension: str = DEFAULT_FILE_EXTENSION
    predefined_text: str = ""
    help_message: str | None = None
    validators: tuple[Validator, ...] = ()
    formatter: Callable[[str], str] = format_editor_answer
    render_config: RenderConfig | None = None
    editor: ExternalEditor | None = None

    def with_editor_command(self, command: str) -> Editor:
        return replace(self, editor_command=command)

    def with_args(self, *args: str) -> Editor:
        return replace(self, editor_command_args=tuple(args))

    def with_file_extension(self, extension: str) -> Editor:
        return replace(self, file_extension=extension)

    def with_predefined_text(self, text: str) -> Editor:
        return replace(self, predefined_text=text)

    def with_validator(self, validator: Validator) -> Editor:
        return replace(self, validators=self.validators + (validator,))

    def with_formatter(self, formatter: Callable[[str], str]) -> Editor:
        return replace(self, formatter=formatter)

    def create_prompt(self) -> EditorPrompt:
        return EditorPrompt(self)


class EditorPrompt(Prompt[str]):
    """State machine for ``Editor``.

    The buffer starts as the predefined text and is replaced by whatever
    the editor leaves in the temporary file.
    """

    def __init__(self, config: Editor) -> None:
        super().__init__(
            config.message,
            help_message=config.help_message,
            render_config=config.render_config,
        )
        self._config = config
        self.editor = config.editor or ExternalEditor(
            config.editor_command, config.editor_command_args
        )
        self.buffer = config.predefined_text
        self._terminal: Terminal | None = None

    def setup(self, terminal: Terminal) -> None:
        self._terminal = terminal

    def handle(self, event: KeyEvent) -> bool:
        if self.keybindings.matches(event, "openEditor"):
            self.open_editor()
            return True
        return False

    def open_editor(self) -> None:
        with tempfile.NamedTemporaryFile(
            mode="w",
            prefix="tmp-",
            suffix=self._config.file_extension,
            delete=False,
            encoding="utf-8",
        ) as f:
            f.write(self.buffer)
            path = f.name

        try:
            # The editor needs a cooked terminal.
            if self._terminal is not None:
                self._terminal.stop()
            try:
                self.editor.edit(path)
            finally:
                if self._terminal is not None:
                    self._terminal.start()
            self.buffer = Path(path).read_text(encoding="utf-8").rstrip("\r\n")
        finally:
            os.unlink(path)

    def submit(self) -> Answer[str] | None:
        validation = run_validators(self.buffer, self._config.validators)
        if not validation.is_valid:
            self.reject(validation)
            return None
        return Answer.submitted(self.buffer)

    def format_answer(self, value: str) -> str:
        return self._config.formatter(value)

    def render(self, frame: FrameBuilder) -> None:
        hint = f"[(e) to open {self.editor.name}, (enter) to submit]"
        frame.prompt_line(
            self.message, content=self.render_config.editor_prompt(hint)
        )
        self.render_error(frame)
        self.render_help(frame)
