"""StdinBuffer splits raw terminal input into complete key sequences.

Reads from a raw-mode terminal can deliver several key presses in one chunk
or a single escape sequence split across chunks. The buffer holds partial
sequences until they are complete and reports bracketed pastes as a single
chunk.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

SequenceStatus = Literal["complete", "incomplete", "not-escape"]


@dataclass(frozen=True)
class InputChunk:
    """One key sequence, or the full content of a bracketed paste."""

    data: str
    paste: bool = False


def _is_complete_sequence(data: str) -> SequenceStatus:
    """Check if *data* is a complete escape sequence or needs more input."""
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    introducer = data[1]

    if introducer == "[":
        return _is_complete_csi_sequence(data)

    if introducer in ("]", "P", "_"):
        # OSC / DCS / APC run until BEL or ST
        if len(data) > 2 and (data.endswith(f"{ESC}\\") or data.endswith("\x07")):
            return "complete"
        return "incomplete"

    if introducer == "O":
        # SS3: ESC O [modifier digit] final
        if len(data) < 3:
            return "incomplete"
        if len(data) == 3 and data[2].isdigit():
            return "incomplete"
        return "complete"

    # Meta key: ESC followed by one character
    return "complete"


def _is_complete_csi_sequence(data: str) -> SequenceStatus:
    if len(data) < 3:
        return "incomplete"

    payload = data[2:]

    # X10 mouse reports carry three raw bytes after "M"
    if payload.startswith("M"):
        return "complete" if len(data) >= 6 else "incomplete"

    last = ord(payload[-1])
    # rxvt uses "^" / "$" terminators for modified keys
    if 0x40 <= last <= 0x7E and (len(payload) > 1 or payload[-1] not in "[<"):
        if payload.startswith("<") and payload[-1] not in "Mm":
            return "incomplete"
        return "complete"

    return "incomplete"


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences.

    Returns ``(sequences, remainder)`` where *remainder* is an escape
    sequence still waiting for more bytes.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]

        if not remaining.startswith(ESC):
            sequences.append(remaining[0])
            pos += 1
            continue

        end = 1
        while end <= len(remaining):
            if _is_complete_sequence(remaining[:end]) != "incomplete":
                break
            end += 1
        else:
            return sequences, remaining

        sequences.append(remaining[:end])
        pos += end

    return sequences, ""


class StdinBuffer:
    """Buffers raw input and hands out complete chunks.

    ``process`` returns every chunk that became complete. A lone ``ESC``
    (or any other prefix) stays pending until more data arrives or the
    caller decides the input has gone quiet and calls ``flush``.
    """

    def __init__(self) -> None:
        self._buffer: str = ""
        self._paste_mode: bool = False
        self._paste_buffer: str = ""

    @property
    def pending(self) -> bool:
        """``True`` while a partial sequence or paste is being held."""
        return bool(self._buffer) or self._paste_mode

    def process(self, data: str) -> list[InputChunk]:
        """Feed *data* into the buffer and return completed chunks."""
        chunks: list[InputChunk] = []

        if self._paste_mode:
            self._paste_buffer += data
            end_index = self._paste_buffer.find(BRACKETED_PASTE_END)
            if end_index == -1:
                return chunks
            chunks.append(InputChunk(self._paste_buffer[:end_index], paste=True))
            remaining = self._paste_buffer[end_index + len(BRACKETED_PASTE_END):]
            self._paste_mode = False
            self._paste_buffer = ""
            if remaining:
                chunks.extend(self.process(remaining))
            return chunks

        self._buffer += data

        start_index = self._buffer.find(BRACKETED_PASTE_START)
        if start_index != -1:
            sequences, _ = _extract_complete_sequences(self._buffer[:start_index])
            chunks.extend(InputChunk(seq) for seq in sequences)
            after = self._buffer[start_index + len(BRACKETED_PASTE_START):]
            self._buffer = ""
            self._paste_mode = True
            chunks.extend(self.process(after))
            return chunks

        sequences, remainder = _extract_complete_sequences(self._buffer)
        self._buffer = remainder
        chunks.extend(InputChunk(seq) for seq in sequences)
        return chunks

    def flush(self) -> list[InputChunk]:
        """Emit whatever partial sequence is held as-is."""
        if not self._buffer:
            return []
        chunk = InputChunk(self._buffer)
        self._buffer = ""
        return [chunk]

    def clear(self) -> None:
        self._buffer = ""
        self._paste_mode = False
        self._paste_buffer = ""
