"""StdinBuffer splits raw stdin chunks into complete key sequences.

A single ``read`` can return several keys at once, or stop in the middle of
an escape sequence. Without buffering, ``"\\x1b[A"`` split across two reads
would be seen as Escape followed by ``[A`` typed as text.
"""

from __future__ import annotations

import asyncio
from typing import Callable

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"


def _sequence_status(data: str) -> str:
    """Classify *data* as 'complete', 'incomplete' or 'not-escape'."""
    if not data.startswith(ESC):
        return "not-escape"
    if len(data) == 1:
        return "incomplete"

    introducer = data[1]
    if introducer == "[":
        # CSI: parameters then a final byte in 0x40..0x7E
        if len(data) < 3:
            return "incomplete"
        return "complete" if 0x40 <= ord(data[-1]) <= 0x7E else "incomplete"
    if introducer == "O":
        # SS3: exactly one byte follows
        return "complete" if len(data) >= 3 else "incomplete"
    if introducer in ("]", "P", "_"):
        # OSC / DCS / APC: terminated by BEL or ST
        if data.endswith("\x07") or data.endswith(f"{ESC}\\"):
            return "complete"
        return "incomplete"

    # Meta key: ESC followed by a single character
    return "complete"


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split accumulated *buffer* into complete sequences and a remainder."""
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue

        end = pos + 1
        while True:
            if end > len(buffer):
                return sequences, buffer[pos:]
            status = _sequence_status(buffer[pos:end])
            if status != "incomplete":
                break
            end += 1
        sequences.append(buffer[pos:end])
        pos = end

    return sequences, ""


class StdinBuffer:
    """Buffers stdin input and emits complete sequences.

    Bracketed pastes are collected whole and emitted through the paste
    callback. A dangling escape prefix is flushed as-is after *timeout*
    seconds so that a lone Escape key press is still delivered.
    """

    def __init__(self, *, timeout: float = 0.01) -> None:
        self._buffer: str = ""
        self._timeout: float = timeout
        self._timeout_handle: asyncio.TimerHandle | None = None
        self._paste_mode: bool = False
        self._paste_buffer: str = ""

        self._on_data: Callable[[str], None] | None = None
        self._on_paste: Callable[[str], None] | None = None

    def on_data(self, callback: Callable[[str], None]) -> None:
        """Set callback for complete sequences."""
        self._on_data = callback

    def on_paste(self, callback: Callable[[str], None]) -> None:
        """Set callback for paste content."""
        self._on_paste = callback

    def _emit_data(self, data: str) -> None:
        if self._on_data:
            self._on_data(data)

    def _emit_paste(self, data: str) -> None:
        if self._on_paste:
            self._on_paste(data)

    def process(self, data: str) -> None:
        """Feed input data into the buffer."""
        self._cancel_timeout()
        self._buffer += data

        if not self._paste_mode:
            start = self._buffer.find(BRACKETED_PASTE_START)
            if start == -1:
                self._emit_complete()
                return
            sequences, _ = _extract_complete_sequences(self._buffer[:start])
            for sequence in sequences:
                self._emit_data(sequence)
            self._buffer = self._buffer[start + len(BRACKETED_PASTE_START):]
            self._paste_mode = True

        self._paste_buffer += self._buffer
        self._buffer = ""
        end = self._paste_buffer.find(BRACKETED_PASTE_END)
        if end == -1:
            return

        content = self._paste_buffer[:end]
        remaining = self._paste_buffer[end + len(BRACKETED_PASTE_END):]
        self._paste_mode = False
        self._paste_buffer = ""
        self._emit_paste(content)
        if remaining:
            self.process(remaining)

    def _emit_complete(self) -> None:
        sequences, self._buffer = _extract_complete_sequences(self._buffer)
        for sequence in sequences:
            self._emit_data(sequence)

        if not self._buffer:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop - flush immediately
            for sequence in self.flush():
                self._emit_data(sequence)
            return
        self._timeout_handle = loop.call_later(self._timeout, self._flush_timeout)

    def _flush_timeout(self) -> None:
        self._timeout_handle = None
        for sequence in self.flush():
            self._emit_data(sequence)

    def _cancel_timeout(self) -> None:
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None

    def flush(self) -> list[str]:
        """Return and discard whatever is buffered, complete or not."""
        self._cancel_timeout()
        if not self._buffer:
            return []
        sequences = [self._buffer]
        self._buffer = ""
        return sequences

    def clear(self) -> None:
        self._cancel_timeout()
        self._buffer = ""
        self._paste_mode = False
        self._paste_buffer = ""

    def get_buffer(self) -> str:
        return self._buffer

    def destroy(self) -> None:
        self.clear()
