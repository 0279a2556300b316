"""In-memory stand-in for ``tureng.tui.terminal.Terminal``.

Writes are queued until ``flush`` like on a real terminal, so tests see
exactly what the prompt chose to send. Keys are injected with
``simulate_input``.
"""

from __future__ import annotations

from typing import Callable


class VirtualTerminal:
    """Terminal double recording flushed output and input flow control.

    Parameters
    ----------
    columns:
        Number of terminal columns (width).
    is_tty:
        Value reported by ``is_tty``.
    """

    def __init__(self, columns: int = 80, is_tty: bool = False) -> None:
        self._columns = columns
        self._is_tty = is_tty
        self._buffer: list[str] = []
        self._pending: list[str] = []
        self._input_handler: Callable[[str], None] | None = None
        self.started = False
        self.stopped = False
        self.input_paused = False
        self.pause_count = 0
        self.resume_count = 0
        self.flush_count = 0

    # -- Terminal protocol: properties --------------------------------------

    @property
    def columns(self) -> int:
        return self._columns

    @columns.setter
    def columns(self, value: int) -> None:
        self._columns = value

    @property
    def is_tty(self) -> bool:
        return self._is_tty

    # -- Terminal protocol: lifecycle ---------------------------------------

    def start(self, on_input: Callable[[str], None]) -> None:
        self._input_handler = on_input
        self.started = True

    def stop(self) -> None:
        self.stopped = True
        self._input_handler = None

    def pause_input(self) -> None:
        self.input_paused = True
        self.pause_count += 1

    def resume_input(self) -> None:
        self.input_paused = False
        self.resume_count += 1

    # -- Terminal protocol: output ------------------------------------------

    def write(self, data: str) -> None:
        """Queue *data* until the next ``flush``."""
        self._pending.append(data)

    def flush(self) -> None:
        self._buffer.extend(self._pending)
        self._pending.clear()
        self.flush_count += 1

    # -- Terminal protocol: cursor/screen manipulation ----------------------

    def move_by(self, lines: int) -> None:
        if lines < 0:
            self.write(f"\x1b[{-lines}A")
        elif lines > 0:
            self.write(f"\x1b[{lines}B")

    def move_right(self, columns: int) -> None:
        if columns > 0:
            self.write(f"\x1b[{columns}C")

    def clear_line(self) -> None:
        self.write("\x1b[2K")

    def clear_from_cursor(self) -> None:
        self.write("\x1b[0J")

    # -- Test helpers -------------------------------------------------------

    @property
    def output(self) -> str:
        """Return everything flushed to the terminal as a single string."""
        return "".join(self._buffer)

    @property
    def unflushed(self) -> str:
        return "".join(self._pending)

    def clear_buffer(self) -> None:
        self._buffer.clear()

    def simulate_input(self, data: str) -> None:
        """Deliver *data* as one key to the prompt; ``start`` must have run."""
        if self._input_handler is None:
            raise RuntimeError("terminal not started")
        self._input_handler(data)
