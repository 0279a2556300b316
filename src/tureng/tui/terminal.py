"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages raw mode, bracketed paste and buffered output
via ANSI escape sequences. Only relative cursor motions are exposed; the
prompt never addresses absolute screen positions.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
import os
import sys
import termios
import tty
from typing import Callable, Protocol, TextIO

from tureng.errors import TerminalError
from tureng.tui.stdin_buffer import BRACKETED_PASTE_END, BRACKETED_PASTE_START, StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"

_CLEAR_LINE = "\x1b[2K"
_CLEAR_FROM_CURSOR = "\x1b[0J"
_CURSOR_UP_FMT = "\x1b[{}A"
_CURSOR_DOWN_FMT = "\x1b[{}B"
_CURSOR_RIGHT_FMT = "\x1b[{}C"

_READ_SIZE = 1024


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def start(self, on_input: Callable[[str], None]) -> None: ...

    def stop(self) -> None: ...

    def pause_input(self) -> None: ...

    def resume_input(self) -> None: ...

    def write(self, data: str) -> None: ...

    def flush(self) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def is_tty(self) -> bool: ...

    def move_by(self, lines: int) -> None: ...

    def move_right(self, columns: int) -> None: ...

    def clear_line(self) -> None: ...

    def clear_from_cursor(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by ``sys.stdin``/``sys.stdout``.

    Raw mode is managed with :mod:`tty` and :mod:`termios`; stdin is read
    through an ``asyncio`` reader callback, so :meth:`start` must be called
    from inside a running event loop. Output is queued by :meth:`write` and
    sent in one piece by :meth:`flush`; write errors propagate as
    :class:`OSError`.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._is_tty: bool = self._stdout.isatty()
        self._pending: list[str] = []
        self._input_handler: Callable[[str], None] | None = None
        self._stdin_buffer: StdinBuffer | None = None
        self._reader_active: bool = False
        self._original_termios: list | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._write_log_path: str = os.environ.get("TURENG_TUI_WRITE_LOG", "")

    # -- properties ---------------------------------------------------------

    @property
    def is_tty(self) -> bool:
        """Whether stdout was a terminal when this object was created."""
        return self._is_tty

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    # -- start / stop -------------------------------------------------------

    def start(self, on_input: Callable[[str], None]) -> None:
        """Enable raw mode and bracketed paste, and begin reading stdin.

        On failure the terminal is left in the mode it was found in.
        """
        self._input_handler = on_input
        self._loop = asyncio.get_running_loop()
        fd = self._stdin.fileno()

        try:
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd)
        except termios.error as exc:
            self._original_termios = None
            self._input_handler = None
            self._loop = None
            raise TerminalError(f"cannot enable raw mode: {exc}") from exc

        self._stdin_buffer = StdinBuffer(timeout=0.01)
        self._stdin_buffer.on_data(self._on_sequence)
        self._stdin_buffer.on_paste(self._on_paste)

        try:
            self.write(_BRACKETED_PASTE_ENABLE)
            self.flush()
            self.resume_input()
        except BaseException:
            # Half-started: put the terminal back before propagating
            self._pending.clear()
            self.pause_input()
            self._stdin_buffer.destroy()
            self._stdin_buffer = None
            self._restore_mode()
            self._input_handler = None
            self._loop = None
            raise
        logger.debug("terminal started (tty=%s, columns=%d)", self._is_tty, self.columns)

    def stop(self) -> None:
        """Restore terminal state and clean up all handlers."""
        self.pause_input()

        if self._stdin_buffer is not None:
            self._stdin_buffer.destroy()
            self._stdin_buffer = None

        try:
            self.write(_BRACKETED_PASTE_DISABLE)
            self.flush()
        finally:
            self._restore_mode()
            self._input_handler = None
            self._loop = None
        logger.debug("terminal stopped")

    def _restore_mode(self) -> None:
        if self._original_termios is None:
            return
        try:
            termios.tcsetattr(self._stdin.fileno(), termios.TCSADRAIN, self._original_termios)
        except termios.error as exc:
            raise TerminalError(f"cannot restore terminal mode: {exc}") from exc
        finally:
            self._original_termios = None

    # -- input flow control -------------------------------------------------

    def pause_input(self) -> None:
        """Stop reading stdin until :meth:`resume_input` is called."""
        if not self._reader_active or self._loop is None:
            return
        self._loop.remove_reader(self._stdin.fileno())
        self._reader_active = False

    def resume_input(self) -> None:
        """Register the stdin reader with the event loop."""
        if self._reader_active or self._loop is None:
            return
        self._loop.add_reader(self._stdin.fileno(), self._on_stdin_readable)
        self._reader_active = True

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Queue *data* for the next :meth:`flush`."""
        self._pending.append(data)

    def flush(self) -> None:
        """Send all queued output to stdout."""
        if not self._pending:
            return
        data = "".join(self._pending)
        self._pending.clear()
        self._stdout.write(data)
        self._stdout.flush()

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                logger.debug("cannot append to write log %s", self._write_log_path)

    # -- cursor / screen manipulation --------------------------------------

    def move_by(self, lines: int) -> None:
        """Move the cursor up (negative) or down (positive) by *lines*."""
        if lines < 0:
            self.write(_CURSOR_UP_FMT.format(-lines))
        elif lines > 0:
            self.write(_CURSOR_DOWN_FMT.format(lines))

    def move_right(self, columns: int) -> None:
        # CSI 0 C moves one column on most terminals
        if columns > 0:
            self.write(_CURSOR_RIGHT_FMT.format(columns))

    def clear_line(self) -> None:
        self.write(_CLEAR_LINE)

    def clear_from_cursor(self) -> None:
        self.write(_CLEAR_FROM_CURSOR)

    # -- private: stdin reading --------------------------------------------

    def _on_stdin_readable(self) -> None:
        """Callback invoked by the event loop when stdin has data."""
        try:
            raw = os.read(self._stdin.fileno(), _READ_SIZE)
        except BlockingIOError:
            return
        if not raw:
            # EOF; stop polling a closed descriptor
            self.pause_input()
            return

        # Multi-byte characters may be split across reads
        data = self._decoder.decode(raw)
        if self._stdin_buffer is not None:
            self._stdin_buffer.process(data)

    def _on_sequence(self, data: str) -> None:
        if self._input_handler is not None:
            self._input_handler(data)

    def _on_paste(self, data: str) -> None:
        # Re-wrap with bracketed paste markers so the prompt can tell pastes apart
        if self._input_handler is not None:
            self._input_handler(BRACKETED_PASTE_START + data + BRACKETED_PASTE_END)
