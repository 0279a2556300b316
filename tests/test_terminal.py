"""Tests for tureng.tui.terminal.ProcessTerminal on a pseudo-terminal."""

from __future__ import annotations

import os
import pty
import termios

import pytest

from tureng.tui.prompt import InteractivePrompt
from tureng.tui.terminal import ProcessTerminal


class FdStream:
    """Minimal stdin stand-in exposing a file descriptor."""

    def __init__(self, fd: int) -> None:
        self._fd = fd

    def fileno(self) -> int:
        return self._fd


class BrokenStdout:
    """stdout whose writes always fail."""

    def isatty(self) -> bool:
        return True

    def fileno(self) -> int:
        raise OSError("no descriptor")

    def write(self, data: str) -> int:
        raise OSError("write failed")

    def flush(self) -> None:
        pass


class RecordingStdout(BrokenStdout):
    def __init__(self) -> None:
        self.data: list[str] = []

    def write(self, data: str) -> int:
        self.data.append(data)
        return len(data)


@pytest.fixture
def pty_fd():
    master, slave = pty.openpty()
    try:
        yield slave
    finally:
        os.close(slave)
        os.close(master)


async def _noop_autocomplete(query: str) -> list[str]:
    return []


class TestStartFailure:
    @pytest.mark.asyncio
    async def test_failed_start_restores_mode(self, pty_fd: int) -> None:
        before = termios.tcgetattr(pty_fd)
        term = ProcessTerminal(stdin=FdStream(pty_fd), stdout=BrokenStdout())
        with pytest.raises(OSError):
            term.start(lambda data: None)
        assert termios.tcgetattr(pty_fd) == before

    @pytest.mark.asyncio
    async def test_prompt_write_error_restores_mode(self, pty_fd: int) -> None:
        before = termios.tcgetattr(pty_fd)
        term = ProcessTerminal(stdin=FdStream(pty_fd), stdout=BrokenStdout())
        prompt = InteractivePrompt(term, _noop_autocomplete)
        with pytest.raises(OSError):
            await prompt.run()
        assert termios.tcgetattr(pty_fd) == before


class TestStartStop:
    @pytest.mark.asyncio
    async def test_raw_mode_while_started(self, pty_fd: int) -> None:
        before = termios.tcgetattr(pty_fd)
        stdout = RecordingStdout()
        term = ProcessTerminal(stdin=FdStream(pty_fd), stdout=stdout)
        term.start(lambda data: None)
        try:
            lflag = termios.tcgetattr(pty_fd)[3]
            assert not lflag & termios.ICANON
            assert not lflag & termios.ECHO
        finally:
            term.stop()
        assert termios.tcgetattr(pty_fd) == before
        assert "".join(stdout.data) == "\x1b[?2004h\x1b[?2004l"
