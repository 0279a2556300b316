"""Prompt line and candidate dropdown drawing.

The renderer never clears the screen and never uses absolute positions.
Every draw starts from the prompt line and leaves the terminal cursor back
on the prompt line at the caret column, so the number of dropdown rows just
written is the only thing it has to remember to get back.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

from tureng.tui.terminal import Terminal
from tureng.tui.text_buffer import TextBuffer
from tureng.tui.utils import plain, sgr, truncate_to_width, visible_width

PROMPT = "> "
MARKER = "↪"
LOADING_FRAMES = ("▁", "▂", "▃", "▄", "▅", "▆", "▇", "█", "▇", "▆", "▅", "▄", "▃", "▁")


@dataclass(frozen=True)
class PromptTheme:
    """Styling functions applied to the pieces of the prompt."""

    prompt: Callable[[str], str] = plain
    marker: Callable[[str], str] = plain
    selected: Callable[[str], str] = plain
    loader: Callable[[str], str] = plain

    @classmethod
    def for_terminal(cls, is_tty: bool) -> PromptTheme:
        """Colored theme for a terminal, plain text otherwise."""
        if not is_tty:
            return cls()
        return cls(
            prompt=sgr(32),
            marker=sgr(32),
            selected=sgr(30, 47),
            loader=sgr(2),
        )


class PromptRenderer:
    """Draws the prompt and up to ``popup_capacity`` candidate rows."""

    def __init__(
        self,
        terminal: Terminal,
        popup_capacity: int,
        theme: PromptTheme | None = None,
    ) -> None:
        self._terminal = terminal
        self._capacity = popup_capacity
        self._theme = theme or PromptTheme()
        self._rows = 0

    @property
    def rows(self) -> int:
        """Number of dropdown rows currently on screen."""
        return self._rows

    def begin(self, buffer: TextBuffer) -> None:
        """Reserve the dropdown area below the cursor and draw the prompt."""
        if self._capacity > 0:
            self._terminal.write("\n" * self._capacity)
            self._terminal.move_by(-self._capacity)
        self.draw_prompt(buffer)
        self._terminal.flush()

    def draw_prompt(self, buffer: TextBuffer, loading_frame: int | None = None) -> None:
        """Rewrite the prompt line and place the cursor at the caret."""
        term = self._terminal
        term.write("\r")
        term.clear_line()
        term.write(self._theme.prompt(PROMPT))
        term.write(buffer.render())
        if loading_frame is not None:
            frame = LOADING_FRAMES[loading_frame % len(LOADING_FRAMES)]
            term.write("  " + self._theme.loader(frame))
        term.write("\r")
        term.move_right(visible_width(PROMPT) + visible_width(buffer.before_cursor()))

    def draw_candidates(
        self,
        buffer: TextBuffer,
        candidates: Sequence[str],
        index: int,
        loading_frame: int | None = None,
    ) -> None:
        """Rewrite the dropdown below the prompt, then the prompt itself."""
        term = self._terminal
        term.write("\r\n")
        term.clear_from_cursor()

        # Wrapped rows would throw off the relative move back up
        width = max(term.columns - visible_width(MARKER) - 2, 1)
        shown = candidates[: self._capacity]
        for i, candidate in enumerate(shown):
            text = truncate_to_width(candidate, width)
            term.write(self._theme.marker(MARKER))
            if i == index:
                term.write(" " + self._theme.selected(text))
            else:
                term.write("  " + text)
            term.write("\r\n")

        term.move_by(-(len(shown) + 1))
        self._rows = len(shown)
        self.draw_prompt(buffer, loading_frame)

    def finish(self, buffer: TextBuffer) -> None:
        """Leave the prompt line as typed, erase the dropdown, end on a new line."""
        self.draw_prompt(buffer)
        self._terminal.write("\r\n")
        self._terminal.clear_from_cursor()
        self._rows = 0
        self._terminal.flush()
