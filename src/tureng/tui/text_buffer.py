"""Editable single-line text addressed by Unicode codepoint."""

from __future__ import annotations

from tureng.tui.utils import is_whitespace_char


class TextBuffer:
    """Codepoint-addressed editable string with a cursor.

    Every index is a codepoint index: ``"ğ"`` or ``"世"`` is one edit unit no
    matter how many bytes its UTF-8 encoding takes. The positional methods
    (``insert``, ``remove``, ``delete_word_back``) trust the caller to pass
    valid indices; the cursor helpers keep ``0 <= cursor <= len(buffer)``.
    """

    def __init__(self, text: str = "") -> None:
        self._chars: list[str] = list(text)
        self.cursor: int = len(self._chars)

    def __len__(self) -> int:
        return len(self._chars)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"TextBuffer({self.render()!r}, cursor={self.cursor})"

    # -- positional operations ---------------------------------------------

    def insert(self, pos: int, char: str) -> None:
        """Insert the single codepoint *char* at index *pos*."""
        self._chars.insert(pos, char)

    def remove(self, pos: int) -> None:
        """Remove the codepoint at index *pos*."""
        del self._chars[pos]

    def delete_word_back(self, start: int) -> int:
        """Delete the word ending at *start* and return the new cursor.

        Whitespace directly before *start* goes first, then the run of
        non-whitespace before it, like readline's ``unix-word-rubout``.
        """
        pos = start
        while pos > 0 and is_whitespace_char(self._chars[pos - 1]):
            pos -= 1
        while pos > 0 and not is_whitespace_char(self._chars[pos - 1]):
            pos -= 1
        del self._chars[pos:start]
        return pos

    def trim_view(self) -> str:
        """Return the content without leading and trailing whitespace."""
        start = 0
        end = len(self._chars)
        while start < end and is_whitespace_char(self._chars[start]):
            start += 1
        while end > start and is_whitespace_char(self._chars[end - 1]):
            end -= 1
        return "".join(self._chars[start:end])

    def render(self) -> str:
        return "".join(self._chars)

    def fingerprint(self) -> int:
        """Cheap content fingerprint; equal contents give equal values."""
        return hash(self.render())

    def before_cursor(self) -> str:
        return "".join(self._chars[: self.cursor])

    # -- cursor editing -----------------------------------------------------

    def insert_text(self, text: str) -> None:
        for ch in text:
            self.insert(self.cursor, ch)
            self.cursor += 1

    def backspace(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1
            self.remove(self.cursor)

    def delete_forward(self) -> None:
        if self.cursor < len(self._chars):
            self.remove(self.cursor)

    def delete_word_backward(self) -> None:
        self.cursor = self.delete_word_back(self.cursor)

    def delete_to_start(self) -> None:
        del self._chars[: self.cursor]
        self.cursor = 0

    def move_left(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def move_right(self) -> None:
        if self.cursor < len(self._chars):
            self.cursor += 1

    def move_home(self) -> None:
        self.cursor = 0

    def move_end(self) -> None:
        self.cursor = len(self._chars)
