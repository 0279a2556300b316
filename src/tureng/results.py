"""Plain-text tables of translation results."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable

from tureng.api.types import TranslationResult
from tureng.tui.utils import plain, sgr, visible_width

INPUT = "Input"
TRANSLATION = "Translation"
CATEGORY = "Category"
TERM_TYPE = "Term Type"

_CATEGORY_WIDTH = 16
_TERM_TYPE_WIDTH = 11
_GAP = "   "


@dataclass(frozen=True)
class ResultTheme:
    """Colors of the table pieces."""

    header: Callable[[str], str] = plain
    term_a: Callable[[str], str] = plain
    term_b: Callable[[str], str] = plain
    detail: Callable[[str], str] = plain

    @classmethod
    def for_terminal(cls, is_tty: bool) -> ResultTheme:
        if not is_tty:
            return cls()
        return cls(header=sgr(31), term_a=sgr(35), term_b=sgr(32), detail=sgr(33))


def _center(text: str, width: int) -> str:
    """Center *text* in *width* columns; the odd column goes to the right."""
    pad = max(width - visible_width(text), 0)
    left = pad // 2
    return " " * left + text + " " * (pad - left)


def _odd(width: int) -> int:
    return (width // 2) * 2 + 1


def format_results(
    results: Iterable[TranslationResult],
    swap: bool = False,
    theme: ResultTheme | None = None,
) -> str:
    """Render *results* as a boxed-header table.

    With *swap* each row is read from its B side, which is how the reverse
    direction of a lookup is shown. A missing term type prints as ``null``.
    """
    theme = theme or ResultTheme()
    rows = [r.swapped() if swap else r for r in results]

    w1 = max([visible_width(INPUT)] + [visible_width(r.term_a) for r in rows])
    w2 = max([visible_width(TRANSLATION)] + [visible_width(r.term_b) for r in rows])
    w1, w2 = _odd(w1), _odd(w2)

    def boxed(title: str, width: int) -> str:
        pad = max(width - visible_width(title), 0)
        left = pad // 2
        return "┌" + "─" * left + theme.header(title) + "─" * (pad - left) + "┐"

    lines = [
        _GAP.join(
            [
                boxed(INPUT, w1),
                boxed(TRANSLATION, w2),
                boxed(CATEGORY, _CATEGORY_WIDTH),
                boxed(TERM_TYPE, _TERM_TYPE_WIDTH),
            ]
        ),
        "",
    ]
    for r in rows:
        cells = [
            (theme.term_a, r.term_a, w1 + 2),
            (theme.term_b, r.term_b, w2 + 2),
            (theme.detail, r.category_text_b, _CATEGORY_WIDTH + 2),
            (theme.detail, r.term_type_text_b or "null", _TERM_TYPE_WIDTH + 3),
        ]
        lines.append(_GAP.join(_center(style(text), width) for style, text, width in cells))
    return "\n".join(lines) + "\n"
