"""Tests for tureng.tui.renderer.PromptRenderer."""

from __future__ import annotations

from tureng.tui.renderer import LOADING_FRAMES, PromptRenderer, PromptTheme
from tureng.tui.text_buffer import TextBuffer

from .virtual_terminal import VirtualTerminal


def make_renderer(
    capacity: int = 3, columns: int = 80, theme: PromptTheme | None = None
) -> tuple[PromptRenderer, VirtualTerminal]:
    term = VirtualTerminal(columns=columns)
    return PromptRenderer(term, capacity, theme), term


class TestBegin:
    def test_reserves_rows_and_draws_prompt(self) -> None:
        renderer, term = make_renderer(capacity=3)
        renderer.begin(TextBuffer())
        assert term.output == "\n\n\n\x1b[3A\r\x1b[2K> \r\x1b[2C"

    def test_zero_capacity(self) -> None:
        renderer, term = make_renderer(capacity=0)
        renderer.begin(TextBuffer())
        assert term.output == "\r\x1b[2K> \r\x1b[2C"


class TestDrawPrompt:
    def test_cursor_after_text(self) -> None:
        renderer, term = make_renderer()
        renderer.draw_prompt(TextBuffer("cat"))
        term.flush()
        assert term.output == "\r\x1b[2K> cat\r\x1b[5C"

    def test_cursor_mid_text(self) -> None:
        renderer, term = make_renderer()
        buf = TextBuffer("cat")
        buf.move_left()
        buf.move_left()
        renderer.draw_prompt(buf)
        term.flush()
        assert term.output.endswith("\r\x1b[3C")

    def test_cursor_counts_display_width(self) -> None:
        renderer, term = make_renderer()
        renderer.draw_prompt(TextBuffer("世界"))
        term.flush()
        assert term.output.endswith("\r\x1b[6C")

    def test_loading_frame(self) -> None:
        renderer, term = make_renderer()
        renderer.draw_prompt(TextBuffer("ca"), loading_frame=3)
        term.flush()
        assert f"> ca  {LOADING_FRAMES[3]}\r" in term.output

    def test_loading_frame_wraps(self) -> None:
        renderer, term = make_renderer()
        renderer.draw_prompt(TextBuffer("ca"), loading_frame=len(LOADING_FRAMES))
        term.flush()
        assert f"  {LOADING_FRAMES[0]}\r" in term.output

    def test_does_not_flush(self) -> None:
        renderer, term = make_renderer()
        renderer.draw_prompt(TextBuffer("ca"))
        assert term.output == ""
        assert term.unflushed != ""


class TestDrawCandidates:
    def test_rows_and_cursor_return(self) -> None:
        renderer, term = make_renderer()
        renderer.draw_candidates(TextBuffer("ca"), ["cat", "car"], 1)
        term.flush()
        assert term.output == (
            "\r\n\x1b[0J"
            "↪  cat\r\n"
            "↪ car\r\n"
            "\x1b[3A"
            "\r\x1b[2K> ca\r\x1b[4C"
        )
        assert renderer.rows == 2

    def test_limited_to_capacity(self) -> None:
        renderer, term = make_renderer(capacity=2)
        renderer.draw_candidates(TextBuffer("c"), ["a", "b", "c", "d"], 0)
        term.flush()
        assert term.output.count("↪") == 2
        assert "\x1b[3A" in term.output
        assert renderer.rows == 2

    def test_empty_list_clears_dropdown(self) -> None:
        renderer, term = make_renderer()
        renderer.draw_candidates(TextBuffer("xyz"), [], 0)
        term.flush()
        assert term.output.startswith("\r\n\x1b[0J\x1b[1A")
        assert renderer.rows == 0

    def test_long_candidates_truncated(self) -> None:
        renderer, term = make_renderer(columns=10)
        renderer.draw_candidates(TextBuffer("a"), ["abcdefghijklmnop"], 1)
        term.flush()
        assert "↪  abcdef…\r\n" in term.output

    def test_selected_row_styled(self) -> None:
        theme = PromptTheme.for_terminal(True)
        renderer, term = make_renderer(theme=theme)
        renderer.draw_candidates(TextBuffer("ca"), ["cat", "car"], 0)
        term.flush()
        assert " \x1b[30;47mcat\x1b[0m\r\n" in term.output
        assert "  car\r\n" in term.output


class TestFinish:
    def test_clears_dropdown_and_ends_on_new_line(self) -> None:
        renderer, term = make_renderer()
        renderer.draw_candidates(TextBuffer("ca"), ["cat"], 0)
        term.flush()
        term.clear_buffer()
        renderer.finish(TextBuffer("ca"))
        assert term.output == "\r\x1b[2K> ca\r\x1b[4C\r\n\x1b[0J"
        assert renderer.rows == 0


class TestTheme:
    def test_plain_for_non_tty(self) -> None:
        theme = PromptTheme.for_terminal(False)
        assert theme.prompt("> ") == "> "
        assert theme.selected("x") == "x"

    def test_colored_for_tty(self) -> None:
        theme = PromptTheme.for_terminal(True)
        assert theme.prompt("> ") == "\x1b[32m> \x1b[0m"
