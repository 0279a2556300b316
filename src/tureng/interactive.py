"""Wiring of the interactive prompt to the terminal and the dictionary."""

from __future__ import annotations

import functools
import logging

from tureng.api.client import TurengClient
from tureng.api.types import Lang
from tureng.config import Config
from tureng.tui.prompt import AutocompleteFn, InteractivePrompt
from tureng.tui.renderer import PromptTheme
from tureng.tui.terminal import ProcessTerminal, Terminal

logger = logging.getLogger(__name__)


async def run_interactive(
    lang: Lang,
    popup_capacity: int,
    *,
    autocomplete: AutocompleteFn | None = None,
    terminal: Terminal | None = None,
    config: Config | None = None,
) -> str | None:
    """Let the user pick a word with live suggestions.

    Returns the chosen suggestion, or ``None`` when the user aborted or
    confirmed with nothing to choose. Raises ``OSError`` when the terminal
    cannot be driven.
    """
    config = config or Config()
    terminal = terminal or ProcessTerminal()
    theme = PromptTheme.for_terminal(terminal.is_tty)

    client: TurengClient | None = None
    if autocomplete is None:
        client = TurengClient(timeout=config.timeout)
        autocomplete = functools.partial(client.autocomplete, lang=lang)

    prompt = InteractivePrompt(
        terminal,
        autocomplete,
        popup_capacity=popup_capacity,
        debounce_delay=config.debounce_ms / 1000,
        tick_interval=config.tick_ms / 1000,
        theme=theme,
    )
    logger.debug("interactive prompt started (lang=%s, capacity=%d)", lang, popup_capacity)
    try:
        return await prompt.run()
    finally:
        if client is not None:
            await client.aclose()
