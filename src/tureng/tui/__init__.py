"""Interactive autocomplete prompt for raw-mode terminals."""

from tureng.tui.debounce import DebounceController, RequestTicket
from tureng.tui.keybindings import (
    DEFAULT_PROMPT_KEYBINDINGS,
    PromptAction,
    PromptKeybindingsManager,
    get_prompt_keybindings,
    set_prompt_keybindings,
)
from tureng.tui.keys import Key, KeyId, matches_key, parse_key
from tureng.tui.prompt import AutocompleteFn, InteractivePrompt, PromptState
from tureng.tui.renderer import PromptRenderer, PromptTheme
from tureng.tui.selection import SelectionState
from tureng.tui.stdin_buffer import StdinBuffer
from tureng.tui.terminal import ProcessTerminal, Terminal
from tureng.tui.text_buffer import TextBuffer
from tureng.tui.utils import truncate_to_width, visible_width

__all__ = [
    # Prompt
    "AutocompleteFn",
    "InteractivePrompt",
    "PromptState",
    # Editing state
    "DebounceController",
    "RequestTicket",
    "SelectionState",
    "TextBuffer",
    # Drawing
    "PromptRenderer",
    "PromptTheme",
    # Keys
    "DEFAULT_PROMPT_KEYBINDINGS",
    "Key",
    "KeyId",
    "PromptAction",
    "PromptKeybindingsManager",
    "get_prompt_keybindings",
    "matches_key",
    "parse_key",
    "set_prompt_keybindings",
    # Terminal
    "ProcessTerminal",
    "StdinBuffer",
    "Terminal",
    # Utilities
    "truncate_to_width",
    "visible_width",
]
