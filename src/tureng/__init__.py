"""Tureng dictionary lookups from the terminal, with live autocomplete."""

from tureng.api import Lang, TranslationDocument, TranslationResult, TurengClient
from tureng.config import Config, load_config
from tureng.errors import NetworkError, ResponseFormatError, TerminalError, TurengError
from tureng.interactive import run_interactive
from tureng.results import format_results

__version__ = "0.1.0"

__all__ = [
    "Config",
    "Lang",
    "NetworkError",
    "ResponseFormatError",
    "TerminalError",
    "TranslationDocument",
    "TranslationResult",
    "TurengClient",
    "TurengError",
    "format_results",
    "load_config",
    "run_interactive",
]
