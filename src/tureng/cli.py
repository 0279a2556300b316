"""CLI entry point for tureng. Uses Click for argument parsing."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from tureng.api.client import TurengClient
from tureng.api.types import Lang, TranslationDocument
from tureng.config import Config, load_config
from tureng.errors import TurengError
from tureng.interactive import run_interactive
from tureng.results import ResultTheme, format_results
from tureng.tui.utils import plain, sgr

logger = logging.getLogger(__name__)

_LANG_CODES = [lang.value for lang in Lang]


def _setup_logging(level: str, log_file: str | None) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=log_file,
    )


async def _lookup(
    word: str | None, interactive: bool, config: Config
) -> TranslationDocument | None:
    """Pick the word (interactively if asked) and translate it.

    Returns ``None`` when the interactive prompt ended without a word.
    """
    async with TurengClient(timeout=config.timeout) as client:
        if interactive:
            word = await run_interactive(
                config.lang,
                config.limit,
                autocomplete=lambda query: client.autocomplete(query, config.lang),
                config=config,
            )
            if word is None:
                return None
        logger.debug("translating %r (%s)", word, config.lang)
        return await client.translate(word, config.lang)


def _print_document(doc: TranslationDocument) -> None:
    theme = ResultTheme.for_terminal(sys.stdout.isatty())
    if doc.a_results:
        click.echo(format_results(doc.a_results, theme=theme), nl=False)
    click.echo()
    if doc.b_results:
        click.echo(format_results(doc.b_results, swap=True, theme=theme), nl=False)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("word", required=False)
@click.option("-l", "--lang", type=click.Choice(_LANG_CODES, case_sensitive=False), default=None, help="Language pair (default: entr)")
@click.option("-i", "--interactive", is_flag=True, help="Pick the word from live suggestions")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Number of suggestions shown (default: 9)")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    help="Log level (default: warning)",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write logs to this file instead of stderr")
def main(word, lang, interactive, limit, log_level, log_file):
    """Look up WORD on tureng.com."""
    if word is None and not interactive:
        raise click.UsageError("a WORD or --interactive is required")

    _setup_logging(log_level, log_file)
    config = load_config().merged(
        lang=Lang.parse(lang) if lang else None,
        limit=limit,
    )

    try:
        doc = asyncio.run(_lookup(word, interactive, config))
    except (TurengError, OSError) as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)

    if doc is None:
        red = sgr(31) if sys.stderr.isatty() else plain
        click.echo(red("No selection!"), err=True)
        return
    _print_document(doc)


if __name__ == "__main__":
    main()
