from __future__ import annotations

import argparse
import logging

from rich.console import Console

from bibgrammar.cli.commands import parse_cmd, show_cmd
from bibgrammar.cli.context import CLIContext
from bibgrammar.core.config import load_settings
from bibgrammar.core.errors import BibGrammarError
from bibgrammar.core.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bibgrammar",
        description="Parse BibTeX/BibLaTeX bibliographies into typed entries",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)

    subparsers = parser.add_subparsers(dest="command", required=True)
    parse_cmd.register(subparsers)
    show_cmd.register(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except BibGrammarError as exc:
        configure_logging(args.verbose)
        logger.error(str(exc))
        return 1

    configure_logging(args.verbose, settings.log_level)
    console = Console()
    ctx = CLIContext(settings=settings, console=console)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 2

    try:
        return handler(args, ctx)
    except BibGrammarError as exc:
        logger.error(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
