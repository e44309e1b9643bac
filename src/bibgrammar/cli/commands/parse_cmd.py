from __future__ import annotations

import argparse
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from bibgrammar.application.services.bibliography_service import BibliographyService
from bibgrammar.cli.context import CLIContext


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("parse", help="Parse a bibliography and list its entries")
    parser.add_argument("bib_path", help="Path to .bib file")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any entry is incomplete or of an unsupported type",
    )
    parser.set_defaults(handler=run_parse)


def run_parse(args: argparse.Namespace, ctx: CLIContext) -> int:
    report = BibliographyService(ctx.settings).load(Path(args.bib_path))

    invalid = report.invalid_keys
    panel = Panel.fit(
        "\n".join(
            [
                f"Entries seen: {len(report.entries)}",
                f"Valid entries: {report.valid_count}",
                f"Invalid entries: {len(invalid)}",
            ]
        ),
        title="Bibliography Summary",
    )
    ctx.console.print(panel)

    table = Table(title=f"Entries ({len(report.entries)})")
    table.add_column("Key", no_wrap=True)
    table.add_column("Type")
    table.add_column("Year")
    table.add_column("Title", overflow="fold")
    table.add_column("Authors", overflow="fold")

    for key, entry in report.entries:
        if entry is None:
            table.add_row(escape(key), "[red]invalid[/red]", "", "", "")
            continue
        table.add_row(
            escape(key),
            entry.kind,
            str(entry.year),
            escape(entry.title),
            escape(str(entry.author)),
        )

    ctx.console.print(table)

    if args.strict and invalid:
        return 1
    return 0
