from __future__ import annotations

import argparse
from dataclasses import fields
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from bibgrammar.application.services.bibliography_service import BibliographyService
from bibgrammar.cli.context import CLIContext
from bibgrammar.domain.models.field import NameList, Range


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("show", help="Show the fields of one entry")
    parser.add_argument("bib_path", help="Path to .bib file")
    parser.add_argument("key", help="Citation key of the entry")
    parser.set_defaults(handler=run_show)


def _format_value(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, NameList):
        return "; ".join(
            f"{name.family}, {name.given}" if name.given else name.family for name in value.names
        )
    if isinstance(value, tuple) and all(isinstance(item, Range) for item in value):
        return ", ".join(f"{r.start}-{r.end}" if r.end else r.start for r in value)
    return str(value)


def run_show(args: argparse.Namespace, ctx: CLIContext) -> int:
    report = BibliographyService(ctx.settings).load(Path(args.bib_path))
    entry = report.get(args.key)
    if entry is None:
        ctx.console.print(
            f"[yellow]Entry {escape(args.key)} is incomplete or of an unsupported type[/yellow]"
        )
        return 1

    table = Table(title=f"{escape(args.key)} ({entry.kind})")
    table.add_column("Field", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for item in fields(entry):
        table.add_row(item.name, escape(_format_value(getattr(entry, item.name))))

    ctx.console.print(table)
    return 0
