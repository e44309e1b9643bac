from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from bibgrammar.domain.models.field import Field, FieldKind, FieldValue
from bibgrammar.grammar.literals import literal
from bibgrammar.grammar.names import name_list
from bibgrammar.grammar.ranges import ranges
from bibgrammar.grammar.scanner import (
    Match,
    Source,
    char,
    digits,
    sp0,
    take_none_of,
    take_while,
)


class ValueGrammar(Enum):
    LITERAL = "literal"
    NAMES = "names"
    RANGES = "ranges"
    LITERAL_OR_NUMBER = "literal_or_number"
    YEAR = "year"
    DATE = "date"


# Keyword -> (field produced, grammar of its value). Keywords are case-sensitive.
FIELD_GRAMMARS: dict[str, tuple[FieldKind, ValueGrammar]] = {
    "title": (FieldKind.TITLE, ValueGrammar.LITERAL),
    "booktitle": (FieldKind.BOOK_TITLE, ValueGrammar.LITERAL),
    "journaltitle": (FieldKind.JOURNAL_TITLE, ValueGrammar.LITERAL),
    "year": (FieldKind.YEAR, ValueGrammar.YEAR),
    "date": (FieldKind.YEAR, ValueGrammar.DATE),
    "pages": (FieldKind.PAGES, ValueGrammar.RANGES),
    "author": (FieldKind.AUTHOR, ValueGrammar.NAMES),
    "editor": (FieldKind.EDITOR, ValueGrammar.NAMES),
    "url": (FieldKind.URL, ValueGrammar.LITERAL),
    "volume": (FieldKind.VOLUME, ValueGrammar.LITERAL_OR_NUMBER),
    "series": (FieldKind.SERIES, ValueGrammar.LITERAL_OR_NUMBER),
    "issue": (FieldKind.ISSUE, ValueGrammar.LITERAL),
}

YEAR_DIGITS = 4

ValueReader = Callable[[Source, int], Optional[Match[FieldValue]]]


def _bare_year(src: Source, pos: int) -> Match[FieldValue] | None:
    found = digits(src, pos, YEAR_DIGITS)
    if found is None:
        return None
    return Match(int(found.value), found.end)


def year_value(src: Source, pos: int) -> Match[FieldValue] | None:
    """``2017`` or ``{ 2017 }``."""
    bare = _bare_year(src, pos)
    if bare is not None:
        return bare

    i = char(src, pos, "{")
    if i is None:
        return None
    found = _bare_year(src, sp0(src, i))
    if found is None:
        return None
    close = char(src, sp0(src, found.end), "}")
    if close is None:
        return None
    return Match(found.value, close)


def _leading_year(src: Source, pos: int) -> Match[str] | None:
    end = pos + YEAR_DIGITS
    candidate = src.text[pos:end]
    if len(candidate) == YEAR_DIGITS and candidate.isascii() and candidate.isdigit():
        return Match(candidate, end)
    return src.fail(pos, "4-digit year")


def date_value(src: Source, pos: int) -> Match[FieldValue] | None:
    """Keep only the year of ``{2000-12-01}``; a bare year is accepted as well."""
    i = char(src, pos, "{")
    if i is not None:
        found = _leading_year(src, sp0(src, i))
        if found is not None:
            close = char(src, take_none_of(src, found.end, "}\n"), "}")
            if close is not None:
                return Match(int(found.value), close)
    return _bare_year(src, pos)


def literal_or_number(src: Source, pos: int) -> Match[FieldValue] | None:
    braced = literal(src, pos)
    if braced is not None:
        return braced
    return digits(src, pos)


_VALUE_READERS: dict[ValueGrammar, ValueReader] = {
    ValueGrammar.LITERAL: literal,
    ValueGrammar.NAMES: name_list,
    ValueGrammar.RANGES: ranges,
    ValueGrammar.LITERAL_OR_NUMBER: literal_or_number,
    ValueGrammar.YEAR: year_value,
    ValueGrammar.DATE: date_value,
}


def _is_keyword_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch in "_-")


def _assignment(src: Source, pos: int) -> int | None:
    """`` = `` between a keyword and its value."""
    i = char(src, sp0(src, pos), "=")
    if i is None:
        return None
    return sp0(src, i)


def known_field(src: Source, pos: int) -> Match[Field] | None:
    keyword_end = take_while(src, pos, _is_keyword_char)
    grammar = FIELD_GRAMMARS.get(src.text[pos:keyword_end])
    if grammar is None:
        return src.fail(pos, "field name")

    value_start = _assignment(src, keyword_end)
    if value_start is None:
        return None

    kind, value_grammar = grammar
    value = _VALUE_READERS[value_grammar](src, value_start)
    if value is None:
        return None
    return Match(Field(kind=kind, value=value.value), value.end)


def unknown_field(src: Source, pos: int) -> Match[Field] | None:
    """Any ``name = value`` pair; only the value text is kept."""
    name_end = take_none_of(src, pos, "{}=,\n")
    if name_end == pos:
        return src.fail(pos, "field name")

    value_start = _assignment(src, name_end)
    if value_start is None:
        return None

    braced = literal(src, value_start)
    if braced is not None:
        return Match(Field(kind=FieldKind.UNKNOWN, value=braced.value), braced.end)

    raw_end = take_none_of(src, value_start, ",\n{}")
    return Match(Field(kind=FieldKind.UNKNOWN, value=src.text[value_start:raw_end]), raw_end)


def field(src: Source, pos: int) -> Match[Field] | None:
    """One ``keyword = value`` pair.

    A recognised keyword whose value does not fit its grammar (``year = 20xx``)
    is kept as an unknown field rather than failing the entry.
    """
    recognised = known_field(src, pos)
    if recognised is not None:
        return recognised
    return unknown_field(src, pos)
