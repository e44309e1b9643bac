from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from bibgrammar.domain.models.field import FieldKind, NameList, Range


@dataclass(frozen=True, slots=True)
class Entry:
    """A validated bibliographic entry.

    Concrete kinds subclass this; every kind carries at least an author list,
    a title and a publication year.
    """

    tag: ClassVar[str] = ""

    author: NameList
    title: str
    year: int

    @property
    def kind(self) -> str:
        return self.tag


@dataclass(frozen=True, slots=True)
class Article(Entry):
    """Article in a journal or other periodical."""

    tag: ClassVar[str] = "article"

    journal_title: str = ""
    editor: NameList | None = None
    volume: str | None = None
    series: str | None = None
    issue: str | None = None
    pages: tuple[Range, ...] | None = None
    url: str | None = None


@dataclass(frozen=True, slots=True)
class InProceedings(Entry):
    """Article in a conference proceedings."""

    tag: ClassVar[str] = "inproceedings"

    book_title: str = ""
    editor: NameList | None = None
    volume: str | None = None
    series: str | None = None
    pages: tuple[Range, ...] | None = None
    url: str | None = None


@dataclass(frozen=True, slots=True)
class Book(Entry):
    """Single-volume book with one or more authors."""

    tag: ClassVar[str] = "book"

    editor: NameList | None = None
    volume: str | None = None
    series: str | None = None
    pages: tuple[Range, ...] | None = None
    url: str | None = None


@dataclass(frozen=True, slots=True)
class EntryKind:
    tag: str
    model: type[Entry]
    required: frozenset[FieldKind]


_BASE_REQUIRED = frozenset({FieldKind.AUTHOR, FieldKind.TITLE, FieldKind.YEAR})

ENTRY_KINDS: dict[str, EntryKind] = {
    kind.tag: kind
    for kind in (
        EntryKind("article", Article, _BASE_REQUIRED | {FieldKind.JOURNAL_TITLE}),
        EntryKind("inproceedings", InProceedings, _BASE_REQUIRED | {FieldKind.BOOK_TITLE}),
        EntryKind("book", Book, _BASE_REQUIRED),
    )
}

# Attribute that receives each field kind on the entry models.
FIELD_ATTRIBUTES: dict[FieldKind, str] = {
    FieldKind.AUTHOR: "author",
    FieldKind.EDITOR: "editor",
    FieldKind.TITLE: "title",
    FieldKind.JOURNAL_TITLE: "journal_title",
    FieldKind.BOOK_TITLE: "book_title",
    FieldKind.YEAR: "year",
    FieldKind.PAGES: "pages",
    FieldKind.URL: "url",
    FieldKind.VOLUME: "volume",
    FieldKind.SERIES: "series",
    FieldKind.ISSUE: "issue",
}
