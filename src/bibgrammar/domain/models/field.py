from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True, slots=True)
class Name:
    """Name of a person or organisation."""

    family: str
    given: str | None = None

    def __str__(self) -> str:
        return self.family


@dataclass(frozen=True, slots=True)
class NameList:
    """Ordered names from an ``author`` or ``editor`` field.

    BibLaTeX marks a shortened list with a trailing ``and others``. That marker
    is not detected yet, so ``truncated`` is always ``False`` and ``others``
    comes through as an ordinary family name.
    """

    names: tuple[Name, ...] = ()
    truncated: bool = False

    @classmethod
    def from_names(cls, names: list[Name]) -> NameList:
        return cls(names=tuple(names), truncated=False)

    def __str__(self) -> str:
        return ", ".join(str(name) for name in self.names)

    def __len__(self) -> int:
        return len(self.names)


@dataclass(frozen=True, slots=True)
class Range:
    """Start and optional end of a span, typically from ``pages``."""

    start: str
    end: str | None = None


class FieldKind(str, Enum):
    AUTHOR = "author"
    EDITOR = "editor"
    TITLE = "title"
    JOURNAL_TITLE = "journaltitle"
    BOOK_TITLE = "booktitle"
    YEAR = "year"
    PAGES = "pages"
    URL = "url"
    VOLUME = "volume"
    SERIES = "series"
    ISSUE = "issue"
    UNKNOWN = "unknown"


FieldValue = Union[str, int, NameList, tuple[Range, ...]]


@dataclass(frozen=True, slots=True)
class Field:
    kind: FieldKind
    value: FieldValue
