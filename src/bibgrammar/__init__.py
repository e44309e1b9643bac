"""Typed reader for BibTeX/BibLaTeX bibliography files."""

from bibgrammar.core.errors import (
    BibDecodeError,
    BibGrammarError,
    BibliographyError,
    BibParseError,
    ConfigurationError,
)
from bibgrammar.domain.models.entry import Article, Book, Entry, InProceedings
from bibgrammar.domain.models.field import Field, FieldKind, Name, NameList, Range
from bibgrammar.grammar.document import parse_bib

__all__ = [
    "Article",
    "BibDecodeError",
    "BibGrammarError",
    "BibParseError",
    "BibliographyError",
    "Book",
    "ConfigurationError",
    "Entry",
    "Field",
    "FieldKind",
    "InProceedings",
    "Name",
    "NameList",
    "Range",
    "parse_bib",
]
