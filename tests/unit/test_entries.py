import logging

import pytest

from bibgrammar.domain.models.entry import ENTRY_KINDS, Article, Book, InProceedings
from bibgrammar.domain.models.field import Field, FieldKind, Name, NameList, Range
from bibgrammar.grammar.entries import entry, fold_fields
from bibgrammar.grammar.scanner import Source

BAEZ_LAUDA = NameList(names=(Name("Baez", "John C."), Name("Lauda", "Aaron D.")))


def test_article() -> None:
    raw = """@article{baez/article,
  author       = {Baez, John C. and Lauda, Aaron D.},
  title        = {Higher-Dimensional Algebra {V}: 2-Groups},
  journaltitle = {Theory and Applications of Categories},
  date         = 2004,
  volume       = 12,
}"""
    match = entry(Source(raw), 0)

    assert match is not None
    assert match.end == len(raw)
    assert match.value == (
        "baez/article",
        Article(
            author=BAEZ_LAUDA,
            title="Higher-Dimensional Algebra V: 2-Groups",
            year=2004,
            journal_title="Theory and Applications of Categories",
            volume="12",
        ),
    )


def test_inproceedings() -> None:
    raw = """@InProceedings{conf_2019,
  author = {Ada Lovelace},
  title = {Notes},
  booktitle = {Proceedings of Things},
  year = {2019},
  pages = {3--9},
  editor = {Turing, Alan}
}"""
    match = entry(Source(raw), 0)

    assert match is not None
    key, parsed = match.value
    assert key == "conf_2019"
    assert parsed == InProceedings(
        author=NameList(names=(Name("Lovelace", "Ada"),)),
        title="Notes",
        year=2019,
        book_title="Proceedings of Things",
        editor=NameList(names=(Name("Turing", "Alan"),)),
        pages=(Range("3", "9"),),
    )
    assert parsed.kind == "inproceedings"


def test_book() -> None:
    match = entry(Source("@book{b1, author={Knuth, Donald}, title={TAOCP}, year=1968}"), 0)

    assert match is not None
    assert match.value == (
        "b1",
        Book(author=NameList(names=(Name("Knuth", "Donald"),)), title="TAOCP", year=1968),
    )


@pytest.mark.parametrize("tag", ["@ARTICLE", "@Article", "@article", "@aRtIcLe"])
def test_tag_is_case_insensitive(tag: str) -> None:
    raw = tag + "{k, author={A, B}, title={T}, journaltitle={J}, year=2020}"
    match = entry(Source(raw), 0)

    assert match is not None
    assert isinstance(match.value[1], Article)


def test_missing_required_field_keeps_key(caplog: pytest.LogCaptureFixture) -> None:
    raw = "@article{k2, author={A, B}, title={T}, year=2020}"

    with caplog.at_level(logging.DEBUG, logger="bibgrammar.grammar.entries"):
        match = entry(Source(raw), 0)

    assert match is not None
    assert match.value == ("k2", None)
    assert "journaltitle" in caplog.text


def test_unsupported_type_keeps_key() -> None:
    match = entry(Source("@misc{m1, title={Something}, year=2001}"), 0)

    assert match is not None
    assert match.value == ("m1", None)


def test_empty_field_list() -> None:
    match = entry(Source("@article{lonely,}"), 0)

    assert match is not None
    assert match.value == ("lonely", None)


def test_last_field_wins() -> None:
    raw = "@book{k, author={A}, title={First}, title={Second}, year=2000}"
    match = entry(Source(raw), 0)

    assert match is not None
    assert match.value[1] is not None
    assert match.value[1].title == "Second"


def test_fields_without_slot_are_ignored() -> None:
    found = [
        Field(FieldKind.AUTHOR, NameList(names=(Name("A"),))),
        Field(FieldKind.TITLE, "T"),
        Field(FieldKind.YEAR, 1999),
        Field(FieldKind.BOOK_TITLE, "B"),
        Field(FieldKind.ISSUE, "4"),
        Field(FieldKind.UNKNOWN, "ignored"),
    ]

    built = fold_fields(ENTRY_KINDS["inproceedings"], found)

    assert built == InProceedings(
        author=NameList(names=(Name("A"),)), title="T", year=1999, book_title="B"
    )


def test_missing_comma_after_key_fails() -> None:
    assert entry(Source("@article{k author={A}}"), 0) is None


def test_invalid_cite_key_fails() -> None:
    assert entry(Source("@article{bad key, title={T}}"), 0) is None


def test_missing_equals_fails() -> None:
    assert entry(Source("@article{k, title {T}}"), 0) is None
