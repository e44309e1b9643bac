from pathlib import Path

import pytest

from bibgrammar.application.services.bibliography_service import BibliographyService
from bibgrammar.core.config import Settings
from bibgrammar.core.errors import BibliographyError

BIB = """
@article{AlphaKey,
  author = {Lovelace, Ada},
  title = {Alpha Title},
  journaltitle = {Journal of Alpha},
  year = {2020},
}
@article{BetaKey,
  author = {Turing, Alan},
  title = {Beta Title},
  year = 2021,
}
"""


def _service(encoding: str = "utf-8") -> BibliographyService:
    return BibliographyService(Settings(encoding=encoding, log_level=None))


def test_load_reports_valid_and_invalid(tmp_path: Path) -> None:
    bib_path = tmp_path / "refs.bib"
    bib_path.write_text(BIB, encoding="utf-8")

    report = _service().load(bib_path)

    assert [key for key, _ in report.entries] == ["AlphaKey", "BetaKey"]
    assert report.valid_count == 1
    assert report.invalid_keys == ["BetaKey"]
    assert report.get("AlphaKey").title == "Alpha Title"
    assert report.get("BetaKey") is None


def test_unknown_key_raises(tmp_path: Path) -> None:
    bib_path = tmp_path / "refs.bib"
    bib_path.write_text(BIB, encoding="utf-8")

    report = _service().load(bib_path)

    with pytest.raises(BibliographyError):
        report.get("GammaKey")


def test_load_with_configured_encoding(tmp_path: Path) -> None:
    bib_path = tmp_path / "latin.bib"
    bib_path.write_bytes(
        "@book{b, author={Gödel, Kurt}, title={Über}, year=1931}".encode("latin-1")
    )

    report = _service("iso8859-1").load(bib_path)

    entry = report.get("b")
    assert entry is not None
    assert entry.title == "Über"
    assert entry.author.names[0].family == "Gödel"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(BibliographyError, match="not found"):
        _service().load(tmp_path / "missing.bib")


def test_parse_error_is_wrapped(tmp_path: Path) -> None:
    bib_path = tmp_path / "broken.bib"
    bib_path.write_text("@article{k, title {T}}", encoding="utf-8")

    with pytest.raises(BibliographyError, match="byte 18"):
        _service().load(bib_path)


def test_parse_error_offset_counts_file_bytes(tmp_path: Path) -> None:
    bib_path = tmp_path / "latin.bib"
    raw = "@book{b, author={Gödel, Kurt}, title={Über}, year=1931}\n%".encode("latin-1")
    bib_path.write_bytes(raw)

    with pytest.raises(BibliographyError, match=f"byte {raw.index(b'%')}:"):
        _service("iso8859-1").load(bib_path)
