from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from bibgrammar.core.config import DEFAULT_ENCODING, Settings
from bibgrammar.core.errors import BibDecodeError, BibliographyError, BibParseError
from bibgrammar.domain.models.entry import Entry
from bibgrammar.grammar.document import ParsedEntry, parse_bib

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BibliographyReport:
    path: Path
    entries: list[ParsedEntry]

    @property
    def valid_count(self) -> int:
        return sum(1 for _, entry in self.entries if entry is not None)

    @property
    def invalid_keys(self) -> list[str]:
        return [key for key, entry in self.entries if entry is None]

    def get(self, key: str) -> Entry | None:
        for entry_key, entry in self.entries:
            if entry_key == key:
                return entry
        raise BibliographyError(f"Citation key not found: {key}")


class BibliographyService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def load(self, bib_path: Path) -> BibliographyReport:
        path = bib_path.expanduser().resolve()
        if not path.exists() or not path.is_file():
            raise BibliographyError(f"Bibliography file not found: {path}")

        raw = path.read_bytes()
        if self.settings.encoding == DEFAULT_ENCODING:
            try:
                entries = parse_bib(raw)
            except (BibDecodeError, BibParseError) as exc:
                raise BibliographyError(f"Failed to parse {path}: {exc}") from exc
        else:
            try:
                text = raw.decode(self.settings.encoding)
            except UnicodeDecodeError as exc:
                raise BibliographyError(
                    f"Failed to decode {path} as {self.settings.encoding}: {exc}"
                ) from exc
            try:
                entries = parse_bib(text)
            except BibParseError as exc:
                offset = _file_offset(text, exc.offset, self.settings.encoding)
                raise BibliographyError(
                    f"Failed to parse {path}: Parse error at byte {offset}: expected {exc.expected}"
                ) from exc

        report = BibliographyReport(path=path, entries=entries)
        logger.info(
            "Loaded %s: %d entries, %d invalid",
            path,
            len(report.entries),
            len(report.invalid_keys),
        )
        return report


def _file_offset(text: str, utf8_offset: int, encoding: str) -> int:
    """Translate a parser byte offset (UTF-8) into an offset in the file's own encoding."""
    prefix = text.encode("utf-8")[:utf8_offset].decode("utf-8")
    return len(prefix.encode(encoding))
