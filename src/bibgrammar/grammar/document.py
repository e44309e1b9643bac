from __future__ import annotations

import logging
from typing import Optional

from bibgrammar.core.errors import BibDecodeError, BibParseError
from bibgrammar.domain.models.entry import Entry
from bibgrammar.grammar.entries import entry
from bibgrammar.grammar.scanner import Source, msp0

logger = logging.getLogger(__name__)

BOM = "\ufeff"

ParsedEntry = tuple[str, Optional[Entry]]


def document(src: Source) -> list[ParsedEntry]:
    """Read every entry of ``src`` in order, requiring nothing but whitespace after them."""
    pos = 1 if src.text.startswith(BOM) else 0
    pos = msp0(src, pos)

    parsed: list[ParsedEntry] = []
    while True:
        found = entry(src, pos)
        if found is None:
            break
        parsed.append(found.value)
        pos = msp0(src, found.end)

    if pos < src.length:
        src.fail(pos, "entry or end of input")
        raise BibParseError(offset=src.byte_offset(src.furthest), expected=src.expected)

    logger.debug("Parsed %d entries", len(parsed))
    return parsed


def parse_bib(buf: bytes | str) -> list[ParsedEntry]:
    """Parse a bibliography buffer into ``(citation key, entry or None)`` pairs.

    ``bytes`` are decoded as UTF-8. Entries that are well formed but lack a
    required field, or whose type is not supported, come back as ``None``.
    Structural problems raise :class:`BibParseError` with the byte offset of
    the furthest point the grammar reached.
    """
    if isinstance(buf, (bytes, bytearray, memoryview)):
        try:
            text = bytes(buf).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BibDecodeError(f"Input is not valid UTF-8 at byte {exc.start}") from exc
    else:
        text = buf
    return document(Source(text))
