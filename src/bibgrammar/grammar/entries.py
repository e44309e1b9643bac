from __future__ import annotations

import logging
from dataclasses import fields as dataclass_fields

from bibgrammar.domain.models.entry import ENTRY_KINDS, FIELD_ATTRIBUTES, Entry, EntryKind
from bibgrammar.domain.models.field import Field, FieldKind, FieldValue
from bibgrammar.grammar.fields import field
from bibgrammar.grammar.scanner import Match, Source, char, msp0, take_while

logger = logging.getLogger(__name__)


def _is_tag_char(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def _is_cite_key_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch in "_/-")


def entry_tag(src: Source, pos: int) -> Match[str] | None:
    """``@type``, lower-cased so that ``@ARTICLE`` and ``@article`` are the same kind."""
    i = char(src, pos, "@")
    if i is None:
        return None
    end = take_while(src, i, _is_tag_char)
    if end == i:
        return src.fail(i, "entry type")
    return Match(src.text[i:end].lower(), end)


def cite_key(src: Source, pos: int) -> Match[str] | None:
    end = take_while(src, pos, _is_cite_key_char)
    if end == pos:
        return src.fail(pos, "citation key")
    return Match(src.text[pos:end], end)


def field_list(src: Source, pos: int) -> Match[list[Field]]:
    """Zero or more comma-separated fields. Always matches, possibly consuming nothing."""
    first = field(src, pos)
    if first is None:
        return Match([], pos)

    found = [first.value]
    i = first.end
    while True:
        sep = char(src, msp0(src, i), ",")
        if sep is None:
            break
        item = field(src, msp0(src, sep))
        if item is None:
            break
        found.append(item.value)
        i = item.end
    return Match(found, i)


def fold_fields(kind: EntryKind, found: list[Field], key: str = "") -> Entry | None:
    """Build the typed entry for ``kind``, or ``None`` when a required field is missing.

    A repeated field overwrites the earlier one. Fields the kind has no slot for
    are dropped.
    """
    values: dict[FieldKind, FieldValue] = {}
    for item in found:
        values[item.kind] = item.value

    missing = kind.required.difference(values)
    if missing:
        logger.debug(
            "Dropping %s entry %s, missing required fields: %s",
            kind.tag,
            key,
            ", ".join(sorted(m.value for m in missing)),
        )
        return None

    accepted = {f.name for f in dataclass_fields(kind.model)}
    kwargs = {
        FIELD_ATTRIBUTES[field_kind]: value
        for field_kind, value in values.items()
        if FIELD_ATTRIBUTES.get(field_kind) in accepted
    }
    return kind.model(**kwargs)


def entry(src: Source, pos: int) -> Match[tuple[str, Entry | None]] | None:
    """One ``@type{key, field = value, ...}`` block.

    The citation key is returned even when the entry fails validation or its
    type is not supported.
    """
    tag = entry_tag(src, pos)
    if tag is None:
        return None

    i = char(src, msp0(src, tag.end), "{")
    if i is None:
        return None
    key = cite_key(src, msp0(src, i))
    if key is None:
        return None
    i = char(src, msp0(src, key.end), ",")
    if i is None:
        return None

    body = field_list(src, msp0(src, i))
    i = msp0(src, body.end)
    if src.at(i) == ",":
        i = msp0(src, i + 1)
    close = char(src, i, "}")
    if close is None:
        return None

    kind = ENTRY_KINDS.get(tag.value)
    if kind is None:
        logger.debug("Unsupported entry type @%s for key %s", tag.value, key.value)
        return Match((key.value, None), close)

    return Match((key.value, fold_fields(kind, body.value, key.value)), close)
