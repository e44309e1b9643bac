from __future__ import annotations

from bibgrammar.domain.models.field import Name, NameList
from bibgrammar.grammar.literals import literal
from bibgrammar.grammar.scanner import (
    MULTISPACE,
    Match,
    Source,
    char,
    msp0,
    msp1,
    take_while,
    word,
)

SEPARATOR = "and"


def _is_plain_name_char(ch: str) -> bool:
    return ch not in ",{}" and ch not in MULTISPACE


def split_name(before: list[str], after: list[str] | None) -> Name:
    """Decide family and given name from the tokens around the first comma.

    ``Family, Given`` when a comma is present; otherwise the last token is the
    family name and anything in front of it is the given name. Braced tokens
    arrive here already flattened and are never split again.
    """
    if after is not None:
        return Name(family=" ".join(before), given=" ".join(after))
    if len(before) == 1:
        return Name(family=before[0])
    return Name(family=before[-1], given=" ".join(before[:-1]))


def name_token(src: Source, pos: int) -> Match[str] | None:
    """One space/comma delimited token; braced spans are kept whole."""
    parts: list[str] = []
    i = pos
    while i < src.length:
        end = take_while(src, i, _is_plain_name_char)
        if end > i:
            parts.append(src.text[i:end])
            i = end
            continue
        if src.at(i) != "{":
            break
        braced = literal(src, i)
        if braced is None:
            break
        parts.append(braced.value)
        i = braced.end

    if not parts:
        return src.fail(pos, "name")
    return Match("".join(parts), i)


def _ends_name_part(src: Source, pos: int) -> bool:
    if src.at(pos) == "}":
        return True
    if src.text.startswith(SEPARATOR, pos):
        return msp1(src, pos + len(SEPARATOR)) is not None
    return False


def name_part(src: Source, pos: int) -> Match[list[str]] | None:
    first = name_token(src, pos)
    if first is None:
        return None

    tokens = [first.value]
    i = first.end
    while True:
        sep = msp1(src, i)
        # the separator keyword and the closing brace are not name tokens
        if sep is None or _ends_name_part(src, sep):
            break
        token = name_token(src, sep)
        if token is None:
            break
        tokens.append(token.value)
        i = token.end

    return Match(tokens, i)


def name(src: Source, pos: int) -> Match[Name] | None:
    before = name_part(src, pos)
    if before is None:
        return None

    comma = char(src, msp0(src, before.end), ",")
    if comma is not None:
        after = name_part(src, msp0(src, comma))
        if after is not None:
            return Match(split_name(before.value, after.value), after.end)

    return Match(split_name(before.value, None), before.end)


def name_list(src: Source, pos: int) -> Match[NameList] | None:
    """``and``-separated names enclosed in braces, as used by ``author`` and ``editor``."""
    i = char(src, pos, "{")
    if i is None:
        return None

    first = name(src, msp0(src, i))
    if first is None:
        return None

    names = [first.value]
    i = first.end
    while True:
        sep = msp1(src, i)
        if sep is None:
            break
        keyword_end = word(src, sep, SEPARATOR)
        if keyword_end is None:
            break
        next_start = msp1(src, keyword_end)
        if next_start is None:
            break
        item = name(src, next_start)
        if item is None:
            break
        names.append(item.value)
        i = item.end

    close = char(src, msp0(src, i), "}")
    if close is None:
        return None
    return Match(NameList.from_names(names), close)
