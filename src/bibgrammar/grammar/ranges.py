from __future__ import annotations

from bibgrammar.domain.models.field import Range
from bibgrammar.grammar.scanner import MULTISPACE, Match, Source, char, msp0, take_while

_TOKEN_STOP = "{},-"


def _is_token_char(ch: str) -> bool:
    return ch not in _TOKEN_STOP and ch not in MULTISPACE


def _token(src: Source, pos: int) -> Match[str] | None:
    end = take_while(src, pos, _is_token_char)
    if end == pos:
        return src.fail(pos, "range value")
    return Match(src.text[pos:end], end)


def range_expr(src: Source, pos: int) -> Match[Range] | None:
    """``start`` or ``start - end``, with any number of hyphens between the two."""
    start = _token(src, pos)
    if start is None:
        return None

    after_start = msp0(src, start.end)
    hyphens_end = take_while(src, after_start, "-".__eq__)
    if hyphens_end > after_start:
        end = _token(src, msp0(src, hyphens_end))
        if end is not None:
            return Match(Range(start=start.value, end=end.value), end.end)

    return Match(Range(start=start.value), start.end)


def ranges(src: Source, pos: int) -> Match[tuple[Range, ...]] | None:
    """Comma-separated ranges enclosed in braces, e.g. ``{1-7, 10--14}``."""
    i = char(src, pos, "{")
    if i is None:
        return None

    first = range_expr(src, msp0(src, i))
    if first is None:
        return None

    items = [first.value]
    i = first.end
    while True:
        sep = char(src, msp0(src, i), ",")
        if sep is None:
            break
        item = range_expr(src, msp0(src, sep))
        if item is None:
            break
        items.append(item.value)
        i = item.end

    close = char(src, msp0(src, i), "}")
    if close is None:
        return None
    return Match(tuple(items), close)
