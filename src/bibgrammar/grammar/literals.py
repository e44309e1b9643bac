from __future__ import annotations

from bibgrammar.grammar.scanner import Match, Source, char

OPEN = "{"
CLOSE = "}"


def literal(src: Source, pos: int) -> Match[str] | None:
    """Read a balanced ``{...}`` span and return its text with every brace removed.

    Nesting is tracked with a depth counter, so arbitrarily deep literals do not
    hit the interpreter recursion limit.
    """
    start = char(src, pos, OPEN)
    if start is None:
        return None

    text = src.text
    chunks: list[str] = []
    chunk_start = start
    depth = 1
    for i in range(start, src.length):
        ch = text[i]
        if ch != OPEN and ch != CLOSE:
            continue
        chunks.append(text[chunk_start:i])
        chunk_start = i + 1
        depth += 1 if ch == OPEN else -1
        if depth == 0:
            return Match("".join(chunks), i + 1)

    return src.fail(src.length, f"'{CLOSE}' closing literal")
