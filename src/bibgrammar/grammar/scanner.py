from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

SPACE = " \t"
MULTISPACE = " \t\r\n"


@dataclass(frozen=True, slots=True)
class Match(Generic[T]):
    """Successful match of a grammar rule: the value and the position after it."""

    value: T
    end: int


class Source:
    """Immutable input text shared by every rule of one parse call.

    Rules never mutate the text. The only bookkeeping is the furthest position
    at which some rule failed, which becomes the error location when the
    document as a whole does not match.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.length = len(text)
        self.furthest = 0
        self.expected = "entry or end of input"

    def fail(self, pos: int, expected: str) -> None:
        if pos >= self.furthest:
            self.furthest = pos
            self.expected = expected
        return None

    def byte_offset(self, pos: int) -> int:
        return len(self.text[:pos].encode("utf-8"))

    def at(self, pos: int) -> str:
        return self.text[pos] if pos < self.length else ""


def take_while(src: Source, pos: int, accept: Callable[[str], bool]) -> int:
    end = pos
    while end < src.length and accept(src.text[end]):
        end += 1
    return end


def take_none_of(src: Source, pos: int, stop: str) -> int:
    end = pos
    while end < src.length and src.text[end] not in stop:
        end += 1
    return end


def char(src: Source, pos: int, expected: str) -> int | None:
    if pos < src.length and src.text[pos] == expected:
        return pos + 1
    return src.fail(pos, f"'{expected}'")


def word(src: Source, pos: int, expected: str) -> int | None:
    """Case-sensitive exact match of ``expected``."""
    end = pos + len(expected)
    if src.text.startswith(expected, pos):
        return end
    return src.fail(pos, f"'{expected}'")


def sp0(src: Source, pos: int) -> int:
    return take_while(src, pos, SPACE.__contains__)


def msp0(src: Source, pos: int) -> int:
    return take_while(src, pos, MULTISPACE.__contains__)


def msp1(src: Source, pos: int) -> int | None:
    end = msp0(src, pos)
    return end if end > pos else None


def digits(src: Source, pos: int, count: int | None = None) -> Match[str] | None:
    """A run of ASCII digits; exactly ``count`` of them when given."""
    end = take_while(src, pos, _is_ascii_digit)
    if end == pos or (count is not None and end - pos != count):
        return src.fail(pos, "digits" if count is None else f"{count} digits")
    return Match(src.text[pos:end], end)


def _is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"
