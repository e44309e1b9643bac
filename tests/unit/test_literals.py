from bibgrammar.grammar.literals import literal
from bibgrammar.grammar.scanner import Source


def test_simple_literal() -> None:
    match = literal(Source("{This is a simple literal}"), 0)

    assert match is not None
    assert match.value == "This is a simple literal"
    assert match.end == len("{This is a simple literal}")


def test_nested_literal_drops_braces_at_every_depth() -> None:
    raw = "{This is a {nested {deeper} literal}}"
    match = literal(Source(raw), 0)

    assert match is not None
    assert match.value == "This is a nested deeper literal"
    assert match.value == raw.replace("{", "").replace("}", "")


def test_literal_stops_at_matching_brace() -> None:
    match = literal(Source("{a{b}c}, rest"), 0)

    assert match is not None
    assert match.value == "abc"
    assert match.end == len("{a{b}c}")


def test_empty_literal() -> None:
    match = literal(Source("{}"), 0)

    assert match is not None
    assert match.value == ""


def test_unbalanced_literal_does_not_match() -> None:
    src = Source("{never {closed}")

    assert literal(src, 0) is None
    assert src.furthest == src.length


def test_literal_requires_opening_brace() -> None:
    assert literal(Source("no braces"), 0) is None


def test_deep_nesting_does_not_recurse() -> None:
    depth = 5000
    raw = "{" * depth + "x" + "}" * depth
    match = literal(Source(raw), 0)

    assert match is not None
    assert match.value == "x"
