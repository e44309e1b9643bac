class BibGrammarError(Exception):
    """Base error for all user-facing bibgrammar exceptions."""


class ConfigurationError(BibGrammarError):
    """Raised when configuration is invalid or incomplete."""


class BibDecodeError(BibGrammarError):
    """Raised when an input buffer is not valid UTF-8."""


class BibParseError(BibGrammarError):
    """Raised when a document is structurally malformed.

    ``offset`` is a byte offset into the UTF-8 encoded input and ``expected``
    is a short static description of what the grammar was looking for there.
    """

    def __init__(self, offset: int, expected: str) -> None:
        super().__init__(f"Parse error at byte {offset}: expected {expected}")
        self.offset = offset
        self.expected = expected


class BibliographyError(BibGrammarError):
    """Raised when a bibliography file cannot be loaded."""
