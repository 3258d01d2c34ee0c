# Error types shared by the minimizer, its file adapters and the command line.
from typing import Optional


class QMError(Exception):
    pass


class InputFormatError(QMError, ValueError):
    """The term file is malformed (bad header, truncated body)."""


class InvalidPatternCharacter(InputFormatError):
    """A term holds a character outside {'0', '1', '-'}."""

    def __init__(self, char: str, position: int, term: Optional[int] = None):
        self.char = char
        self.position = position
        self.term = term
        where = f"position {position}" if term is None else f"term {term}, position {position}"
        super().__init__(f"invalid pattern character {char!r} at {where}")


class InternalInvariantViolation(QMError, AssertionError):
    """A precondition of the minimizer itself was broken. Never retried."""
