"""
Positioned failure taxonomy for the rewriter.

Every error raised while scanning a document carries the line and column of
the byte that triggered it, so callers can point users at the exact spot.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Immutable line/column snapshot; columns count bytes within a line."""

    line: int = 1
    column: int = 0

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError("line must be a positive integer")
        if self.column < 0:
            raise ValueError("column must be a non-negative integer")

    def shifted(self, offset: int) -> "Position":
        """Returns the position `offset` bytes further along the same line."""
        return Position(self.line, self.column + offset)

    def __str__(self) -> str:
        return f"Line: {self.line}, Column: {self.column}"


ORIGIN = Position()


class ParseError(ValueError):
    """
    Base class for every failure raised while rewriting a document.

    Holds the bare message plus the position of the failure, and renders
    both as ``Line: L, Column: C <message>``.
    """

    def __init__(self, msg: str, position: Position = ORIGIN) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(position, Position):
            raise TypeError("position must be a Position")

        self.msg = msg
        self.position = position
        self.lineno = position.line
        self.colno = position.column

        super().__init__(f"{position} {msg}")


class UnexpectedToken(ParseError):
    """Byte is not valid for the current grammar state."""


class MismatchedToken(ParseError):
    """Closing bracket does not match the innermost open container."""


class MissingToken(ParseError):
    """Input ended before the current construct was complete."""


class MultilineStringNotSupported(ParseError):
    """Raw newline byte found inside a string literal."""


class InvalidEscapeSequence(ParseError):
    """Backslash followed by a character that is not a JSON escape."""


class InvalidUnicodeEscape(ParseError):
    """Non-hex digit inside a \\uXXXX escape."""


class UnterminatedUnicodeEscape(ParseError):
    """Fewer than four digits follow a \\u escape."""


class InvalidUtf8Encoding(ParseError):
    """Malformed multi-byte UTF-8 sequence."""


class InvalidCodePoint(ParseError):
    """Decoded codepoint is a surrogate or lies beyond U+10FFFF."""


class InvalidNumber(ParseError):
    """Numeric literal does not follow the JSON number grammar."""


class TrailingContent(ParseError):
    """Non-whitespace bytes follow the closed top-level object."""


# Alternate names for the end-of-input and trailing-content failures.
UnterminatedInput = MissingToken
DoneButTrailingContent = TrailingContent


__all__ = [
    "ORIGIN",
    "DoneButTrailingContent",
    "InvalidCodePoint",
    "InvalidEscapeSequence",
    "InvalidNumber",
    "InvalidUnicodeEscape",
    "InvalidUtf8Encoding",
    "MismatchedToken",
    "MissingToken",
    "MultilineStringNotSupported",
    "ParseError",
    "Position",
    "TrailingContent",
    "UnexpectedToken",
    "UnterminatedInput",
    "UnterminatedUnicodeEscape",
]
