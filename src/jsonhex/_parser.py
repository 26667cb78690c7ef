"""
Single-pass JSON validator that re-streams its input with encoded strings.

The rewriter never builds a document tree. It walks the input one byte at a
time (with one byte of lookahead), checks every byte against the lexical class
of the previous token and the innermost open container, and copies accepted
bytes straight to the output. String bodies are the only exception: they are
collected, encoded through the identifier table and written in canonical
``\\uXXXX`` form.
"""

import logging
import re
from enum import Enum
from typing import BinaryIO
from typing import Final

from ._config import ParseConfig
from ._encoder import encode_string
from ._errors import InvalidNumber
from ._errors import MismatchedToken
from ._errors import MissingToken
from ._errors import MultilineStringNotSupported
from ._errors import Position
from ._errors import TrailingContent
from ._errors import UnexpectedToken
from ._identifiers import IdentifierTable
from ._profiling import ProfileContext

logger = logging.getLogger(__name__)

NEWLINE: Final = ord("\n")
QUOTE: Final = ord('"')
BACKSLASH: Final = ord("\\")
COLON: Final = ord(":")
COMMA: Final = ord(",")

WHITESPACE: Final = frozenset(b" \t\r\n")
NUMBER_START: Final = frozenset(b"-0123456789")
NUMBER_CHARS: Final = frozenset(b"0123456789+-.eE")
NUMBER_RE: Final = re.compile(
    rb"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?"
)
LITERALS: Final = {
    ord("t"): b"true",
    ord("f"): b"false",
    ord("n"): b"null",
}


class LexicalClass(Enum):
    """Category of the most recently accepted token."""

    NONE = "none"
    DONE = "done"
    OBJECT_START = "object_start"
    OBJECT_END = "object_end"
    OBJECT_SEPARATOR = "object_separator"
    ITERATOR = "iterator"
    ARRAY_START = "array_start"
    ARRAY_END = "array_end"
    STRING = "string"
    VALUE = "value"


class Container(Enum):
    """Kind of an open ``{`` or ``[`` scope on the context stack."""

    OBJECT = "object"
    ARRAY = "array"


# opening byte -> (container pushed, resulting class)
OPENERS: Final = {
    ord("{"): (Container.OBJECT, LexicalClass.OBJECT_START),
    ord("["): (Container.ARRAY, LexicalClass.ARRAY_START),
}

# closing byte -> (container expected, class of an empty container, resulting class)
CLOSERS: Final = {
    ord("}"): (
        Container.OBJECT,
        LexicalClass.OBJECT_START,
        LexicalClass.OBJECT_END,
    ),
    ord("]"): (
        Container.ARRAY,
        LexicalClass.ARRAY_START,
        LexicalClass.ARRAY_END,
    ),
}

COMPLETED_VALUES: Final = frozenset(
    {LexicalClass.VALUE, LexicalClass.OBJECT_END, LexicalClass.ARRAY_END}
)


def expects_key(previous: LexicalClass, top: Container | None) -> bool:
    """True when the next string is an object key."""
    return previous is LexicalClass.OBJECT_START or (
        previous is LexicalClass.ITERATOR and top is Container.OBJECT
    )


def expects_value(previous: LexicalClass, top: Container | None) -> bool:
    """True when the next token must be a value."""
    return previous in (
        LexicalClass.OBJECT_SEPARATOR,
        LexicalClass.ARRAY_START,
    ) or (previous is LexicalClass.ITERATOR and top is Container.ARRAY)


def completes_value(previous: LexicalClass) -> bool:
    """True when a value just ended, so a separator or closer may follow."""
    return previous in COMPLETED_VALUES


def _describe(byte: int) -> str:
    if 0x20 <= byte < 0x7F:
        return repr(chr(byte))
    return f"0x{byte:02x}"


class ByteReader:
    """
    Chunked byte source with one byte of lookahead and position tracking.

    Only consumed bytes move the position; peeking does not.
    """

    def __init__(self, source: BinaryIO, chunk_size: int) -> None:
        self.source = source
        self.chunk_size = chunk_size
        self.line = 1
        self.column = 0
        self._buffer = b""
        self._index = 0
        self._exhausted = False

    @property
    def position(self) -> Position:
        return Position(self.line, self.column)

    def _fill(self) -> bool:
        if self._exhausted:
            return False
        chunk = self.source.read(self.chunk_size)
        if isinstance(chunk, str):
            raise TypeError("source must be opened in binary mode")
        if not chunk:
            self._exhausted = True
            return False
        self._buffer = bytes(chunk)
        self._index = 0
        return True

    def peek(self) -> int | None:
        """Returns the next byte without consuming it, or None at end of input."""
        if self._index >= len(self._buffer) and not self._fill():
            return None
        return self._buffer[self._index]

    def advance(self) -> int | None:
        """Consumes and returns the next byte, or None at end of input."""
        byte = self.peek()
        if byte is None:
            return None
        self._index += 1
        if byte == NEWLINE:
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        return byte


class StreamRewriter:
    """
    Validates a JSON object document while rewriting its strings.

    ``parse()`` consumes ``source`` to the end, writes the rewritten document
    to ``output`` and fills ``identifiers``. The first grammar or encoding
    problem aborts with a positioned ParseError; output produced before the
    failure is flushed but not rolled back.
    """

    def __init__(
        self,
        source: BinaryIO,
        output: BinaryIO,
        config: ParseConfig | None = None,
        identifiers: IdentifierTable | None = None,
    ) -> None:
        self.config = config if config is not None else ParseConfig()
        self.reader = ByteReader(source, self.config.chunk_size)
        self.output = output
        self.identifiers = (
            identifiers if identifiers is not None else IdentifierTable()
        )
        self.state = LexicalClass.NONE
        self.stack: list[Container] = []
        self.string_count = 0
        self._pending = bytearray()

    @property
    def top(self) -> Container | None:
        """Innermost open container, or None outside any container."""
        return self.stack[-1] if self.stack else None

    @property
    def done(self) -> bool:
        return self.state is LexicalClass.DONE

    def parse(self) -> IdentifierTable:
        """Rewrites the whole input and returns the populated identifier table."""
        logger.debug("Rewriting document")
        with ProfileContext("parse"):
            try:
                byte = self.reader.advance()
                while byte is not None:
                    self._step(byte)
                    byte = self.reader.advance()

                if not self.done:
                    raise MissingToken(self._missing_message(), self.position)
            finally:
                self._flush()

        logger.debug(
            "Rewrote document: %d strings, %d distinct",
            self.string_count,
            len(self.identifiers),
        )
        return self.identifiers

    @property
    def position(self) -> Position:
        return self.reader.position

    def _missing_message(self) -> str:
        if self.state is LexicalClass.NONE:
            return "Missing token, expected '{'"
        return f"Missing token, {len(self.stack)} unclosed container(s)"

    def _emit(self, data: bytes) -> None:
        self._pending += data
        if len(self._pending) >= self.config.chunk_size:
            self._flush()

    def _flush(self) -> None:
        if self._pending:
            self.output.write(bytes(self._pending))
            self._pending.clear()

    def _unexpected(self, byte: int) -> UnexpectedToken:
        return UnexpectedToken(
            f"Unexpected token {_describe(byte)}", self.position
        )

    def _step(self, byte: int) -> None:  # noqa: PLR0912
        """Validates one consumed byte against the current state and emits it."""
        if byte in WHITESPACE:
            self._emit(bytes((byte,)))
            return

        previous, top = self.state, self.top

        if previous is LexicalClass.DONE:
            if byte in CLOSERS:
                raise MismatchedToken(
                    f"Unmatched {_describe(byte)}, no container is open",
                    self.position,
                )
            raise TrailingContent(
                f"Unexpected trailing content {_describe(byte)}",
                self.position,
            )

        if byte in OPENERS:
            container, opened = OPENERS[byte]
            top_level = (
                previous is LexicalClass.NONE and container is Container.OBJECT
            )
            if not (top_level or expects_value(previous, top)):
                raise self._unexpected(byte)
            self.stack.append(container)
            self._emit(bytes((byte,)))
            self.state = opened
        elif byte in CLOSERS:
            self._close(byte)
        elif byte == COLON:
            if previous is not LexicalClass.STRING:
                raise self._unexpected(byte)
            self._emit(b":")
            self.state = LexicalClass.OBJECT_SEPARATOR
        elif byte == COMMA:
            if not completes_value(previous):
                raise self._unexpected(byte)
            self._emit(b",")
            self.state = LexicalClass.ITERATOR
        elif byte == QUOTE:
            if expects_key(previous, top):
                self._rewrite_string()
                self.state = LexicalClass.STRING
            elif expects_value(previous, top):
                self._rewrite_string()
                self.state = LexicalClass.VALUE
            else:
                raise self._unexpected(byte)
        elif byte in LITERALS:
            if not expects_value(previous, top):
                raise self._unexpected(byte)
            self._match_literal(LITERALS[byte])
            self.state = LexicalClass.VALUE
        elif byte in NUMBER_START:
            if not expects_value(previous, top):
                raise self._unexpected(byte)
            self._scan_number(byte)
            self.state = LexicalClass.VALUE
        else:
            raise self._unexpected(byte)

    def _close(self, byte: int) -> None:
        container, empty, closed = CLOSERS[byte]
        if not self.stack:
            raise MismatchedToken(
                f"Unmatched {_describe(byte)}, no container is open",
                self.position,
            )
        if self.stack[-1] is not container:
            raise MismatchedToken(
                f"Mismatched {_describe(byte)} closing an open "
                f"{self.stack[-1].value}",
                self.position,
            )
        if not (completes_value(self.state) or self.state is empty):
            raise self._unexpected(byte)

        self.stack.pop()
        self._emit(bytes((byte,)))
        self.state = closed if self.stack else LexicalClass.DONE

    def _rewrite_string(self) -> None:
        """Collects a string body after its opening quote and emits its encoding."""
        origin = self.position
        raw = bytearray()
        escaped = False

        while True:
            byte = self.reader.advance()
            if byte is None:
                raise MissingToken("Unterminated string", self.position)
            if escaped:
                raw.append(byte)
                escaped = False
            elif byte == BACKSLASH:
                raw.append(byte)
                escaped = True
            elif byte == NEWLINE:
                raise MultilineStringNotSupported(
                    "Multi-line strings are not supported", self.position
                )
            elif byte == QUOTE:
                break
            else:
                raw.append(byte)

        encoded = self.identifiers.resolve(
            bytes(raw), lambda body: encode_string(body, origin)
        )
        self._emit(b'"' + encoded.encode("ascii") + b'"')
        self.string_count += 1

    def _match_literal(self, literal: bytes) -> None:
        """Checks the rest of true/false/null after its first byte."""
        for expected in literal[1:]:
            byte = self.reader.advance()
            if byte is None:
                raise MissingToken(
                    f"Missing token, expected {literal.decode('ascii')!r}",
                    self.position,
                )
            if byte != expected:
                raise self._unexpected(byte)
        self._emit(literal)

    def _scan_number(self, first: int) -> None:
        """
        Consumes a numeric literal and re-emits its exact source bytes.

        The span is delimited lexically, then checked against the JSON number
        grammar, so the output never depends on how a float would print.
        """
        with ProfileContext("scan_number"):
            span = bytearray((first,))
            byte = self.reader.peek()
            while byte is not None and byte in NUMBER_CHARS:
                self.reader.advance()
                span.append(byte)
                byte = self.reader.peek()

            text = bytes(span)
            if NUMBER_RE.fullmatch(text) is None:
                raise InvalidNumber(
                    f"Invalid number {text.decode('ascii')!r}", self.position
                )
            self._emit(text)


__all__ = [
    "ByteReader",
    "Container",
    "LexicalClass",
    "StreamRewriter",
    "completes_value",
    "expects_key",
    "expects_value",
]
