"""
Canonical \\uXXXX encoding of raw JSON string bodies.

The encoder works on the bytes found between a string's quotes, escape
sequences still in textual form, and turns every source codepoint into one
lowercase four-digit ``\\uXXXX`` group (two groups, a UTF-16 surrogate pair,
above the Basic Multilingual Plane).
"""

from typing import Final

from ._errors import ORIGIN
from ._errors import InvalidCodePoint
from ._errors import InvalidEscapeSequence
from ._errors import InvalidUnicodeEscape
from ._errors import InvalidUtf8Encoding
from ._errors import Position
from ._errors import UnterminatedUnicodeEscape
from ._profiling import ProfileContext

BACKSLASH: Final = ord("\\")
UNICODE_MARKER: Final = ord("u")
HEX_DIGITS: Final = frozenset(b"0123456789abcdefABCDEF")

# No arithmetic links an escape letter to its codepoint, so spell them out.
ESCAPE_CODES: Final = {
    ord("b"): "\\u0008",
    ord("f"): "\\u000c",
    ord("n"): "\\u000a",
    ord("r"): "\\u000d",
    ord("t"): "\\u0009",
    ord('"'): "\\u0022",
    ord("/"): "\\u002f",
    ord("\\"): "\\u005c",
}

SURROGATE_MIN: Final = 0xD800
SURROGATE_MAX: Final = 0xDFFF
BMP_MAX: Final = 0xFFFF
MAX_CODEPOINT: Final = 0x10FFFF

ASCII_LIMIT: Final = 0x80

# lead byte mask, lead byte pattern, payload mask, continuation count,
# smallest codepoint that may use this length
UTF8_LEADS: Final = (
    (0b11100000, 0b11000000, 0b00011111, 1, 0x80),
    (0b11110000, 0b11100000, 0b00001111, 2, 0x800),
    (0b11111000, 0b11110000, 0b00000111, 3, 0x10000),
)


def encode_codepoint(codepoint: int, position: Position = ORIGIN) -> str:
    """
    Encodes a single codepoint as one or two \\uXXXX groups.

    Codepoints above U+FFFF become a high/low surrogate pair; surrogates
    themselves and anything beyond U+10FFFF are rejected.
    """
    if codepoint < SURROGATE_MIN:
        return f"\\u{codepoint:04x}"
    if codepoint <= SURROGATE_MAX:
        raise InvalidCodePoint(
            f"Invalid code point U+{codepoint:04X}", position
        )
    if codepoint <= BMP_MAX:
        return f"\\u{codepoint:04x}"
    if codepoint > MAX_CODEPOINT:
        raise InvalidCodePoint(f"Invalid code point U+{codepoint:X}", position)

    offset = codepoint - 0x10000
    high = offset // 0x400 + 0xD800
    low = offset % 0x400 + 0xDC00
    return f"\\u{high:04x}\\u{low:04x}"


def _encode_escape(raw: bytes, i: int, origin: Position) -> tuple[str, int]:
    """Encodes the escape sequence starting at raw[i] and returns the new index."""
    if i + 1 >= len(raw):
        raise InvalidEscapeSequence(
            "Missing escape sequence", origin.shifted(i + 1)
        )

    marker = raw[i + 1]
    if marker in ESCAPE_CODES:
        return ESCAPE_CODES[marker], i + 2
    if marker != UNICODE_MARKER:
        raise InvalidEscapeSequence(
            f"Invalid escape sequence {chr(marker)!r}", origin.shifted(i + 1)
        )

    digits = raw[i + 2 : i + 6]
    for offset, digit in enumerate(digits):
        if digit not in HEX_DIGITS:
            raise InvalidUnicodeEscape(
                "Invalid unicode character", origin.shifted(i + 3 + offset)
            )
    if len(digits) < 4:
        raise UnterminatedUnicodeEscape(
            "Unfinished unicode character", origin.shifted(i + 1)
        )

    # Escaped digits are copied as written, case included.
    return "\\u" + digits.decode("ascii"), i + 6


def _encode_utf8(raw: bytes, i: int, origin: Position) -> tuple[str, int]:
    """Decodes the UTF-8 sequence starting at raw[i] and encodes its codepoint."""
    lead = raw[i]
    if lead < ASCII_LIMIT:
        return f"\\u{lead:04x}", i + 1

    for mask, pattern, payload, count, minimum in UTF8_LEADS:
        if lead & mask == pattern:
            break
    else:
        raise InvalidUtf8Encoding(
            f"Invalid UTF-8 lead byte 0x{lead:02x}", origin.shifted(i + 1)
        )

    codepoint = lead & payload
    for k in range(1, count + 1):
        if i + k >= len(raw):
            raise InvalidUtf8Encoding(
                "Missing UTF-8 continuation byte", origin.shifted(i + k)
            )
        byte = raw[i + k]
        if byte & 0b11000000 != 0b10000000:
            raise InvalidUtf8Encoding(
                f"Invalid UTF-8 continuation byte 0x{byte:02x}",
                origin.shifted(i + k + 1),
            )
        codepoint = (codepoint << 6) | (byte & 0b00111111)

    if codepoint < minimum:
        raise InvalidUtf8Encoding(
            "Overlong UTF-8 encoding", origin.shifted(i + 1)
        )

    return encode_codepoint(codepoint, origin.shifted(i + 1)), i + count + 1


def encode_string(raw: bytes | str, origin: Position = ORIGIN) -> str:
    """
    Converts a raw string body into its canonical \\uXXXX form.

    ``raw`` is the content between the quotes exactly as it appeared in the
    source; ``str`` input is taken as its UTF-8 bytes. ``origin`` is the
    position of the opening quote and is used to position errors on the
    offending byte.
    """
    if isinstance(raw, str):
        raw = raw.encode("utf-8")

    with ProfileContext("encode_string", len(raw)):
        parts: list[str] = []
        i = 0
        while i < len(raw):
            if raw[i] == BACKSLASH:
                text, i = _encode_escape(raw, i, origin)
            else:
                text, i = _encode_utf8(raw, i, origin)
            parts.append(text)
        return "".join(parts)


__all__ = ["encode_codepoint", "encode_string"]
