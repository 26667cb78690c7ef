"""
Streaming JSON validator that rewrites string literals as \\uXXXX escapes.

Validates a JSON object document in a single pass, replaces the content of
every string with one canonical escape group per codepoint, and records a
deduplicated table mapping each original string to its encoded form.
"""

import io
from typing import Any
from typing import BinaryIO

from ._config import DEFAULT_CHUNK_SIZE
from ._config import ParseConfig
from ._encoder import encode_codepoint
from ._encoder import encode_string
from ._errors import DoneButTrailingContent
from ._errors import InvalidCodePoint
from ._errors import InvalidEscapeSequence
from ._errors import InvalidNumber
from ._errors import InvalidUnicodeEscape
from ._errors import InvalidUtf8Encoding
from ._errors import MismatchedToken
from ._errors import MissingToken
from ._errors import MultilineStringNotSupported
from ._errors import ParseError
from ._errors import Position
from ._errors import TrailingContent
from ._errors import UnexpectedToken
from ._errors import UnterminatedInput
from ._errors import UnterminatedUnicodeEscape
from ._identifiers import IdentifierTable
from ._parser import Container
from ._parser import LexicalClass
from ._parser import StreamRewriter
from ._profiling import HotPathStats
from ._profiling import clear_hot_path_stats
from ._profiling import get_hot_path_stats

__version__ = "0.1.0"


def _make_config(config: ParseConfig | None, kwargs: dict[str, Any]) -> ParseConfig:
    if config is not None and kwargs:
        raise TypeError("pass either config or keyword settings, not both")
    if config is None:
        return ParseConfig(**kwargs)
    if not isinstance(config, ParseConfig):
        raise TypeError("config must be a ParseConfig")
    return config


def rewrite(
    source: BinaryIO,
    output: BinaryIO,
    mapping: BinaryIO,
    config: ParseConfig | None = None,
    **kwargs: Any,
) -> IdentifierTable:
    """
    Rewrites the document read from `source` into `output`.

    The identifier table is written to `mapping` only once the whole document
    has been validated; on failure `mapping` is left untouched.
    """
    if not hasattr(source, "read"):
        raise TypeError("source must have a read() method")
    if not hasattr(output, "write") or not hasattr(mapping, "write"):
        raise TypeError("output and mapping must have a write() method")

    rewriter = StreamRewriter(source, output, _make_config(config, kwargs))
    identifiers = rewriter.parse()
    identifiers.flush(mapping)
    return identifiers


def rewrites(data: bytes | str, **kwargs: Any) -> tuple[bytes, bytes]:
    """
    Rewrites an in-memory document.

    Returns the rewritten document and the rendered identifier table.
    ``str`` input is encoded as UTF-8 first.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    if not isinstance(data, bytes | bytearray):
        raise TypeError(
            f"the JSON document must be bytes or str, not {type(data).__name__}"
        )

    output = io.BytesIO()
    mapping = io.BytesIO()
    rewrite(io.BytesIO(data), output, mapping, **kwargs)
    return output.getvalue(), mapping.getvalue()


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "Container",
    "DoneButTrailingContent",
    "HotPathStats",
    "IdentifierTable",
    "InvalidCodePoint",
    "InvalidEscapeSequence",
    "InvalidNumber",
    "InvalidUnicodeEscape",
    "InvalidUtf8Encoding",
    "LexicalClass",
    "MismatchedToken",
    "MissingToken",
    "MultilineStringNotSupported",
    "ParseConfig",
    "ParseError",
    "Position",
    "StreamRewriter",
    "TrailingContent",
    "UnexpectedToken",
    "UnterminatedInput",
    "UnterminatedUnicodeEscape",
    "clear_hot_path_stats",
    "encode_codepoint",
    "encode_string",
    "get_hot_path_stats",
    "rewrite",
    "rewrites",
]
