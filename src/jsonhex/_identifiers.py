"""Deduplicating table of raw string contents and their encoded forms."""

import logging
from collections.abc import Callable
from collections.abc import Iterator
from typing import BinaryIO

logger = logging.getLogger(__name__)

Encoder = Callable[[bytes], str]


class IdentifierTable:
    """
    Insertion-ordered mapping from raw string bodies to their encoding.

    Each distinct raw value is stored once, the first time it is seen, and is
    never replaced afterwards. Keys are the bytes found between the quotes with
    escape sequences left as written.
    """

    def __init__(self) -> None:
        self._entries: dict[bytes, str] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, raw: object) -> bool:
        return raw in self._entries

    def __iter__(self) -> Iterator[tuple[bytes, str]]:
        return iter(self._entries.items())

    def lookup(self, raw: bytes) -> str | None:
        """Returns the encoded form of `raw`, or None if it was never seen."""
        return self._entries.get(raw)

    def insert(self, raw: bytes, encoded: str) -> str:
        """Stores `encoded` for `raw` unless present; returns the stored value."""
        return self._entries.setdefault(raw, encoded)

    def resolve(self, raw: bytes, encoder: Encoder) -> str:
        """Returns the encoding of `raw`, running `encoder` only on first sight."""
        encoded = self._entries.get(raw)
        if encoded is None:
            encoded = self.insert(raw, encoder(raw))
        return encoded

    def as_dict(self) -> dict[bytes, str]:
        return dict(self._entries)

    def render(self) -> bytes:
        """
        Renders the table as a JSON object, one tab-indented pair per line.

        Raw keys are written exactly as captured. They keep their original
        escape sequences, so a key containing an escaped quote stays valid.
        """
        pairs = b",\n".join(
            b'\t"' + raw + b'": "' + encoded.encode("ascii") + b'"'
            for raw, encoded in self._entries.items()
        )
        return b"{\n" + pairs + b"\n}"

    def flush(self, sink: BinaryIO) -> None:
        """Writes the rendered table to `sink`."""
        logger.debug("Writing %d identifier mappings", len(self._entries))
        sink.write(self.render())


__all__ = ["IdentifierTable"]
