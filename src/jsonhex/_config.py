"""Immutable rewriter settings and environment switches."""

import os
from dataclasses import dataclass
from typing import Final

DEFAULT_CHUNK_SIZE: Final = 65536

# Read once at import, like JSONHEX_PROFILE.
LOG_LEVEL: Final = os.environ.get("JSONHEX_LOG_LEVEL", "WARNING").upper()


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures rewriting behavior with immutable settings.

    ``chunk_size`` bounds both how many bytes are pulled from the source per
    read and how much rewritten output is buffered before it is written.
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        if isinstance(self.chunk_size, bool) or not isinstance(
            self.chunk_size, int
        ):
            raise TypeError("chunk_size must be an integer")
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be a positive integer")
