"""
Core types for charstream.

This module defines the capabilities the decoding layers are written against.
"""

from typing import Protocol, runtime_checkable

from charstream._errors import CharacterError

# A decoded character, or the error that took its place
CharacterResult = str | CharacterError


@runtime_checkable
class ByteSource(Protocol):
    """
    Anything that can hand out raw bytes.

    `read(size)` blocks until at least one byte is available and returns at
    most `size` bytes. An empty result means the input is exhausted. Failures
    are reported by raising OSError; InterruptedError is treated as transient.
    """

    def read(self, size: int, /) -> bytes: ...


@runtime_checkable
class CharSource(Protocol):
    """Anything that produces one decoded character per call."""

    @property
    def is_lossy(self) -> bool: ...

    def read_char(self) -> str: ...


@runtime_checkable
class Peekable(CharSource, Protocol):
    """A character source that can look at the next result without consuming it."""

    def peek(self) -> CharacterResult | None: ...


# Replacement for malformed input in lossy mode
REPLACEMENT_CHARACTER = "�"

# Retries allowed for consecutive InterruptedError reads before giving up
INTERRUPTED_MAXIMUM = 5

# Chunk size requested from HTTP response bodies (None lets httpx decide)
DEFAULT_CHUNK_SIZE: int | None = None
