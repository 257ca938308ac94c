"""
charstream

Decode a byte stream into UTF-8 characters one at a time, with optional
lookahead, for incremental parsers.

Example usage:
    >>> from charstream import CharacterStream
    >>>
    >>> # Plain iteration
    >>> for char in CharacterStream.from_bytes(b"ab\\xe2\\x82\\xac"):
    ...     print(char)
    >>>
    >>> # Lookahead
    >>> chars = CharacterStream.from_bytes(b"<!--").peekable_multi()
    >>> [chars.peek() for _ in range(4)]
    ['<', '!', '-', '-']
"""

from importlib.metadata import PackageNotFoundError, version

from charstream._errors import (
    CharacterError,
    DecodeError,
    IoError,
    NoBytesRead,
    UnexpectedEndOfInput,
)
from charstream._sources import ChunkedByteSource, ResponseByteSource
from charstream._types import (
    DEFAULT_CHUNK_SIZE,
    INTERRUPTED_MAXIMUM,
    REPLACEMENT_CHARACTER,
    ByteSource,
    CharacterResult,
    CharSource,
    Peekable,
)
from charstream.chars import decode_chars, iter_chars, iter_response_chars
from charstream.decoder import CharacterStream
from charstream.iterator import CharacterIterator
from charstream.peek import MultiPeekableCharacterStream, PeekableCharacterStream

__all__ = [
    # Types
    "ByteSource",
    "CharSource",
    "Peekable",
    "CharacterResult",
    # Constants
    "DEFAULT_CHUNK_SIZE",
    "INTERRUPTED_MAXIMUM",
    "REPLACEMENT_CHARACTER",
    # Errors
    "CharacterError",
    "NoBytesRead",
    "IoError",
    "UnexpectedEndOfInput",
    "DecodeError",
    # Top-level functions
    "iter_chars",
    "decode_chars",
    "iter_response_chars",
    # Stream classes
    "CharacterStream",
    "PeekableCharacterStream",
    "MultiPeekableCharacterStream",
    "CharacterIterator",
    # Byte sources
    "ChunkedByteSource",
    "ResponseByteSource",
]

# Use importlib.metadata for version (works with installed package)
# Fall back to hard-coded version for editable installs
try:
    __version__ = version("charstream")
except PackageNotFoundError:
    __version__ = "0.1.0"
