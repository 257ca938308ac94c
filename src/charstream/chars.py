"""
Top-level helpers for iterating characters.

These wrap a byte source in a CharacterStream and a CharacterIterator in one
call, which is all most consumers need.
"""

from __future__ import annotations

import httpx

from charstream._sources import ResponseByteSource
from charstream._types import (
    DEFAULT_CHUNK_SIZE,
    INTERRUPTED_MAXIMUM,
    ByteSource,
    CharacterResult,
)
from charstream.decoder import CharacterStream
from charstream.iterator import CharacterIterator


def iter_chars(
    source: ByteSource,
    *,
    lossy: bool = False,
    max_interruptions: int = INTERRUPTED_MAXIMUM,
) -> CharacterIterator:
    """
    Iterate over the characters of a byte source.

    Args:
        source: Object with a `read(size)` method returning bytes
        lossy: Replace malformed input with U+FFFD instead of yielding errors
        max_interruptions: Retries allowed for consecutive interrupted reads

    Returns:
        A CharacterIterator that owns the source

    Example:
        >>> with open("input.txt", "rb") as f:
        ...     for char in iter_chars(f):
        ...         print(char)
    """
    return CharacterStream(source, lossy=lossy).iter_chars(max_interruptions)


def decode_chars(data: bytes | bytearray, *, lossy: bool = False) -> list[CharacterResult]:
    """
    Decode an in-memory buffer into a list of characters and errors.

    Args:
        data: The UTF-8 encoded bytes
        lossy: Replace malformed input with U+FFFD instead of returning errors

    Returns:
        Every element the iterator produced, in order
    """
    with CharacterStream.from_bytes(data, lossy=lossy) as stream:
        return list(stream)


def iter_response_chars(
    response: httpx.Response,
    *,
    lossy: bool = False,
    chunk_size: int | None = DEFAULT_CHUNK_SIZE,
    max_interruptions: int = INTERRUPTED_MAXIMUM,
) -> CharacterIterator:
    """
    Iterate over the characters of a streaming HTTP response body.

    The body is read chunk by chunk; a character split across chunk
    boundaries is decoded once all of its bytes have arrived. Closing the
    iterator closes the response.

    Args:
        response: A response opened with `client.stream(...)` or `send(stream=True)`
        lossy: Replace malformed input with U+FFFD instead of yielding errors
        chunk_size: Chunk size passed to `response.iter_bytes()`
        max_interruptions: Retries allowed for consecutive interrupted reads

    Returns:
        A CharacterIterator over the body

    Example:
        >>> with httpx.stream("GET", "https://example.com/data.txt") as res:
        ...     for char in iter_response_chars(res):
        ...         print(char)
    """
    source = ResponseByteSource(response, chunk_size=chunk_size)
    return iter_chars(source, lossy=lossy, max_interruptions=max_interruptions)
