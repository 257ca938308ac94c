"""
Lookahead buffers over a CharacterStream.

Two disciplines share the Peekable capability:

- PeekableCharacterStream caches at most one result.
- MultiPeekableCharacterStream keeps a queue and a replay cursor so a parser
  can look arbitrarily far ahead, rewind, and look again.

Decoded results are cached as values. A cached error is handed back by
peek() and raised by the read_char() that consumes it, so caching never
hides or rewrites a failure. An interrupted read is returned but not
cached: it does not occupy a position, and peeking again retries it.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from charstream._errors import CharacterError, IoError, NoBytesRead
from charstream._types import INTERRUPTED_MAXIMUM, CharacterResult

if TYPE_CHECKING:
    from charstream.decoder import CharacterStream
    from charstream.iterator import CharacterIterator


def _unwrap(result: CharacterResult) -> str:
    if isinstance(result, CharacterError):
        raise result
    return result


def _is_interruption(result: CharacterResult | None) -> bool:
    return isinstance(result, IoError) and result.is_interrupted


class _BufferedCharacterStream:
    """Shared plumbing for the peek buffers."""

    def __init__(self, stream: CharacterStream) -> None:
        self._stream = stream
        self._buffer: deque[CharacterResult] = deque()

    @property
    def is_lossy(self) -> bool:
        """Whether the wrapped stream replaces malformed input."""
        return self._stream.is_lossy

    @property
    def stream(self) -> CharacterStream:
        """The wrapped CharacterStream."""
        return self._stream

    @property
    def closed(self) -> bool:
        return self._stream.closed

    def close(self) -> None:
        """Drop cached results and close the wrapped stream."""
        self._buffer.clear()
        self._stream.close()

    def __enter__(self):
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._buffer)

    def __iter__(self) -> CharacterIterator:
        return self.iter_chars()

    def iter_chars(self, max_interruptions: int = INTERRUPTED_MAXIMUM) -> CharacterIterator:
        """Iterate over the remaining characters, cached ones first."""
        from charstream.iterator import CharacterIterator

        return CharacterIterator(self, max_interruptions=max_interruptions)

    def _decode_next(self) -> CharacterResult | None:
        """
        Decode one fresh result from the wrapped stream.

        Returns:
            The character or error, or None at a clean end of input
        """
        try:
            return self._stream.read_char()
        except NoBytesRead:
            return None
        except CharacterError as e:
            return e

    def _consume(self) -> str:
        if self._buffer:
            return _unwrap(self._buffer.popleft())
        return self._stream.read_char()


class PeekableCharacterStream(_BufferedCharacterStream):
    """
    A CharacterStream with a single cached lookahead slot.

    Example:
        >>> chars = CharacterStream.from_bytes(b"ab").peekable()
        >>> chars.peek()
        'a'
        >>> chars.read_char()
        'a'
    """

    def peek(self) -> CharacterResult | None:
        """
        Return the next result without consuming it.

        Repeated calls return the same cached result.

        Returns:
            The next character or error, or None at the end of input
        """
        if self._buffer:
            return self._buffer[0]

        result = self._decode_next()
        if result is not None and not _is_interruption(result):
            self._buffer.append(result)
        return result

    def read_char(self) -> str:
        """Consume the next character, draining the cached slot first."""
        return self._consume()


class MultiPeekableCharacterStream(_BufferedCharacterStream):
    """
    A CharacterStream with unbounded, replayable lookahead.

    Each peek() moves a cursor one result further ahead. reset_peek() moves
    the cursor back to the consumption point while keeping everything
    already decoded. The cache grows until reads catch up with it.

    Example:
        >>> chars = CharacterStream.from_bytes(b"abc").peekable_multi()
        >>> chars.peek(), chars.peek()
        ('a', 'b')
        >>> chars.reset_peek()
        >>> chars.peek()
        'a'
    """

    def __init__(self, stream: CharacterStream) -> None:
        super().__init__(stream)
        self._position = 0

    @property
    def peek_position(self) -> int:
        """How many results ahead of the consumption point the cursor sits."""
        return self._position

    def peek(self) -> CharacterResult | None:
        """
        Return the result under the cursor and advance the cursor.

        Results past the cached tail are decoded and appended to the cache.

        Returns:
            The character or error, or None at the end of input (the cursor
            stays put, as it does for an interrupted read)
        """
        if self._position < len(self._buffer):
            result = self._buffer[self._position]
        else:
            result = self._decode_next()
            if result is None or _is_interruption(result):
                return result
            self._buffer.append(result)

        self._position += 1
        return result

    def reset_peek(self) -> None:
        """Rewind the cursor to the consumption point."""
        self._position = 0

    def read_char(self) -> str:
        """Consume the next character and rewind the cursor."""
        self.reset_peek()
        return self._consume()

    def close(self) -> None:
        self._position = 0
        super().close()
