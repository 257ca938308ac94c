"""
CharacterStream: decode one UTF-8 scalar value per call from a byte source.

The decoder never buffers more input than the character it is working on.
Malformed sequences are detected byte by byte, so the byte that breaks a
sequence is held back and starts the next character, matching the
"maximal subpart" replacement rule of the built-in UTF-8 codec.
"""

from __future__ import annotations

import io
import logging
import os
from collections import deque
from typing import TYPE_CHECKING

from charstream._errors import (
    DecodeError,
    IoError,
    NoBytesRead,
    UnexpectedEndOfInput,
)
from charstream._types import INTERRUPTED_MAXIMUM, REPLACEMENT_CHARACTER, ByteSource
from charstream._utf8 import continuation_count, is_valid_continuation

if TYPE_CHECKING:
    from charstream.iterator import CharacterIterator
    from charstream.peek import MultiPeekableCharacterStream, PeekableCharacterStream

logger = logging.getLogger(__name__)


class CharacterStream:
    """
    Reads UTF-8 encoded characters from a byte source.

    In strict mode malformed input raises DecodeError carrying the offending
    bytes. In lossy mode every maximal invalid subsequence becomes a single
    U+FFFD instead.

    Usage as a context manager closes the byte source on exit:

        with CharacterStream.from_path("input.txt") as chars:
            for char in chars:
                ...
    """

    def __init__(self, source: ByteSource, lossy: bool = False) -> None:
        self._source = source
        self._lossy = lossy
        self._pending: deque[int] = deque()
        self._closed = False

    @classmethod
    def from_bytes(cls, data: bytes | bytearray, lossy: bool = False) -> CharacterStream:
        """Create a stream over an in-memory buffer."""
        return cls(io.BytesIO(bytes(data)), lossy=lossy)

    @classmethod
    def from_path(cls, path: str | os.PathLike[str], lossy: bool = False) -> CharacterStream:
        """
        Create a stream over a file opened in binary mode.

        The file is closed together with the stream.
        """
        return cls(open(path, "rb"), lossy=lossy)  # noqa: SIM115

    @property
    def is_lossy(self) -> bool:
        """Whether malformed input is replaced with U+FFFD."""
        return self._lossy

    @property
    def source(self) -> ByteSource:
        """The underlying byte source."""
        return self._source

    @property
    def closed(self) -> bool:
        """Whether the stream is closed."""
        return self._closed

    def close(self) -> None:
        """Close the stream and the byte source, if it can be closed."""
        if not self._closed:
            self._closed = True
            close = getattr(self._source, "close", None)
            if callable(close):
                close()

    def __enter__(self) -> CharacterStream:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __iter__(self) -> CharacterIterator:
        return self.iter_chars()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(source={self._source!r}, lossy={self._lossy!r})"

    # ------------------------------------------------------------------
    # Wrapping
    # ------------------------------------------------------------------

    def peekable(self) -> PeekableCharacterStream:
        """Wrap this stream with a single-slot peek buffer."""
        from charstream.peek import PeekableCharacterStream

        return PeekableCharacterStream(self)

    def peekable_multi(self) -> MultiPeekableCharacterStream:
        """Wrap this stream with a replayable multi-character peek buffer."""
        from charstream.peek import MultiPeekableCharacterStream

        return MultiPeekableCharacterStream(self)

    def iter_chars(self, max_interruptions: int = INTERRUPTED_MAXIMUM) -> CharacterIterator:
        """
        Iterate over the characters of this stream.

        Args:
            max_interruptions: Retries allowed for consecutive interrupted reads

        Returns:
            A CharacterIterator owning this stream
        """
        from charstream.iterator import CharacterIterator

        return CharacterIterator(self, max_interruptions=max_interruptions)

    # ------------------------------------------------------------------
    # Raw reads
    # ------------------------------------------------------------------

    def _next_byte(self, consumed: bytes | bytearray) -> int | None:
        """
        Take one byte, preferring a held-back byte over the source.

        An interrupted read puts `consumed` back in front of the held-back
        bytes, so retrying the request resumes it instead of losing them.

        Args:
            consumed: Bytes already read for the current request, attached to
                any IoError raised

        Returns:
            The byte, or None if the source is exhausted
        """
        if self._pending:
            return self._pending.popleft()

        try:
            chunk = self._source.read(1)
        except OSError as e:
            if isinstance(e, InterruptedError):
                self._pending.extendleft(reversed(consumed))
            raise IoError(e, bytes(consumed)) from e

        if not chunk:
            return None
        if len(chunk) > 1:
            # Source ignored the size hint; keep the surplus for later reads
            self._pending.extend(chunk[1:])
        return chunk[0]

    def read_bytes(self, amount: int) -> bytes:
        """
        Read exactly `amount` raw bytes.

        Args:
            amount: Number of bytes to read

        Returns:
            The bytes read

        Raises:
            NoBytesRead: The source was already exhausted
            UnexpectedEndOfInput: The source ran out before `amount` bytes
            IoError: The source raised an OSError
        """
        if amount <= 0:
            return b""

        data = bytearray()
        while len(data) < amount:
            byte = self._next_byte(data)
            if byte is None:
                break
            data.append(byte)

        if not data:
            raise NoBytesRead()
        if len(data) != amount:
            raise UnexpectedEndOfInput(bytes(data), expected=amount)
        return bytes(data)

    def read_byte(self) -> int:
        """Read a single raw byte."""
        return self.read_bytes(1)[0]

    # ------------------------------------------------------------------
    # Character reads
    # ------------------------------------------------------------------

    def read_char(self) -> str:
        """
        Read the next character from the stream.

        Returns:
            A single-character string

        Raises:
            NoBytesRead: The input is exhausted (clean end)
            UnexpectedEndOfInput: The input ended inside a sequence (strict only)
            DecodeError: The bytes are not valid UTF-8 (strict only)
            IoError: The source raised an OSError
        """
        leading = self._next_byte(b"")
        if leading is None:
            raise NoBytesRead()

        count = continuation_count(leading)
        if count is None:
            return self._malformed(bytes([leading]), "invalid start byte")

        sequence = bytearray([leading])
        for index in range(1, count + 1):
            byte = self._next_byte(sequence)
            if byte is None:
                if self._lossy:
                    return REPLACEMENT_CHARACTER
                raise UnexpectedEndOfInput(bytes(sequence), expected=count + 1)
            if not is_valid_continuation(leading, index, byte):
                # The breaking byte starts the next character
                self._pending.appendleft(byte)
                return self._malformed(bytes(sequence), "invalid continuation byte")
            sequence.append(byte)

        return self._decode(bytes(sequence))

    def _malformed(self, data: bytes, reason: str) -> str:
        """Replace or reject a maximal invalid subsequence."""
        if self._lossy:
            logger.debug("Replacing invalid UTF-8 bytes %s: %s", data.hex(" "), reason)
            return REPLACEMENT_CHARACTER

        cause = UnicodeDecodeError("utf-8", data, 0, len(data), reason)
        raise DecodeError(f"Invalid UTF-8 sequence: {reason}", data, cause=cause) from cause

    def _decode(self, data: bytes) -> str:
        """Decode a structurally complete sequence into exactly one character."""
        try:
            text = data.decode("utf-8", "replace" if self._lossy else "strict")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 sequence: {e.reason}", data, cause=e) from e

        if len(text) != 1:
            raise DecodeError(f"Expected 1 character, not {len(text)}", data)
        return text
