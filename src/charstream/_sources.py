"""
Byte sources built from chunked input.

Network bodies arrive as an iterator of chunks rather than a file-like
object. These adapters expose such input through the `read(size)` byte
source protocol so it can be decoded one character at a time.
"""

from __future__ import annotations

from collections.abc import Iterable

import httpx


class ChunkedByteSource:
    """
    Present an iterable of byte chunks as a readable byte source.

    Chunks are split and joined as needed; `read(size)` returns at most
    `size` bytes and an empty bytes object once the chunks run out.
    """

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks = iter(chunks)
        self._buffer = b""
        self._exhausted = False

    @property
    def exhausted(self) -> bool:
        """Whether every chunk has been handed out."""
        return self._exhausted and not self._buffer

    def _next_chunk(self) -> bytes:
        return next(self._chunks)

    def read(self, size: int = -1, /) -> bytes:
        """
        Read up to `size` bytes (everything buffered plus one chunk if negative).

        Args:
            size: Maximum number of bytes to return

        Returns:
            The bytes read, empty at end of input
        """
        if size == 0:
            return b""

        while not self._buffer and not self._exhausted:
            try:
                self._buffer = bytes(self._next_chunk())
            except StopIteration:
                self._exhausted = True

        if size < 0:
            data, self._buffer = self._buffer, b""
        else:
            data, self._buffer = self._buffer[:size], self._buffer[size:]
        return data

    def close(self) -> None:
        """Drop buffered bytes and close the chunk iterator if it is a generator."""
        self._buffer = b""
        self._exhausted = True
        close = getattr(self._chunks, "close", None)
        if callable(close):
            close()


class ResponseByteSource(ChunkedByteSource):
    """
    Byte source over the body of a streaming httpx.Response.

    Transport failures while reading the body are raised as OSError so the
    character layers report them like any other I/O error: timeouts become
    TimeoutError, everything else a plain OSError.
    """

    def __init__(self, response: httpx.Response, chunk_size: int | None = None) -> None:
        super().__init__(response.iter_bytes(chunk_size))
        self._response = response

    @property
    def response(self) -> httpx.Response:
        return self._response

    def _next_chunk(self) -> bytes:
        try:
            return super()._next_chunk()
        except httpx.TimeoutException as e:
            raise TimeoutError(f"Timed out reading {self._response.url}: {e}") from e
        except httpx.TransportError as e:
            raise OSError(f"Failed reading {self._response.url}: {e}") from e

    def close(self) -> None:
        """Close the response body."""
        super().close()
        self._response.close()
