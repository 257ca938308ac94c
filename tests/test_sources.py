"""Tests for chunked byte sources and HTTP response bodies."""

from collections.abc import Iterator

import httpx
import pytest

from charstream import (
    ChunkedByteSource,
    IoError,
    iter_chars,
    iter_response_chars,
)


class FailingStream(httpx.SyncByteStream):
    """Response body that breaks after the first chunk."""

    def __init__(self, error: Exception) -> None:
        self._error = error

    def __iter__(self) -> Iterator[bytes]:
        yield b"ab"
        raise self._error


def make_client(content: bytes | httpx.SyncByteStream) -> httpx.Client:
    """Create an httpx.Client whose every request returns `content`."""

    def handler(request: httpx.Request) -> httpx.Response:
        if isinstance(content, httpx.SyncByteStream):
            return httpx.Response(200, stream=content)
        return httpx.Response(200, content=content)

    return httpx.Client(transport=httpx.MockTransport(handler))


class TestChunkedByteSource:
    """Tests for ChunkedByteSource."""

    def test_splits_and_joins_chunks(self) -> None:
        source = ChunkedByteSource([b"ab", b"", b"cde"])
        assert source.read(1) == b"a"
        assert source.read(5) == b"b"
        assert source.read(2) == b"cd"
        assert source.read(-1) == b"e"
        assert source.read(1) == b""
        assert source.exhausted

    def test_zero_size_read_leaves_chunks_alone(self) -> None:
        consumed: list[bytes] = []

        def chunks() -> Iterator[bytes]:
            for chunk in (b"ab", b"cd"):
                consumed.append(chunk)
                yield chunk

        source = ChunkedByteSource(chunks())
        assert source.read(0) == b""
        assert consumed == []
        assert not source.exhausted
        assert source.read(3) == b"ab"

    def test_character_split_across_chunks(self) -> None:
        source = ChunkedByteSource([b"\xe2", b"\x82", b"\xaca"])
        assert list(iter_chars(source)) == ["€", "a"]

    def test_accepts_generators(self) -> None:
        def chunks() -> Iterator[bytes]:
            yield "hé".encode()
            yield "llo".encode()

        assert "".join(iter_chars(ChunkedByteSource(chunks()))) == "héllo"

    def test_close_stops_reading(self) -> None:
        source = ChunkedByteSource([b"abc", b"def"])
        assert source.read(1) == b"a"
        source.close()
        assert source.read(1) == b""


class TestIterResponseChars:
    """Tests for iter_response_chars with httpx responses."""

    def test_decodes_body(self) -> None:
        with make_client("streamed ✓".encode()) as client:
            with client.stream("GET", "https://example.com/text") as response:
                assert "".join(iter_response_chars(response)) == "streamed ✓"

    def test_small_chunks_split_characters(self) -> None:
        text = "日本語 💻"
        with make_client(text.encode()) as client:
            with client.stream("GET", "https://example.com/text") as response:
                chars = list(iter_response_chars(response, chunk_size=1))
        assert chars == list(text)

    def test_lossy_body(self) -> None:
        with make_client(b"ok\xff") as client:
            with client.stream("GET", "https://example.com/text") as response:
                assert list(iter_response_chars(response, lossy=True)) == ["o", "k", "�"]

    def test_transport_error_is_yielded(self) -> None:
        with make_client(FailingStream(httpx.ReadError("connection reset"))) as client:
            with client.stream("GET", "https://example.com/text") as response:
                elements = list(iter_response_chars(response))

        assert elements[:2] == ["a", "b"]
        assert len(elements) == 3
        error = elements[2]
        assert isinstance(error, IoError)
        assert isinstance(error.error, OSError)
        assert isinstance(error.error.__cause__, httpx.ReadError)
        assert not error.is_interrupted

    def test_timeout_becomes_timeout_error(self) -> None:
        with make_client(FailingStream(httpx.ReadTimeout("too slow"))) as client:
            with client.stream("GET", "https://example.com/text") as response:
                elements = list(iter_response_chars(response))

        assert isinstance(elements[-1], IoError)
        assert isinstance(elements[-1].error, TimeoutError)

    def test_close_closes_response(self) -> None:
        with make_client(b"abcdef") as client:
            with client.stream("GET", "https://example.com/text") as response:
                it = iter_response_chars(response)
                assert next(it) == "a"
                it.close()
                assert response.is_closed
                with pytest.raises(StopIteration):
                    next(it)
