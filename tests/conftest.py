"""
Pytest configuration and fixtures for charstream tests.

This module provides byte sources with scripted behaviour so tests can
reproduce interruptions and I/O failures deterministically.
"""

import io
from collections.abc import Callable, Sequence

import pytest


class ScriptedSource:
    """
    Byte source that replays a script of chunks and exceptions.

    Each read() takes the next script entry: bytes are returned, exceptions
    are raised. Once the script runs out every read returns b"".
    """

    def __init__(self, script: Sequence[bytes | BaseException]):
        self._script = list(script)
        self.calls = 0
        self.closed = False

    def read(self, size: int, /) -> bytes:
        self.calls += 1
        if not self._script:
            return b""
        entry = self._script.pop(0)
        if isinstance(entry, BaseException):
            raise entry
        return entry

    def close(self) -> None:
        self.closed = True


class AlwaysInterrupted:
    """Byte source whose every read is interrupted."""

    def __init__(self) -> None:
        self.calls = 0

    def read(self, size: int, /) -> bytes:
        self.calls += 1
        raise InterruptedError("interrupted system call")


class CountingBytesIO(io.BytesIO):
    """BytesIO that counts read() calls."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.reads = 0

    def read(self, size: int | None = -1, /) -> bytes:
        self.reads += 1
        return super().read(size)


@pytest.fixture
def scripted_source() -> Callable[[Sequence[bytes | BaseException]], ScriptedSource]:
    """Factory for ScriptedSource instances."""
    return ScriptedSource


@pytest.fixture
def always_interrupted() -> AlwaysInterrupted:
    return AlwaysInterrupted()


@pytest.fixture
def counting_source() -> Callable[[bytes], CountingBytesIO]:
    """Factory for CountingBytesIO instances."""
    return CountingBytesIO
