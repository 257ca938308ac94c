"""
Exception hierarchy for charstream.

This module defines all exceptions that can be raised while decoding
characters from a byte stream.
"""


class CharacterError(Exception):
    """
    Base exception for everything a character read can fail with.

    Attributes:
        message: Human-readable error message
        bytes: The raw bytes consumed by the failed read
        code: Error code for programmatic handling
    """

    code: str = "CHARACTER_ERROR"

    def __init__(
        self,
        message: str,
        bytes: bytes = b"",  # noqa: A002 - mirrors the attribute name
    ) -> None:
        super().__init__(message)
        self.message = message
        self.bytes = bytes

    def __str__(self) -> str:
        parts = [self.message]
        if self.bytes:
            parts.append(f"(bytes={self.bytes.hex(' ')})")
        parts.append(f"[{self.code}]")
        return " ".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"bytes={self.bytes!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CharacterError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.message == other.message
            and self.bytes == other.bytes
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.bytes))


class NoBytesRead(CharacterError):
    """
    Raised when the byte source is exhausted before a new character starts.

    This is a termination signal rather than a failure.
    """

    code = "NO_BYTES_READ"

    def __init__(self, message: str = "Failed to read bytes from the stream") -> None:
        super().__init__(message)


class IoError(CharacterError):
    """
    Exception wrapping an OSError raised by the byte source.

    Attributes:
        error: The underlying OSError
    """

    code = "IO_ERROR"

    def __init__(
        self,
        error: OSError,
        bytes: bytes = b"",  # noqa: A002
        message: str | None = None,
    ) -> None:
        super().__init__(message or f"An I/O error occurred: {error}", bytes)
        self.error = error

    @property
    def is_interrupted(self) -> bool:
        """Whether the underlying error is a transient interruption."""
        return isinstance(self.error, InterruptedError)


class UnexpectedEndOfInput(CharacterError):
    """
    Raised when the input ends in the middle of a multi-byte sequence.

    Attributes:
        expected: Total number of bytes the leading byte announced
    """

    code = "UNEXPECTED_EOF"

    def __init__(
        self,
        bytes: bytes = b"",  # noqa: A002
        expected: int | None = None,
    ) -> None:
        if expected is not None:
            message = f"Input ended after {len(bytes)} of {expected} bytes"
        else:
            message = "Input ended in the middle of a character"
        super().__init__(message, bytes)
        self.expected = expected


class DecodeError(CharacterError):
    """
    Raised when the consumed bytes are not valid UTF-8.

    Attributes:
        cause: The error describing why the bytes were rejected
    """

    code = "DECODE_ERROR"

    def __init__(
        self,
        message: str,
        bytes: bytes = b"",  # noqa: A002
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, bytes)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause
