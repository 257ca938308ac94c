"""Tests for error handling."""

from charstream._errors import (
    CharacterError,
    DecodeError,
    IoError,
    NoBytesRead,
    UnexpectedEndOfInput,
)


class TestCharacterError:
    """Tests for CharacterError."""

    def test_basic_error(self) -> None:
        error = CharacterError("Something went wrong")
        assert error.message == "Something went wrong"
        assert error.bytes == b""
        assert str(error) == "Something went wrong [CHARACTER_ERROR]"

    def test_error_with_bytes(self) -> None:
        error = CharacterError("Bad input", b"\xe2\x28")
        assert "(bytes=e2 28)" in str(error)
        assert "bytes=b'\\xe2('" in repr(error)

    def test_equality(self) -> None:
        assert CharacterError("x", b"\x80") == CharacterError("x", b"\x80")
        assert CharacterError("x", b"\x80") != CharacterError("x", b"\x81")
        assert DecodeError("x", b"\x80") != CharacterError("x", b"\x80")
        assert len({NoBytesRead(), NoBytesRead()}) == 1


class TestSpecificErrors:
    """Tests for specific error types."""

    def test_no_bytes_read(self) -> None:
        error = NoBytesRead()
        assert error.code == "NO_BYTES_READ"
        assert isinstance(error, CharacterError)

    def test_io_error(self) -> None:
        cause = OSError("disk on fire")
        error = IoError(cause, b"\xf0")
        assert error.code == "IO_ERROR"
        assert error.error is cause
        assert error.bytes == b"\xf0"
        assert "disk on fire" in str(error)
        assert error.is_interrupted is False

    def test_io_error_interrupted(self) -> None:
        assert IoError(InterruptedError()).is_interrupted is True

    def test_unexpected_end_of_input(self) -> None:
        error = UnexpectedEndOfInput(b"\xe2\x82", expected=3)
        assert error.code == "UNEXPECTED_EOF"
        assert error.message == "Input ended after 2 of 3 bytes"
        assert error.expected == 3

    def test_unexpected_end_of_input_without_expected(self) -> None:
        error = UnexpectedEndOfInput(b"\xe2")
        assert error.expected is None
        assert "middle of a character" in error.message

    def test_decode_error_chains_cause(self) -> None:
        cause = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        error = DecodeError("Invalid UTF-8 sequence", b"\xff", cause=cause)
        assert error.code == "DECODE_ERROR"
        assert error.cause is cause
        assert error.__cause__ is cause

    def test_decode_error_without_cause(self) -> None:
        error = DecodeError("Expected 1 character, not 2", b"ab")
        assert error.cause is None
        assert error.__cause__ is None
