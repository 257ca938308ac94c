"""
UTF-8 byte classification helpers.

These functions know nothing about streams; they answer questions about
single bytes so the decoder can validate a sequence while it reads it.
"""

# Leading bytes whose bit pattern announces a sequence that can never be
# well-formed: C0/C1 only encode overlong ASCII, F5-F7 exceed U+10FFFF.
_NEVER_LEADING = frozenset({0xC0, 0xC1, 0xF5, 0xF6, 0xF7})

# Narrowed range for the byte after these leading bytes
_SECOND_BYTE_RANGES = {
    0xE0: (0xA0, 0xBF),  # overlong 3-byte
    0xED: (0x80, 0x9F),  # UTF-16 surrogates
    0xF0: (0x90, 0xBF),  # overlong 4-byte
    0xF4: (0x80, 0x8F),  # above U+10FFFF
}

_CONTINUATION_RANGE = (0x80, 0xBF)


def continuation_count(byte: int) -> int | None:
    """
    Derive the number of continuation bytes from a leading byte.

    Args:
        byte: The first byte of a sequence

    Returns:
        0-3 for a leading byte, None if the byte cannot start a sequence
    """
    if byte >> 7 == 0b0:
        return 0
    if byte in _NEVER_LEADING:
        return None
    if byte >> 5 == 0b110:
        return 1
    if byte >> 4 == 0b1110:
        return 2
    if byte >> 3 == 0b11110:
        return 3
    return None


def is_valid_continuation(leading: int, index: int, byte: int) -> bool:
    """
    Check whether `byte` may appear at `index` of a sequence starting with `leading`.

    Args:
        leading: The leading byte of the sequence
        index: Position of `byte` within the sequence (1 for the first continuation)
        byte: The byte to check
    """
    low, high = _CONTINUATION_RANGE
    if index == 1:
        low, high = _SECOND_BYTE_RANGES.get(leading, _CONTINUATION_RANGE)
    return low <= byte <= high
