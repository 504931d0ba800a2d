"""
Decode errors.

Every failure raised while turning bytes (or hex text) into a Transaction
derives from ``DecodeError``. Malformed input is a permanent condition, so
none of these are meant to be retried: the caller either fixes the input or
reports it.

``DecodeError`` subclasses ``ValueError`` so callers that only care about
"bad input" can catch the built-in type.
"""

from __future__ import annotations


class DecodeError(ValueError):
    """Base class for every transaction decoding failure."""
    pass


class MalformedHex(DecodeError):
    """Raised when textual input is not valid hexadecimal."""
    pass


class TruncatedInput(DecodeError):
    """
    Raised when a read asks for more bytes than remain in the buffer.

    Attributes:
        position: Offset at which the read was attempted.
        requested: Number of bytes the read needed.
        available: Number of bytes that were actually left.
    """

    def __init__(self, position: int, requested: int, available: int):
        self.position = position
        self.requested = requested
        self.available = available
        super().__init__(
            f"Truncated input at offset {position}: "
            f"needed {requested} bytes, only {available} remain"
        )


class TrailingData(DecodeError):
    """
    Raised when bytes remain after the lock time has been read.

    Attributes:
        position: Offset of the first unconsumed byte.
        count: Number of unconsumed bytes.
    """

    def __init__(self, position: int, count: int):
        self.position = position
        self.count = count
        super().__init__(
            f"{count} trailing byte(s) after transaction end at offset {position}"
        )


class NonCanonicalVarint(DecodeError):
    """
    Raised in strict mode when a compact size uses a wider encoding than
    its value requires (e.g. ``fd0500`` for 5).

    Attributes:
        position: Offset of the varint prefix byte.
        value: The decoded value.
    """

    def __init__(self, position: int, value: int):
        self.position = position
        self.value = value
        super().__init__(
            f"Non-canonical varint at offset {position}: "
            f"value {value} does not need the wider encoding"
        )


class InputTooLarge(DecodeError):
    """
    Raised before parsing when the input exceeds the configured size limit.

    Attributes:
        size: Length of the rejected input in bytes.
        limit: The limit that was exceeded.
    """

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"Input of {size} bytes exceeds the {limit}-byte transaction limit"
        )
