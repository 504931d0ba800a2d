"""
Bounds-checked cursor over a byte buffer.

Every field of a serialized transaction is read through a ``ByteReader``.
Each read advances the cursor and raises ``TruncatedInput`` if the buffer
does not hold enough bytes, so no decoder ever slices past the end of the
input and silently gets a short result.

The reader wraps the caller's buffer in a ``memoryview`` and never copies
it as a whole; only the individual fields handed back are materialized as
``bytes``.
"""

from __future__ import annotations

from txcodec.errors import TruncatedInput


class ByteReader:
    """
    A position-tracking, read-only view over a byte buffer.

    Attributes:
        data: A ``memoryview`` over the caller's buffer.
    """

    def __init__(self, data, offset: int = 0):
        """
        Initialize the reader.

        Args:
            data: bytes, bytearray or memoryview to read from.
            offset: Starting position within *data*.

        Raises:
            ValueError: If *offset* lies outside the buffer.
        """
        self.data = memoryview(data).cast('B')
        if offset < 0 or offset > len(self.data):
            raise ValueError(
                f"Offset {offset} out of range for a {len(self.data)}-byte buffer"
            )
        self._position = offset

    def position(self) -> int:
        """Current offset into the buffer."""
        return self._position

    def remaining(self) -> int:
        """Number of bytes not yet read."""
        return len(self.data) - self._position

    def seek(self, position: int) -> None:
        """
        Move the cursor to an absolute *position*.

        Used to rewind after a lookahead that turned out not to match.
        """
        if position < 0 or position > len(self.data):
            raise ValueError(
                f"Position {position} out of range for a {len(self.data)}-byte buffer"
            )
        self._position = position

    def read_exact(self, n: int) -> bytes:
        """
        Read exactly *n* bytes and advance the cursor.

        Args:
            n: Number of bytes to read.

        Returns:
            The next *n* bytes.

        Raises:
            TruncatedInput: If fewer than *n* bytes remain.
        """
        available = self.remaining()
        if n > available:
            raise TruncatedInput(self._position, n, available)
        start = self._position
        self._position += n
        return self.data[start:self._position].tobytes()

    # ------------------------------------------------------------------
    # Fixed-width little-endian integers
    # ------------------------------------------------------------------

    def read_uint8(self) -> int:
        return self.read_exact(1)[0]

    def read_uint16(self) -> int:
        return int.from_bytes(self.read_exact(2), byteorder='little')

    def read_uint32(self) -> int:
        return int.from_bytes(self.read_exact(4), byteorder='little')

    def read_int32(self) -> int:
        return int.from_bytes(self.read_exact(4), byteorder='little', signed=True)

    def read_uint64(self) -> int:
        return int.from_bytes(self.read_exact(8), byteorder='little')

    def __repr__(self) -> str:
        return f"ByteReader(position={self._position}, remaining={self.remaining()})"
