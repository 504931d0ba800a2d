"""
Bitcoin encoding utilities.

This module provides the low-level encoding and decoding functions the
transaction codec is built on:

- Hex/bytes conversions (with the input cleaning the hex entry points need)
- Little-endian integer encoding
- Variable-length integer (varint) encoding, known in Bitcoin Core as
  "CompactSize", used for every count and length prefix in a transaction

Bitcoin uses little-endian byte order for all serialized integer fields.
"""

from __future__ import annotations

import string

from txcodec.core.params import MAX_UINT64
from txcodec.errors import MalformedHex, NonCanonicalVarint
from txcodec.utils.reader import ByteReader

_HEX_DIGITS = frozenset(string.hexdigits)


# ---------------------------------------------------------------------------
# Hex / bytes conversions
# ---------------------------------------------------------------------------

def bytes_to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hex string.

    Example:
        >>> bytes_to_hex(b'\\xab\\xcd')
        'abcd'
    """
    return bytes(data).hex()


def hex_to_bytes(hex_string: str) -> bytes:
    """
    Convert a hex string to bytes.

    The string may use either case, may carry a '0x' prefix, and may contain
    whitespace anywhere (line breaks from copy/paste, spaces between
    fields); all whitespace is stripped before decoding.

    Args:
        hex_string: Hexadecimal text.

    Returns:
        The decoded bytes.

    Raises:
        MalformedHex: If the cleaned text is not valid hex.

    Example:
        >>> hex_to_bytes('AB cd\\n')
        b'\\xab\\xcd'
    """
    if not isinstance(hex_string, str):
        raise MalformedHex(f"Expected hex text, got {type(hex_string).__name__}")

    cleaned = ''.join(hex_string.split())
    if cleaned.startswith('0x') or cleaned.startswith('0X'):
        cleaned = cleaned[2:]

    if len(cleaned) % 2:
        raise MalformedHex(f"Hex string has odd length ({len(cleaned)} digits)")

    for index, char in enumerate(cleaned):
        if char not in _HEX_DIGITS:
            raise MalformedHex(f"Invalid hex character {char!r} at position {index}")

    return bytes.fromhex(cleaned)


# ---------------------------------------------------------------------------
# Endian conversions
# ---------------------------------------------------------------------------

def int_to_little_endian(value: int, length: int, signed: bool = False) -> bytes:
    """
    Encode an integer as little-endian bytes of the specified length.

    Args:
        value: Integer to encode.
        length: Number of bytes in the output.
        signed: Encode as two's complement.

    Returns:
        Little-endian encoded bytes.

    Raises:
        ValueError: If *value* does not fit in *length* bytes.

    Example:
        >>> int_to_little_endian(1, 4)
        b'\\x01\\x00\\x00\\x00'
    """
    try:
        return value.to_bytes(length, byteorder='little', signed=signed)
    except OverflowError as e:
        raise ValueError(
            f"Value {value} does not fit in {length} "
            f"{'signed' if signed else 'unsigned'} bytes"
        ) from e


def little_endian_to_int(data: bytes, signed: bool = False) -> int:
    """
    Decode little-endian bytes to an integer.

    Example:
        >>> little_endian_to_int(b'\\x01\\x00\\x00\\x00')
        1
    """
    return int.from_bytes(data, byteorder='little', signed=signed)


# ---------------------------------------------------------------------------
# Variable-length integer (varint / CompactSize) encoding
# ---------------------------------------------------------------------------

def encode_varint(value: int) -> bytes:
    """
    Encode an integer using Bitcoin's variable-length integer format.

    The shortest form that can hold the value is always used:

    - 0x00-0xfc:             1 byte  (the value itself)
    - 0xfd-0xffff:           3 bytes (0xfd prefix + 2-byte little-endian)
    - 0x10000-0xffffffff:    5 bytes (0xfe prefix + 4-byte little-endian)
    - up to 0xffffffffffffffff: 9 bytes (0xff prefix + 8-byte little-endian)

    Args:
        value: Non-negative integer below 2**64.

    Returns:
        Variable-length encoded bytes.

    Raises:
        ValueError: If value is negative or does not fit in 64 bits.

    Example:
        >>> encode_varint(252).hex()
        'fc'
        >>> encode_varint(255).hex()
        'fdff00'
    """
    if value < 0:
        raise ValueError(f"Varint value must be non-negative, got {value}")
    if value > MAX_UINT64:
        raise ValueError(f"Varint value must fit in 64 bits, got {value}")

    if value < 0xfd:
        return bytes([value])
    elif value <= 0xffff:
        return b'\xfd' + int_to_little_endian(value, 2)
    elif value <= 0xffffffff:
        return b'\xfe' + int_to_little_endian(value, 4)
    else:
        return b'\xff' + int_to_little_endian(value, 8)


def read_varint(reader: ByteReader, strict: bool = False) -> int:
    """
    Read a variable-length integer from *reader*, advancing it.

    Non-minimal encodings (e.g. ``fd0500`` for 5) are accepted unless
    *strict* is set.

    Args:
        reader: The cursor to read from.
        strict: Reject values that were not encoded in their shortest form.

    Returns:
        The decoded value.

    Raises:
        TruncatedInput: If the prefix or its payload runs past the buffer.
        NonCanonicalVarint: In strict mode, for a non-minimal encoding.
    """
    start = reader.position()
    prefix = reader.read_uint8()

    if prefix < 0xfd:
        return prefix
    elif prefix == 0xfd:
        value = reader.read_uint16()
        minimum = 0xfd
    elif prefix == 0xfe:
        value = reader.read_uint32()
        minimum = 0x10000
    else:  # 0xff
        value = reader.read_uint64()
        minimum = 0x100000000

    if strict and value < minimum:
        raise NonCanonicalVarint(start, value)
    return value


def decode_varint(data: bytes, offset: int = 0, strict: bool = False) -> tuple:
    """
    Decode a Bitcoin variable-length integer from a byte buffer.

    Args:
        data: The byte buffer containing the varint.
        offset: Starting position in the buffer.
        strict: Reject non-minimal encodings.

    Returns:
        A tuple of (decoded_value, number_of_bytes_consumed).

    Raises:
        TruncatedInput: If there are not enough bytes to decode.
        NonCanonicalVarint: In strict mode, for a non-minimal encoding.

    Example:
        >>> decode_varint(b'\\xfc')
        (252, 1)
        >>> decode_varint(b'\\xfd\\xff\\x00')
        (255, 3)
    """
    reader = ByteReader(data, offset)
    value = read_varint(reader, strict=strict)
    return (value, reader.position() - offset)


def read_var_bytes(reader: ByteReader, strict: bool = False) -> bytes:
    """Read a varint length prefix followed by that many bytes."""
    length = read_varint(reader, strict=strict)
    return reader.read_exact(length)


def encode_var_bytes(data: bytes) -> bytes:
    """Encode *data* with its varint length prefix."""
    return encode_varint(len(data)) + bytes(data)
