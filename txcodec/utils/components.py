"""
Raw transaction components.

Splits a serialized transaction into its wire fields and returns each one
as the exact hex it occupies in the input, compact-size prefixes included.
This is the byte-level counterpart of ``Transaction.to_dict()``: nothing is
interpreted, byte-swapped or re-encoded, so the fields read in wire order
concatenate back to the input hex.

Layout of the returned dictionary::

    version        4 bytes
    marker, flag   1 byte each, or None for a legacy transaction
    input_count    compact size
    inputs         [{txid, vout, script_sig_size, script_sig, sequence}]
    output_count   compact size
    outputs        [{amount, script_pubkey_size, script_pubkey}]
    witness        [{stack_items, items: [{size, item}]}], or None
    lock_time      4 bytes

The walk applies the same checks as ``decode_transaction``: the size guard,
truncation, strict compact sizes and the trailing-data check.
"""

from __future__ import annotations

import logging

from txcodec.core.params import MAX_TRANSACTION_SIZE
from txcodec.core.transaction import read_marker_flag
from txcodec.errors import DecodeError, InputTooLarge, TrailingData
from txcodec.utils.encoding import bytes_to_hex, hex_to_bytes, read_varint
from txcodec.utils.reader import ByteReader

logger = logging.getLogger(__name__)


def _read_field(reader: ByteReader, n: int) -> str:
    return bytes_to_hex(reader.read_exact(n))


def _read_count(reader: ByteReader, strict: bool) -> tuple:
    """Read a compact size; return (value, hex of its encoded bytes)."""
    start = reader.position()
    value = read_varint(reader, strict=strict)
    return value, reader.data[start:reader.position()].hex()


def _read_sized(reader: ByteReader, strict: bool) -> tuple:
    """Read a length-prefixed field; return (prefix hex, payload hex)."""
    length, prefix = _read_count(reader, strict)
    return prefix, _read_field(reader, length)


def raw_components(
    data,
    strict: bool = False,
    max_size: int = MAX_TRANSACTION_SIZE,
) -> dict:
    """
    Split a serialized transaction into raw hex fields.

    Args:
        data: bytes, bytearray or memoryview holding exactly one transaction.
        strict: Reject compact sizes that are not minimally encoded.
        max_size: Largest accepted input, in bytes.

    Returns:
        A dictionary of hex strings laid out as described in the module
        docstring.

    Raises:
        DecodeError: Any failure ``decode_transaction`` would raise for
            the same input.
    """
    size = memoryview(data).nbytes
    try:
        if size > max_size:
            raise InputTooLarge(size, max_size)

        reader = ByteReader(data)
        components = {'version': _read_field(reader, 4)}

        marker, flag = read_marker_flag(reader)
        components['marker'] = None if marker is None else f"{marker:02x}"
        components['flag'] = None if flag is None else f"{flag:02x}"

        input_count, components['input_count'] = _read_count(reader, strict)
        inputs = []
        for _ in range(input_count):
            txid = _read_field(reader, 32)
            vout = _read_field(reader, 4)
            script_sig_size, script_sig = _read_sized(reader, strict)
            inputs.append({
                'txid': txid,
                'vout': vout,
                'script_sig_size': script_sig_size,
                'script_sig': script_sig,
                'sequence': _read_field(reader, 4),
            })
        components['inputs'] = inputs

        output_count, components['output_count'] = _read_count(reader, strict)
        outputs = []
        for _ in range(output_count):
            amount = _read_field(reader, 8)
            script_pubkey_size, script_pubkey = _read_sized(reader, strict)
            outputs.append({
                'amount': amount,
                'script_pubkey_size': script_pubkey_size,
                'script_pubkey': script_pubkey,
            })
        components['outputs'] = outputs

        witness = None
        if flag is not None:
            witness = []
            for _ in range(input_count):
                item_count, stack_items = _read_count(reader, strict)
                items = []
                for _ in range(item_count):
                    item_size, item = _read_sized(reader, strict)
                    items.append({'size': item_size, 'item': item})
                witness.append({'stack_items': stack_items, 'items': items})
        components['witness'] = witness

        components['lock_time'] = _read_field(reader, 4)

        if reader.remaining():
            raise TrailingData(reader.position(), reader.remaining())
    except DecodeError as e:
        logger.warning("Rejected transaction input: %s", e)
        raise

    return components


def raw_components_hex(
    hex_string: str,
    strict: bool = False,
    max_size: int = MAX_TRANSACTION_SIZE,
) -> dict:
    """Like ``raw_components``, for a transaction given as hex text."""
    return raw_components(hex_to_bytes(hex_string), strict=strict, max_size=max_size)
