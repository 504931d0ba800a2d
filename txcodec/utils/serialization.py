"""
Transaction decode/encode entry points.

The field-by-field logic lives on the data-structure classes
(``Transaction.read_from`` / ``Transaction.serialize``). This module is the
public layer on top of them. It adds the checks that only make sense for a
whole input:

- the input size guard (``max_size``), applied before any parsing;
- the trailing-data check after lock_time;
- hex text cleaning for the ``*_hex`` variants.

``decode_transaction`` is all-or-nothing: it either returns a complete
Transaction or raises a ``DecodeError`` subclass.
"""

from __future__ import annotations

import logging

from txcodec.core.params import MAX_TRANSACTION_SIZE
from txcodec.core.transaction import Transaction
from txcodec.errors import DecodeError, InputTooLarge, TrailingData
from txcodec.utils.encoding import bytes_to_hex, hex_to_bytes
from txcodec.utils.reader import ByteReader

logger = logging.getLogger(__name__)


def decode_transaction(
    data,
    strict: bool = False,
    max_size: int = MAX_TRANSACTION_SIZE,
) -> Transaction:
    """
    Decode a single serialized transaction that spans the whole buffer.

    Args:
        data: bytes, bytearray or memoryview holding exactly one transaction.
        strict: Reject compact sizes that are not minimally encoded.
        max_size: Largest accepted input, in bytes.

    Returns:
        The decoded Transaction.

    Raises:
        InputTooLarge: If *data* is longer than *max_size*.
        TruncatedInput: If any field runs past the end of the buffer.
        TrailingData: If bytes remain after lock_time.
        NonCanonicalVarint: In strict mode, for a non-minimal varint.
    """
    size = memoryview(data).nbytes
    try:
        if size > max_size:
            raise InputTooLarge(size, max_size)

        reader = ByteReader(data)
        tx = Transaction.read_from(reader, strict=strict)

        if reader.remaining():
            raise TrailingData(reader.position(), reader.remaining())
    except DecodeError as e:
        logger.warning("Rejected transaction input: %s", e)
        raise

    logger.debug(
        "Decoded transaction %s (%d bytes, segwit=%s, %d inputs, %d outputs)",
        tx.txid, size, tx.is_segwit, len(tx.inputs), len(tx.outputs),
    )
    return tx


def decode_transaction_hex(
    hex_string: str,
    strict: bool = False,
    max_size: int = MAX_TRANSACTION_SIZE,
) -> Transaction:
    """
    Decode a transaction given as hex text.

    Whitespace anywhere in the text and a leading '0x' are ignored; either
    case is accepted.

    Raises:
        MalformedHex: If the text is not valid hex.
        DecodeError: Any failure ``decode_transaction`` can raise.
    """
    try:
        data = hex_to_bytes(hex_string)
    except DecodeError as e:
        logger.warning("Rejected transaction hex: %s", e)
        raise
    return decode_transaction(data, strict=strict, max_size=max_size)


def deserialize_transaction(data, offset: int = 0, strict: bool = False) -> tuple:
    """
    Read one transaction from *data* starting at *offset*.

    Unlike ``decode_transaction`` this does not require the transaction to
    end the buffer, so it can walk several concatenated transactions.

    Returns:
        A tuple of (Transaction, bytes_consumed).
    """
    return Transaction.deserialize(data, offset, strict=strict)


def deserialize_transactions(data, strict: bool = False) -> list:
    """
    Decode a buffer holding back-to-back transactions until it is exhausted.

    Raises:
        TruncatedInput: If the last transaction is incomplete.
    """
    reader = ByteReader(data)
    transactions = []
    while reader.remaining():
        transactions.append(Transaction.read_from(reader, strict=strict))
    logger.debug("Decoded %d transactions from %d bytes", len(transactions), len(reader.data))
    return transactions


def encode_transaction(tx: Transaction, include_witness: bool = True) -> bytes:
    """
    Serialize a Transaction to wire format.

    This is a convenience wrapper around ``tx.serialize()``.
    """
    return tx.serialize(include_witness=include_witness)


def encode_transaction_hex(tx: Transaction, include_witness: bool = True) -> str:
    """Serialize a Transaction to lowercase hex."""
    return bytes_to_hex(encode_transaction(tx, include_witness=include_witness))
