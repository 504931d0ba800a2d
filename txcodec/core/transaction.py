"""
Bitcoin transaction data structures.

This module implements the transaction types produced by the decoder and
consumed by the encoder:

- **TransactionOutput**: An amount (in satoshis) and the locking script
  (script_pubkey) that must be satisfied to spend it.

- **TransactionInput**: A reference to a previous output (txid + output
  index), the unlocking script (script_sig), a sequence number and, for
  segwit transactions, the witness stack.

- **Transaction**: Version, inputs, outputs, lock time and the optional
  segwit marker/flag pair.

Wire format (BIP 144)::

    version      int32 LE
    [marker 0x00, flag >= 0x01]           segwit only
    input_count  varint, inputs...
    output_count varint, outputs...
    [witness stack for each input]        segwit only
    lock_time    uint32 LE

Byte fields (txids, scripts, witness items) are kept as ``bytes``. The
previous txid is stored in wire order; ``previous_txid_hex`` gives the
reversed form that explorers and RPCs display.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from txcodec.core.params import (
    COINBASE_VOUT,
    NULL_TXID,
    SEGWIT_FLAG,
    SEGWIT_MARKER,
    SEQUENCE_FINAL,
    WITNESS_SCALE_FACTOR,
)
from txcodec.core.script import classify_script, script_to_address
from txcodec.crypto.hash import hash256_display
from txcodec.utils.encoding import (
    bytes_to_hex,
    encode_var_bytes,
    encode_varint,
    hex_to_bytes,
    int_to_little_endian,
    read_var_bytes,
    read_varint,
)
from txcodec.utils.reader import ByteReader

logger = logging.getLogger(__name__)


def read_marker_flag(reader: ByteReader) -> tuple:
    """
    Read the segwit marker/flag pair that may follow the version field.

    In a legacy transaction these two bytes start the input count, so the
    reader is rewound unless they read 00 followed by a non-zero flag.

    Returns:
        (marker, flag), or (None, None) for a legacy serialization.
    """
    if reader.remaining() < 2:
        return None, None
    saved = reader.position()
    marker = reader.read_uint8()
    flag = reader.read_uint8()
    if marker == SEGWIT_MARKER and flag >= 0x01:
        logger.debug("Segwit marker/flag %02x%02x at offset %d", marker, flag, saved)
        return marker, flag
    reader.seek(saved)
    return None, None


# ---------------------------------------------------------------------------
# TransactionOutput
# ---------------------------------------------------------------------------

class TransactionOutput:
    """
    A transaction output assigns an amount (in satoshis) to a locking script.

    Attributes:
        amount: Amount in satoshis (1 BTC = 100,000,000 satoshis).
        script_pubkey: Raw locking script bytes.
    """

    def __init__(self, amount: int, script_pubkey: bytes = b''):
        self.amount = amount
        self.script_pubkey = bytes(script_pubkey)

    def serialize(self) -> bytes:
        """
        Serialize this output to binary format.

        Format:
            - amount: 8 bytes, little-endian (uint64)
            - script_length: varint
            - script_pubkey: raw bytes

        Raises:
            ValueError: If the amount does not fit in 64 unsigned bits.
        """
        return int_to_little_endian(self.amount, 8) + encode_var_bytes(self.script_pubkey)

    @classmethod
    def read_from(cls, reader: ByteReader, strict: bool = False) -> TransactionOutput:
        """Read one output from *reader*, advancing it."""
        amount = reader.read_uint64()
        script_pubkey = read_var_bytes(reader, strict=strict)
        return cls(amount=amount, script_pubkey=script_pubkey)

    @classmethod
    def deserialize(cls, data: bytes, offset: int = 0, strict: bool = False) -> tuple:
        """
        Deserialize a TransactionOutput from binary data.

        Args:
            data: Raw bytes containing the serialized output.
            offset: Starting byte position.
            strict: Reject non-minimal varints.

        Returns:
            A tuple of (TransactionOutput, bytes_consumed).
        """
        reader = ByteReader(data, offset)
        txout = cls.read_from(reader, strict=strict)
        return (txout, reader.position() - offset)

    @property
    def script_type(self) -> str:
        """Standard template of the locking script (see ``classify_script``)."""
        return classify_script(self.script_pubkey)

    def get_address(self, network: str = 'mainnet') -> Optional[str]:
        """
        Address this output pays to, or None if the script has no
        address form.
        """
        return script_to_address(self.script_pubkey, network)

    def to_dict(self) -> dict:
        return {
            'amount': self.amount,
            'script_pubkey': bytes_to_hex(self.script_pubkey),
            'script_type': self.script_type,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TransactionOutput:
        return cls(
            amount=data['amount'],
            script_pubkey=hex_to_bytes(data.get('script_pubkey', '')),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransactionOutput):
            return NotImplemented
        return (
            self.amount == other.amount
            and self.script_pubkey == other.script_pubkey
        )

    def __repr__(self) -> str:
        return (
            f"TransactionOutput(amount={self.amount}, "
            f"script_pubkey='{self.script_pubkey.hex()[:16]}...')"
        )


# ---------------------------------------------------------------------------
# TransactionInput
# ---------------------------------------------------------------------------

class TransactionInput:
    """
    A transaction input references a previous output and carries the data
    that unlocks it.

    Attributes:
        previous_txid: 32-byte id of the transaction being spent, in wire
            (internal) byte order.
        previous_vout: Index of the output within that transaction.
        script_sig: Raw unlocking script bytes (empty for native segwit).
        sequence: Sequence number (default 0xffffffff, final).
        witness: None for an input of a legacy transaction, otherwise the
            list of witness stack items (possibly empty).
    """

    def __init__(
        self,
        previous_txid: bytes,
        previous_vout: int,
        script_sig: bytes = b'',
        sequence: int = SEQUENCE_FINAL,
        witness: Optional[list] = None,
    ):
        previous_txid = bytes(previous_txid)
        if len(previous_txid) != 32:
            raise ValueError(
                f"previous_txid must be 32 bytes, got {len(previous_txid)}"
            )
        self.previous_txid = previous_txid
        self.previous_vout = previous_vout
        self.script_sig = bytes(script_sig)
        self.sequence = sequence
        self.witness = [bytes(item) for item in witness] if witness is not None else None

    @property
    def previous_txid_hex(self) -> str:
        """The previous txid in display order (bytes reversed), as hex."""
        return bytes_to_hex(self.previous_txid[::-1])

    def serialize(self) -> bytes:
        """
        Serialize the non-witness part of this input.

        Format:
            - previous_txid: 32 bytes (wire order)
            - previous_vout: 4 bytes, little-endian
            - script_length: varint
            - script_sig: raw bytes
            - sequence: 4 bytes, little-endian

        The witness, if any, is written separately by the transaction
        after all outputs.
        """
        return (
            self.previous_txid
            + int_to_little_endian(self.previous_vout, 4)
            + encode_var_bytes(self.script_sig)
            + int_to_little_endian(self.sequence, 4)
        )

    def serialize_witness(self) -> bytes:
        """Serialize the witness stack: item count then each item."""
        items = self.witness or []
        result = encode_varint(len(items))
        for item in items:
            result += encode_var_bytes(item)
        return result

    def with_witness(self, witness: Optional[list]) -> TransactionInput:
        """Return a copy of this input carrying *witness* instead."""
        return TransactionInput(
            previous_txid=self.previous_txid,
            previous_vout=self.previous_vout,
            script_sig=self.script_sig,
            sequence=self.sequence,
            witness=witness,
        )

    @classmethod
    def read_from(cls, reader: ByteReader, strict: bool = False) -> TransactionInput:
        """Read the non-witness part of one input from *reader*."""
        previous_txid = reader.read_exact(32)
        previous_vout = reader.read_uint32()
        script_sig = read_var_bytes(reader, strict=strict)
        sequence = reader.read_uint32()
        return cls(
            previous_txid=previous_txid,
            previous_vout=previous_vout,
            script_sig=script_sig,
            sequence=sequence,
        )

    @staticmethod
    def read_witness(reader: ByteReader, strict: bool = False) -> list:
        """Read one witness stack (item count, then length-prefixed items)."""
        count = read_varint(reader, strict=strict)
        return [read_var_bytes(reader, strict=strict) for _ in range(count)]

    @classmethod
    def deserialize(cls, data: bytes, offset: int = 0, strict: bool = False) -> tuple:
        """
        Deserialize the non-witness part of a TransactionInput.

        Returns:
            A tuple of (TransactionInput, bytes_consumed).
        """
        reader = ByteReader(data, offset)
        txin = cls.read_from(reader, strict=strict)
        return (txin, reader.position() - offset)

    def is_coinbase(self) -> bool:
        """
        Check if this input is a coinbase input (null txid, index
        0xffffffff).
        """
        return (
            self.previous_txid == NULL_TXID
            and self.previous_vout == COINBASE_VOUT
        )

    def to_dict(self) -> dict:
        return {
            'txid': self.previous_txid_hex,
            'vout': self.previous_vout,
            'script_sig': bytes_to_hex(self.script_sig),
            'sequence': self.sequence,
            'witness': (
                [bytes_to_hex(item) for item in self.witness]
                if self.witness is not None else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> TransactionInput:
        """
        Reconstruct a TransactionInput from a dictionary.

        The ``txid`` key is expected in display order, as produced by
        ``to_dict()``.
        """
        witness = data.get('witness')
        return cls(
            previous_txid=hex_to_bytes(data['txid'])[::-1],
            previous_vout=data['vout'],
            script_sig=hex_to_bytes(data.get('script_sig', '')),
            sequence=data.get('sequence', SEQUENCE_FINAL),
            witness=[hex_to_bytes(item) for item in witness] if witness is not None else None,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransactionInput):
            return NotImplemented
        return (
            self.previous_txid == other.previous_txid
            and self.previous_vout == other.previous_vout
            and self.script_sig == other.script_sig
            and self.sequence == other.sequence
            and self.witness == other.witness
        )

    def __repr__(self) -> str:
        return (
            f"TransactionInput(txid='{self.previous_txid_hex[:16]}...', "
            f"vout={self.previous_vout})"
        )


# ---------------------------------------------------------------------------
# Transaction
# ---------------------------------------------------------------------------

class Transaction:
    """
    A complete Bitcoin transaction.

    A transaction is either legacy (``marker`` and ``flag`` are None and no
    input has a witness) or segwit (``marker``/``flag`` hold the pair read
    from the wire and every input has a witness, possibly empty). The
    constructor enforces this: passing a flag, or any input with a witness,
    makes the transaction segwit, and inputs without a witness then get an
    empty one. The caller's input objects are copied, never modified.

    Attributes:
        version: Transaction version (signed 32-bit).
        inputs: List of TransactionInput objects.
        outputs: List of TransactionOutput objects.
        lock_time: Earliest block height / time for inclusion (uint32).
        marker: Segwit marker byte, or None.
        flag: Segwit flag byte, or None.
    """

    def __init__(
        self,
        version: int = 1,
        inputs: Optional[list] = None,
        outputs: Optional[list] = None,
        lock_time: int = 0,
        marker: Optional[int] = None,
        flag: Optional[int] = None,
    ):
        self.version = version
        self.inputs = list(inputs) if inputs is not None else []
        self.outputs = list(outputs) if outputs is not None else []
        self.lock_time = lock_time

        has_witness = any(txin.witness is not None for txin in self.inputs)
        if marker is None and flag is None and not has_witness:
            self.marker = None
            self.flag = None
            return

        self.marker = SEGWIT_MARKER if marker is None else marker
        self.flag = SEGWIT_FLAG if flag is None else flag
        if self.marker != SEGWIT_MARKER or self.flag < 0x01:
            raise ValueError(
                f"Invalid segwit marker/flag pair: {self.marker:#04x}/{self.flag:#04x}"
            )
        # Inputs may be shared with another transaction; copy instead of
        # attaching the empty witness in place.
        self.inputs = [
            txin if txin.witness is not None else txin.with_witness([])
            for txin in self.inputs
        ]

    @property
    def is_segwit(self) -> bool:
        return self.flag is not None

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def serialize(self, include_witness: bool = True) -> bytes:
        """
        Serialize this transaction to Bitcoin wire format.

        Args:
            include_witness: Write marker, flag and witness stacks for a
                segwit transaction. With False the legacy (witness-stripped)
                form is produced, which is what the txid commits to.

        Returns:
            Complete serialized transaction bytes.

        Raises:
            ValueError: If a field does not fit its wire width.
        """
        with_witness = include_witness and self.is_segwit

        result = int_to_little_endian(self.version, 4, signed=True)
        if with_witness:
            result += bytes([self.marker, self.flag])

        result += encode_varint(len(self.inputs))
        for txin in self.inputs:
            result += txin.serialize()

        result += encode_varint(len(self.outputs))
        for txout in self.outputs:
            result += txout.serialize()

        if with_witness:
            for txin in self.inputs:
                result += txin.serialize_witness()

        result += int_to_little_endian(self.lock_time, 4)
        return result

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    @classmethod
    def read_from(cls, reader: ByteReader, strict: bool = False) -> Transaction:
        """
        Read one transaction from *reader*, advancing it past lock_time.

        Trailing bytes are left unread; checking for them is the caller's
        job (see ``txcodec.utils.serialization.decode_transaction``).

        Args:
            reader: Cursor positioned at the version field.
            strict: Reject non-minimal varints.

        Raises:
            TruncatedInput: If any field runs past the end of the buffer.
            NonCanonicalVarint: In strict mode, for a non-minimal varint.
        """
        version = reader.read_int32()
        marker, flag = read_marker_flag(reader)

        input_count = read_varint(reader, strict=strict)
        inputs = []
        for _ in range(input_count):
            inputs.append(TransactionInput.read_from(reader, strict=strict))

        output_count = read_varint(reader, strict=strict)
        outputs = []
        for _ in range(output_count):
            outputs.append(TransactionOutput.read_from(reader, strict=strict))

        if flag is not None:
            inputs = [
                txin.with_witness(TransactionInput.read_witness(reader, strict=strict))
                for txin in inputs
            ]

        lock_time = reader.read_uint32()

        return cls(
            version=version,
            inputs=inputs,
            outputs=outputs,
            lock_time=lock_time,
            marker=marker,
            flag=flag,
        )

    @classmethod
    def deserialize(cls, data: bytes, offset: int = 0, strict: bool = False) -> tuple:
        """
        Deserialize a Transaction from binary data.

        Args:
            data: Raw bytes containing the serialized transaction.
            offset: Starting byte position.
            strict: Reject non-minimal varints.

        Returns:
            A tuple of (Transaction, bytes_consumed).
        """
        reader = ByteReader(data, offset)
        tx = cls.read_from(reader, strict=strict)
        return (tx, reader.position() - offset)

    # ------------------------------------------------------------------
    # Identifiers and sizes
    # ------------------------------------------------------------------

    @property
    def txid(self) -> str:
        """
        The transaction ID: double SHA-256 of the witness-stripped
        serialization, in display (reversed) byte order.
        """
        return hash256_display(self.serialize(include_witness=False))

    @property
    def wtxid(self) -> str:
        """
        The witness transaction ID: double SHA-256 of the full
        serialization. Equal to ``txid`` for a legacy transaction.
        """
        return hash256_display(self.serialize())

    @property
    def size(self) -> int:
        """Length of the full serialization in bytes."""
        return len(self.serialize())

    @property
    def base_size(self) -> int:
        """Length of the witness-stripped serialization in bytes."""
        return len(self.serialize(include_witness=False))

    @property
    def weight(self) -> int:
        """BIP 141 weight: base bytes count four times, witness bytes once."""
        return self.base_size * (WITNESS_SCALE_FACTOR - 1) + self.size

    @property
    def vsize(self) -> int:
        """Virtual size: weight / 4, rounded up."""
        return math.ceil(self.weight / WITNESS_SCALE_FACTOR)

    def is_coinbase(self) -> bool:
        """A coinbase transaction has exactly one input, and it is a coinbase input."""
        return len(self.inputs) == 1 and self.inputs[0].is_coinbase()

    def total_output_value(self) -> int:
        return sum(txout.amount for txout in self.outputs)

    # ------------------------------------------------------------------
    # Dictionary form
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """
        Convert this transaction to a JSON-serializable dictionary.

        Byte fields become lowercase hex; derived values (txid, wtxid,
        sizes) are included for display and ignored by ``from_dict``.
        """
        return {
            'txid': self.txid,
            'wtxid': self.wtxid,
            'version': self.version,
            'segwit': self.is_segwit,
            'marker': self.marker,
            'flag': self.flag,
            'size': self.size,
            'vsize': self.vsize,
            'weight': self.weight,
            'inputs': [txin.to_dict() for txin in self.inputs],
            'outputs': [txout.to_dict() for txout in self.outputs],
            'lock_time': self.lock_time,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Transaction:
        """Reconstruct a Transaction from a dictionary produced by ``to_dict()``."""
        return cls(
            version=data['version'],
            inputs=[TransactionInput.from_dict(inp) for inp in data['inputs']],
            outputs=[TransactionOutput.from_dict(out) for out in data['outputs']],
            lock_time=data.get('lock_time', 0),
            marker=data.get('marker'),
            flag=data.get('flag'),
        )

    def __repr__(self) -> str:
        return (
            f"Transaction(txid='{self.txid[:16]}...', segwit={self.is_segwit}, "
            f"inputs={len(self.inputs)}, outputs={len(self.outputs)})"
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return (
            self.version == other.version
            and self.marker == other.marker
            and self.flag == other.flag
            and self.inputs == other.inputs
            and self.outputs == other.outputs
            and self.lock_time == other.lock_time
        )

    def __hash__(self) -> int:
        """
        Hash of the full serialization, consistent with ``__eq__``.

        Transactions are mutable; the hash changes if a field does, so do
        not mutate a transaction while it is a dict key or set member.
        """
        return hash(self.serialize())
