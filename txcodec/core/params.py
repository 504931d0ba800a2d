"""
Codec Parameters
================

Constants shared by the decoder, the encoder and the script helpers.

Most of these are fixed by the Bitcoin wire format. ``MAX_TRANSACTION_SIZE``
is the one tunable limit: every decode entry point accepts a ``max_size``
keyword that defaults to it.
"""

MAX_TRANSACTION_SIZE = 4_000_000
"""Largest input (in bytes) the decoder will attempt to parse.
No valid transaction can be bigger than a block, and a block's weight is
capped at 4 million weight units, so 4,000,000 raw bytes is a safe upper
bound. Anything larger is rejected before parsing starts."""

WITNESS_SCALE_FACTOR = 4
"""BIP 141 discount: non-witness bytes count 4 weight units, witness bytes
count 1. Weight = base_size * (WITNESS_SCALE_FACTOR - 1) + total_size."""

SEGWIT_MARKER = 0x00
"""Marker byte that follows the version field in a segwit serialization.
In a legacy serialization this position holds the input count, which is
never zero for a valid transaction, so the two forms can be told apart."""

SEGWIT_FLAG = 0x01
"""Flag byte written after the marker. The decoder accepts any non-zero
flag; the encoder writes this value for freshly built transactions."""

SEQUENCE_FINAL = 0xffffffff
"""Default input sequence number (final, no relative lock time)."""

NULL_TXID = b'\x00' * 32
"""Previous txid referenced by a coinbase input."""

COINBASE_VOUT = 0xffffffff
"""Previous output index referenced by a coinbase input."""

SATOSHIS_PER_BTC = 100_000_000
"""Number of satoshis in one bitcoin."""

MAX_UINT64 = 0xffffffffffffffff

NETWORKS = {
    'mainnet': {
        'p2pkh_version': b'\x00',
        'p2sh_version': b'\x05',
        'bech32_hrp': 'bc',
    },
    'testnet': {
        'p2pkh_version': b'\x6f',
        'p2sh_version': b'\xc4',
        'bech32_hrp': 'tb',
    },
}
"""Address parameters per network: Base58Check version bytes for
P2PKH/P2SH outputs and the bech32 human-readable part for witness
outputs."""
