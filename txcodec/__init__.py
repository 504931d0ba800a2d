# Bitcoin transaction codec: legacy and segwit wire formats

from txcodec.core.transaction import Transaction, TransactionInput, TransactionOutput
from txcodec.errors import (
    DecodeError,
    InputTooLarge,
    MalformedHex,
    NonCanonicalVarint,
    TrailingData,
    TruncatedInput,
)
from txcodec.utils.components import raw_components, raw_components_hex
from txcodec.utils.serialization import (
    decode_transaction,
    decode_transaction_hex,
    deserialize_transaction,
    deserialize_transactions,
    encode_transaction,
    encode_transaction_hex,
)

__all__ = [
    # Data model
    'Transaction',
    'TransactionInput',
    'TransactionOutput',
    # Entry points
    'decode_transaction',
    'decode_transaction_hex',
    'deserialize_transaction',
    'deserialize_transactions',
    'encode_transaction',
    'encode_transaction_hex',
    'raw_components',
    'raw_components_hex',
    # Errors
    'DecodeError',
    'MalformedHex',
    'TruncatedInput',
    'TrailingData',
    'NonCanonicalVarint',
    'InputTooLarge',
]
