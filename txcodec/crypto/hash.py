"""
Bitcoin Hash Functions
======================

Transaction identifiers are computed with double SHA-256 (also called
hash256): SHA-256 applied twice to the serialized transaction.

- The **txid** hashes the witness-stripped serialization, so it does not
  change when witness data is malleated.
- The **wtxid** hashes the full serialization including marker, flag and
  witness stacks. For a legacy transaction the two are identical.

Both are conventionally displayed with their bytes reversed.
"""

import hashlib


def sha256(data: bytes) -> bytes:
    """
    Compute the SHA-256 hash of the input data.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def double_sha256(data: bytes) -> bytes:
    """
    Compute the double SHA-256 hash: SHA-256(SHA-256(data)).

    Args:
        data: The raw bytes to hash.

    Returns:
        The 32-byte double-SHA-256 digest, in natural (internal) byte order.

    Example:
        >>> double_sha256(b"hello").hex()
        '9595c9df90075148eb06860365df33584b75bff782a510c6cd4883a419833d50'
    """
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def hash256_display(data: bytes) -> str:
    """
    Double SHA-256 of *data* as hex in display order (bytes reversed).

    This is the form block explorers and Bitcoin Core RPCs show for
    transaction ids.
    """
    return double_sha256(data)[::-1].hex()
