# Hash functions used for transaction identifiers

from .hash import sha256, double_sha256, hash256_display

__all__ = [
    'sha256',
    'double_sha256',
    'hash256_display',
]
