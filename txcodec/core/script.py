"""
Output script inspection.

Scripts are opaque to the codec: they are never parsed into opcodes or
executed. This module only recognises the handful of fixed templates that
standard outputs use, so a decoded output can be labelled (``p2pkh``,
``p2wpkh``, ...) and, where the template has one, rendered as an address.

Addresses:

- P2PKH and P2SH outputs use Base58Check (version byte + 20-byte hash +
  4-byte double-SHA-256 checksum), via the ``base58`` library.
- Witness version 0 outputs (P2WPKH, P2WSH) use bech32, via the ``bech32``
  library.

Taproot (witness v1) addresses need bech32m, which the ``bech32`` library
does not implement, so ``script_to_address`` returns None for them.
"""

from __future__ import annotations

from typing import Optional

import base58
import bech32

from txcodec.core.params import NETWORKS

OP_0 = 0x00
OP_1 = 0x51
OP_16 = 0x60
OP_RETURN = 0x6a
OP_DUP = 0x76
OP_EQUAL = 0x87
OP_EQUALVERIFY = 0x88
OP_HASH160 = 0xa9
OP_CHECKSIG = 0xac
OP_CHECKMULTISIG = 0xae


def classify_script(script: bytes) -> str:
    """
    Identify the standard template an output script follows.

    Args:
        script: Raw script_pubkey bytes.

    Returns:
        One of ``'p2pk'``, ``'p2pkh'``, ``'p2sh'``, ``'p2wpkh'``,
        ``'p2wsh'``, ``'p2tr'``, ``'nulldata'``, ``'multisig'`` or
        ``'nonstandard'``.
    """
    n = len(script)

    if (n == 25 and script[0] == OP_DUP and script[1] == OP_HASH160
            and script[2] == 20 and script[23] == OP_EQUALVERIFY
            and script[24] == OP_CHECKSIG):
        return 'p2pkh'

    if n == 23 and script[0] == OP_HASH160 and script[1] == 20 and script[22] == OP_EQUAL:
        return 'p2sh'

    if n == 22 and script[0] == OP_0 and script[1] == 20:
        return 'p2wpkh'

    if n == 34 and script[0] == OP_0 and script[1] == 32:
        return 'p2wsh'

    if n == 34 and script[0] == OP_1 and script[1] == 32:
        return 'p2tr'

    # Compressed (33-byte) or uncompressed (65-byte) public key + OP_CHECKSIG
    if n in (35, 67) and script[0] == n - 2 and script[-1] == OP_CHECKSIG:
        return 'p2pk'

    if n >= 1 and script[0] == OP_RETURN:
        return 'nulldata'

    if (n >= 3 and script[-1] == OP_CHECKMULTISIG
            and OP_1 <= script[0] <= OP_16 and OP_1 <= script[-2] <= OP_16):
        return 'multisig'

    return 'nonstandard'


def script_to_address(script: bytes, network: str = 'mainnet') -> Optional[str]:
    """
    Render the address an output script pays to, if it has one.

    Args:
        script: Raw script_pubkey bytes.
        network: ``'mainnet'`` or ``'testnet'``.

    Returns:
        The address string, or None for templates without an address form
        (P2PK, multisig, OP_RETURN, taproot, non-standard).

    Raises:
        ValueError: If *network* is unknown.
    """
    if network not in NETWORKS:
        raise ValueError(
            f"Unknown network '{network}', expected one of {sorted(NETWORKS)}"
        )
    params = NETWORKS[network]
    script = bytes(script)
    script_type = classify_script(script)

    if script_type == 'p2pkh':
        payload = params['p2pkh_version'] + script[3:23]
        return base58.b58encode_check(payload).decode('ascii')

    if script_type == 'p2sh':
        payload = params['p2sh_version'] + script[2:22]
        return base58.b58encode_check(payload).decode('ascii')

    if script_type in ('p2wpkh', 'p2wsh'):
        return bech32.encode(params['bech32_hrp'], 0, script[2:])

    return None
