"""
Example 01: Decoding Raw Transactions
======================================

This example decodes two real mainnet transactions and prints them:

1. A legacy transaction (the first bitcoin transfer, block 170).
2. A segwit transaction spending a native P2WPKH output.

For each one it shows the decoded fields, the txid/wtxid, the size
metrics, the raw wire fields and a re-encoding check (the encoder must
reproduce the exact input bytes).

Usage:
    python examples/01_decode_transaction.py [RAW_TX_HEX]
"""

import logging
import sys

from txcodec import (
    DecodeError,
    decode_transaction_hex,
    encode_transaction_hex,
    raw_components_hex,
)
from txcodec.utils.visualizer import TransactionVisualizer

LEGACY_TX = (
    "0100000001c997a5e56e104102fa209c6a852dd90660a20b2d9c352423edce25857fcd3704"
    "000000004847304402204e45e16932b8af514961a1d3a1a25fdf3f4f7732e9d624c6c61548ab"
    "5fb8cd410220181522ec8eca07de4860a4acdd12909d831cc56cbbac4622082221a8768d1d09"
    "01ffffffff0200ca9a3b00000000434104ae1a62fe09c5f51b13905f07f06b99a2f7159b2225"
    "f374cd378d71302fa28414e7aab37397f554a7df5f142c21c1b7303b8a0626f1baded5c72a70"
    "4f7e6cd84cac00286bee0000000043410411db93e1dcdb8a016b49840f8c53bc1eb68a382e97"
    "b1482ecad7b148a6909a5cb2e0eaddfb84ccf9744464f82e160bfa9b8b64f9d4c03f999b8643"
    "f656b412a3ac00000000"
)

SEGWIT_TX = (
    "010000000001019d78d88ba7223285a8f238a8b4a4cfa50e5a8bae1c48ab9c9fdba65726f67b"
    "7b0d00000000ffffffff018ea003000000000017a9143761107a6ed37e71cfec61275f175446"
    "e67c23a6870247304402202c744bd89c0aa12f8434cf442f0c67ab78ad6a7670e5ec770e5a5e"
    "8c67be474b022034dece145972f135e02f7bbc17853133c876d4f7d521de438dd5d13a529f1f"
    "05012103365db62d9cf4b19e4dcebb6946763e8048f315d84814f507fa3ca38412044ba20000"
    "0000"
)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if len(sys.argv) > 1:
        samples = [("Command line", sys.argv[1])]
    else:
        samples = [("Legacy", LEGACY_TX), ("Segwit", SEGWIT_TX)]

    visualizer = TransactionVisualizer()

    for label, raw_hex in samples:
        print("=" * 60)
        print(f"{label} transaction")
        print("=" * 60)

        try:
            tx = decode_transaction_hex(raw_hex)
        except DecodeError as e:
            print(f"  Could not decode: {e}")
            continue

        visualizer.print_transaction(tx)
        visualizer.print_components(raw_components_hex(raw_hex))

        cleaned = "".join(raw_hex.split()).lower()
        roundtrip_ok = encode_transaction_hex(tx) == cleaned
        print(f"  Re-encoding matches input: {roundtrip_ok}")
        print()


if __name__ == "__main__":
    main()
