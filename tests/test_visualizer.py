"""
Tests for the transaction visualizer
====================================

The visualizer writes to a rich Console; these tests record the output
and check that the decoded fields show up.
"""

import io
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from rich.console import Console

from txcodec import decode_transaction, raw_components
from txcodec.utils.visualizer import TransactionVisualizer, format_btc
from vectors import LEGACY_TXID, SEGWIT_TXID


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def visualizer(output):
    """A visualizer writing plain text to an in-memory buffer."""
    console = Console(file=output, width=250, color_system=None)
    return TransactionVisualizer(console=console)


class TestFormatBtc:

    def test_whole_and_fraction(self):
        assert format_btc(1_000_000_000) == "10.00000000 BTC"
        assert format_btc(237710) == "0.00237710 BTC"
        assert format_btc(0) == "0.00000000 BTC"


class TestTransactionVisualizer:
    """Tests for TransactionVisualizer."""

    def test_legacy_output(self, visualizer, output, legacy_tx_bytes):
        visualizer.print_transaction(decode_transaction(legacy_tx_bytes))
        text = output.getvalue()
        assert LEGACY_TXID in text
        assert "Segwit:" in text
        assert "p2pk" in text
        assert "10.00000000 BTC" in text
        assert "40.00000000 BTC" in text

    def test_segwit_output(self, visualizer, output, segwit_tx_bytes):
        visualizer.print_transaction(decode_transaction(segwit_tx_bytes))
        text = output.getvalue()
        assert SEGWIT_TXID in text
        assert "marker 00, flag 01" in text
        assert "p2sh" in text
        assert "0xffffffff" in text

    def test_empty_witness_marked(self, visualizer, output):
        data = bytes.fromhex(
            "02000000" "0001"
            "01" + "11" * 32 + "00000000" "00" "ffffffff"
            "01" "e803000000000000" "00"
            "00"
            "00000000"
        )
        visualizer.print_inputs(decode_transaction(data))
        assert "(empty)" in output.getvalue()


class TestPrintComponents:
    """Tests for the raw components table."""

    def test_segwit_components(self, visualizer, output, segwit_tx_bytes):
        visualizer.print_components(raw_components(segwit_tx_bytes))
        text = output.getvalue()
        assert "Raw Transaction Components" in text
        assert "Marker" in text
        assert "Witness 0 Stack Items" in text
        assert "Witness 0 Item 1 Data" in text
        assert "03365db62d9cf4b19e4dcebb6946763e8048f315d84814f507fa3ca38412044ba2" in text

    def test_legacy_components(self, visualizer, output, legacy_single_output_tx_bytes):
        visualizer.print_components(raw_components(legacy_single_output_tx_bytes))
        text = output.getvalue()
        assert "Marker" not in text
        assert "Witness" not in text
        assert "Input 0 Script Sig Size" in text
        assert "f0a29a3b00000000" in text
        assert "76a91489abcdefabbaabbaabbaabbaabbaabbaabbaabba88ac" in text
