"""
Shared fixtures for the test modules.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import pytest
from vectors import (
    LEGACY_SINGLE_OUTPUT_TX_HEX,
    LEGACY_TX_HEX,
    SEGWIT_THREE_INPUT_TX_HEX,
    SEGWIT_TWO_OUTPUT_TX_HEX,
    SEGWIT_TX_HEX,
)


@pytest.fixture
def legacy_tx_bytes():
    """Raw bytes of the block 170 transaction."""
    return bytes.fromhex(LEGACY_TX_HEX)


@pytest.fixture
def segwit_tx_bytes():
    """Raw bytes of the single-output segwit transaction."""
    return bytes.fromhex(SEGWIT_TX_HEX)


@pytest.fixture
def segwit_two_output_tx_bytes():
    """Raw bytes of the two-output segwit transaction."""
    return bytes.fromhex(SEGWIT_TWO_OUTPUT_TX_HEX)


@pytest.fixture
def legacy_single_output_tx_bytes():
    """Raw bytes of the 1-input, 1-output legacy transaction."""
    return bytes.fromhex(LEGACY_SINGLE_OUTPUT_TX_HEX)


@pytest.fixture
def segwit_three_input_tx_bytes():
    """Raw bytes of the three-input segwit transaction."""
    return bytes.fromhex(SEGWIT_THREE_INPUT_TX_HEX)
