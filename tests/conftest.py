"""
Arbitrage Bot Test Configuration
================================
Shared fixtures and pytest markers for the test suite.
"""

import pytest
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from solders.keypair import Keypair

from jupiter_arb.shared.execution.models import Token
from jupiter_arb.shared.execution.wallet import Wallet


# ============================================================================
# SHARED FIXTURES
# ============================================================================

@pytest.fixture
def usdc():
    return Token("USDC", "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v", 6)


@pytest.fixture
def sol():
    return Token("SOL", "So11111111111111111111111111111111111111112", 9)


@pytest.fixture
def keypair():
    return Keypair()


@pytest.fixture
def wallet(keypair):
    return Wallet(keypair=keypair)


@pytest.fixture
def silent_logger():
    """Keep console output out of test logs; file logging still runs."""
    from jupiter_arb.shared.system.logging import Logger
    Logger.set_silent(True)
    yield Logger
    Logger.set_silent(False)
