"""
Arbitrage Bot Test Mocks
========================
Reusable mock classes for isolated testing.
"""

from tests.mocks.mock_rpc import MockRpcClient, transport_error
from tests.mocks.mock_jupiter import MockJupiterClient, make_quote
from tests.mocks.mock_swap import RecordingBuilder, RecordingSubmitter, make_swap_tx

__all__ = [
    "MockRpcClient",
    "transport_error",
    "MockJupiterClient",
    "make_quote",
    "RecordingBuilder",
    "RecordingSubmitter",
    "make_swap_tx",
]
