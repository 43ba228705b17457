"""
Exception hierarchy for the arbitrage bot.

Collaborators raise these; the cycle controller catches the leg-level ones
(QuoteError, BuildError, SubmitError) and converts them into a backoff.
WalletLoadError is a startup error and is fatal.
"""

from typing import Optional

from jupiter_arb.shared.execution.execution_result import ErrorCode


class ArbitrageError(Exception):
    """Base exception for all arbitrage bot errors."""

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class QuoteError(ArbitrageError):
    """Quoting failed: network, venue error or no viable route."""

    code = ErrorCode.QUOTE_FAILED


class BuildError(ArbitrageError):
    """Swap transaction could not be constructed, decoded or signed."""

    code = ErrorCode.BUILD_FAILED


class SubmitError(ArbitrageError):
    """Broadcast, confirmation or on-chain execution failed."""

    code = ErrorCode.SUBMIT_FAILED


class WalletLoadError(ArbitrageError):
    """Wallet file missing or malformed."""

    code = ErrorCode.WALLET_INVALID
