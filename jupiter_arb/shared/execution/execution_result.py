"""
Leg Execution Result
====================
Standardized return type for one executed (or attempted) swap leg.

The controller produces one ExecutionResult per leg it attempts, so a
cycle's outcome can be reported leg by leg.
"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum


class ErrorCode(Enum):
    """Standardized error codes for cycle and leg failures."""

    QUOTE_FAILED = "QUOTE_FAILED"

    # Build / sign
    BUILD_FAILED = "BUILD_FAILED"
    SIGNING_FAILED = "SIGNING_FAILED"

    # Submit / confirm
    SUBMIT_FAILED = "SUBMIT_FAILED"
    CONFIRMATION_TIMEOUT = "CONFIRMATION_TIMEOUT"
    ONCHAIN_FAILURE = "ONCHAIN_FAILURE"

    # Startup
    WALLET_INVALID = "WALLET_INVALID"

    UNKNOWN = "UNKNOWN"


@dataclass
class ExecutionResult:
    """
    Result of one swap leg.

    Usage:
        result = await controller.execute_leg("forward", quote)
        if result.success:
            log(f"Confirmed {result.tx_signature} in {result.latency_ms:.0f}ms")
        else:
            handle_error(result.error_code)
    """

    leg: str
    success: bool
    tx_signature: Optional[str] = None

    # Error handling
    error_code: Optional[ErrorCode] = None
    error_message: Optional[str] = None

    # Build + submit + confirm wall time
    latency_ms: float = 0.0


# ═══════════════════════════════════════════════════════════════════════════════
# FACTORY FUNCTIONS
# ═══════════════════════════════════════════════════════════════════════════════

def success_result(leg: str, tx_signature: str, latency_ms: float = 0.0) -> ExecutionResult:
    """Create a successful leg result."""
    return ExecutionResult(leg=leg, success=True, tx_signature=tx_signature, latency_ms=latency_ms)


def failure_result(
    leg: str,
    error_code: ErrorCode,
    error_message: str,
    latency_ms: float = 0.0,
) -> ExecutionResult:
    """Create a failed leg result."""
    return ExecutionResult(
        leg=leg,
        success=False,
        error_code=error_code,
        error_message=error_message,
        latency_ms=latency_ms,
    )
