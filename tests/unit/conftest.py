"""
Unit Test Configuration
=======================
Fixtures for pure logic tests - NO I/O ALLOWED.

All unit tests should be completely isolated from:
- Network (RPC, HTTP)
- File system (except tmp_path)
"""

import pytest


# ============================================================================
# AUTOUSE: ENFORCE I/O ISOLATION
# ============================================================================


@pytest.fixture(autouse=True)
def isolate_unit_tests(monkeypatch):
    """
    Automatically disable real network I/O for unit tests.
    httpx.MockTransport is unaffected; only the real transports are blocked.
    """
    def block_network(*args, **kwargs):
        raise RuntimeError(
            "Network I/O detected in unit test! "
            "Unit tests must be pure logic with no external dependencies. "
            "Use httpx.MockTransport or tests.mocks instead."
        )

    monkeypatch.setattr("httpx.AsyncHTTPTransport.handle_async_request", block_network)
    monkeypatch.setattr("httpx.HTTPTransport.handle_request", block_network)


# ============================================================================
# CONTROLLER FIXTURES
# ============================================================================


@pytest.fixture
def arb_config(usdc, sol):
    """Strategy config with distinguishable fast timers."""
    from jupiter_arb.arbiter.core.cycle_controller import ArbConfig
    return ArbConfig(
        token_a=usdc,
        token_b=sol,
        initial_amount=10_000_000,
        min_profit_pct=0.01,
        slippage_bps=500,
        forward_dexes=("Whirlpool", "Orca"),
        backward_dexes=("Whirlpool", "Orca", "Serum"),
        cycle_delay_s=1.0,
        leg_delay_s=0.2,
        failure_backoff_s=3.0,
    )


@pytest.fixture
def sleeps():
    """Recorded sleep durations (injected in place of asyncio.sleep)."""
    return []


@pytest.fixture
def fake_sleep(sleeps):
    async def _sleep(seconds):
        sleeps.append(seconds)
    return _sleep
