# jupiter_arb/arbiter - Arbitrage Engine Package
"""
Round-trip arbitrage detection and execution.

Submodules:
    core/ - Profit evaluation and the cycle controller
"""
