"""
Jupiter Arbitrage Bot - Entrypoint
==================================
Polls Jupiter for USDC -> SOL -> USDC round trips and executes both
swaps when the quoted return clears ARB_MIN_PROFIT_PCT.

Usage:
    python main.py

Environment Variables:
    API_BASE_URL     - Jupiter API base (default: https://quote-api.jup.ag/v6)
    SOLANA_RPC_URL   - RPC endpoint for broadcast + confirmation
    WALLET_PATH      - Keypair JSON file (default: ./your_wallet.json)

Runs until SIGINT/SIGTERM. Exits 1 if the wallet cannot be loaded.
"""

import asyncio
import signal
import sys

from solana.rpc.async_api import AsyncClient

from config.settings import Settings
from jupiter_arb.arbiter.core.cycle_controller import ArbConfig, ArbitrageCycleController
from jupiter_arb.shared.execution.errors import WalletLoadError
from jupiter_arb.shared.execution.submitter import ExecutionSubmitter
from jupiter_arb.shared.execution.swap_builder import SwapTransactionBuilder
from jupiter_arb.shared.execution.wallet import Wallet, load_wallet
from jupiter_arb.shared.infrastructure.jupiter_client import JupiterClient
from jupiter_arb.shared.system.logging import Logger


def _install_stop_handlers(stop_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows event loops; Ctrl+C still raises KeyboardInterrupt
            pass


async def run(wallet: Wallet) -> None:
    stop_event = asyncio.Event()
    _install_stop_handlers(stop_event)

    rpc = AsyncClient(Settings.RPC_URL)
    try:
        async with JupiterClient(Settings.API_BASE_URL) as jupiter:
            controller = ArbitrageCycleController(
                config=ArbConfig.from_settings(),
                jupiter=jupiter,
                builder=SwapTransactionBuilder(jupiter, wallet),
                submitter=ExecutionSubmitter(rpc),
            )
            await controller.run(stop_event)
    finally:
        await rpc.close()


def main() -> int:
    Logger.info("🤖 Jupiter Arbitrage Bot")
    Logger.info(f"Using base url: {Settings.API_BASE_URL}")

    try:
        wallet = load_wallet(Settings.WALLET_PATH)
    except WalletLoadError as e:
        Logger.critical(f"[WALLET] {e}")
        return 1

    Logger.info(f"[WALLET] Loaded wallet: {wallet.get_public_key()}")

    try:
        asyncio.run(run(wallet))
    except KeyboardInterrupt:
        Logger.warning("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
