"""
Arbitrage Cycle Controller
==========================
Round-trip USDC -> SOL -> USDC arbitrage loop over Jupiter quotes.

State machine (one cycle at a time, never concurrent):

    QUOTING_FORWARD -> QUOTING_BACKWARD -> EVALUATING -> IDLE | EXECUTING -> SLEEPING -> ...

Quote or leg failures log, back off and restart at QUOTING_FORWARD.

NOT ATOMIC
==========
Execution submits TWO independent transactions: the forward swap is
confirmed first, then (after LEG_DELAY_S) the backward swap is built,
signed and submitted. The ledger gives no atomicity across them. If the
backward leg fails after a confirmed forward leg, the wallet is left
holding token B and nothing here unwinds it.
"""

import asyncio
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Optional, Tuple

from config.settings import Settings
from jupiter_arb.arbiter.core.profit import evaluate
from jupiter_arb.shared.execution.errors import BuildError, QuoteError, SubmitError
from jupiter_arb.shared.execution.execution_result import (
    ErrorCode,
    ExecutionResult,
    failure_result,
    success_result,
)
from jupiter_arb.shared.execution.models import (
    ArbitrageCycle,
    QuoteRequest,
    QuoteResponse,
    Token,
    TokenAmount,
)
from jupiter_arb.shared.execution.submitter import ExecutionSubmitter
from jupiter_arb.shared.execution.swap_builder import SwapTransactionBuilder
from jupiter_arb.shared.infrastructure.jupiter_client import JupiterClient
from jupiter_arb.shared.system.logging import Logger


@dataclass(frozen=True)
class ArbConfig:
    """Immutable snapshot of strategy settings handed to the controller."""
    token_a: Token
    token_b: Token
    initial_amount: int = 10_000_000
    min_profit_pct: float = 0.01
    slippage_bps: int = 500
    forward_dexes: Tuple[str, ...] = ()
    backward_dexes: Tuple[str, ...] = ()
    cycle_delay_s: float = 1.0
    leg_delay_s: float = 0.2
    failure_backoff_s: float = 1.0

    @classmethod
    def from_settings(cls) -> "ArbConfig":
        return cls(
            token_a=Token("USDC", Settings.USDC_MINT, Settings.USDC_DECIMALS),
            token_b=Token("SOL", Settings.SOL_MINT, Settings.SOL_DECIMALS),
            initial_amount=Settings.INITIAL_AMOUNT,
            min_profit_pct=Settings.MIN_PROFIT_PCT,
            slippage_bps=Settings.SLIPPAGE_BPS,
            forward_dexes=tuple(Settings.FORWARD_DEXES),
            backward_dexes=tuple(Settings.BACKWARD_DEXES),
            cycle_delay_s=Settings.CYCLE_DELAY_S,
            leg_delay_s=Settings.LEG_DELAY_S,
            failure_backoff_s=Settings.FAILURE_BACKOFF_S,
        )


class CycleState(Enum):
    QUOTING_FORWARD = "QUOTING_FORWARD"
    QUOTING_BACKWARD = "QUOTING_BACKWARD"
    EVALUATING = "EVALUATING"
    IDLE = "IDLE"
    EXECUTING = "EXECUTING"
    SLEEPING = "SLEEPING"


class CycleOutcome(Enum):
    FORWARD_QUOTE_FAILED = "FORWARD_QUOTE_FAILED"
    BACKWARD_QUOTE_FAILED = "BACKWARD_QUOTE_FAILED"
    NO_OPPORTUNITY = "NO_OPPORTUNITY"
    EXECUTED = "EXECUTED"
    FORWARD_LEG_FAILED = "FORWARD_LEG_FAILED"
    BACKWARD_LEG_FAILED = "BACKWARD_LEG_FAILED"

    @property
    def is_failure(self) -> bool:
        return self not in (CycleOutcome.NO_OPPORTUNITY, CycleOutcome.EXECUTED)


@dataclass
class CycleReport:
    """What one cycle did. Discarded after logging."""
    outcome: CycleOutcome
    cycle: Optional[ArbitrageCycle] = None
    forward_result: Optional[ExecutionResult] = None
    backward_result: Optional[ExecutionResult] = None
    error: Optional[str] = None


@dataclass
class RunStats:
    cycles: int = 0
    opportunities: int = 0
    executions: int = 0
    failures: int = 0
    started_at: float = field(default_factory=time.time)


class ArbitrageCycleController:
    """
    Orchestrates quote -> evaluate -> execute -> sleep.

    Usage:
        controller = ArbitrageCycleController(config, jupiter, builder, submitter)
        await controller.run(stop_event)
    """

    def __init__(
        self,
        config: ArbConfig,
        jupiter: JupiterClient,
        builder: SwapTransactionBuilder,
        submitter: ExecutionSubmitter,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.config = config
        self.jupiter = jupiter
        self.builder = builder
        self.submitter = submitter
        self._sleep = sleep

        self.state = CycleState.SLEEPING
        self.stats = RunStats()

    # =========================================================================
    # MAIN LOOP
    # =========================================================================

    async def run(self, stop_event: Optional[asyncio.Event] = None) -> RunStats:
        """
        Run cycles until stop_event is set.
        The event is only checked between cycles, never mid-submission.
        """
        while stop_event is None or not stop_event.is_set():
            report = await self.run_cycle()

            self.state = CycleState.SLEEPING
            if report.outcome.is_failure:
                await self._sleep(self.config.failure_backoff_s)
            else:
                Logger.info(f"⏳ Waiting {self.config.cycle_delay_s:g} second(s) before next cycle...")
                await self._sleep(self.config.cycle_delay_s)

        uptime = time.time() - self.stats.started_at
        Logger.info(
            f"[ARB] Stopped after {self.stats.cycles} cycles in {uptime:.0f}s | "
            f"{self.stats.opportunities} opportunities | "
            f"{self.stats.executions} executed | {self.stats.failures} failed"
        )
        return self.stats

    async def run_cycle(self) -> CycleReport:
        """One pass from QUOTING_FORWARD to the SLEEPING boundary (sleep excluded)."""
        self.stats.cycles += 1
        report = await self._run_cycle()
        if report.outcome.is_failure:
            self.stats.failures += 1
        return report

    async def _run_cycle(self) -> CycleReport:
        cfg = self.config
        a, b = cfg.token_a, cfg.token_b
        input_amount = TokenAmount(cfg.initial_amount, a)

        Logger.section("🔄 Starting arbitrage cycle...")

        # Step 1: A -> B
        self.state = CycleState.QUOTING_FORWARD
        Logger.info(f"[QUOTE] Step 1: Getting {a.symbol} → {b.symbol} quote")
        try:
            forward_quote = await self.jupiter.quote(self._request(a, b, input_amount.amount, cfg.forward_dexes))
        except QuoteError as e:
            Logger.error(f"[QUOTE] ❌ Forward quote failed: {e}")
            return CycleReport(CycleOutcome.FORWARD_QUOTE_FAILED, error=str(e))

        forward_out = TokenAmount(forward_quote.out_amount, b)
        Logger.info(f"[QUOTE]    ✅ Forward quote: {input_amount.ui:.2f} {a.symbol} → {forward_out.ui:.6f} {b.symbol}")

        # Step 2: B -> A, sized by the forward output
        self.state = CycleState.QUOTING_BACKWARD
        Logger.info(f"[QUOTE] Step 2: Getting {b.symbol} → {a.symbol} quote")
        try:
            backward_quote = await self.jupiter.quote(self._request(b, a, forward_out.amount, cfg.backward_dexes))
        except QuoteError as e:
            Logger.error(f"[QUOTE] ❌ Backward quote failed: {e}")
            return CycleReport(CycleOutcome.BACKWARD_QUOTE_FAILED, error=str(e))

        backward_out = TokenAmount(backward_quote.out_amount, a)
        Logger.info(f"[QUOTE]    ✅ Backward quote: {forward_out.ui:.6f} {b.symbol} → {backward_out.ui:.6f} {a.symbol}")

        # Evaluate against the ORIGINAL input amount
        self.state = CycleState.EVALUATING
        evaluation = evaluate(input_amount.amount, forward_out.amount, backward_out.amount)
        cycle = ArbitrageCycle(
            input_amount=input_amount,
            forward_out=forward_out,
            backward_out=backward_out,
            forward_quote=forward_quote,
            backward_quote=backward_quote,
            evaluation=evaluation,
        )

        Logger.info("[ARB] 💰 ARBITRAGE ANALYSIS:")
        Logger.info(f"[ARB]    Input: {input_amount.ui:.6f} {a.symbol}")
        Logger.info(f"[ARB]    Output: {backward_out.ui:.6f} {a.symbol}")
        Logger.info(
            f"[ARB]    Profit: {evaluation.profit / 10 ** a.decimals:+.6f} {a.symbol} "
            f"({evaluation.profit_percentage:.4f}%)"
        )

        if not evaluation.meets(cfg.min_profit_pct):
            self.state = CycleState.IDLE
            Logger.info("[ARB]    😔 No profitable arbitrage opportunity")
            return CycleReport(CycleOutcome.NO_OPPORTUNITY, cycle=cycle)

        self.stats.opportunities += 1
        Logger.success("[ARB]    🎯 PROFITABLE ARBITRAGE FOUND!")
        self.state = CycleState.EXECUTING
        return await self._execute(cycle)

    def _request(self, src: Token, dst: Token, amount: int, dexes: Tuple[str, ...]) -> QuoteRequest:
        return QuoteRequest(
            input_mint=src.mint,
            output_mint=dst.mint,
            amount=amount,
            slippage_bps=self.config.slippage_bps,
            dexes=dexes or None,
        )

    # =========================================================================
    # EXECUTION (two sequential, non-atomic legs)
    # =========================================================================

    async def execute_leg(self, leg: str, quote: QuoteResponse) -> ExecutionResult:
        """Build, sign and submit one leg. Never raises; failures come back as a result."""
        start = time.time()
        Logger.info(f"[EXEC]    📝 Executing {leg} swap...")
        try:
            tx = await self.builder.build_and_sign(quote)
            signature = await self.submitter.submit_and_confirm(tx)
        except (BuildError, SubmitError) as e:
            return failure_result(leg, e.code, str(e), latency_ms=(time.time() - start) * 1000)
        except Exception as e:
            # Unmapped collaborator errors still end in backoff, never a dead loop
            Logger.error(f"[EXEC] Unexpected {type(e).__name__} during {leg} leg")
            return failure_result(
                leg, ErrorCode.UNKNOWN, f"{type(e).__name__}: {e}",
                latency_ms=(time.time() - start) * 1000,
            )
        return success_result(leg, signature, latency_ms=(time.time() - start) * 1000)

    async def _execute(self, cycle: ArbitrageCycle) -> CycleReport:
        b = self.config.token_b
        pct = cycle.evaluation.profit_percentage

        forward = await self.execute_leg("forward", cycle.forward_quote)
        if not forward.success:
            Logger.error(f"[EXEC]    ❌ Forward swap failed ({forward.error_code.value}): {forward.error_message}")
            return CycleReport(CycleOutcome.FORWARD_LEG_FAILED, cycle=cycle, forward_result=forward, error=forward.error_message)
        Logger.success(f"[EXEC]    ✅ Forward swap successful: {forward.tx_signature} ({forward.latency_ms:.0f}ms)")

        # Let the forward swap's state settle before the dependent leg
        await self._sleep(self.config.leg_delay_s)

        backward = await self.execute_leg("backward", cycle.backward_quote)
        if not backward.success:
            Logger.error(f"[EXEC]    ❌ Backward swap failed ({backward.error_code.value}): {backward.error_message}")
            Logger.critical(
                f"[EXEC] Forward leg {forward.tx_signature} is confirmed; wallet holds "
                f"~{cycle.forward_out.ui:.6f} {b.symbol} that was NOT swapped back"
            )
            return CycleReport(
                CycleOutcome.BACKWARD_LEG_FAILED,
                cycle=cycle,
                forward_result=forward,
                backward_result=backward,
                error=backward.error_message,
            )
        Logger.success(f"[EXEC]    ✅ Backward swap successful: {backward.tx_signature} ({backward.latency_ms:.0f}ms)")

        self.stats.executions += 1
        Logger.success(f"[ARB]    🎉 ARBITRAGE COMPLETED! Profit: {pct:.2f}%")
        return CycleReport(CycleOutcome.EXECUTED, cycle=cycle, forward_result=forward, backward_result=backward)
