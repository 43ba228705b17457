"""
Arbitrage Data Model
====================
Token amounts, Jupiter quote request/response schemas and the
per-iteration ArbitrageCycle record.

QuoteRequest/QuoteResponse are frozen pydantic models (they cross the
HTTP boundary); the rest are plain frozen dataclasses.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from jupiter_arb.arbiter.core.profit import ProfitEvaluation


@dataclass(frozen=True)
class Token:
    """A mint and its decimal precision."""
    symbol: str
    mint: str
    decimals: int


@dataclass(frozen=True)
class TokenAmount:
    """
    Integer quantity of a token's smallest unit.

    Arithmetic and ordering are only defined between amounts of the
    same token; mixing tokens raises ValueError.
    """
    amount: int
    token: Token

    def __post_init__(self):
        if self.amount < 0:
            raise ValueError(f"TokenAmount cannot be negative: {self.amount} {self.token.symbol}")

    @property
    def ui(self) -> float:
        """Amount in human units (e.g. 10_000_000 USDC atomic -> 10.0)."""
        return self.amount / (10 ** self.token.decimals)

    def _check_same_token(self, other: "TokenAmount") -> None:
        if not isinstance(other, TokenAmount):
            raise TypeError(f"Expected TokenAmount, got {type(other).__name__}")
        if other.token.mint != self.token.mint:
            raise ValueError(
                f"Token mismatch: {self.token.symbol} vs {other.token.symbol}"
            )

    def __sub__(self, other: "TokenAmount") -> int:
        """Signed difference in smallest units."""
        self._check_same_token(other)
        return self.amount - other.amount

    def __lt__(self, other: "TokenAmount") -> bool:
        self._check_same_token(other)
        return self.amount < other.amount

    def __le__(self, other: "TokenAmount") -> bool:
        self._check_same_token(other)
        return self.amount <= other.amount

    def __gt__(self, other: "TokenAmount") -> bool:
        self._check_same_token(other)
        return self.amount > other.amount

    def __ge__(self, other: "TokenAmount") -> bool:
        self._check_same_token(other)
        return self.amount >= other.amount

    def __str__(self) -> str:
        return f"{self.ui:.{self.token.decimals}f} {self.token.symbol}"


class QuoteRequest(BaseModel):
    """
    One leg's quote request.

    Example:
        req = QuoteRequest(
            input_mint="EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",  # USDC
            output_mint="So11111111111111111111111111111111111111112",  # SOL
            amount=10_000_000,  # 10 USDC
            slippage_bps=500,
            dexes=("Whirlpool", "Orca"),
        )
    """
    model_config = ConfigDict(frozen=True)

    input_mint: str = Field(..., min_length=1, description="Input token mint address")
    output_mint: str = Field(..., min_length=1, description="Output token mint address")
    amount: int = Field(..., gt=0, description="Input amount in smallest units")
    slippage_bps: int = Field(default=50, ge=0, le=10_000, description="Slippage tolerance in basis points")
    dexes: Optional[Tuple[str, ...]] = Field(default=None, description="Liquidity source allow-list")

    def to_params(self) -> Dict[str, Any]:
        """Render Jupiter /quote query params."""
        params = {
            "inputMint": self.input_mint,
            "outputMint": self.output_mint,
            "amount": str(self.amount),
            "slippageBps": self.slippage_bps,
        }
        if self.dexes:
            params["dexes"] = ",".join(self.dexes)
        return params


class QuoteResponse(BaseModel):
    """
    Parsed Jupiter quote.

    `raw` keeps the payload exactly as returned, since /swap expects the
    original quote object back.
    """
    model_config = ConfigDict(frozen=True)

    input_mint: str
    output_mint: str
    in_amount: int = Field(..., ge=0)
    out_amount: int = Field(..., ge=0)
    other_amount_threshold: int = Field(default=0, ge=0)
    slippage_bps: int = 0
    price_impact_pct: float = 0.0
    route_labels: Tuple[str, ...] = ()
    raw: Dict[str, Any] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "QuoteResponse":
        labels = tuple(
            step.get("swapInfo", {}).get("label", "?")
            for step in payload.get("routePlan", [])
        )
        return cls(
            input_mint=payload["inputMint"],
            output_mint=payload["outputMint"],
            in_amount=int(payload["inAmount"]),
            out_amount=int(payload["outAmount"]),
            other_amount_threshold=int(payload.get("otherAmountThreshold", 0)),
            slippage_bps=int(payload.get("slippageBps", 0)),
            price_impact_pct=float(payload.get("priceImpactPct") or 0.0),
            route_labels=labels,
            raw=payload,
        )


@dataclass(frozen=True)
class ArbitrageCycle:
    """One iteration's forward/backward quote pair plus its evaluation. Never persisted."""
    input_amount: TokenAmount
    forward_out: TokenAmount
    backward_out: TokenAmount
    forward_quote: QuoteResponse
    backward_quote: QuoteResponse
    evaluation: "ProfitEvaluation"
    started_at: float = field(default_factory=time.time)

    @property
    def round_trip_delta(self) -> int:
        """Signed token-A difference after both legs (smallest units)."""
        return self.backward_out - self.input_amount
