"""
Round-trip profit evaluation.

Pure: no I/O, never touches the quotes it was derived from.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProfitEvaluation:
    """Signed profit in token-A smallest units and as a percentage of input."""
    profit: int
    profit_percentage: float

    def meets(self, min_profit_pct: float) -> bool:
        """True when the percentage return reaches the threshold (same percent units)."""
        return self.profit_percentage >= min_profit_pct

    @property
    def is_profitable(self) -> bool:
        return self.profit > 0


def evaluate(input_amount: int, forward_out: int, backward_out: int) -> ProfitEvaluation:
    """
    Evaluate a forward/backward quote pair against the original input.

    Args:
        input_amount: Token A sent into the forward leg (smallest units)
        forward_out: Token B the forward leg yields; informational only
        backward_out: Token A the backward leg returns

    Returns:
        ProfitEvaluation with profit = backward_out - input_amount and
        profit_percentage = profit / input_amount * 100
    """
    if input_amount <= 0:
        raise ValueError(f"input_amount must be positive, got {input_amount}")
    if forward_out < 0 or backward_out < 0:
        raise ValueError("quote outputs cannot be negative")

    profit = backward_out - input_amount
    profit_percentage = (profit / input_amount) * 100
    return ProfitEvaluation(profit=profit, profit_percentage=profit_percentage)
