from .profit import ProfitEvaluation, evaluate
from .cycle_controller import (
    ArbConfig,
    ArbitrageCycleController,
    CycleOutcome,
    CycleReport,
    CycleState,
)

__all__ = [
    "ProfitEvaluation",
    "evaluate",
    "ArbConfig",
    "ArbitrageCycleController",
    "CycleOutcome",
    "CycleReport",
    "CycleState",
]
