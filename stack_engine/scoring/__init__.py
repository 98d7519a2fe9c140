"""Weight profiles, tool scoring, integration scoring and tool-count ranges."""

from stack_engine.scoring.integration import (
    calculate_integration_score,
    calculate_synergy_bonus,
    selection_score,
)
from stack_engine.scoring.ranges import ToolRange, calculate_target_tool_range, quality_floor
from stack_engine.scoring.scorer import (
    ScoreBreakdown,
    ScoredTool,
    ScoringContext,
    ToolScorer,
    compute_ai_score,
    compute_cost_score,
    compute_fit_score,
)
from stack_engine.scoring.weights import (
    SCENARIO_BASE_WEIGHTS,
    WeightProfile,
    WeightProfileBuilder,
    WeightSignals,
)

__all__ = [
    "SCENARIO_BASE_WEIGHTS",
    "ScoreBreakdown",
    "ScoredTool",
    "ScoringContext",
    "ToolRange",
    "ToolScorer",
    "WeightProfile",
    "WeightProfileBuilder",
    "WeightSignals",
    "calculate_integration_score",
    "calculate_synergy_bonus",
    "calculate_target_tool_range",
    "compute_ai_score",
    "compute_cost_score",
    "compute_fit_score",
    "quality_floor",
    "selection_score",
]
