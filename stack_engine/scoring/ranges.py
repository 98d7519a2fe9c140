# stack_engine/scoring/ranges.py
"""Adaptive tool-count range and the statistical quality floor."""

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from stack_engine.catalog.types import PainPoint, ScenarioType, TeamSize

BASE_TOOL_RANGES: dict[TeamSize, tuple[int, int]] = {
    TeamSize.SOLO: (2, 4),
    TeamSize.SMALL: (3, 5),
    TeamSize.MEDIUM: (4, 7),
    TeamSize.LARGE: (5, 8),
    TeamSize.ENTERPRISE: (6, 10),
}

# Where each scenario sits inside the base span
SCENARIO_RANGE_BIAS: dict[ScenarioType, str] = {
    ScenarioType.MONO_STACK: "min",
    ScenarioType.NATIVE_INTEGRATOR: "mid",
    ScenarioType.AGENTIC_LEAN: "max",
    ScenarioType.STARTER_PACK: "min",
}

# Each one present trims one tool off the upper bound
RANGE_REDUCING_PAIN_POINTS = (PainPoint.TOO_MANY_TOOLS, PainPoint.OVERPAYING)

SINGLE_SCORE_FLOOR_RATIO = 0.7


@dataclass(frozen=True)
class ToolRange:
    min: int
    max: int

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


def calculate_target_tool_range(
    team_size: TeamSize,
    scenario_type: ScenarioType,
    pain_points: Iterable[PainPoint] = (),
) -> ToolRange:
    low, high = BASE_TOOL_RANGES.get(team_size, BASE_TOOL_RANGES[TeamSize.SMALL])
    bias = SCENARIO_RANGE_BIAS.get(scenario_type, "mid")

    if bias == "min":
        high = max(low, math.ceil(low + (high - low) * 0.4))
    elif bias == "max":
        low = max(low, math.floor(low + (high - low) * 0.6))

    present = set(pain_points)
    for pain_point in RANGE_REDUCING_PAIN_POINTS:
        if pain_point in present:
            high = max(low, high - 1)

    return ToolRange(min=low, max=high)


def quality_floor(scores: Sequence[float], single_ratio: float = SINGLE_SCORE_FLOOR_RATIO) -> float:
    """Cutoff below which a candidate should not be added.

    >>> quality_floor([])
    0.0
    >>> quality_floor([60, 80])
    60.0
    """
    if len(scores) == 0:
        return 0.0
    if len(scores) == 1:
        return single_ratio * float(scores[0])

    values = np.asarray(scores, dtype=float)
    # Population standard deviation
    return float(values.mean() - values.std())
