# stack_engine/scoring/weights.py
"""Per-scenario weight profiles.

A profile starts from the scenario's base vector and is shifted by additive
modifiers keyed on the assessment: each pain point, the stage, the cost
sensitivity and the automation philosophy. Deltas are summed first; clamping
and renormalization run once, after every delta has been applied.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from stack_engine.catalog.types import (
    CostSensitivity,
    PainPoint,
    Philosophy,
    ScenarioType,
    Stage,
)

DIMENSIONS = ("fit", "popularity", "cost", "ai", "integration")

SUM_TOLERANCE = 1e-9


@dataclass(frozen=True)
class WeightProfile:
    """Five non-negative weights summing to 1.0."""

    fit: float
    popularity: float
    cost: float
    ai: float
    integration: float

    def __post_init__(self):
        values = self.as_tuple()
        if any(v < 0 for v in values):
            raise ValueError(f"Weights must be non-negative: {values}")
        if abs(sum(values) - 1.0) > 1e-6:
            raise ValueError(f"Weights must sum to 1.0, got {sum(values)}")

    def as_tuple(self) -> tuple[float, ...]:
        return tuple(getattr(self, d) for d in DIMENSIONS)

    def to_dict(self) -> dict:
        return {d: getattr(self, d) for d in DIMENSIONS}

    @classmethod
    def uniform(cls) -> "WeightProfile":
        share = 1.0 / len(DIMENSIONS)
        return cls(**{d: share for d in DIMENSIONS})


# Base weights before modulation by the assessment
SCENARIO_BASE_WEIGHTS: dict[ScenarioType, dict[str, float]] = {
    ScenarioType.MONO_STACK: {
        "integration": 0.35, "cost": 0.25, "fit": 0.25, "popularity": 0.10, "ai": 0.05,
    },
    ScenarioType.NATIVE_INTEGRATOR: {
        "integration": 0.30, "popularity": 0.30, "fit": 0.20, "cost": 0.10, "ai": 0.10,
    },
    ScenarioType.AGENTIC_LEAN: {
        "ai": 0.35, "integration": 0.30, "popularity": 0.15, "fit": 0.10, "cost": 0.10,
    },
    # Defined but no assembly path builds this scenario.
    ScenarioType.STARTER_PACK: {
        "fit": 0.30, "cost": 0.25, "popularity": 0.25, "integration": 0.10, "ai": 0.10,
    },
}

PAIN_POINT_MODIFIERS: dict[PainPoint, dict[str, float]] = {
    PainPoint.TOO_MANY_TOOLS: {"integration": 0.10, "fit": 0.05},
    PainPoint.TOOLS_DONT_TALK: {"integration": 0.15, "popularity": -0.05},
    PainPoint.OVERPAYING: {"cost": 0.15, "popularity": -0.05},
    PainPoint.TOO_MUCH_MANUAL_WORK: {"ai": 0.15, "fit": -0.05},
    PainPoint.DISORGANIZED: {"fit": 0.10, "integration": 0.05},
    PainPoint.SLOW_APPROVALS: {"integration": 0.05, "ai": 0.05},
    PainPoint.NO_VISIBILITY: {"popularity": 0.05, "integration": 0.05},
}

STAGE_WEIGHT_MODIFIERS: dict[Stage, dict[str, float]] = {
    Stage.BOOTSTRAPPING: {"cost": 0.10, "popularity": -0.05},
    Stage.PRE_SEED: {},
    Stage.EARLY_SEED: {"fit": 0.05},
    Stage.GROWTH: {"integration": 0.05, "fit": 0.05},
    Stage.ESTABLISHED: {"popularity": 0.10, "cost": -0.10},
}

COST_SENSITIVITY_MODIFIERS: dict[CostSensitivity, dict[str, float]] = {
    CostSensitivity.PRICE_FIRST: {"cost": 0.15, "popularity": -0.05},
    CostSensitivity.BALANCED: {},
    CostSensitivity.VALUE_FIRST: {"cost": -0.10, "fit": 0.10},
}

PHILOSOPHY_MODIFIERS: dict[Philosophy, dict[str, float]] = {
    Philosophy.AUTO_PILOT: {"ai": 0.15},
    Philosophy.HYBRID: {},
    Philosophy.CO_PILOT: {"ai": -0.10, "popularity": 0.10},
}


@dataclass(frozen=True)
class WeightSignals:
    """The assessment facts that modulate a weight profile."""

    pain_points: tuple[PainPoint, ...] = ()
    stage: Optional[Stage] = None
    cost_sensitivity: Optional[CostSensitivity] = None
    philosophy: Optional[Philosophy] = None


def collect_modifiers(signals: WeightSignals) -> list[dict[str, float]]:
    """Modifier sets that apply to these signals, in application order."""
    modifiers = [PAIN_POINT_MODIFIERS.get(p, {}) for p in signals.pain_points]
    modifiers.append(STAGE_WEIGHT_MODIFIERS.get(signals.stage, {}))
    modifiers.append(COST_SENSITIVITY_MODIFIERS.get(signals.cost_sensitivity, {}))
    modifiers.append(PHILOSOPHY_MODIFIERS.get(signals.philosophy, {}))
    return [m for m in modifiers if m]


def accumulate(base: dict[str, float], modifiers: Iterable[dict[str, float]]) -> np.ndarray:
    """Sum base and every modifier delta. No clamping happens here."""
    vector = np.array([base[d] for d in DIMENSIONS], dtype=float)
    for modifier in modifiers:
        for key, delta in modifier.items():
            if key in DIMENSIONS:
                vector[DIMENSIONS.index(key)] += delta
    return vector


def normalize(vector: np.ndarray) -> Optional[np.ndarray]:
    """Clamp negatives to zero and rescale to sum 1. None if nothing is left."""
    clamped = np.clip(vector, 0.0, None)
    total = clamped.sum()
    if total <= SUM_TOLERANCE:
        return None
    return clamped / total


class WeightProfileBuilder:
    """Builds a normalized weight profile per (scenario type, assessment)."""

    def __init__(self, engine_logger=None):
        self.engine_logger = engine_logger

    def build(self, scenario_type: ScenarioType, signals: WeightSignals) -> WeightProfile:
        base = SCENARIO_BASE_WEIGHTS.get(
            scenario_type, SCENARIO_BASE_WEIGHTS[ScenarioType.NATIVE_INTEGRATOR]
        )
        raw = accumulate(base, collect_modifiers(signals))
        normalized = normalize(raw)

        if normalized is None:
            if self.engine_logger:
                self.engine_logger.scoring_degeneracy(scenario_type.value)
            return WeightProfile.uniform()

        values = dict(zip(DIMENSIONS, (float(v) for v in normalized)))
        # Absorb float residue so the profile sums to exactly 1.0
        largest = max(DIMENSIONS, key=lambda d: values[d])
        values[largest] += 1.0 - sum(values.values())
        return WeightProfile(**values)
