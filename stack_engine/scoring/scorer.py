# stack_engine/scoring/scorer.py
"""Composite tool scoring with an auditable breakdown."""

from dataclasses import dataclass, field
from typing import Optional

from stack_engine.catalog.tool import Tool
from stack_engine.catalog.types import Philosophy, Stage, TeamSize
from stack_engine.scoring.weights import WeightProfile

FIT_POINTS_PER_MATCH = 50
DEFAULT_FAMILIARITY_BONUS = 8.0

AI_SCORES_WITH_FEATURES = {
    Philosophy.AUTO_PILOT: 100,
    Philosophy.HYBRID: 80,
    Philosophy.CO_PILOT: 60,
}


@dataclass(frozen=True)
class ScoringContext:
    """Assessment facts the scorer needs, fixed for one pipeline run."""

    team_size: Optional[TeamSize] = None
    stage: Optional[Stage] = None
    budget_per_user: float = 0.0
    philosophy: Optional[Philosophy] = None
    user_tool_ids: frozenset = field(default_factory=frozenset)
    familiarity_bonus: float = DEFAULT_FAMILIARITY_BONUS


@dataclass(frozen=True)
class ScoreBreakdown:
    """Every component behind a composite score."""

    fit: float
    popularity: float
    cost: float
    ai: float
    integration: float
    synergy: float
    familiarity: float
    weighted: float  # before bonuses

    def to_dict(self) -> dict:
        return {
            "fit": round(self.fit, 2),
            "popularity": round(self.popularity, 2),
            "cost": round(self.cost, 2),
            "ai": round(self.ai, 2),
            "integration": round(self.integration, 2),
            "synergy": round(self.synergy, 2),
            "familiarity": round(self.familiarity, 2),
            "weighted": round(self.weighted, 4),
        }


@dataclass(frozen=True)
class ScoredTool:
    tool: Tool
    composite_score: float
    breakdown: ScoreBreakdown

    def to_dict(self) -> dict:
        return {
            "tool_id": self.tool.id,
            "tool": self.tool.display_name,
            "composite_score": round(self.composite_score, 4),
            "breakdown": self.breakdown.to_dict(),
        }


def compute_fit_score(tool: Tool, team_size: Optional[TeamSize], stage: Optional[Stage]) -> int:
    """50 points per matching best-fit set; an empty set matches anything."""
    score = 0
    if not tool.best_for_team_size or team_size in tool.best_for_team_size:
        score += FIT_POINTS_PER_MATCH
    if not tool.best_for_stage or stage in tool.best_for_stage:
        score += FIT_POINTS_PER_MATCH
    return score


def compute_cost_score(tool: Tool, budget_per_user: float) -> float:
    cost = tool.estimated_cost_per_user

    if tool.has_free_forever and (cost is None or cost == 0):
        return 90
    if cost is None:
        return 60

    budget = max(budget_per_user, 1)
    if cost <= budget_per_user:
        return 70 + 20 * (1 - cost / budget)

    overage_ratio = (cost - budget_per_user) / budget
    return max(10, 50 - 40 * overage_ratio)


def compute_ai_score(tool: Tool, philosophy: Optional[Philosophy]) -> int:
    if tool.has_ai_features:
        return AI_SCORES_WITH_FEATURES.get(philosophy, 50)
    return 10 if philosophy == Philosophy.AUTO_PILOT else 30


class ToolScorer:
    """Scores one tool under one weight profile and context."""

    def score(
        self,
        tool: Tool,
        weights: WeightProfile,
        context: ScoringContext,
        integration_score: float = 50,
        synergy_bonus: float = 0,
    ) -> ScoredTool:
        """Weighted sum of the five sub-scores plus the unweighted bonuses.

        Args:
            tool: Candidate tool
            weights: Normalized weight profile for the scenario
            context: Assessment facts
            integration_score: Score against the tools selected so far (0-100)
            synergy_bonus: Additive bonus from recipe chains

        Returns:
            ScoredTool with the full breakdown
        """
        fit = compute_fit_score(tool, context.team_size, context.stage)
        popularity = tool.popularity
        cost = compute_cost_score(tool, context.budget_per_user)
        ai = compute_ai_score(tool, context.philosophy)

        weighted = (
            fit * weights.fit
            + popularity * weights.popularity
            + cost * weights.cost
            + ai * weights.ai
            + integration_score * weights.integration
        )
        familiarity = context.familiarity_bonus if tool.id in context.user_tool_ids else 0

        breakdown = ScoreBreakdown(
            fit=fit,
            popularity=popularity,
            cost=cost,
            ai=ai,
            integration=integration_score,
            synergy=synergy_bonus,
            familiarity=familiarity,
            weighted=weighted,
        )
        return ScoredTool(
            tool=tool,
            composite_score=weighted + synergy_bonus + familiarity,
            breakdown=breakdown,
        )
