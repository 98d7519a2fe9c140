# stack_engine/assembly/replacement.py
"""Context-aware replacement suggestions."""

from dataclasses import dataclass
from typing import Callable, Optional

from stack_engine.catalog.providers import ReplacementProvider
from stack_engine.catalog.relations import ReplacementContext, ReplacementSuggestion
from stack_engine.catalog.types import CostSensitivity, ReplacementReason, TechSavviness

CONDITIONS_MATCH_BONUS = 2


def _cost_savings(ctx: ReplacementContext) -> int:
    if ctx.cost_sensitivity == CostSensitivity.PRICE_FIRST:
        return 3
    if ctx.cost_sensitivity == CostSensitivity.BALANCED:
        return 1
    return 0


def _simpler_ux(ctx: ReplacementContext) -> int:
    if ctx.tech_savviness == TechSavviness.NEWBIE:
        return 3
    if ctx.tech_savviness == TechSavviness.DECENT:
        return 1
    return 0


# How strongly each reason type speaks to a given context
REASON_AFFINITY: dict[ReplacementReason, Callable[[ReplacementContext], int]] = {
    ReplacementReason.COST_SAVINGS: _cost_savings,
    ReplacementReason.SIMPLER_UX: _simpler_ux,
    ReplacementReason.AI_NATIVE: lambda ctx: 3 if ctx.prefer_ai_native else 0,
    ReplacementReason.FEATURE_SUPERSET: (
        lambda ctx: 2 if ctx.cost_sensitivity == CostSensitivity.VALUE_FIRST else 0
    ),
    ReplacementReason.CONSOLIDATION: lambda ctx: 2,
    ReplacementReason.COMPLIANCE: lambda ctx: 3 if ctx.requires_compliance else 0,
    ReplacementReason.BETTER_INTEGRATION: lambda ctx: 1,
}


@dataclass(frozen=True)
class RankedSuggestion:
    suggestion: ReplacementSuggestion
    score: int


def score_suggestion(suggestion: ReplacementSuggestion, context: ReplacementContext) -> int:
    affinity = REASON_AFFINITY.get(suggestion.reason_type)
    score = affinity(context) if affinity else 0
    if suggestion.conditions.matches(context):
        score += CONDITIONS_MATCH_BONUS
    return score


class ReplacementAdvisor:
    """Picks the replacement rule that best suits the context."""

    def __init__(self, replacements: Optional[ReplacementProvider]):
        self.replacements = replacements

    def rank(self, tool_id: str, context: ReplacementContext) -> list[RankedSuggestion]:
        """Every rule for tool_id, best first; equal scores keep rule order."""
        if self.replacements is None:
            return []
        ranked = [
            RankedSuggestion(rule, score_suggestion(rule, context))
            for rule in self.replacements.find_replacements_for(tool_id)
        ]
        # sorted() is stable
        return sorted(ranked, key=lambda r: r.score, reverse=True)

    def find_best_ranked(
        self, tool_id: str, context: ReplacementContext
    ) -> Optional[RankedSuggestion]:
        ranked = self.rank(tool_id, context)
        if not ranked:
            return None
        # Scores are never negative, so when none is positive the stable
        # sort leaves the first listed rule on top as the default
        return ranked[0]

    def find_best(self, tool_id: str, context: ReplacementContext) -> Optional[ReplacementSuggestion]:
        best = self.find_best_ranked(tool_id, context)
        return best.suggestion if best else None
