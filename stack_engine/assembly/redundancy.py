# stack_engine/assembly/redundancy.py
"""Redundancy resolution over the overlap graph."""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from stack_engine.catalog.providers import RedundancyProvider
from stack_engine.catalog.relations import RedundancyPair
from stack_engine.catalog.tool import Tool
from stack_engine.catalog.types import RecommendationHint, RedundancyStrength

logger = logging.getLogger(__name__)

ANALYZED_STRENGTHS = (RedundancyStrength.FULL, RedundancyStrength.PARTIAL)


@dataclass(frozen=True)
class Removal:
    """One tool dropped by resolution and the tool that made it redundant."""

    tool_id: str
    kept_tool_id: str
    reason: str


@dataclass(frozen=True)
class DisplacementSuggestion:
    """An informational 'you could drop X, Y covers it' note."""

    displaced: Tool
    kept: Tool
    strength: RedundancyStrength
    reason: str

    def to_dict(self) -> dict:
        return {
            "displaced": self.displaced.display_name,
            "kept": self.kept.display_name,
            "strength": self.strength.value,
            "reason": self.reason,
        }


def _cost(tool: Tool) -> float:
    return tool.estimated_cost_per_user or 0


def choose_removal(pair: RedundancyPair, anchor_id: Optional[str]) -> Removal:
    """Which endpoint of a FULL pair goes."""
    a, b = pair.tool_a, pair.tool_b

    if anchor_id is not None and pair.involves(anchor_id):
        kept = a if a.id == anchor_id else b
        removed = pair.other(anchor_id)
        return Removal(removed.id, kept.id, "anchor")

    if pair.hint == RecommendationHint.PREFER_A:
        return Removal(b.id, a.id, "prefer_a")
    if pair.hint == RecommendationHint.PREFER_B:
        return Removal(a.id, b.id, "prefer_b")

    # Context dependent: the pricier tool goes, B on a tie
    if _cost(a) > _cost(b):
        return Removal(a.id, b.id, "higher_cost")
    return Removal(b.id, a.id, "higher_cost")


class RedundancyResolver:
    """Removes tools made obsolete by another tool in the same set."""

    def __init__(self, redundancies: RedundancyProvider, engine_logger=None):
        self.redundancies = redundancies
        self.engine_logger = engine_logger

    def resolve(self, tool_ids: Sequence[str], anchor_id: Optional[str] = None) -> list[str]:
        """Return tool_ids minus the losers of every FULL pair, order kept."""
        return self.resolve_with_removals(tool_ids, anchor_id)[0]

    def resolve_with_removals(
        self, tool_ids: Sequence[str], anchor_id: Optional[str] = None
    ) -> tuple[list[str], list[Removal]]:
        ids = list(tool_ids)
        if len(ids) < 2:
            return ids, []

        pairs = self.redundancies.find_redundancies_in_set(ids)

        removed: set[str] = set()
        removals: list[Removal] = []
        for pair in pairs:
            if pair.strength != RedundancyStrength.FULL:
                continue
            removal = choose_removal(pair, anchor_id)
            if removal.tool_id == anchor_id or removal.tool_id in removed:
                continue
            removed.add(removal.tool_id)
            removals.append(removal)
            if self.engine_logger:
                self.engine_logger.redundancy_removed(
                    removal.tool_id, removal.kept_tool_id, removal.reason
                )

        return [tool_id for tool_id in ids if tool_id not in removed], removals

    def fully_overlaps(self, tool_id: str, other_ids: Sequence[str]) -> bool:
        """True when tool_id forms a FULL pair with any of other_ids."""
        others = [other for other in other_ids if other != tool_id]
        if not others:
            return False
        pairs = self.redundancies.find_redundancies_in_set([tool_id] + others)
        return any(
            pair.strength == RedundancyStrength.FULL and pair.involves(tool_id)
            for pair in pairs
        )

    def analyze(
        self, tool_ids: Sequence[str], anchor_id: Optional[str] = None
    ) -> list[DisplacementSuggestion]:
        """Displacement suggestions for a user's current stack.

        FULL and PARTIAL pairs are reported, NICHE ones skipped. The anchor is
        never the displaced side. One suggestion per displaced tool.
        """
        ids = list(dict.fromkeys(tool_ids))
        if len(ids) < 2:
            return []

        suggestions: list[DisplacementSuggestion] = []
        displaced_ids: set[str] = set()

        for pair in self.redundancies.find_redundancies_in_set(ids):
            if pair.strength not in ANALYZED_STRENGTHS:
                continue

            if anchor_id is not None and pair.involves(anchor_id):
                kept = pair.tool_a if pair.tool_a.id == anchor_id else pair.tool_b
                displaced = pair.other(anchor_id)
            elif pair.hint == RecommendationHint.PREFER_B:
                kept, displaced = pair.tool_b, pair.tool_a
            elif pair.hint == RecommendationHint.PREFER_A:
                kept, displaced = pair.tool_a, pair.tool_b
            elif _cost(pair.tool_a) > _cost(pair.tool_b):
                kept, displaced = pair.tool_b, pair.tool_a
            else:
                kept, displaced = pair.tool_a, pair.tool_b

            if displaced.id in displaced_ids or displaced.id == anchor_id:
                continue
            displaced_ids.add(displaced.id)

            use_cases = ", ".join(pair.overlapping_use_cases[:2]) or "the same work"
            suggestions.append(DisplacementSuggestion(
                displaced=displaced,
                kept=kept,
                strength=pair.strength,
                reason=f"{displaced.display_name} overlaps with {kept.display_name} for {use_cases}",
            ))

        logger.debug("Redundancy analysis produced %d suggestions", len(suggestions))
        return suggestions
