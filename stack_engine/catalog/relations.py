# stack_engine/catalog/relations.py
"""Relations between catalog tools: integrations, redundancies, replacements, recipes."""

from dataclasses import dataclass, field
from typing import Optional

from stack_engine.catalog.tool import Tool
from stack_engine.catalog.types import (
    INTEGRATION_QUALITY_SCORES,
    ComplianceRequirement,
    CostSensitivity,
    IntegrationQuality,
    RecommendationHint,
    RedundancyStrength,
    ReplacementReason,
    TeamSize,
    TechSavviness,
)


@dataclass(frozen=True)
class IntegrationLink:
    """One integration edge as seen from a tool."""

    target_id: str
    quality: IntegrationQuality

    @property
    def quality_score(self) -> int:
        return INTEGRATION_QUALITY_SCORES[self.quality]


@dataclass(frozen=True)
class RedundancyPair:
    """Overlap between two tools, stored as (tool_a, tool_b)."""

    tool_a: Tool
    tool_b: Tool
    strength: RedundancyStrength
    hint: RecommendationHint = RecommendationHint.CONTEXT_DEPENDENT
    overlapping_use_cases: tuple[str, ...] = ()
    overlapping_features: tuple[str, ...] = ()
    notes: Optional[str] = None

    def involves(self, tool_id: str) -> bool:
        return self.tool_a.id == tool_id or self.tool_b.id == tool_id

    def other(self, tool_id: str) -> Tool:
        """The endpoint that is not tool_id."""
        return self.tool_b if self.tool_a.id == tool_id else self.tool_a


@dataclass(frozen=True)
class ReplacementContext:
    """Assessment facts a replacement rule can be conditioned on."""

    cost_sensitivity: Optional[CostSensitivity] = None
    tech_savviness: Optional[TechSavviness] = None
    team_size: Optional[TeamSize] = None
    requires_compliance: frozenset = frozenset()
    prefer_ai_native: Optional[bool] = None


@dataclass(frozen=True)
class ReplacementConditions:
    """Optional predicates; every predicate that is set must hold.

    A predicate is only checked when the context carries the matching fact.
    """

    cost_sensitivity: Optional[frozenset] = None
    tech_savviness: Optional[frozenset] = None
    team_size: Optional[frozenset] = None
    requires_compliance: Optional[frozenset] = None
    prefer_ai_native: Optional[bool] = None

    def matches(self, context: ReplacementContext) -> bool:
        if self.cost_sensitivity is not None and context.cost_sensitivity is not None:
            if context.cost_sensitivity not in self.cost_sensitivity:
                return False

        if self.tech_savviness is not None and context.tech_savviness is not None:
            if context.tech_savviness not in self.tech_savviness:
                return False

        if self.team_size is not None and context.team_size is not None:
            if context.team_size not in self.team_size:
                return False

        if self.requires_compliance is not None:
            if not self.requires_compliance <= context.requires_compliance:
                return False

        if self.prefer_ai_native is not None and context.prefer_ai_native is not None:
            if self.prefer_ai_native != context.prefer_ai_native:
                return False

        return True

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "ReplacementConditions":
        if not data:
            return cls()

        def members(enum_cls, key, camel):
            raw = data.get(key, data.get(camel))
            if raw is None:
                return None
            return frozenset(enum_cls.from_string(v) for v in raw)

        ai = data.get("prefer_ai_native", data.get("preferAiNative"))
        return cls(
            cost_sensitivity=members(CostSensitivity, "cost_sensitivity", "costSensitivity"),
            tech_savviness=members(TechSavviness, "tech_savviness", "techSavviness"),
            team_size=members(TeamSize, "team_size", "teamSize"),
            requires_compliance=members(
                ComplianceRequirement, "requires_compliance", "requiresCompliance"
            ),
            prefer_ai_native=None if ai is None else bool(ai),
        )


@dataclass(frozen=True)
class ReplacementSuggestion:
    """A rule saying from_tool may be swapped for to_tool."""

    from_tool: Tool
    to_tool: Tool
    reason_type: ReplacementReason
    reason_text: str = ""
    conditions: ReplacementConditions = field(default_factory=ReplacementConditions)


@dataclass(frozen=True)
class AutomationRecipe:
    """A known trigger -> action automation between two tools."""

    trigger_tool_id: str
    action_tool_id: str
    name: str = ""
