# stack_engine/assembly/assembler.py
"""Greedy per-scenario bundle assembly.

Assembly runs as four explicit stages, each producing a new list:

    candidates -> selected -> deduplicated -> substituted

1. candidates: the allowed pool, narrowed to AI-feature tools for scenarios
   that demand them.
2. selected: walk the scenario's category priority list, seeding with the
   anchor. For each uncovered category pick the candidate with the best
   selection blend (integration/popularity), breaking ties on the composite
   score, then catalog order. A candidate under the quality floor of the
   tools picked so far is skipped. The walk stops at the range maximum.
3. deduplicated: redundancy resolution over FULL pairs, anchor protected.
4. substituted: each non-anchor tool may be swapped for its best positively
   scored replacement whose target is in the candidate pool, not already in
   the bundle, not removed in stage 3 and not in a FULL pair with a kept tool.

The packaged scenario carries its rationale, personalized by pain point.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from stack_engine.assembly.costs import (
    TEAM_SIZE_HEADCOUNT,
    TransitionCost,
    YearProjection,
    complexity_reduction,
    estimate_transition_cost,
    monthly_cost_per_user,
    project_costs,
)
from stack_engine.assembly.rationale import ScenarioRationale, build_rationale
from stack_engine.assembly.redundancy import Removal, RedundancyResolver
from stack_engine.assembly.replacement import ReplacementAdvisor
from stack_engine.assembly.workflow import WorkflowStep, build_workflow
from stack_engine.catalog.providers import (
    IntegrationProvider,
    RecipeProvider,
    RedundancyProvider,
    ReplacementProvider,
)
from stack_engine.catalog.relations import ReplacementContext
from stack_engine.catalog.tool import Tool
from stack_engine.catalog.types import ScenarioType, TeamSize, ToolCategory
from stack_engine.config import EngineConfig
from stack_engine.errors import UnsupportedScenarioError
from stack_engine.scoring.integration import (
    calculate_integration_score,
    calculate_synergy_bonus,
    selection_score,
)
from stack_engine.scoring.ranges import ToolRange, calculate_target_tool_range, quality_floor
from stack_engine.scoring.scorer import ScoredTool, ScoringContext, ToolScorer
from stack_engine.scoring.weights import WeightProfile

logger = logging.getLogger(__name__)

C = ToolCategory

SCENARIO_CATEGORY_PRIORITIES: dict[ScenarioType, tuple[ToolCategory, ...]] = {
    ScenarioType.MONO_STACK: (
        C.DOCUMENTATION, C.COMMUNICATION, C.DEVELOPMENT, C.PROJECT_MANAGEMENT,
    ),
    ScenarioType.NATIVE_INTEGRATOR: (
        C.PROJECT_MANAGEMENT, C.DOCUMENTATION, C.DEVELOPMENT, C.COMMUNICATION,
        C.MEETINGS, C.DESIGN, C.ANALYTICS,
    ),
    ScenarioType.AGENTIC_LEAN: (
        C.AI_ASSISTANTS, C.DEVELOPMENT, C.MEETINGS, C.DOCUMENTATION,
        C.PROJECT_MANAGEMENT, C.AUTOMATION, C.COMMUNICATION,
    ),
}

# Scenarios whose candidates must carry AI features
AI_ONLY_SCENARIOS = frozenset({ScenarioType.AGENTIC_LEAN})

SCENARIO_TITLES = {
    ScenarioType.MONO_STACK: "The Mono-Stack",
    ScenarioType.NATIVE_INTEGRATOR: "The Native Integrator",
    ScenarioType.AGENTIC_LEAN: "The Agentic Lean",
    ScenarioType.STARTER_PACK: "The Starter Pack",
}


@dataclass(frozen=True)
class AppliedReplacement:
    from_tool_id: str
    to_tool_id: str
    reason_type: str
    score: int

    def to_dict(self) -> dict:
        return {
            "from_tool_id": self.from_tool_id,
            "to_tool_id": self.to_tool_id,
            "reason_type": self.reason_type,
            "score": self.score,
        }


@dataclass
class BuiltScenario:
    """One assembled bundle and everything derived from it."""

    title: str
    scenario_type: ScenarioType
    tools: list[Tool]
    displacement_list: list[str]
    workflow: list[WorkflowStep]
    estimated_monthly_cost_per_user: float
    complexity_reduction_score: int
    scored_tools: list[ScoredTool] = field(default_factory=list)
    tool_range: Optional[ToolRange] = None
    removed: list[Removal] = field(default_factory=list)
    replacements: list[AppliedReplacement] = field(default_factory=list)
    cost_projection: list[YearProjection] = field(default_factory=list)
    transition_cost: Optional[TransitionCost] = None
    rationale: Optional[ScenarioRationale] = None

    @property
    def tool_ids(self) -> list[str]:
        return [t.id for t in self.tools]

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "scenario_type": self.scenario_type.value,
            "tools": [t.to_dict() for t in self.tools],
            "displacement_list": list(self.displacement_list),
            "workflow": [step.to_dict() for step in self.workflow],
            "estimated_monthly_cost_per_user": round(self.estimated_monthly_cost_per_user, 2),
            "complexity_reduction_score": self.complexity_reduction_score,
            "scored_tools": [s.to_dict() for s in self.scored_tools],
            "tool_range": self.tool_range.to_dict() if self.tool_range else None,
            "removed": [
                {"tool_id": r.tool_id, "kept_tool_id": r.kept_tool_id, "reason": r.reason}
                for r in self.removed
            ],
            "replacements": [r.to_dict() for r in self.replacements],
            "cost_projection": [p.to_dict() for p in self.cost_projection],
            "transition_cost": self.transition_cost.to_dict() if self.transition_cost else None,
            "rationale": self.rationale.to_dict() if self.rationale is not None else None,
        }


class ScenarioAssembler:
    """Builds one BuiltScenario per call from already-fetched inputs."""

    def __init__(
        self,
        integrations: IntegrationProvider,
        redundancies: RedundancyProvider,
        replacements: Optional[ReplacementProvider] = None,
        recipes: Optional[RecipeProvider] = None,
        config: Optional[EngineConfig] = None,
        engine_logger=None,
    ):
        self.integrations = integrations
        self.recipes = recipes
        self.config = config or EngineConfig()
        self.engine_logger = engine_logger
        self.scorer = ToolScorer()
        self.redundancy_resolver = RedundancyResolver(redundancies, engine_logger)
        self.replacement_advisor = ReplacementAdvisor(replacements)

    def assemble(
        self,
        scenario_type: ScenarioType,
        allowed_tools: Sequence[Tool],
        anchor_tool: Optional[Tool],
        user_tools: Sequence[Tool],
        weights: WeightProfile,
        scoring_context: Optional[ScoringContext] = None,
        replacement_context: Optional[ReplacementContext] = None,
        pain_points: Sequence = (),
    ) -> BuiltScenario:
        if scenario_type not in SCENARIO_CATEGORY_PRIORITIES:
            raise UnsupportedScenarioError(
                f"No assembly path for scenario {scenario_type.value}",
                scenario_type=scenario_type.value,
            )

        context = scoring_context or ScoringContext(
            user_tool_ids=frozenset(t.id for t in user_tools),
            familiarity_bonus=self.config.familiarity_bonus,
        )
        team_size = context.team_size or TeamSize.SMALL
        tool_range = calculate_target_tool_range(team_size, scenario_type, pain_points)

        candidates = self.candidate_pool(scenario_type, allowed_tools)
        selected = self.select(
            scenario_type, candidates, anchor_tool, weights, context, tool_range
        )
        anchor_id = anchor_tool.id if anchor_tool else None
        deduplicated, removed = self.deduplicate(selected, anchor_id)

        replacements: list[AppliedReplacement] = []
        final = deduplicated
        if self.config.apply_replacements and replacement_context is not None:
            final, replacements = self.substitute(
                deduplicated, candidates, anchor_id, replacement_context,
                removed_ids={r.tool_id for r in removed},
            )

        scored = self.explain(final, weights, context)
        return self._package(
            scenario_type, final, scored, user_tools, context, tool_range, removed, replacements,
            rationale=build_rationale(scenario_type, pain_points),
        )

    # Stage 1
    def candidate_pool(self, scenario_type: ScenarioType, allowed_tools: Sequence[Tool]) -> list[Tool]:
        pool = list(dict((t.id, t) for t in allowed_tools).values())
        if scenario_type in AI_ONLY_SCENARIOS:
            pool = [t for t in pool if t.has_ai_features]
        return pool

    # Stage 2
    def select(
        self,
        scenario_type: ScenarioType,
        candidates: Sequence[Tool],
        anchor_tool: Optional[Tool],
        weights: WeightProfile,
        context: ScoringContext,
        tool_range: ToolRange,
    ) -> list[Tool]:
        selected: list[Tool] = []
        selected_scores: list[float] = []

        if anchor_tool is not None:
            anchor_scored = self._score(anchor_tool, [], weights, context)
            selected.append(anchor_tool)
            selected_scores.append(anchor_scored.composite_score)

        for category in SCENARIO_CATEGORY_PRIORITIES[scenario_type]:
            if len(selected) >= tool_range.max:
                break
            if any(t.category == category for t in selected):
                continue

            taken = {t.id for t in selected}
            pool = [t for t in candidates if t.category == category and t.id not in taken]
            if not pool:
                if self.engine_logger:
                    self.engine_logger.empty_category_pool(scenario_type.value, category.value)
                continue

            best = self._best_candidate(pool, selected, weights, context)

            floor = quality_floor(selected_scores, self.config.single_score_floor_ratio)
            if selected_scores and best.composite_score < floor:
                if self.engine_logger:
                    self.engine_logger.quality_floor_skip(
                        scenario_type.value, best.tool.id, best.composite_score, floor
                    )
                continue

            selected.append(best.tool)
            selected_scores.append(best.composite_score)

        return selected

    def _best_candidate(
        self,
        pool: Sequence[Tool],
        selected: Sequence[Tool],
        weights: WeightProfile,
        context: ScoringContext,
    ) -> ScoredTool:
        best: Optional[ScoredTool] = None
        best_key = None
        for tool in pool:
            scored = self._score(tool, selected, weights, context)
            key = (
                selection_score(tool, scored.breakdown.integration, bool(selected)),
                scored.composite_score,
            )
            # Strict comparison keeps the earliest catalog entry on ties
            if best_key is None or key > best_key:
                best, best_key = scored, key
        return best

    def _score(
        self,
        tool: Tool,
        selected: Sequence[Tool],
        weights: WeightProfile,
        context: ScoringContext,
    ) -> ScoredTool:
        selected_ids = [t.id for t in selected]
        integration = calculate_integration_score(tool.id, selected_ids, self.integrations)
        synergy = calculate_synergy_bonus(tool.id, selected_ids, self.recipes)
        return self.scorer.score(tool, weights, context, integration, synergy)

    # Stage 3
    def deduplicate(
        self, tools: Sequence[Tool], anchor_id: Optional[str]
    ) -> tuple[list[Tool], list[Removal]]:
        kept_ids, removed = self.redundancy_resolver.resolve_with_removals(
            [t.id for t in tools], anchor_id
        )
        kept = set(kept_ids)
        return [t for t in tools if t.id in kept], removed

    # Stage 4
    def substitute(
        self,
        tools: Sequence[Tool],
        candidates: Sequence[Tool],
        anchor_id: Optional[str],
        replacement_context: ReplacementContext,
        removed_ids: Iterable[str] = (),
    ) -> tuple[list[Tool], list[AppliedReplacement]]:
        pool_by_id = {t.id: t for t in candidates}
        excluded = set(removed_ids)
        result = list(tools)
        applied: list[AppliedReplacement] = []

        for i, tool in enumerate(tools):
            if tool.id == anchor_id:
                continue
            for ranked in self.replacement_advisor.rank(tool.id, replacement_context):
                # Ranked best first, so nothing after a zero score applies
                if ranked.score <= 0:
                    break
                target = pool_by_id.get(ranked.suggestion.to_tool.id)
                if target is None or target.id in excluded:
                    continue
                if any(t.id == target.id for t in result):
                    continue
                kept_ids = [t.id for j, t in enumerate(result) if j != i]
                if self.redundancy_resolver.fully_overlaps(target.id, kept_ids):
                    continue

                result[i] = target
                reason = ranked.suggestion.reason_type.value
                applied.append(AppliedReplacement(tool.id, target.id, reason, ranked.score))
                if self.engine_logger:
                    self.engine_logger.replacement_applied(tool.id, target.id, reason)
                break

        return result, applied

    def explain(
        self, tools: Sequence[Tool], weights: WeightProfile, context: ScoringContext
    ) -> list[ScoredTool]:
        """Score each final tool against the tools listed before it."""
        return [self._score(tool, tools[:i], weights, context) for i, tool in enumerate(tools)]

    def _package(
        self,
        scenario_type: ScenarioType,
        tools: list[Tool],
        scored: list[ScoredTool],
        user_tools: Sequence[Tool],
        context: ScoringContext,
        tool_range: ToolRange,
        removed: list[Removal],
        replacements: list[AppliedReplacement],
        rationale: Optional[ScenarioRationale] = None,
    ) -> BuiltScenario:
        final_ids = {t.id for t in tools}
        displacement = list(dict.fromkeys(
            t.display_name for t in user_tools if t.id not in final_ids
        ))

        cost = monthly_cost_per_user(tools)
        headcount = TEAM_SIZE_HEADCOUNT.get(context.team_size, 1)

        logger.debug(
            "Assembled %s with %d tools (range %d-%d)",
            scenario_type.value, len(tools), tool_range.min, tool_range.max,
        )
        return BuiltScenario(
            title=SCENARIO_TITLES[scenario_type],
            scenario_type=scenario_type,
            tools=tools,
            displacement_list=displacement,
            workflow=build_workflow(tools, context.philosophy),
            estimated_monthly_cost_per_user=cost,
            complexity_reduction_score=complexity_reduction(len(user_tools), len(tools)),
            scored_tools=scored,
            tool_range=tool_range,
            removed=removed,
            replacements=replacements,
            cost_projection=project_costs(cost, headcount),
            transition_cost=estimate_transition_cost(
                [t.id for t in user_tools], [t.id for t in tools], headcount
            ),
            rationale=rationale,
        )
