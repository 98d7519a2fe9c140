# stack_engine/pipeline/decision.py
"""Decision Pipeline - assessment in, ordered scenarios out."""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Sequence

from stack_engine.assembly.assembler import BuiltScenario, ScenarioAssembler
from stack_engine.assembly.redundancy import DisplacementSuggestion, RedundancyResolver
from stack_engine.catalog.snapshot import Collaborators, prefetch_inputs
from stack_engine.catalog.tool import Tool
from stack_engine.catalog.types import ScenarioType
from stack_engine.config import EngineConfig
from stack_engine.errors import InfrastructureError
from stack_engine.logging import EngineLogger
from stack_engine.matching.resolver import ToolMatch, ToolNameResolver
from stack_engine.pipeline.anchor import resolve_anchor
from stack_engine.pipeline.assessment import AssessmentInput
from stack_engine.pipeline.filters import filter_allowed_tools
from stack_engine.scoring.weights import WeightProfile, WeightProfileBuilder

logger = logging.getLogger(__name__)

# Emitted in this order; STARTER_PACK has weights but no assembly path
SUPPORTED_SCENARIOS = (
    ScenarioType.MONO_STACK,
    ScenarioType.NATIVE_INTEGRATOR,
    ScenarioType.AGENTIC_LEAN,
)


@dataclass
class PipelineResult:
    """Everything one run produced."""

    scenarios: list[BuiltScenario]
    matches: dict[str, Optional[ToolMatch]]
    unmatched: list[str]
    user_tools: list[Tool]
    anchor_tool: Optional[Tool]
    allowed_tool_count: int
    weights: dict[ScenarioType, WeightProfile] = field(default_factory=dict)
    displacement_suggestions: list[DisplacementSuggestion] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "scenarios": [s.to_dict() for s in self.scenarios],
            "matches": {
                name: match.to_dict() if match else None
                for name, match in self.matches.items()
            },
            "unmatched": list(self.unmatched),
            "user_tools": [t.to_dict() for t in self.user_tools],
            "anchor_tool": self.anchor_tool.to_dict() if self.anchor_tool else None,
            "allowed_tool_count": self.allowed_tool_count,
            "weights": {
                scenario_type.value: profile.to_dict()
                for scenario_type, profile in self.weights.items()
            },
            "displacement_suggestions": [s.to_dict() for s in self.displacement_suggestions],
            "warnings": list(self.warnings),
        }


class DecisionPipeline:
    """Runs name resolution, pool filtering and assembly for one assessment."""

    def __init__(
        self,
        collaborators: Collaborators,
        config: Optional[EngineConfig] = None,
        engine_logger: Optional[EngineLogger] = None,
    ):
        self.collaborators = collaborators
        self.config = config or EngineConfig()
        self.logger = engine_logger or EngineLogger(level=self.config.log_level)
        self.resolver = ToolNameResolver(min_confidence=self.config.fuzzy_min_confidence)
        self.weight_builder = WeightProfileBuilder(self.logger)

    def run(
        self,
        assessment: AssessmentInput,
        allowed_tools: Optional[Sequence[Tool]] = None,
    ) -> PipelineResult:
        """Build every supported scenario.

        Args:
            assessment: Validated assessment
            allowed_tools: Pre-filtered pool; when omitted the pipeline filters
                the catalog itself (unless pool filtering is disabled)

        Returns:
            PipelineResult with scenarios in SUPPORTED_SCENARIOS order

        Raises:
            InfrastructureError: A collaborator failed
        """
        start = time.time()
        names = assessment.tool_names()
        self.logger.pipeline_started(assessment.company, len(names))

        try:
            result = self._run(assessment, names, allowed_tools)
        except InfrastructureError as e:
            self.logger.infrastructure_error(e.collaborator or "unknown", str(e))
            raise

        self.logger.pipeline_complete(len(result.scenarios), time.time() - start)
        return result

    def _run(
        self,
        assessment: AssessmentInput,
        names: list[str],
        allowed_tools: Optional[Sequence[Tool]],
    ) -> PipelineResult:
        snapshot = prefetch_inputs(self.collaborators, workers=self.config.fetch_workers)
        guarded = self.collaborators.guarded()

        matches = self.resolver.resolve(names, snapshot.tools)
        unmatched = [name for name, match in matches.items() if match is None]
        for name in unmatched:
            self.logger.resolution_miss(name)

        user_tools = list({
            match.tool.id: match.tool for match in matches.values() if match is not None
        }.values())
        anchor = resolve_anchor(assessment.anchor_type, user_tools, assessment.other_anchor_text)

        pool = self._allowed_pool(snapshot.tools, assessment, allowed_tools)
        warnings = []
        if not pool:
            self.logger.no_allowed_tools(assessment.company)
            warnings.append("No allowed tools matched the assessment constraints")

        user_ids = [t.id for t in user_tools]
        anchor_id = anchor.id if anchor else None
        displacement_suggestions = RedundancyResolver(guarded.redundancies).analyze(
            user_ids, anchor_id
        )

        assembler = ScenarioAssembler(
            integrations=snapshot.integrations,
            redundancies=guarded.redundancies,
            replacements=guarded.replacements,
            recipes=guarded.recipes,
            config=self.config,
            engine_logger=self.logger,
        )
        scoring_context = assessment.scoring_context(user_ids, self.config.familiarity_bonus)
        replacement_context = assessment.replacement_context()
        signals = assessment.weight_signals()

        scenarios = []
        weights = {}
        for scenario_type in SUPPORTED_SCENARIOS:
            profile = self.weight_builder.build(scenario_type, signals)
            weights[scenario_type] = profile

            scenario = assembler.assemble(
                scenario_type,
                pool,
                anchor,
                user_tools,
                profile,
                scoring_context=scoring_context,
                replacement_context=replacement_context,
                pain_points=assessment.pain_points,
            )
            scenarios.append(scenario)

        logger.debug("Built %d scenarios from a pool of %d tools", len(scenarios), len(pool))
        return PipelineResult(
            scenarios=scenarios,
            matches=matches,
            unmatched=unmatched,
            user_tools=user_tools,
            anchor_tool=anchor,
            allowed_tool_count=len(pool),
            weights=weights,
            displacement_suggestions=displacement_suggestions,
            warnings=warnings,
        )

    def _allowed_pool(
        self,
        catalog: list[Tool],
        assessment: AssessmentInput,
        allowed_tools: Optional[Sequence[Tool]],
    ) -> list[Tool]:
        if allowed_tools is not None:
            return list(allowed_tools)
        if not self.config.apply_pool_filters:
            return list(catalog)
        return filter_allowed_tools(catalog, assessment)
