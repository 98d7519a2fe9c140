"""Bundle assembly: redundancy, replacements, workflow, cost metrics and rationale."""

from stack_engine.assembly.assembler import (
    AI_ONLY_SCENARIOS,
    SCENARIO_CATEGORY_PRIORITIES,
    SCENARIO_TITLES,
    AppliedReplacement,
    BuiltScenario,
    ScenarioAssembler,
)
from stack_engine.assembly.costs import (
    complexity_reduction,
    estimate_transition_cost,
    monthly_cost_per_user,
    project_costs,
)
from stack_engine.assembly.rationale import ScenarioRationale, build_rationale
from stack_engine.assembly.redundancy import DisplacementSuggestion, Removal, RedundancyResolver
from stack_engine.assembly.replacement import RankedSuggestion, ReplacementAdvisor
from stack_engine.assembly.workflow import WorkflowStep, build_workflow

__all__ = [
    "AI_ONLY_SCENARIOS",
    "AppliedReplacement",
    "BuiltScenario",
    "DisplacementSuggestion",
    "RankedSuggestion",
    "RedundancyResolver",
    "Removal",
    "ReplacementAdvisor",
    "SCENARIO_CATEGORY_PRIORITIES",
    "SCENARIO_TITLES",
    "ScenarioAssembler",
    "ScenarioRationale",
    "WorkflowStep",
    "build_rationale",
    "build_workflow",
    "complexity_reduction",
    "estimate_transition_cost",
    "monthly_cost_per_user",
    "project_costs",
]
