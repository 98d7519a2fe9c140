# stack_engine/pipeline/filters.py
"""Allowed-pool filtering: compliance, budget, savviness and fit."""

from typing import Sequence

from stack_engine.catalog.tool import Tool
from stack_engine.catalog.types import (
    ComplianceRequirement,
    Complexity,
    CostSensitivity,
    PricingTier,
    Stage,
    TeamSize,
    TechSavviness,
)

BALANCED_BUDGET_STRETCH = 1.5
VALUE_FIRST_LOW_BUDGET = 20


def meets_requirement(tool: Tool, requirement: ComplianceRequirement) -> bool:
    if requirement == ComplianceRequirement.SOC2:
        return tool.soc2
    if requirement == ComplianceRequirement.HIPAA:
        return tool.hipaa
    if requirement == ComplianceRequirement.EU_DATA_RESIDENCY:
        return tool.gdpr or tool.eu_data_residency
    if requirement == ComplianceRequirement.SELF_HOSTED:
        return tool.self_hosted
    if requirement == ComplianceRequirement.AIR_GAPPED:
        return tool.air_gapped
    return True


def filter_by_compliance(
    tools: Sequence[Tool], requirements: Sequence[ComplianceRequirement], high_stakes: bool
) -> list[Tool]:
    if not high_stakes or not requirements:
        return list(tools)
    return [t for t in tools if all(meets_requirement(t, r) for r in requirements)]


def filter_by_budget(
    tools: Sequence[Tool], budget_per_user: float, cost_sensitivity: CostSensitivity
) -> list[Tool]:
    if cost_sensitivity == CostSensitivity.VALUE_FIRST:
        if budget_per_user < VALUE_FIRST_LOW_BUDGET:
            return [t for t in tools if t.pricing_tier != PricingTier.ENTERPRISE]
        return list(tools)

    limit = budget_per_user
    if cost_sensitivity == CostSensitivity.BALANCED:
        limit = budget_per_user * BALANCED_BUDGET_STRETCH

    return [
        t for t in tools
        if t.has_free_forever
        or t.estimated_cost_per_user is None
        or t.estimated_cost_per_user <= limit
    ]


def filter_by_savviness(tools: Sequence[Tool], savviness: TechSavviness) -> list[Tool]:
    if savviness == TechSavviness.NINJA:
        return list(tools)
    if savviness == TechSavviness.NEWBIE:
        allowed = (Complexity.SIMPLE, Complexity.MODERATE)
        return [t for t in tools if t.complexity in allowed]
    return [t for t in tools if t.complexity != Complexity.EXPERT]


def filter_by_fit(tools: Sequence[Tool], team_size: TeamSize, stage: Stage) -> list[Tool]:
    return [
        t for t in tools
        if (not t.best_for_team_size or team_size in t.best_for_team_size)
        and (not t.best_for_stage or stage in t.best_for_stage)
    ]


def filter_allowed_tools(tools: Sequence[Tool], assessment) -> list[Tool]:
    """Apply every pool filter in order, keeping catalog order."""
    pool = filter_by_compliance(
        tools, assessment.high_stakes_requirements, assessment.is_high_stakes
    )
    pool = filter_by_budget(pool, assessment.budget_per_user, assessment.cost_sensitivity)
    pool = filter_by_savviness(pool, assessment.tech_savviness)
    return filter_by_fit(pool, assessment.team_size, assessment.stage)
