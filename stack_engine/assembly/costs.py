# stack_engine/assembly/costs.py
"""Cost and complexity metrics for a bundle."""

from dataclasses import dataclass
from typing import Sequence

from stack_engine.catalog.tool import Tool
from stack_engine.catalog.types import TeamSize

# Representative headcount per team-size bucket
TEAM_SIZE_HEADCOUNT = {
    TeamSize.SOLO: 1,
    TeamSize.SMALL: 4,
    TeamSize.MEDIUM: 12,
    TeamSize.LARGE: 50,
    TeamSize.ENTERPRISE: 150,
}

TEAM_GROWTH_RATE = 0.20
PRICE_INFLATION_RATE = 0.05
PROJECTION_YEARS = 5

HOURS_PER_REMOVED_TOOL = 4
HOURS_PER_ADDED_TOOL = 8
DEFAULT_HOURLY_RATE = 75.0


def monthly_cost_per_user(tools: Sequence[Tool]) -> float:
    """Sum of known per-user costs; unknown costs count as zero."""
    return float(sum(t.estimated_cost_per_user or 0 for t in tools))


def complexity_reduction(current_tool_count: int, new_tool_count: int) -> int:
    """Percentage fewer tools than today, clamped to 0-100."""
    if current_tool_count <= 0:
        return 0
    reduction = round((current_tool_count - new_tool_count) / current_tool_count * 100)
    return max(0, min(100, reduction))


@dataclass(frozen=True)
class YearProjection:
    year: int
    team_members: int
    monthly_cost_per_user: float
    annual_cost: float

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "team_members": self.team_members,
            "monthly_cost_per_user": round(self.monthly_cost_per_user, 2),
            "annual_cost": round(self.annual_cost, 2),
        }


def project_costs(
    monthly_per_user: float,
    team_members: int,
    years: int = PROJECTION_YEARS,
    growth_rate: float = TEAM_GROWTH_RATE,
    inflation_rate: float = PRICE_INFLATION_RATE,
) -> list[YearProjection]:
    """Yearly cost as the team grows and prices inflate."""
    projections = []
    for year in range(1, years + 1):
        members = max(1, round(team_members * (1 + growth_rate) ** (year - 1)))
        price = monthly_per_user * (1 + inflation_rate) ** (year - 1)
        projections.append(YearProjection(
            year=year,
            team_members=members,
            monthly_cost_per_user=price,
            annual_cost=price * members * 12,
        ))
    return projections


@dataclass(frozen=True)
class TransitionCost:
    tools_removed: int
    tools_added: int
    hours: float
    cost: float

    def to_dict(self) -> dict:
        return {
            "tools_removed": self.tools_removed,
            "tools_added": self.tools_added,
            "hours": self.hours,
            "cost": round(self.cost, 2),
        }


def estimate_transition_cost(
    current_ids: Sequence[str],
    new_ids: Sequence[str],
    team_members: int,
    hourly_rate: float = DEFAULT_HOURLY_RATE,
) -> TransitionCost:
    """Migration effort: offboarding removed tools and onboarding new ones."""
    current, new = set(current_ids), set(new_ids)
    removed = len(current - new)
    added = len(new - current)
    hours = float(
        (removed * HOURS_PER_REMOVED_TOOL + added * HOURS_PER_ADDED_TOOL) * max(1, team_members)
    )
    return TransitionCost(
        tools_removed=removed,
        tools_added=added,
        hours=hours,
        cost=hours * hourly_rate,
    )
