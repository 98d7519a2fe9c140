# stack_engine/scoring/integration.py
"""Integration score, selection blend and recipe synergy."""

from typing import Optional, Sequence

from stack_engine.catalog.providers import IntegrationProvider, RecipeProvider
from stack_engine.catalog.tool import Tool

NO_SELECTION_SCORE = 50
COVERAGE_POINTS = 60
QUALITY_POINTS = 40

# (minimum chain length, bonus), checked longest first
SYNERGY_TIERS = ((5, 15), (4, 10), (3, 5))


def calculate_integration_score(
    candidate_id: str,
    selected_ids: Sequence[str],
    integrations: IntegrationProvider,
) -> int:
    """How well a candidate connects to the tools already chosen.

    Coverage of the selected tools the candidate links to is worth up to 60
    points, the average quality tier of those links up to 40. An empty
    selection scores a neutral 50.
    """
    selected = [tool_id for tool_id in dict.fromkeys(selected_ids) if tool_id != candidate_id]
    if not selected:
        return NO_SELECTION_SCORE

    wanted = set(selected)
    links = [
        link for link in integrations.get_integrations(candidate_id)
        if link.target_id in wanted
    ]
    if not links:
        return 0

    connected = {link.target_id: link.quality_score for link in links}
    coverage = len(connected) / len(selected)
    avg_quality = sum(connected.values()) / len(connected)

    return round(min(100, coverage * COVERAGE_POINTS + avg_quality / 100 * QUALITY_POINTS))


def selection_score(tool: Tool, integration_score: float, has_selection: bool) -> float:
    """Ranking blend used to pick a category winner.

    50/50 integration and popularity once the bundle has tools; 60/40
    popularity and momentum while it is still empty.
    """
    if has_selection:
        return 0.5 * integration_score + 0.5 * tool.popularity
    return 0.6 * tool.popularity + 0.4 * tool.momentum


def calculate_synergy_bonus(
    candidate_id: str,
    selected_ids: Sequence[str],
    recipes: Optional[RecipeProvider],
) -> int:
    """Bonus for recipe chains linking the candidate to bundle tools."""
    if recipes is None or not selected_ids:
        return 0

    wanted = set(selected_ids)
    partners = set()
    for recipe in recipes.find_recipes_for(candidate_id):
        peer = (
            recipe.action_tool_id
            if recipe.trigger_tool_id == candidate_id
            else recipe.trigger_tool_id
        )
        if peer in wanted and peer != candidate_id:
            partners.add(peer)

    chain_length = len(partners) + 1
    for minimum, bonus in SYNERGY_TIERS:
        if chain_length >= minimum:
            return bonus
    return 0
