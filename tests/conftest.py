# tests/conftest.py
"""Shared test helpers."""

from stack_engine.catalog.providers import (
    InMemoryCatalog,
    InMemoryIntegrationGraph,
    InMemoryRecipes,
    InMemoryRedundancyGraph,
    InMemoryReplacementRules,
)
from stack_engine.catalog.relations import RedundancyPair
from stack_engine.catalog.snapshot import Collaborators
from stack_engine.catalog.tool import Tool
from stack_engine.catalog.types import (
    RecommendationHint,
    RedundancyStrength,
    ToolCategory,
)


def make_tool(tool_id: str, category=ToolCategory.OTHER, **kwargs) -> Tool:
    """Tool with sensible defaults; name defaults to the id."""
    name = kwargs.pop("name", tool_id)
    display_name = kwargs.pop("display_name", name.title())
    if isinstance(category, str):
        category = ToolCategory.from_string(category)
    for key in ("aliases",):
        if key in kwargs:
            kwargs[key] = tuple(kwargs[key])
    for key in ("best_for_team_size", "best_for_stage", "best_for_tech_savviness"):
        if key in kwargs:
            kwargs[key] = frozenset(kwargs[key])
    return Tool(id=tool_id, name=name, display_name=display_name, category=category, **kwargs)


def make_pair(tool_a: Tool, tool_b: Tool, strength="FULL", hint="CONTEXT_DEPENDENT", use_cases=()):
    return RedundancyPair(
        tool_a=tool_a,
        tool_b=tool_b,
        strength=RedundancyStrength.from_string(strength),
        hint=RecommendationHint.from_string(hint),
        overlapping_use_cases=tuple(use_cases),
    )


def make_collaborators(tools, edges=(), pairs=(), rules=(), recipes=()) -> Collaborators:
    """In-memory collaborators around the given fixtures."""
    return Collaborators(
        catalog=InMemoryCatalog(tools),
        integrations=InMemoryIntegrationGraph(edges),
        redundancies=InMemoryRedundancyGraph(pairs),
        replacements=InMemoryReplacementRules(rules),
        recipes=InMemoryRecipes(recipes),
    )


def make_assessment(**overrides):
    from stack_engine.pipeline.assessment import AssessmentInput

    data = {
        "company": "Acme Labs",
        "stage": "Pre-Seed",
        "team_size": "SMALL",
        "current_tools": "",
        "philosophy": "Hybrid",
        "tech_savviness": "Decent",
        "budget_per_user": 50,
        "cost_sensitivity": "Balanced",
        "sensitivity": "Low-Stakes",
        "anchor_type": "We're just starting! (no Anchor tool yet)",
        "pain_points": [],
    }
    data.update(overrides)
    return AssessmentInput(**data)


class EventRecorder:
    """Stands in for EngineLogger and records every event call."""

    def __init__(self):
        self.events = []

    def __getattr__(self, name):
        def record(*args, **kwargs):
            self.events.append((name, args))
        return record

    def names(self):
        return [name for name, _ in self.events]
