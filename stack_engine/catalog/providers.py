# stack_engine/catalog/providers.py
"""Collaborator interfaces and in-memory implementations.

The engine never talks to storage directly. Callers hand it providers that
answer from already-materialized collections; the in-memory classes here are
what the CLI, the JSON loader and the tests use.
"""

from abc import ABC, abstractmethod
from typing import Iterable

from stack_engine.catalog.relations import (
    AutomationRecipe,
    IntegrationLink,
    RedundancyPair,
    ReplacementSuggestion,
)
from stack_engine.catalog.tool import Tool
from stack_engine.catalog.types import IntegrationQuality


class ToolCatalogProvider(ABC):
    """Source of catalog tools."""

    @abstractmethod
    def get_all_tools(self) -> list[Tool]:
        """Return every catalog tool in a stable order."""
        pass


class IntegrationProvider(ABC):
    """Source of the integration graph."""

    @abstractmethod
    def get_integrations(self, tool_id: str) -> list[IntegrationLink]:
        """Return integrations involving tool_id (both directions, one link per peer)."""
        pass


class RedundancyProvider(ABC):
    """Source of the redundancy graph."""

    @abstractmethod
    def find_redundancies_in_set(self, tool_ids: Iterable[str]) -> list[RedundancyPair]:
        """Return pairs whose both endpoints are in tool_ids."""
        pass


class ReplacementProvider(ABC):
    """Source of replacement rules."""

    @abstractmethod
    def find_replacements_for(self, tool_id: str) -> list[ReplacementSuggestion]:
        """Return rules whose from_tool is tool_id, in rule order."""
        pass


class RecipeProvider(ABC):
    """Source of automation recipes."""

    @abstractmethod
    def find_recipes_for(self, tool_id: str) -> list[AutomationRecipe]:
        """Return recipes where tool_id is trigger or action."""
        pass


class InMemoryCatalog(ToolCatalogProvider):
    def __init__(self, tools: Iterable[Tool]):
        self._tools = list(tools)
        ids = [t.id for t in self._tools]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate tool ids in catalog")

    def get_all_tools(self) -> list[Tool]:
        return list(self._tools)


class InMemoryIntegrationGraph(IntegrationProvider):
    """Integration edges indexed in both directions.

    An edge recorded as (a -> b) is also visible from b. If both directions
    are recorded, the outgoing record wins for that peer.
    """

    def __init__(self, edges: Iterable[tuple[str, str, IntegrationQuality]] = ()):
        self._outgoing: dict[str, dict[str, IntegrationLink]] = {}
        self._incoming: dict[str, dict[str, IntegrationLink]] = {}
        for source_id, target_id, quality in edges:
            self.add(source_id, target_id, quality)

    def add(self, source_id: str, target_id: str, quality: IntegrationQuality) -> None:
        self._outgoing.setdefault(source_id, {})[target_id] = IntegrationLink(target_id, quality)
        self._incoming.setdefault(target_id, {})[source_id] = IntegrationLink(source_id, quality)

    def get_integrations(self, tool_id: str) -> list[IntegrationLink]:
        links = dict(self._outgoing.get(tool_id, {}))
        for peer_id, link in self._incoming.get(tool_id, {}).items():
            links.setdefault(peer_id, link)
        return list(links.values())


class InMemoryRedundancyGraph(RedundancyProvider):
    def __init__(self, pairs: Iterable[RedundancyPair] = ()):
        self._pairs = list(pairs)

    def find_redundancies_in_set(self, tool_ids: Iterable[str]) -> list[RedundancyPair]:
        wanted = set(tool_ids)
        if len(wanted) < 2:
            return []
        return [
            p for p in self._pairs
            if p.tool_a.id in wanted and p.tool_b.id in wanted
        ]


class InMemoryReplacementRules(ReplacementProvider):
    def __init__(self, rules: Iterable[ReplacementSuggestion] = ()):
        self._rules = list(rules)

    def find_replacements_for(self, tool_id: str) -> list[ReplacementSuggestion]:
        return [r for r in self._rules if r.from_tool.id == tool_id]


class InMemoryRecipes(RecipeProvider):
    def __init__(self, recipes: Iterable[AutomationRecipe] = ()):
        self._recipes = list(recipes)

    def find_recipes_for(self, tool_id: str) -> list[AutomationRecipe]:
        return [
            r for r in self._recipes
            if r.trigger_tool_id == tool_id or r.action_tool_id == tool_id
        ]
