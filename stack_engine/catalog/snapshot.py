# stack_engine/catalog/snapshot.py
"""Collaborator wiring and concurrent prefetch.

The engine core is single-threaded and never blocks on I/O. The only fan-out
happens here, before the core runs: the catalog is read once, then the
integration records of every catalog tool are fetched in parallel and joined
into an in-memory graph.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from stack_engine.catalog.providers import (
    IntegrationProvider,
    RecipeProvider,
    RedundancyProvider,
    ReplacementProvider,
    ToolCatalogProvider,
)
from stack_engine.catalog.relations import IntegrationLink
from stack_engine.catalog.tool import Tool
from stack_engine.errors import InfrastructureError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def call_collaborator(collaborator: str, fn: Callable[..., T], *args) -> T:
    """Invoke a collaborator, converting any failure into InfrastructureError."""
    try:
        return fn(*args)
    except InfrastructureError:
        raise
    except Exception as e:
        raise InfrastructureError(
            f"{collaborator} failed: {e}", collaborator=collaborator
        ) from e


@dataclass
class Collaborators:
    """The external collaborators one pipeline run talks to."""

    catalog: ToolCatalogProvider
    integrations: IntegrationProvider
    redundancies: RedundancyProvider
    replacements: Optional[ReplacementProvider] = None
    recipes: Optional[RecipeProvider] = None

    @classmethod
    def from_bundle(cls, bundle) -> "Collaborators":
        """Build from a loader CatalogBundle."""
        return cls(
            catalog=bundle.catalog,
            integrations=bundle.integrations,
            redundancies=bundle.redundancies,
            replacements=bundle.replacements,
            recipes=bundle.recipes,
        )

    def guarded(self) -> "Collaborators":
        """Same collaborators, with every on-demand query wrapped."""
        return Collaborators(
            catalog=self.catalog,
            integrations=self.integrations,
            redundancies=GuardedRedundancies(self.redundancies),
            replacements=GuardedReplacements(self.replacements) if self.replacements else None,
            recipes=GuardedRecipes(self.recipes) if self.recipes else None,
        )


class PrefetchedIntegrations(IntegrationProvider):
    """Integration records already fetched for a fixed set of tools."""

    def __init__(self, links_by_tool: dict[str, list[IntegrationLink]]):
        self._links = links_by_tool

    def get_integrations(self, tool_id: str) -> list[IntegrationLink]:
        return list(self._links.get(tool_id, []))


class GuardedRedundancies(RedundancyProvider):
    """Redundancy provider whose failures surface as InfrastructureError."""

    def __init__(self, inner: RedundancyProvider):
        self.inner = inner

    def find_redundancies_in_set(self, tool_ids):
        return call_collaborator("redundancies", self.inner.find_redundancies_in_set, list(tool_ids))


class GuardedReplacements(ReplacementProvider):
    def __init__(self, inner: ReplacementProvider):
        self.inner = inner

    def find_replacements_for(self, tool_id: str):
        return call_collaborator("replacements", self.inner.find_replacements_for, tool_id)


class GuardedRecipes(RecipeProvider):
    def __init__(self, inner: RecipeProvider):
        self.inner = inner

    def find_recipes_for(self, tool_id: str):
        return call_collaborator("recipes", self.inner.find_recipes_for, tool_id)


@dataclass
class CatalogSnapshot:
    """Materialized catalog and integration graph for one run."""

    tools: list[Tool]
    integrations: PrefetchedIntegrations


def prefetch_inputs(collaborators: Collaborators, workers: int = 4) -> CatalogSnapshot:
    """Fetch the catalog, then every tool's integrations concurrently."""
    tools = call_collaborator("catalog", collaborators.catalog.get_all_tools)
    tool_ids = [t.id for t in tools]

    def fetch(tool_id: str) -> list[IntegrationLink]:
        return call_collaborator(
            "integrations", collaborators.integrations.get_integrations, tool_id
        )

    if not tool_ids:
        return CatalogSnapshot(tools=[], integrations=PrefetchedIntegrations({}))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        # map preserves input order, so the joined graph is deterministic
        results = list(executor.map(fetch, tool_ids))

    logger.debug("Prefetched integrations for %d tools", len(tool_ids))
    return CatalogSnapshot(
        tools=list(tools),
        integrations=PrefetchedIntegrations(dict(zip(tool_ids, results))),
    )
