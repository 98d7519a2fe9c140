"""Catalog entities, relations and collaborator providers."""

from stack_engine.catalog.loader import CatalogBundle, load_catalog, parse_catalog
from stack_engine.catalog.providers import (
    InMemoryCatalog,
    InMemoryIntegrationGraph,
    InMemoryRecipes,
    InMemoryRedundancyGraph,
    InMemoryReplacementRules,
    IntegrationProvider,
    RecipeProvider,
    RedundancyProvider,
    ReplacementProvider,
    ToolCatalogProvider,
)
from stack_engine.catalog.relations import (
    AutomationRecipe,
    IntegrationLink,
    RedundancyPair,
    ReplacementConditions,
    ReplacementContext,
    ReplacementSuggestion,
)
from stack_engine.catalog.snapshot import (
    CatalogSnapshot,
    Collaborators,
    call_collaborator,
    prefetch_inputs,
)
from stack_engine.catalog.tool import Tool, compute_popularity_score

__all__ = [
    "AutomationRecipe",
    "CatalogBundle",
    "CatalogSnapshot",
    "Collaborators",
    "InMemoryCatalog",
    "InMemoryIntegrationGraph",
    "InMemoryRecipes",
    "InMemoryRedundancyGraph",
    "InMemoryReplacementRules",
    "IntegrationLink",
    "IntegrationProvider",
    "RecipeProvider",
    "RedundancyPair",
    "RedundancyProvider",
    "ReplacementConditions",
    "ReplacementContext",
    "ReplacementProvider",
    "ReplacementSuggestion",
    "Tool",
    "ToolCatalogProvider",
    "call_collaborator",
    "compute_popularity_score",
    "load_catalog",
    "parse_catalog",
    "prefetch_inputs",
]
