# stack_engine/catalog/loader.py
"""Load a catalog JSON document into in-memory providers."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from stack_engine.catalog.providers import (
    InMemoryCatalog,
    InMemoryIntegrationGraph,
    InMemoryRecipes,
    InMemoryRedundancyGraph,
    InMemoryReplacementRules,
)
from stack_engine.catalog.relations import (
    AutomationRecipe,
    RedundancyPair,
    ReplacementConditions,
    ReplacementSuggestion,
)
from stack_engine.catalog.tool import Tool
from stack_engine.catalog.types import (
    IntegrationQuality,
    RecommendationHint,
    RedundancyStrength,
    ReplacementReason,
)
from stack_engine.errors import CatalogFormatError

SAMPLE_CATALOG = Path(__file__).parent.parent / "data" / "sample_catalog.json"


@dataclass
class CatalogBundle:
    """Providers built from one catalog document."""

    catalog: InMemoryCatalog
    integrations: InMemoryIntegrationGraph
    redundancies: InMemoryRedundancyGraph
    replacements: InMemoryReplacementRules
    recipes: InMemoryRecipes
    source: Optional[Path] = None
    stats: dict = field(default_factory=dict)


def load_catalog(path: Optional[Path] = None) -> CatalogBundle:
    """Load a catalog file. Defaults to the bundled sample catalog."""
    path = Path(path) if path else SAMPLE_CATALOG
    if not path.exists():
        raise CatalogFormatError(f"Catalog not found: {path}", path=str(path))

    try:
        with open(path) as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogFormatError(f"Invalid JSON in {path}: {e}", path=str(path)) from e

    bundle = parse_catalog(document, source=str(path))
    bundle.source = path
    return bundle


def parse_catalog(document: dict, source: str = "<memory>") -> CatalogBundle:
    """Build providers from an already-decoded catalog document."""
    if not isinstance(document, dict) or "tools" not in document:
        raise CatalogFormatError("Catalog document must be an object with a 'tools' list", path=source)

    try:
        tools = [Tool.from_dict(record) for record in document["tools"]]
        catalog = InMemoryCatalog(tools)
    except (KeyError, ValueError, TypeError) as e:
        raise CatalogFormatError(f"Invalid tool record: {e}", path=source) from e

    by_id = {t.id: t for t in tools}

    def tool_ref(ref: str) -> Tool:
        tool = by_id.get(ref)
        if tool is None:
            # Allow references by canonical name as well as id
            tool = next((t for t in tools if t.name == ref), None)
        if tool is None:
            raise CatalogFormatError(f"Unknown tool reference: {ref!r}", path=source)
        return tool

    try:
        integrations = InMemoryIntegrationGraph(
            (
                tool_ref(edge["tool"]).id,
                tool_ref(edge["integrates_with"]).id,
                IntegrationQuality.from_string(edge.get("quality", "BASIC")),
            )
            for edge in document.get("integrations", [])
        )

        redundancies = InMemoryRedundancyGraph(
            RedundancyPair(
                tool_a=tool_ref(record["tool_a"]),
                tool_b=tool_ref(record["tool_b"]),
                strength=RedundancyStrength.from_string(record["strength"]),
                hint=RecommendationHint.from_string(record.get("hint", "CONTEXT_DEPENDENT")),
                overlapping_use_cases=tuple(record.get("overlapping_use_cases", [])),
                overlapping_features=tuple(record.get("overlapping_features", [])),
                notes=record.get("notes"),
            )
            for record in document.get("redundancies", [])
        )

        replacements = InMemoryReplacementRules(
            ReplacementSuggestion(
                from_tool=tool_ref(record["from"]),
                to_tool=tool_ref(record["to"]),
                reason_type=ReplacementReason.from_string(record["reason_type"]),
                reason_text=record.get("reason_text", ""),
                conditions=ReplacementConditions.from_dict(record.get("conditions")),
            )
            for record in document.get("replacements", [])
        )

        recipes = InMemoryRecipes(
            AutomationRecipe(
                trigger_tool_id=tool_ref(record["trigger"]).id,
                action_tool_id=tool_ref(record["action"]).id,
                name=record.get("name", ""),
            )
            for record in document.get("recipes", [])
        )
    except (KeyError, ValueError, TypeError) as e:
        raise CatalogFormatError(f"Invalid relation record: {e}", path=source) from e

    return CatalogBundle(
        catalog=catalog,
        integrations=integrations,
        redundancies=redundancies,
        replacements=replacements,
        recipes=recipes,
        stats={
            "tools": len(tools),
            "integrations": len(document.get("integrations", [])),
            "redundancies": len(document.get("redundancies", [])),
            "replacements": len(document.get("replacements", [])),
            "recipes": len(document.get("recipes", [])),
        },
    )
