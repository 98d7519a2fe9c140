# tests/test_loader.py
"""Tests for catalog loading."""

import json

import pytest


def test_sample_catalog_loads():
    from stack_engine.catalog.loader import load_catalog

    bundle = load_catalog()

    assert bundle.stats["tools"] == 22
    assert bundle.stats["redundancies"] == 10
    assert bundle.stats["replacements"] == 6
    assert bundle.stats["recipes"] == 7
    assert bundle.source.name == "sample_catalog.json"


def test_popularity_composite_from_sub_scores():
    from stack_engine.catalog.loader import load_catalog

    tools = {t.id: t for t in load_catalog().catalog.get_all_tools()}

    # 92*.30 + 85*.20 + 80*.20 + 88*.15 + 82*.15
    assert tools["tool-notion"].popularity_score == 86


def test_relations_are_resolved_by_name():
    from stack_engine.catalog.loader import load_catalog

    bundle = load_catalog()

    peers = {link.target_id for link in bundle.integrations.get_integrations("tool-notion")}
    assert {"tool-slack", "tool-github", "tool-fireflies"} <= peers

    rules = bundle.replacements.find_replacements_for("tool-jira")
    assert [r.to_tool.id for r in rules] == ["tool-linear"]


def test_camel_case_records():
    from stack_engine.catalog.loader import parse_catalog
    from stack_engine.catalog.types import PricingTier, TeamSize

    bundle = parse_catalog({"tools": [{
        "id": 7,
        "name": " Linear ",
        "displayName": "Linear",
        "category": "PROJECT_MANAGEMENT",
        "typicalPricingTier": "STARTER",
        "estimatedCostPerUser": "8",
        "bestForTeamSize": ["SMALL"],
    }]})

    tool = bundle.catalog.get_all_tools()[0]
    assert (tool.id, tool.name) == ("7", "linear")
    assert tool.pricing_tier == PricingTier.STARTER
    assert tool.estimated_cost_per_user == 8.0
    assert tool.best_for_team_size == frozenset({TeamSize.SMALL})


def test_missing_file(tmp_path):
    from stack_engine.catalog.loader import load_catalog
    from stack_engine.errors import CatalogFormatError

    with pytest.raises(CatalogFormatError):
        load_catalog(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    from stack_engine.catalog.loader import load_catalog
    from stack_engine.errors import CatalogFormatError

    path = tmp_path / "catalog.json"
    path.write_text("{not json")

    with pytest.raises(CatalogFormatError) as exc_info:
        load_catalog(path)

    assert exc_info.value.path == str(path)


@pytest.mark.parametrize("document", [
    [],
    {"integrations": []},
    {"tools": [{"id": "a", "name": "a"}]},
    {"tools": [{"id": "a", "name": "a", "category": "NOT_A_CATEGORY"}]},
    {"tools": [
        {"id": "a", "name": "a", "category": "OTHER"},
        {"id": "a", "name": "b", "category": "OTHER"},
    ]},
])
def test_malformed_tools(document):
    from stack_engine.catalog.loader import parse_catalog
    from stack_engine.errors import CatalogFormatError

    with pytest.raises(CatalogFormatError):
        parse_catalog(document)


def test_unknown_relation_reference(tmp_path):
    from stack_engine.catalog.loader import load_catalog
    from stack_engine.errors import CatalogFormatError

    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({
        "tools": [{"id": "a", "name": "a", "category": "OTHER"}],
        "redundancies": [{"tool_a": "a", "tool_b": "ghost", "strength": "FULL"}],
    }))

    with pytest.raises(CatalogFormatError, match="ghost"):
        load_catalog(path)
