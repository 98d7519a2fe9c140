# tests/test_resolver.py
"""Tests for tool name resolution."""

import pytest

from conftest import make_tool


def _catalog():
    return [
        make_tool("t1", "DOCUMENTATION", name="notion", display_name="Notion", aliases=["notion.so"]),
        make_tool("t2", "COMMUNICATION", name="slack", display_name="Slack"),
        make_tool("t3", "PROJECT_MANAGEMENT", name="jira", display_name="Jira",
                  aliases=["atlassian jira"]),
        make_tool("t4", "COMMUNICATION", name="teams", display_name="Microsoft Teams",
                  aliases=["ms teams"]),
    ]


def test_levenshtein_distance():
    from stack_engine.matching.resolver import levenshtein_distance

    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("slack", "slack") == 0
    assert levenshtein_distance("notoin", "notion") == 2


@pytest.mark.parametrize("name,expected", [
    ("ab", 2),
    ("notion", 2),
    ("confluence", 3),
    ("microsoft teams", 4),
])
def test_max_edit_distance(name, expected):
    from stack_engine.matching.resolver import max_edit_distance

    assert max_edit_distance(name) == expected


def test_exact_name_match_is_full_confidence():
    from stack_engine.matching.resolver import ToolNameResolver

    result = ToolNameResolver().resolve(["  Notion "], _catalog())

    match = result["  Notion "]
    assert match.tool.id == "t1"
    assert match.confidence == 1.0
    assert match.matched_on == "name"


def test_alias_match():
    from stack_engine.matching.resolver import ToolNameResolver

    match = ToolNameResolver().resolve_one("Atlassian Jira", _catalog())

    assert match.tool.id == "t3"
    assert match.confidence == pytest.approx(0.95)
    assert match.matched_on == "alias"


def test_fuzzy_match_on_typo():
    from stack_engine.matching.resolver import ToolNameResolver

    match = ToolNameResolver().resolve_one("slak", _catalog())

    assert match is not None
    assert match.tool.id == "t2"
    assert match.matched_on == "fuzzy"
    assert match.confidence == pytest.approx(0.8)


def test_fuzzy_match_against_display_name():
    from stack_engine.matching.resolver import ToolNameResolver

    match = ToolNameResolver().resolve_one("microsoft team", _catalog())

    assert match.tool.id == "t4"
    assert match.matched_on == "fuzzy"


def test_unknown_name_is_unmatched():
    from stack_engine.matching.resolver import ToolNameResolver

    result = ToolNameResolver().resolve(["Basecamp", "slack"], _catalog())

    assert result["Basecamp"] is None
    assert result["slack"].tool.id == "t2"
    assert list(result) == ["Basecamp", "slack"]


def test_confidence_at_threshold_is_rejected():
    from stack_engine.matching.resolver import ToolNameResolver

    # "jora" vs "jira": distance 1, confidence 0.75; rejected with a stricter threshold
    catalog = _catalog()
    assert ToolNameResolver().resolve_one("jora", catalog).tool.id == "t3"
    assert ToolNameResolver(min_confidence=0.75).resolve_one("jora", catalog) is None


def test_short_names_do_not_fuzzy_match_loosely():
    from stack_engine.matching.resolver import ToolNameResolver

    # nothing in the catalog is within two edits
    assert ToolNameResolver().resolve_one("zz", _catalog()) is None


def test_fuzzy_ties_go_to_first_catalog_entry():
    from stack_engine.matching.resolver import ToolNameResolver

    catalog = [
        make_tool("a", name="abcx"),
        make_tool("b", name="abcy"),
    ]
    match = ToolNameResolver().resolve_one("abcz", catalog)

    assert match.tool.id == "a"


def test_resolved_matches_always_exceed_threshold():
    from stack_engine.matching.resolver import ToolNameResolver

    names = ["notoin", "slck", "jiraa", "teems", "xyz", "ms team", "confluence", "notion.s"]
    results = ToolNameResolver().resolve(names, _catalog())

    for match in results.values():
        if match is not None:
            assert match.confidence > 0.6


def test_empty_name_resolves_to_none():
    from stack_engine.matching.resolver import ToolNameResolver

    assert ToolNameResolver().resolve_one("   ", _catalog()) is None
