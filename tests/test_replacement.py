# tests/test_replacement.py
"""Tests for the replacement advisor."""

from conftest import make_tool


def _rule(from_tool, to_tool, reason, conditions=None):
    from stack_engine.catalog.relations import ReplacementConditions, ReplacementSuggestion
    from stack_engine.catalog.types import ReplacementReason

    return ReplacementSuggestion(
        from_tool=from_tool,
        to_tool=to_tool,
        reason_type=ReplacementReason.from_string(reason),
        conditions=conditions or ReplacementConditions(),
    )


def _advisor(*rules):
    from stack_engine.assembly.replacement import ReplacementAdvisor
    from stack_engine.catalog.providers import InMemoryReplacementRules

    return ReplacementAdvisor(InMemoryReplacementRules(rules))


def test_no_rules_returns_none():
    from stack_engine.catalog.relations import ReplacementContext

    assert _advisor().find_best("x", ReplacementContext()) is None


def test_cost_savings_wins_under_price_first():
    from stack_engine.catalog.relations import ReplacementContext
    from stack_engine.catalog.types import CostSensitivity

    src, cheap, simple = make_tool("src"), make_tool("cheap"), make_tool("simple")
    advisor = _advisor(
        _rule(src, simple, "SIMPLER_UX"),
        _rule(src, cheap, "COST_SAVINGS"),
    )

    best = advisor.find_best("src", ReplacementContext(cost_sensitivity=CostSensitivity.PRICE_FIRST))

    assert best.to_tool.id == "cheap"


def test_ai_native_wins_when_preferred():
    from stack_engine.catalog.relations import ReplacementContext

    src, ai, merged = make_tool("src"), make_tool("ai"), make_tool("merged")
    advisor = _advisor(
        _rule(src, merged, "BETTER_INTEGRATION"),
        _rule(src, ai, "AI_NATIVE"),
    )

    assert advisor.find_best("src", ReplacementContext(prefer_ai_native=True)).to_tool.id == "ai"


def test_condition_match_adds_bonus():
    from stack_engine.assembly.replacement import score_suggestion
    from stack_engine.catalog.relations import ReplacementConditions, ReplacementContext
    from stack_engine.catalog.types import TeamSize

    src, dst = make_tool("src"), make_tool("dst")
    rule = _rule(src, dst, "AI_NATIVE", ReplacementConditions(team_size=frozenset({TeamSize.SMALL})))

    assert score_suggestion(rule, ReplacementContext(team_size=TeamSize.SMALL)) == 2
    assert score_suggestion(rule, ReplacementContext(team_size=TeamSize.LARGE)) == 0


def test_required_compliance_must_be_covered():
    from stack_engine.catalog.relations import ReplacementConditions, ReplacementContext
    from stack_engine.catalog.types import ComplianceRequirement

    conditions = ReplacementConditions(
        requires_compliance=frozenset({ComplianceRequirement.SOC2, ComplianceRequirement.HIPAA})
    )

    assert not conditions.matches(
        ReplacementContext(requires_compliance=frozenset({ComplianceRequirement.SOC2}))
    )
    assert conditions.matches(
        ReplacementContext(requires_compliance=frozenset(ComplianceRequirement))
    )


def test_equal_scores_keep_rule_order():
    from stack_engine.catalog.relations import ReplacementContext

    src, first, second = make_tool("src"), make_tool("first"), make_tool("second")
    advisor = _advisor(
        _rule(src, first, "CONSOLIDATION"),
        _rule(src, second, "CONSOLIDATION"),
    )

    assert advisor.find_best("src", ReplacementContext()).to_tool.id == "first"


def test_falls_back_to_first_rule_when_nothing_scores():
    from stack_engine.catalog.relations import ReplacementConditions, ReplacementContext
    from stack_engine.catalog.types import CostSensitivity, TechSavviness

    src, a, b = make_tool("src"), make_tool("a"), make_tool("b")
    mismatch = ReplacementConditions(tech_savviness=frozenset({TechSavviness.NEWBIE}))
    advisor = _advisor(
        _rule(src, a, "COST_SAVINGS", mismatch),
        _rule(src, b, "AI_NATIVE", mismatch),
    )
    context = ReplacementContext(
        cost_sensitivity=CostSensitivity.VALUE_FIRST,
        tech_savviness=TechSavviness.NINJA,
        prefer_ai_native=False,
    )

    best = advisor.find_best_ranked("src", context)

    assert best.suggestion.to_tool.id == "a"
    assert best.score == 0
