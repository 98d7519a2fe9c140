# tests/test_filters_anchor.py
"""Tests for allowed-pool filters and anchor resolution."""

from conftest import make_assessment, make_tool


class TestFilters:
    """Tests for the pool filters."""

    def test_compliance_only_applies_to_high_stakes(self):
        from stack_engine.catalog.types import ComplianceRequirement
        from stack_engine.pipeline.filters import filter_by_compliance

        certified = make_tool("certified", soc2=True)
        plain = make_tool("plain")
        reqs = [ComplianceRequirement.SOC2]

        assert filter_by_compliance([certified, plain], reqs, high_stakes=False) == [certified, plain]
        assert filter_by_compliance([certified, plain], reqs, high_stakes=True) == [certified]

    def test_gdpr_counts_as_eu_residency(self):
        from stack_engine.catalog.types import ComplianceRequirement
        from stack_engine.pipeline.filters import meets_requirement

        assert meets_requirement(make_tool("t", gdpr=True), ComplianceRequirement.EU_DATA_RESIDENCY)

    def test_budget_by_sensitivity(self):
        from stack_engine.catalog.types import CostSensitivity
        from stack_engine.pipeline.filters import filter_by_budget

        tools = [
            make_tool("cheap", estimated_cost_per_user=10),
            make_tool("mid", estimated_cost_per_user=14),
            make_tool("free", estimated_cost_per_user=99, has_free_forever=True),
            make_tool("unknown"),
        ]

        price_first = filter_by_budget(tools, 10, CostSensitivity.PRICE_FIRST)
        balanced = filter_by_budget(tools, 10, CostSensitivity.BALANCED)

        assert [t.id for t in price_first] == ["cheap", "free", "unknown"]
        assert [t.id for t in balanced] == ["cheap", "mid", "free", "unknown"]

    def test_value_first_drops_enterprise_tier_on_low_budget(self):
        from stack_engine.catalog.types import CostSensitivity, PricingTier
        from stack_engine.pipeline.filters import filter_by_budget

        tools = [make_tool("big", pricing_tier=PricingTier.ENTERPRISE), make_tool("small")]

        assert [t.id for t in filter_by_budget(tools, 10, CostSensitivity.VALUE_FIRST)] == ["small"]
        assert len(filter_by_budget(tools, 100, CostSensitivity.VALUE_FIRST)) == 2

    def test_savviness(self):
        from stack_engine.catalog.types import Complexity, TechSavviness
        from stack_engine.pipeline.filters import filter_by_savviness

        tools = [
            make_tool("simple", complexity=Complexity.SIMPLE),
            make_tool("advanced", complexity=Complexity.ADVANCED),
            make_tool("expert", complexity=Complexity.EXPERT),
        ]

        assert [t.id for t in filter_by_savviness(tools, TechSavviness.NEWBIE)] == ["simple"]
        assert [t.id for t in filter_by_savviness(tools, TechSavviness.DECENT)] == ["simple", "advanced"]
        assert len(filter_by_savviness(tools, TechSavviness.NINJA)) == 3

    def test_filter_allowed_tools_keeps_catalog_order(self):
        from stack_engine.catalog.types import Complexity
        from stack_engine.pipeline.filters import filter_allowed_tools

        tools = [
            make_tool("z", estimated_cost_per_user=1),
            make_tool("expert", complexity=Complexity.EXPERT),
            make_tool("a", estimated_cost_per_user=2),
        ]

        pool = filter_allowed_tools(tools, make_assessment())

        assert [t.id for t in pool] == ["z", "a"]


class TestAnchor:
    """Tests for resolve_anchor."""

    def test_doc_centric_prefers_first_matching_user_tool(self):
        from stack_engine.catalog.types import AnchorType
        from stack_engine.pipeline.anchor import resolve_anchor

        slack = make_tool("s", "COMMUNICATION", name="slack")
        coda = make_tool("c", "DOCUMENTATION", name="coda")
        notion = make_tool("n", "DOCUMENTATION", name="notion")

        assert resolve_anchor(AnchorType.DOC_CENTRIC, [slack, coda, notion]).id == "c"

    def test_dev_centric_accepts_ai_builders(self):
        from stack_engine.catalog.types import AnchorType
        from stack_engine.pipeline.anchor import resolve_anchor

        builder = make_tool("b", "AI_BUILDERS", name="lovable")

        assert resolve_anchor(AnchorType.DEV_CENTRIC, [builder]).id == "b"

    def test_no_anchor(self):
        from stack_engine.catalog.types import AnchorType
        from stack_engine.pipeline.anchor import resolve_anchor

        notion = make_tool("n", "DOCUMENTATION", name="notion")

        assert resolve_anchor(AnchorType.NONE, [notion]) is None
        assert resolve_anchor(AnchorType.COMM_CENTRIC, [notion]) is None

    def test_other_matches_free_text(self):
        from stack_engine.catalog.types import AnchorType
        from stack_engine.pipeline.anchor import resolve_anchor

        figma = make_tool("f", "DESIGN", name="figma", aliases=["figjam"])

        assert resolve_anchor(AnchorType.OTHER, [figma], " FigJam ").id == "f"
        assert resolve_anchor(AnchorType.OTHER, [figma], "") is None
        assert resolve_anchor(AnchorType.OTHER, [figma], "Sketch") is None
