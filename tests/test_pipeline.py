# tests/test_pipeline.py
"""End-to-end tests for the decision pipeline on the sample catalog."""

import pytest

from conftest import EventRecorder, make_assessment, make_collaborators, make_tool


@pytest.fixture
def collaborators():
    from stack_engine.catalog.loader import load_catalog
    from stack_engine.catalog.snapshot import Collaborators

    return Collaborators.from_bundle(load_catalog())


def _pipeline(collaborators, config=None, recorder=None):
    from stack_engine.pipeline.decision import DecisionPipeline

    return DecisionPipeline(collaborators, config, recorder or EventRecorder())


def _doc_team(**overrides):
    data = {
        "current_tools": "Notion, Confluence, Slack, Definitely Not A Tool",
        "anchor_type": "The Doc-Centric Team (Notion)",
    }
    data.update(overrides)
    return make_assessment(**data)


def test_scenarios_in_fixed_order(collaborators):
    result = _pipeline(collaborators).run(_doc_team())

    assert [s.scenario_type.value for s in result.scenarios] == [
        "MONO_STACK", "NATIVE_INTEGRATOR", "AGENTIC_LEAN",
    ]
    assert all(s.rationale is not None for s in result.scenarios)
    assert set(result.weights) == {s.scenario_type for s in result.scenarios}


def test_unmatched_names_are_reported_and_logged(collaborators):
    recorder = EventRecorder()

    result = _pipeline(collaborators, recorder=recorder).run(_doc_team())

    assert result.unmatched == ["Definitely Not A Tool"]
    assert [t.id for t in result.user_tools] == ["tool-notion", "tool-confluence", "tool-slack"]
    assert ("resolution_miss", ("Definitely Not A Tool",)) in recorder.events


def test_anchor_leads_every_scenario(collaborators):
    result = _pipeline(collaborators).run(_doc_team())

    assert result.anchor_tool.id == "tool-notion"
    for scenario in result.scenarios:
        assert scenario.tool_ids[0] == "tool-notion"
        assert "Notion" not in scenario.displacement_list
        assert len(scenario.tool_ids) == len(set(scenario.tool_ids))


def test_agentic_lean_adds_only_ai_tools(collaborators):
    result = _pipeline(collaborators).run(_doc_team())

    agentic = result.scenarios[2]
    assert all(t.has_ai_features for t in agentic.tools)


def test_current_stack_overlaps_are_suggested(collaborators):
    result = _pipeline(collaborators).run(_doc_team())

    displaced = [s.displaced.id for s in result.displacement_suggestions]
    assert "tool-confluence" in displaced
    assert "tool-notion" not in displaced


def test_runs_are_deterministic(collaborators):
    first = _pipeline(collaborators).run(_doc_team()).to_dict()
    second = _pipeline(collaborators).run(_doc_team()).to_dict()

    assert first == second


def test_empty_allowed_pool_warns(collaborators):
    recorder = EventRecorder()

    result = _pipeline(collaborators, recorder=recorder).run(_doc_team(), allowed_tools=[])

    assert result.allowed_tool_count == 0
    assert result.warnings
    assert "no_allowed_tools" in recorder.names()
    # The anchor still seeds each bundle
    assert all(s.tool_ids == ["tool-notion"] for s in result.scenarios)


def test_pool_filters_can_be_disabled(collaborators):
    from stack_engine.config import EngineConfig

    config = EngineConfig(apply_pool_filters=False)

    result = _pipeline(collaborators, config=config).run(make_assessment(budget_per_user=0))

    assert result.allowed_tool_count == 22


def test_high_stakes_filters_pool_by_compliance(collaborators):
    result = _pipeline(collaborators).run(make_assessment(
        sensitivity="High-Stakes", high_stakes_requirements=["SELF_HOSTED"], tech_savviness="Ninja",
    ))

    for scenario in result.scenarios:
        assert all(t.self_hosted for t in scenario.tools)


def test_catalog_failure_raises_infrastructure_error():
    from stack_engine.catalog.providers import ToolCatalogProvider
    from stack_engine.errors import InfrastructureError

    class UnreachableCatalog(ToolCatalogProvider):
        def get_all_tools(self):
            raise ConnectionError("catalog service is down")

    collaborators = make_collaborators([])
    collaborators.catalog = UnreachableCatalog()
    recorder = EventRecorder()

    with pytest.raises(InfrastructureError) as exc_info:
        _pipeline(collaborators, recorder=recorder).run(make_assessment())

    assert exc_info.value.collaborator == "catalog"
    assert "infrastructure_error" in recorder.names()


def test_redundancy_failure_raises_infrastructure_error():
    from stack_engine.catalog.providers import RedundancyProvider
    from stack_engine.errors import InfrastructureError

    class BrokenRedundancies(RedundancyProvider):
        def find_redundancies_in_set(self, tool_ids):
            raise RuntimeError("timeout")

    tools = [make_tool("a", "DOCUMENTATION"), make_tool("b", "COMMUNICATION")]
    collaborators = make_collaborators(tools)
    collaborators.redundancies = BrokenRedundancies()

    with pytest.raises(InfrastructureError) as exc_info:
        _pipeline(collaborators).run(make_assessment(current_tools="a, b"))

    assert exc_info.value.collaborator == "redundancies"


def test_result_serializes(collaborators):
    import json

    data = json.loads(json.dumps(_pipeline(collaborators).run(_doc_team()).to_dict()))

    assert data["anchor_tool"]["name"] == "notion"
    assert data["matches"]["Definitely Not A Tool"] is None
    assert len(data["scenarios"]) == 3
