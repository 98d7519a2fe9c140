# tests/test_weights.py
"""Tests for weight profile construction."""

import itertools

import pytest


class _RecordingLogger:
    def __init__(self):
        self.events = []

    def scoring_degeneracy(self, scenario_type):
        self.events.append(("scoring_degeneracy", scenario_type))


def test_base_profile_without_modifiers():
    from stack_engine.catalog.types import ScenarioType
    from stack_engine.scoring.weights import WeightProfileBuilder, WeightSignals

    profile = WeightProfileBuilder().build(ScenarioType.MONO_STACK, WeightSignals())

    assert profile.integration == pytest.approx(0.35)
    assert profile.cost == pytest.approx(0.25)
    assert profile.fit == pytest.approx(0.25)
    assert profile.popularity == pytest.approx(0.10)
    assert profile.ai == pytest.approx(0.05)


def test_every_scenario_and_signal_mix_sums_to_one():
    from stack_engine.catalog.types import (
        CostSensitivity,
        PainPoint,
        Philosophy,
        ScenarioType,
        Stage,
    )
    from stack_engine.scoring.weights import WeightProfileBuilder, WeightSignals

    builder = WeightProfileBuilder()
    pain_sets = [(), tuple(PainPoint), (PainPoint.TOO_MUCH_MANUAL_WORK, PainPoint.OVERPAYING)]

    for scenario, stage, cost, philosophy, pains in itertools.product(
        ScenarioType, Stage, CostSensitivity, Philosophy, pain_sets
    ):
        signals = WeightSignals(
            pain_points=pains, stage=stage, cost_sensitivity=cost, philosophy=philosophy
        )
        profile = builder.build(scenario, signals)

        assert sum(profile.as_tuple()) == pytest.approx(1.0)
        assert min(profile.as_tuple()) >= 0


def test_negative_component_is_clamped_to_zero():
    from stack_engine.catalog.types import Philosophy, ScenarioType
    from stack_engine.scoring.weights import WeightProfileBuilder, WeightSignals

    # MONO_STACK ai 0.05 with Co-Pilot -0.10 goes negative
    profile = WeightProfileBuilder().build(
        ScenarioType.MONO_STACK, WeightSignals(philosophy=Philosophy.CO_PILOT)
    )

    assert profile.ai == 0
    assert profile.fit == pytest.approx(0.25 / 1.05)
    assert profile.popularity == pytest.approx(0.20 / 1.05)


def test_clamping_happens_after_all_deltas():
    from stack_engine.catalog.types import PainPoint, Philosophy, ScenarioType
    from stack_engine.scoring.weights import WeightProfileBuilder, WeightSignals

    # ai: 0.05 + 0.15 - 0.10 = 0.10; clamping between steps would give 0.15 instead
    signals = WeightSignals(
        pain_points=(PainPoint.TOO_MUCH_MANUAL_WORK,),
        philosophy=Philosophy.CO_PILOT,
    )
    profile = WeightProfileBuilder().build(ScenarioType.MONO_STACK, signals)

    assert profile.ai == pytest.approx(0.10 / 1.10)
    assert profile.fit == pytest.approx(0.20 / 1.10)


def test_pain_point_order_does_not_matter():
    from stack_engine.catalog.types import (
        CostSensitivity,
        PainPoint,
        Philosophy,
        ScenarioType,
        Stage,
    )
    from stack_engine.scoring.weights import WeightProfileBuilder, WeightSignals

    builder = WeightProfileBuilder()
    pains = (PainPoint.TOO_MUCH_MANUAL_WORK, PainPoint.OVERPAYING, PainPoint.TOOLS_DONT_TALK)
    profiles = [
        builder.build(
            ScenarioType.AGENTIC_LEAN,
            WeightSignals(
                pain_points=order,
                stage=Stage.ESTABLISHED,
                cost_sensitivity=CostSensitivity.VALUE_FIRST,
                philosophy=Philosophy.CO_PILOT,
            ),
        )
        for order in itertools.permutations(pains)
    ]

    first = profiles[0].as_tuple()
    for profile in profiles[1:]:
        assert profile.as_tuple() == pytest.approx(first)


def test_modifiers_shift_weight_toward_their_dimension():
    from stack_engine.catalog.types import CostSensitivity, ScenarioType
    from stack_engine.scoring.weights import WeightProfileBuilder, WeightSignals

    builder = WeightProfileBuilder()
    neutral = builder.build(ScenarioType.NATIVE_INTEGRATOR, WeightSignals())
    price_first = builder.build(
        ScenarioType.NATIVE_INTEGRATOR,
        WeightSignals(cost_sensitivity=CostSensitivity.PRICE_FIRST),
    )

    assert price_first.cost > neutral.cost


def test_degenerate_vector_falls_back_to_uniform(monkeypatch):
    from stack_engine.catalog.types import PainPoint, ScenarioType
    from stack_engine.scoring import weights
    from stack_engine.scoring.weights import DIMENSIONS, WeightProfileBuilder, WeightSignals

    monkeypatch.setitem(
        weights.PAIN_POINT_MODIFIERS, PainPoint.TOO_MANY_TOOLS, {d: -1.0 for d in DIMENSIONS}
    )
    recorder = _RecordingLogger()

    profile = WeightProfileBuilder(recorder).build(
        ScenarioType.MONO_STACK, WeightSignals(pain_points=(PainPoint.TOO_MANY_TOOLS,))
    )

    assert profile.as_tuple() == pytest.approx((0.2,) * 5)
    assert recorder.events == [("scoring_degeneracy", "MONO_STACK")]


def test_weight_profile_rejects_invalid_vectors():
    from stack_engine.scoring.weights import WeightProfile

    with pytest.raises(ValueError):
        WeightProfile(fit=0.5, popularity=0.5, cost=0.5, ai=0, integration=0)
    with pytest.raises(ValueError):
        WeightProfile(fit=-0.1, popularity=0.6, cost=0.5, ai=0, integration=0)


def test_starter_pack_weights_defined():
    from stack_engine.catalog.types import ScenarioType
    from stack_engine.scoring.weights import WeightProfileBuilder, WeightSignals

    profile = WeightProfileBuilder().build(ScenarioType.STARTER_PACK, WeightSignals())

    assert profile.fit == pytest.approx(0.30)
