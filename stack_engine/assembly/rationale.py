# stack_engine/assembly/rationale.py
"""Static scenario rationale plus lines personalized by pain point."""

from dataclasses import dataclass, field
from typing import Sequence

from stack_engine.catalog.types import PainPoint, ScenarioType


@dataclass(frozen=True)
class ScenarioRationale:
    goal: str
    key_principle: str
    best_for_generic: tuple[str, ...]
    decision_framing: str
    complexity_note: str
    best_for_user: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "goal": self.goal,
            "key_principle": self.key_principle,
            "best_for_generic": list(self.best_for_generic),
            "best_for_user": list(self.best_for_user),
            "decision_framing": self.decision_framing,
            "complexity_note": self.complexity_note,
        }


SCENARIO_RATIONALES: dict[ScenarioType, ScenarioRationale] = {
    ScenarioType.MONO_STACK: ScenarioRationale(
        goal="Cut context switching by consolidating into as few tools as possible",
        key_principle="Each tool covers several workflow phases; fewer integrations mean less friction",
        best_for_generic=(
            "Solo founders and small teams who want simplicity",
            "Budget-conscious teams trimming per-seat spend",
            "Teams buried under tool sprawl",
        ),
        decision_framing="Pick this when simplicity and a short tool list matter most",
        complexity_note="Lowest complexity: fewer tools, fewer integration points to maintain",
    ),
    ScenarioType.NATIVE_INTEGRATOR: ScenarioRationale(
        goal="Best-of-breed tools per function, chosen for native integration quality",
        key_principle="One specialist tool per major function, joined by native integrations rather than glue code",
        best_for_generic=(
            "Growing teams that need specialist capabilities",
            "Teams that value deep integration between tools",
            "Organizations with varied functional needs",
        ),
        decision_framing="Pick this when you want the best tool for each job and need them to work together",
        complexity_note="Moderate complexity: more tools, each earning its place through integration",
    ),
    ScenarioType.AGENTIC_LEAN: ScenarioRationale(
        goal="Push AI automation into every workflow phase",
        key_principle="Every tool brings AI capabilities; people focus on high-judgment decisions",
        best_for_generic=(
            "Tech-forward teams adopting AI-first workflows",
            "Teams looking to automate repetitive work",
            "Organizations chasing maximum efficiency",
        ),
        decision_framing="Pick this when you want AI to take routine work off your team",
        complexity_note="Higher capability complexity: AI tools need tuning and oversight",
    ),
    ScenarioType.STARTER_PACK: ScenarioRationale(
        goal="Set a new team up with the essentials",
        key_principle="Cover the basics with affordable, easy tools and upgrade later",
        best_for_generic=(
            "Brand-new teams with no tooling yet",
            "Bootstrapping teams on tight budgets",
            "Non-technical founders getting started",
        ),
        decision_framing="Pick this when starting from scratch",
        complexity_note="Minimal complexity: beginner-friendly tools",
    ),
}

P, S = PainPoint, ScenarioType

# (pain point, scenario) -> personalized line, in display order
USER_RELEVANCE_RULES: tuple[tuple[PainPoint, ScenarioType, str], ...] = (
    (P.TOO_MANY_TOOLS, S.MONO_STACK, "Tackles tool sprawl head on by shrinking to a few core tools"),
    (P.TOO_MANY_TOOLS, S.NATIVE_INTEGRATOR, "Swaps redundant tools for specialists that integrate natively"),
    (P.TOO_MANY_TOOLS, S.AGENTIC_LEAN, "One capable AI platform often replaces several single-purpose tools"),
    (P.TOOLS_DONT_TALK, S.NATIVE_INTEGRATOR, "Every tool is chosen for native integration quality, so data stops living in silos"),
    (P.TOOLS_DONT_TALK, S.MONO_STACK, "Fewer tools leave fewer integrations that can break"),
    (P.TOOLS_DONT_TALK, S.AGENTIC_LEAN, "AI tools tend to bridge the gaps between workflow phases"),
    (P.OVERPAYING, S.MONO_STACK, "Consolidation drops redundant subscriptions and cuts spend"),
    (P.OVERPAYING, S.AGENTIC_LEAN, "Automation offsets tool costs by reducing manual effort"),
    (P.TOO_MUCH_MANUAL_WORK, S.AGENTIC_LEAN, "AI agents take repetitive tasks end to end"),
    (P.TOO_MUCH_MANUAL_WORK, S.NATIVE_INTEGRATOR, "Native integrations automate hand-offs between tools"),
    (P.DISORGANIZED, S.MONO_STACK, "A single hub gives one place to find everything"),
    (P.DISORGANIZED, S.NATIVE_INTEGRATOR, "Well-integrated specialist tools keep information organized"),
    (P.SLOW_APPROVALS, S.AGENTIC_LEAN, "AI can pre-review work and shorten approval queues"),
    (P.SLOW_APPROVALS, S.NATIVE_INTEGRATOR, "Integrated notifications keep approvals moving"),
    (P.NO_VISIBILITY, S.NATIVE_INTEGRATOR, "Specialist analytics give visibility across the workflow"),
    (P.NO_VISIBILITY, S.AGENTIC_LEAN, "AI-driven analytics surface what manual reporting misses"),
)


def build_rationale(scenario_type: ScenarioType, pain_points: Sequence[PainPoint]) -> ScenarioRationale:
    base = SCENARIO_RATIONALES.get(scenario_type, SCENARIO_RATIONALES[ScenarioType.MONO_STACK])
    present = set(pain_points)
    lines = tuple(
        message
        for pain_point, rule_scenario, message in USER_RELEVANCE_RULES
        if rule_scenario == scenario_type and pain_point in present
    )
    return ScenarioRationale(
        goal=base.goal,
        key_principle=base.key_principle,
        best_for_generic=base.best_for_generic,
        decision_framing=base.decision_framing,
        complexity_note=base.complexity_note,
        best_for_user=lines,
    )
