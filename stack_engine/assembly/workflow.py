# stack_engine/assembly/workflow.py
"""Map a bundle onto the product workflow phases."""

from dataclasses import dataclass
from typing import Optional, Sequence

from stack_engine.catalog.tool import Tool
from stack_engine.catalog.types import Philosophy, ToolCategory, WorkflowPhase

C = ToolCategory

PHASE_CATEGORIES: dict[WorkflowPhase, tuple[ToolCategory, ...]] = {
    WorkflowPhase.DISCOVER: (C.DOCUMENTATION, C.AI_ASSISTANTS, C.GROWTH),
    WorkflowPhase.DECIDE: (C.PROJECT_MANAGEMENT, C.DOCUMENTATION, C.AI_ASSISTANTS),
    WorkflowPhase.DESIGN: (C.DESIGN, C.AI_BUILDERS),
    WorkflowPhase.BUILD: (C.DEVELOPMENT, C.AI_BUILDERS, C.AI_ASSISTANTS, C.PROJECT_MANAGEMENT),
    WorkflowPhase.LAUNCH: (C.DEVELOPMENT, C.AUTOMATION, C.ANALYTICS),
    WorkflowPhase.REVIEW: (C.MEETINGS, C.COMMUNICATION, C.ANALYTICS),
    WorkflowPhase.ITERATE: (C.ANALYTICS, C.GROWTH, C.PROJECT_MANAGEMENT, C.DOCUMENTATION),
}

# Workspace tools that plausibly carry planning phases on their own
MULTI_PHASE_TOOLS = ("notion", "clickup", "linear", "asana", "monday")
MULTI_PHASE_ELIGIBLE = (WorkflowPhase.DISCOVER, WorkflowPhase.DECIDE, WorkflowPhase.ITERATE)

PLACEHOLDER_TOOLS = {
    WorkflowPhase.DISCOVER: "Documentation Tool",
    WorkflowPhase.DECIDE: "Project Management Tool",
    WorkflowPhase.DESIGN: "Design Tool",
    WorkflowPhase.BUILD: "Development Tool",
    WorkflowPhase.LAUNCH: "Deployment Tool",
    WorkflowPhase.REVIEW: "Meeting Tool",
    WorkflowPhase.ITERATE: "Analytics Tool",
}

PHASE_OUTCOMES = {
    WorkflowPhase.DISCOVER: "Validated problem statements",
    WorkflowPhase.DECIDE: "Prioritized, scoped roadmap",
    WorkflowPhase.DESIGN: "Reviewed designs ready for build",
    WorkflowPhase.BUILD: "Working feature implementation",
    WorkflowPhase.LAUNCH: "Shipped release with tracking in place",
    WorkflowPhase.REVIEW: "Feedback captured from the team and users",
    WorkflowPhase.ITERATE: "Next iteration plan",
}

# phase -> philosophy -> (ai role, human role)
PHASE_ROLES: dict[WorkflowPhase, dict[Philosophy, tuple[str, str]]] = {
    WorkflowPhase.DISCOVER: {
        Philosophy.AUTO_PILOT: (
            "Mine feedback and market signals for opportunities",
            "Pick which opportunities are worth chasing",
        ),
        Philosophy.HYBRID: (
            "Summarize research notes and cluster feedback",
            "Run interviews and sharpen the problem framing",
        ),
        Philosophy.CO_PILOT: (
            "Offer research templates",
            "Lead research and synthesis",
        ),
    },
    WorkflowPhase.DECIDE: {
        Philosophy.AUTO_PILOT: (
            "Draft specs, open tickets and estimate effort",
            "Approve scope and set priorities",
        ),
        Philosophy.HYBRID: (
            "Propose task breakdowns from the product brief",
            "Finalize scope and assign owners",
        ),
        Philosophy.CO_PILOT: (
            "Help tidy up documents",
            "Write specs and plan the work",
        ),
    },
    WorkflowPhase.DESIGN: {
        Philosophy.AUTO_PILOT: (
            "Generate layouts and clickable prototypes",
            "Choose a direction and review usability",
        ),
        Philosophy.HYBRID: (
            "Suggest layout variations from wireframes",
            "Own the design decisions",
        ),
        Philosophy.CO_PILOT: (
            "Provide component libraries",
            "Design screens and flows",
        ),
    },
    WorkflowPhase.BUILD: {
        Philosophy.AUTO_PILOT: (
            "Write code, generate tests and open pull requests",
            "Review code and hold quality gates",
        ),
        Philosophy.HYBRID: (
            "Pair on code and suggest changes",
            "Implement features and make the calls",
        ),
        Philosophy.CO_PILOT: (
            "Complete code and flag lint issues",
            "Write code and shape the architecture",
        ),
    },
    WorkflowPhase.LAUNCH: {
        Philosophy.AUTO_PILOT: (
            "Run release checklists and deploy",
            "Sign off the release",
        ),
        Philosophy.HYBRID: (
            "Prepare release notes and watch the rollout",
            "Decide when to ship",
        ),
        Philosophy.CO_PILOT: (
            "Check deployment configuration",
            "Drive the release",
        ),
    },
    WorkflowPhase.REVIEW: {
        Philosophy.AUTO_PILOT: (
            "Summarize meetings and compile reports",
            "Present outcomes to stakeholders",
        ),
        Philosophy.HYBRID: (
            "Transcribe meetings and draft summaries",
            "Run reviews and collect feedback",
        ),
        Philosophy.CO_PILOT: (
            "Transcribe meetings",
            "Run demos and gather feedback",
        ),
    },
    WorkflowPhase.ITERATE: {
        Philosophy.AUTO_PILOT: (
            "Analyze metrics and file improvement tickets",
            "Make strategic calls on what comes next",
        ),
        Philosophy.HYBRID: (
            "Build reports and propose iterations",
            "Decide on next steps",
        ),
        Philosophy.CO_PILOT: (
            "Surface the relevant numbers",
            "Analyze results and plan the next cycle",
        ),
    },
}


@dataclass(frozen=True)
class WorkflowStep:
    phase: WorkflowPhase
    tool: str
    tool_id: Optional[str]
    ai_role: str
    human_role: str
    outcome: str

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "tool": self.tool,
            "tool_id": self.tool_id,
            "ai_role": self.ai_role,
            "human_role": self.human_role,
            "outcome": self.outcome,
        }


def find_tool_for_phase(tools: Sequence[Tool], phase: WorkflowPhase) -> Optional[Tool]:
    for category in PHASE_CATEGORIES[phase]:
        for tool in tools:
            if tool.category == category:
                return tool

    if phase in MULTI_PHASE_ELIGIBLE:
        for tool in tools:
            if tool.name in MULTI_PHASE_TOOLS:
                return tool

    return tools[0] if tools else None


def build_workflow(tools: Sequence[Tool], philosophy: Optional[Philosophy]) -> list[WorkflowStep]:
    """One step per phase, in phase order."""
    roles_key = philosophy if philosophy in (Philosophy.AUTO_PILOT, Philosophy.HYBRID) else Philosophy.CO_PILOT

    steps = []
    for phase in WorkflowPhase:
        tool = find_tool_for_phase(tools, phase)
        ai_role, human_role = PHASE_ROLES[phase][roles_key]
        steps.append(WorkflowStep(
            phase=phase,
            tool=tool.display_name if tool else PLACEHOLDER_TOOLS[phase],
            tool_id=tool.id if tool else None,
            ai_role=ai_role,
            human_role=human_role,
            outcome=PHASE_OUTCOMES[phase],
        ))
    return steps
