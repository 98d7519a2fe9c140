"""Assessment validation, pool filtering, anchor resolution and the decision pipeline."""

from stack_engine.pipeline.anchor import resolve_anchor
from stack_engine.pipeline.assessment import AssessmentInput
from stack_engine.pipeline.decision import SUPPORTED_SCENARIOS, DecisionPipeline, PipelineResult
from stack_engine.pipeline.filters import filter_allowed_tools

__all__ = [
    "AssessmentInput",
    "DecisionPipeline",
    "PipelineResult",
    "SUPPORTED_SCENARIOS",
    "filter_allowed_tools",
    "resolve_anchor",
]
