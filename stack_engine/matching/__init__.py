"""Tool name resolution."""

from stack_engine.matching.resolver import (
    ToolMatch,
    ToolNameResolver,
    levenshtein_distance,
    max_edit_distance,
)

__all__ = ["ToolMatch", "ToolNameResolver", "levenshtein_distance", "max_edit_distance"]
