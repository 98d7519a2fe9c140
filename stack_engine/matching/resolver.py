# stack_engine/matching/resolver.py
"""Resolve free-text tool names to catalog tools.

Order of attempts for each input name:
1. exact match on canonical name (confidence 1.0)
2. exact match on any alias (confidence 0.95)
3. fuzzy match by edit distance against canonical name, display name and
   every alias of every tool, bounded to max(2, floor(0.3 * len(name)))

A fuzzy match is accepted only above the confidence threshold; anything else
resolves to None, meaning "not in catalog".
"""

import logging
from dataclasses import dataclass
from typing import Optional

from stack_engine.catalog.tool import Tool

logger = logging.getLogger(__name__)

ALIAS_CONFIDENCE = 0.95
DEFAULT_MIN_CONFIDENCE = 0.6


@dataclass(frozen=True)
class ToolMatch:
    """A resolved tool name."""

    tool: Tool
    confidence: float  # 0-1, 1 = exact match
    matched_on: str    # "name" | "alias" | "fuzzy"

    def to_dict(self) -> dict:
        return {
            "tool_id": self.tool.id,
            "tool": self.tool.display_name,
            "confidence": round(self.confidence, 4),
            "matched_on": self.matched_on,
        }


def levenshtein_distance(s1: str, s2: str) -> int:
    """Minimum number of single-character insertions, deletions or substitutions.

    >>> levenshtein_distance("kitten", "sitting")
    3
    """
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    if len(s1) > len(s2):
        s1, s2 = s2, s1

    prev_row = list(range(len(s1) + 1))
    curr_row = [0] * (len(s1) + 1)

    for i, c2 in enumerate(s2):
        curr_row[0] = i + 1
        for j, c1 in enumerate(s1):
            cost = 0 if c1 == c2 else 1
            curr_row[j + 1] = min(
                prev_row[j + 1] + 1,  # deletion
                curr_row[j] + 1,      # insertion
                prev_row[j] + cost,   # substitution
            )
        prev_row, curr_row = curr_row, prev_row

    return prev_row[len(s1)]


def max_edit_distance(name: str) -> int:
    """Allowed edit distance for a normalized name (30% of its length, at least 2)."""
    return max(2, int(len(name) * 0.3))


def normalize_name(name: str) -> str:
    return name.strip().lower()


class ToolNameResolver:
    """Matches user-supplied tool names to canonical catalog entries."""

    def __init__(self, min_confidence: float = DEFAULT_MIN_CONFIDENCE):
        self.min_confidence = min_confidence

    def resolve(self, names: list[str], catalog: list[Tool]) -> dict[str, Optional[ToolMatch]]:
        """Resolve every name. Keys keep input order; misses map to None."""
        results: dict[str, Optional[ToolMatch]] = {}
        for name in names:
            if name in results:
                continue
            results[name] = self.resolve_one(name, catalog)
        return results

    def resolve_one(self, name: str, catalog: list[Tool]) -> Optional[ToolMatch]:
        normalized = normalize_name(name)
        if not normalized:
            return None

        for tool in catalog:
            if tool.name == normalized:
                return ToolMatch(tool=tool, confidence=1.0, matched_on="name")

        for tool in catalog:
            if any(alias.lower() == normalized for alias in tool.aliases):
                return ToolMatch(tool=tool, confidence=ALIAS_CONFIDENCE, matched_on="alias")

        return self.find_fuzzy_match(normalized, catalog)

    def find_fuzzy_match(self, name: str, catalog: list[Tool]) -> Optional[ToolMatch]:
        """Closest candidate by edit distance; first encountered wins ties."""
        limit = max_edit_distance(name)
        best: Optional[ToolMatch] = None
        best_distance = limit + 1

        for tool in catalog:
            candidates = [tool.name, tool.display_name.lower()]
            candidates.extend(alias.lower() for alias in tool.aliases)

            for candidate in candidates:
                distance = levenshtein_distance(name, candidate)
                if distance < best_distance:
                    best_distance = distance
                    best = ToolMatch(
                        tool=tool,
                        confidence=1 - distance / max(len(name), len(candidate)),
                        matched_on="fuzzy",
                    )

        if best is not None and best.confidence > self.min_confidence:
            return best

        if best is not None:
            logger.debug(
                "Fuzzy candidate %r for %r rejected (confidence %.2f)",
                best.tool.name, name, best.confidence,
            )
        return None
