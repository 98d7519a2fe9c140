# stack_engine/logging.py
"""Structured logging for engine events."""

import json
import logging
from datetime import datetime, timezone


class EngineLogger:
    """Structured JSON logger for engine events."""

    def __init__(self, name: str = "stack_engine", level: str = "INFO"):
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(message)s"))
            self.logger.addHandler(handler)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    def _log(self, level: int, event: str, **kwargs):
        """Log a structured event."""
        data = {
            "event": event,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **kwargs
        }
        self.logger.log(level, json.dumps(data))

    def pipeline_started(self, company: str, tool_name_count: int):
        """Log pipeline start."""
        self._log(
            logging.INFO,
            "pipeline_started",
            company=company,
            tool_name_count=tool_name_count
        )

    def pipeline_complete(self, scenario_count: int, duration_seconds: float):
        """Log pipeline completion."""
        self._log(
            logging.INFO,
            "pipeline_complete",
            scenario_count=scenario_count,
            duration_seconds=round(duration_seconds, 4)
        )

    def resolution_miss(self, name: str):
        """Log a tool name with no confident catalog match."""
        self._log(logging.WARNING, "resolution_miss", name=name)

    def empty_category_pool(self, scenario_type: str, category: str):
        """Log a category with no allowed candidates."""
        self._log(
            logging.WARNING,
            "empty_category_pool",
            scenario_type=scenario_type,
            category=category
        )

    def scoring_degeneracy(self, scenario_type: str):
        """Log a weight vector that clamped to all zeros."""
        self._log(logging.WARNING, "scoring_degeneracy", scenario_type=scenario_type)

    def quality_floor_skip(self, scenario_type: str, tool_id: str, score: float, floor: float):
        """Log a candidate skipped for scoring under the quality floor."""
        self._log(
            logging.DEBUG,
            "quality_floor_skip",
            scenario_type=scenario_type,
            tool_id=tool_id,
            score=round(score, 2),
            floor=round(floor, 2)
        )

    def redundancy_removed(self, tool_id: str, kept_tool_id: str, reason: str):
        """Log a tool removed by redundancy resolution."""
        self._log(
            logging.INFO,
            "redundancy_removed",
            tool_id=tool_id,
            kept_tool_id=kept_tool_id,
            reason=reason
        )

    def replacement_applied(self, from_tool_id: str, to_tool_id: str, reason_type: str):
        """Log a replacement swapped into a bundle."""
        self._log(
            logging.INFO,
            "replacement_applied",
            from_tool_id=from_tool_id,
            to_tool_id=to_tool_id,
            reason_type=reason_type
        )

    def no_allowed_tools(self, company: str):
        """Log an empty allowed-tool pool."""
        self._log(logging.WARNING, "no_allowed_tools", company=company)

    def infrastructure_error(self, collaborator: str, message: str):
        """Log a collaborator failure."""
        self._log(
            logging.ERROR,
            "infrastructure_error",
            collaborator=collaborator,
            message=message
        )
