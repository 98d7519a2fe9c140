"""Assessment input schema - validation at the engine boundary

Everything past this model works with typed enums; free-text values are
rejected here with a pydantic ValidationError.
"""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stack_engine.catalog.relations import ReplacementContext
from stack_engine.catalog.types import (
    AnchorType,
    ComplianceRequirement,
    CostSensitivity,
    PainPoint,
    Philosophy,
    ProductSensitivity,
    Stage,
    TeamSize,
    TechSavviness,
)
from stack_engine.scoring.scorer import DEFAULT_FAMILIARITY_BONUS, ScoringContext
from stack_engine.scoring.weights import WeightSignals

TOOL_NAME_SEPARATORS = re.compile(r"[,;]")


def _member(enum_cls, value):
    """Accept a member, its value ("Pre-Seed") or its name ("PRE_SEED")."""
    if value is None:
        return None
    return enum_cls.from_string(value)


def _members(enum_cls, values):
    if values is None:
        return []
    if isinstance(values, str):
        values = [v for v in TOOL_NAME_SEPARATORS.split(values) if v.strip()]
    result = []
    for value in values:
        member = enum_cls.from_string(value)
        if member not in result:
            result.append(member)
    return result


class AssessmentInput(BaseModel):
    """A team's answers to the stack assessment"""
    model_config = ConfigDict(json_schema_extra={
        "example": {
            "company": "Acme Labs",
            "stage": "Pre-Seed",
            "team_size": "SMALL",
            "current_tools": "Notion, Slack, Jira",
            "philosophy": "Hybrid",
            "tech_savviness": "Decent",
            "budget_per_user": 40,
            "cost_sensitivity": "Balanced",
            "sensitivity": "Low-Stakes",
            "anchor_type": "The Doc-Centric Team (Notion)",
            "pain_points": ["TOO_MANY_TOOLS"],
        }
    })

    company: str = Field(..., min_length=1, max_length=200, description="Company name")
    stage: Stage = Field(default=Stage.PRE_SEED)
    team_size: TeamSize = Field(default=TeamSize.SMALL)
    current_tools: str = Field(
        default="",
        max_length=5000,
        description="Comma or semicolon separated tool names"
    )
    philosophy: Philosophy = Field(default=Philosophy.HYBRID)
    tech_savviness: TechSavviness = Field(default=TechSavviness.DECENT)
    budget_per_user: float = Field(default=0.0, ge=0, description="Monthly budget per user")
    cost_sensitivity: CostSensitivity = Field(default=CostSensitivity.BALANCED)
    sensitivity: ProductSensitivity = Field(default=ProductSensitivity.LOW_STAKES)
    high_stakes_requirements: list[ComplianceRequirement] = Field(default_factory=list)
    anchor_type: AnchorType = Field(default=AnchorType.NONE)
    other_anchor_text: Optional[str] = Field(default=None, max_length=200)
    pain_points: list[PainPoint] = Field(default_factory=list)
    solo_founder: bool = False

    @field_validator('company')
    @classmethod
    def validate_company(cls, v):
        """Ensure company is not just whitespace"""
        if not v.strip():
            raise ValueError("Company cannot be empty or whitespace only")
        return v.strip()

    @field_validator('stage', mode='before')
    @classmethod
    def parse_stage(cls, v):
        return _member(Stage, v)

    @field_validator('team_size', mode='before')
    @classmethod
    def parse_team_size(cls, v):
        return _member(TeamSize, v)

    @field_validator('philosophy', mode='before')
    @classmethod
    def parse_philosophy(cls, v):
        return _member(Philosophy, v)

    @field_validator('tech_savviness', mode='before')
    @classmethod
    def parse_tech_savviness(cls, v):
        return _member(TechSavviness, v)

    @field_validator('cost_sensitivity', mode='before')
    @classmethod
    def parse_cost_sensitivity(cls, v):
        return _member(CostSensitivity, v)

    @field_validator('sensitivity', mode='before')
    @classmethod
    def parse_sensitivity(cls, v):
        return _member(ProductSensitivity, v)

    @field_validator('anchor_type', mode='before')
    @classmethod
    def parse_anchor_type(cls, v):
        return _member(AnchorType, v)

    @field_validator('high_stakes_requirements', mode='before')
    @classmethod
    def parse_requirements(cls, v):
        return _members(ComplianceRequirement, v)

    @field_validator('pain_points', mode='before')
    @classmethod
    def parse_pain_points(cls, v):
        return _members(PainPoint, v)

    def tool_names(self) -> list[str]:
        """Split current_tools into trimmed, non-empty names"""
        return [
            name.strip()
            for name in TOOL_NAME_SEPARATORS.split(self.current_tools)
            if name.strip()
        ]

    @property
    def is_high_stakes(self) -> bool:
        return self.sensitivity == ProductSensitivity.HIGH_STAKES

    def weight_signals(self) -> WeightSignals:
        return WeightSignals(
            pain_points=tuple(self.pain_points),
            stage=self.stage,
            cost_sensitivity=self.cost_sensitivity,
            philosophy=self.philosophy,
        )

    def scoring_context(
        self, user_tool_ids, familiarity_bonus: float = DEFAULT_FAMILIARITY_BONUS
    ) -> ScoringContext:
        return ScoringContext(
            team_size=self.team_size,
            stage=self.stage,
            budget_per_user=self.budget_per_user,
            philosophy=self.philosophy,
            user_tool_ids=frozenset(user_tool_ids),
            familiarity_bonus=familiarity_bonus,
        )

    def replacement_context(self) -> ReplacementContext:
        return ReplacementContext(
            cost_sensitivity=self.cost_sensitivity,
            tech_savviness=self.tech_savviness,
            team_size=self.team_size,
            requires_compliance=frozenset(self.high_stakes_requirements),
            prefer_ai_native=self.philosophy == Philosophy.AUTO_PILOT,
        )
