# stack_engine/catalog/tool.py
"""Catalog tool entity and popularity composite."""

from dataclasses import dataclass, field
from typing import Optional

from stack_engine.catalog.types import (
    Complexity,
    PricingTier,
    Stage,
    TeamSize,
    TechSavviness,
    ToolCategory,
)

POPULARITY_WEIGHTS = {
    "adoption": 0.30,
    "sentiment": 0.20,
    "momentum": 0.20,
    "ecosystem": 0.15,
    "reliability": 0.15,
}

DEFAULT_SUB_SCORE = 50


def compute_popularity_score(
    adoption: Optional[float] = None,
    sentiment: Optional[float] = None,
    momentum: Optional[float] = None,
    ecosystem: Optional[float] = None,
    reliability: Optional[float] = None,
) -> int:
    """Weighted composite of the five popularity sub-scores, clamped to 0-100.

    Missing sub-scores count as 50.
    """
    values = {
        "adoption": adoption,
        "sentiment": sentiment,
        "momentum": momentum,
        "ecosystem": ecosystem,
        "reliability": reliability,
    }
    composite = round(sum(
        (DEFAULT_SUB_SCORE if value is None else value) * POPULARITY_WEIGHTS[key]
        for key, value in values.items()
    ))
    return max(0, min(100, composite))


def _enum_set(enum_cls, values) -> frozenset:
    return frozenset(enum_cls.from_string(v) for v in (values or []))


@dataclass(frozen=True)
class Tool:
    """A catalog tool. Read-only for the whole pipeline run."""

    id: str
    name: str
    display_name: str
    category: ToolCategory
    aliases: tuple[str, ...] = ()
    complexity: Complexity = Complexity.MODERATE
    pricing_tier: PricingTier = PricingTier.FREEMIUM
    estimated_cost_per_user: Optional[float] = None
    has_free_forever: bool = False

    # Compliance flags
    soc2: bool = False
    hipaa: bool = False
    gdpr: bool = False
    eu_data_residency: bool = False
    self_hosted: bool = False
    air_gapped: bool = False

    has_ai_features: bool = False

    popularity_score: Optional[float] = None
    popularity_adoption: Optional[float] = None
    popularity_sentiment: Optional[float] = None
    popularity_momentum: Optional[float] = None
    popularity_ecosystem: Optional[float] = None
    popularity_reliability: Optional[float] = None

    best_for_team_size: frozenset = field(default_factory=frozenset)
    best_for_stage: frozenset = field(default_factory=frozenset)
    best_for_tech_savviness: frozenset = field(default_factory=frozenset)

    @property
    def popularity(self) -> float:
        """Stored composite popularity, 50 when absent."""
        return DEFAULT_SUB_SCORE if self.popularity_score is None else self.popularity_score

    @property
    def momentum(self) -> float:
        return DEFAULT_SUB_SCORE if self.popularity_momentum is None else self.popularity_momentum

    def matches_name(self, value: str) -> bool:
        """Case-insensitive match against canonical name, display name or any alias."""
        needle = value.strip().lower()
        return (
            self.name == needle
            or self.display_name.lower() == needle
            or any(alias.lower() == needle for alias in self.aliases)
        )

    def to_dict(self) -> dict:
        """Compact representation for results."""
        return {
            "id": self.id,
            "name": self.name,
            "display_name": self.display_name,
            "category": self.category.value,
            "estimated_cost_per_user": self.estimated_cost_per_user,
            "has_ai_features": self.has_ai_features,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Tool":
        """Create from a catalog record (camelCase or snake_case keys)."""

        def get(snake: str, camel: str = None, default=None):
            if snake in data:
                return data[snake]
            if camel and camel in data:
                return data[camel]
            return default

        sub_scores = {
            "adoption": get("popularity_adoption", "popularityAdoption"),
            "sentiment": get("popularity_sentiment", "popularitySentiment"),
            "momentum": get("popularity_momentum", "popularityMomentum"),
            "ecosystem": get("popularity_ecosystem", "popularityEcosystem"),
            "reliability": get("popularity_reliability", "popularityReliability"),
        }
        popularity = get("popularity_score", "popularityScore")
        if popularity is None and any(v is not None for v in sub_scores.values()):
            popularity = compute_popularity_score(**sub_scores)

        cost = get("estimated_cost_per_user", "estimatedCostPerUser")

        return cls(
            id=str(data["id"]),
            name=str(data["name"]).strip().lower(),
            display_name=get("display_name", "displayName", data["name"]),
            category=ToolCategory.from_string(data["category"]),
            aliases=tuple(get("aliases", default=[]) or []),
            complexity=Complexity.from_string(get("complexity", default="MODERATE")),
            pricing_tier=PricingTier.from_string(
                get("pricing_tier", "typicalPricingTier", "FREEMIUM")
            ),
            estimated_cost_per_user=None if cost is None else float(cost),
            has_free_forever=bool(get("has_free_forever", "hasFreeForever", False)),
            soc2=bool(get("soc2", default=False)),
            hipaa=bool(get("hipaa", default=False)),
            gdpr=bool(get("gdpr", default=False)),
            eu_data_residency=bool(get("eu_data_residency", "euDataResidency", False)),
            self_hosted=bool(get("self_hosted", "selfHosted", False)),
            air_gapped=bool(get("air_gapped", "airGapped", False)),
            has_ai_features=bool(get("has_ai_features", "hasAiFeatures", False)),
            popularity_score=popularity,
            popularity_adoption=sub_scores["adoption"],
            popularity_sentiment=sub_scores["sentiment"],
            popularity_momentum=sub_scores["momentum"],
            popularity_ecosystem=sub_scores["ecosystem"],
            popularity_reliability=sub_scores["reliability"],
            best_for_team_size=_enum_set(TeamSize, get("best_for_team_size", "bestForTeamSize")),
            best_for_stage=_enum_set(Stage, get("best_for_stage", "bestForStage")),
            best_for_tech_savviness=_enum_set(
                TechSavviness, get("best_for_tech_savviness", "bestForTechSavviness")
            ),
        )
