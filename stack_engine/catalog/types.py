# stack_engine/catalog/types.py
"""Enumerations shared by the catalog, the assessment and the engine."""

from enum import Enum
from typing import Optional


class _LookupEnum(Enum):
    """Enum that can be looked up by member name or by value."""

    @classmethod
    def from_string(cls, value: str):
        """Convert a member name ("PRE_SEED") or value ("Pre-Seed") to a member."""
        member = cls.lookup(value)
        if member is None:
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        return member

    @classmethod
    def lookup(cls, value) -> Optional["_LookupEnum"]:
        """Like from_string but returns None for unknown values."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        raw = value.strip()
        for member in cls:
            if member.value == raw or member.name == raw.upper().replace("-", "_"):
                return member
        return None


class ToolCategory(_LookupEnum):
    PROJECT_MANAGEMENT = "PROJECT_MANAGEMENT"
    DOCUMENTATION = "DOCUMENTATION"
    COMMUNICATION = "COMMUNICATION"
    DEVELOPMENT = "DEVELOPMENT"
    DESIGN = "DESIGN"
    MEETINGS = "MEETINGS"
    AUTOMATION = "AUTOMATION"
    AI_ASSISTANTS = "AI_ASSISTANTS"
    AI_BUILDERS = "AI_BUILDERS"
    ANALYTICS = "ANALYTICS"
    GROWTH = "GROWTH"
    OTHER = "OTHER"


class Complexity(_LookupEnum):
    SIMPLE = "SIMPLE"
    MODERATE = "MODERATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


class PricingTier(_LookupEnum):
    FREE = "FREE"
    FREEMIUM = "FREEMIUM"
    STARTER = "STARTER"
    PROFESSIONAL = "PROFESSIONAL"
    ENTERPRISE = "ENTERPRISE"


class TeamSize(_LookupEnum):
    SOLO = "SOLO"
    SMALL = "SMALL"            # 2-5
    MEDIUM = "MEDIUM"          # 6-20
    LARGE = "LARGE"            # 21-100
    ENTERPRISE = "ENTERPRISE"  # 100+


class Stage(_LookupEnum):
    BOOTSTRAPPING = "Bootstrapping"
    PRE_SEED = "Pre-Seed"
    EARLY_SEED = "Early-Seed"
    GROWTH = "Growth"
    ESTABLISHED = "Established"


class TechSavviness(_LookupEnum):
    NEWBIE = "Newbie"
    DECENT = "Decent"
    NINJA = "Ninja"


class Philosophy(_LookupEnum):
    """Automation philosophy of the team."""

    CO_PILOT = "Co-Pilot"
    HYBRID = "Hybrid"
    AUTO_PILOT = "Auto-Pilot"


class CostSensitivity(_LookupEnum):
    PRICE_FIRST = "Price-First"
    BALANCED = "Balanced"
    VALUE_FIRST = "Value-First"


class ProductSensitivity(_LookupEnum):
    LOW_STAKES = "Low-Stakes"
    HIGH_STAKES = "High-Stakes"


class ComplianceRequirement(_LookupEnum):
    SELF_HOSTED = "SELF_HOSTED"
    SOC2 = "SOC2"
    HIPAA = "HIPAA"
    EU_DATA_RESIDENCY = "EU_DATA_RESIDENCY"
    AIR_GAPPED = "AIR_GAPPED"


class AnchorType(_LookupEnum):
    DOC_CENTRIC = "The Doc-Centric Team (Notion)"
    DEV_CENTRIC = "The Dev-Centric Team (GitHub/Cursor)"
    COMM_CENTRIC = "The Communication-Centric Team (Slack)"
    OTHER = "Other"
    NONE = "We're just starting! (no Anchor tool yet)"


class PainPoint(_LookupEnum):
    TOO_MANY_TOOLS = "TOO_MANY_TOOLS"
    TOOLS_DONT_TALK = "TOOLS_DONT_TALK"
    OVERPAYING = "OVERPAYING"
    TOO_MUCH_MANUAL_WORK = "TOO_MUCH_MANUAL_WORK"
    DISORGANIZED = "DISORGANIZED"
    SLOW_APPROVALS = "SLOW_APPROVALS"
    NO_VISIBILITY = "NO_VISIBILITY"


class ScenarioType(_LookupEnum):
    MONO_STACK = "MONO_STACK"
    NATIVE_INTEGRATOR = "NATIVE_INTEGRATOR"
    AGENTIC_LEAN = "AGENTIC_LEAN"
    STARTER_PACK = "STARTER_PACK"


class RedundancyStrength(_LookupEnum):
    NICHE = "NICHE"
    PARTIAL = "PARTIAL"
    FULL = "FULL"


class RecommendationHint(_LookupEnum):
    PREFER_A = "PREFER_A"
    PREFER_B = "PREFER_B"
    CONTEXT_DEPENDENT = "CONTEXT_DEPENDENT"


class IntegrationQuality(_LookupEnum):
    NATIVE = "NATIVE"
    DEEP = "DEEP"
    BASIC = "BASIC"
    WEBHOOK_ONLY = "WEBHOOK_ONLY"
    ZAPIER_ONLY = "ZAPIER_ONLY"


class ReplacementReason(_LookupEnum):
    COST_SAVINGS = "COST_SAVINGS"
    SIMPLER_UX = "SIMPLER_UX"
    AI_NATIVE = "AI_NATIVE"
    FEATURE_SUPERSET = "FEATURE_SUPERSET"
    CONSOLIDATION = "CONSOLIDATION"
    COMPLIANCE = "COMPLIANCE"
    BETTER_INTEGRATION = "BETTER_INTEGRATION"


class WorkflowPhase(_LookupEnum):
    DISCOVER = "Discover"
    DECIDE = "Decide"
    DESIGN = "Design"
    BUILD = "Build"
    LAUNCH = "Launch"
    REVIEW = "Review"
    ITERATE = "Iterate"


# Quality tier -> score used by the integration score
INTEGRATION_QUALITY_SCORES = {
    IntegrationQuality.NATIVE: 100,
    IntegrationQuality.DEEP: 80,
    IntegrationQuality.BASIC: 50,
    IntegrationQuality.WEBHOOK_ONLY: 30,
    IntegrationQuality.ZAPIER_ONLY: 15,
}
