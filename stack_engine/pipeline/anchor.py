# stack_engine/pipeline/anchor.py
"""Pick the anchor tool out of the user's resolved tools."""

from typing import Optional, Sequence

from stack_engine.catalog.tool import Tool
from stack_engine.catalog.types import AnchorType, ToolCategory

# anchor type -> (preferred canonical names, accepted categories)
ANCHOR_RULES: dict[AnchorType, tuple[tuple[str, ...], tuple[ToolCategory, ...]]] = {
    AnchorType.DOC_CENTRIC: (("notion",), (ToolCategory.DOCUMENTATION,)),
    AnchorType.DEV_CENTRIC: (
        ("github", "gitlab", "cursor"),
        (ToolCategory.DEVELOPMENT, ToolCategory.AI_BUILDERS),
    ),
    AnchorType.COMM_CENTRIC: (("slack", "discord", "teams"), (ToolCategory.COMMUNICATION,)),
}


def resolve_anchor(
    anchor_type: AnchorType,
    user_tools: Sequence[Tool],
    other_anchor_text: Optional[str] = None,
) -> Optional[Tool]:
    """First user tool, in user order, that satisfies the anchor preference."""
    if anchor_type == AnchorType.OTHER:
        if not other_anchor_text or not other_anchor_text.strip():
            return None
        return next((t for t in user_tools if t.matches_name(other_anchor_text)), None)

    rule = ANCHOR_RULES.get(anchor_type)
    if rule is None:
        return None

    names, categories = rule
    return next(
        (t for t in user_tools if t.name in names or t.category in categories),
        None,
    )
