"""
60/30/10 design rule evaluation.

The three dominant colors should cover about 60%, 30% and 10% of the image,
each within an absolute margin of RULE_MARGIN percentage points.
"""

from typing import List, Sequence

from ...schemas import ColorPercentage, RuleReport, RuleSlot

RULE_TARGETS = (60.0, 30.0, 10.0)
RULE_MARGIN = 5.0
SLOT_ROLES = ("primary", "secondary", "accent")


def target_for_rank(index: int) -> float:
    return RULE_TARGETS[index]


def check_design_rule(colors: Sequence[ColorPercentage]) -> bool:
    """True iff there are exactly three colors, each within margin of its target."""
    if len(colors) != len(RULE_TARGETS):
        return False
    return all(
        abs(color.percentage - target) <= RULE_MARGIN
        for color, target in zip(colors, RULE_TARGETS)
    )


def evaluate_design_rule(colors: Sequence[ColorPercentage]) -> RuleReport:
    """Build a per-slot rule report; ``follows_rule`` matches ``check_design_rule``."""
    slots: List[RuleSlot] = []
    for index, color in enumerate(colors[:len(RULE_TARGETS)]):
        target = target_for_rank(index)
        variance = color.percentage - target
        slots.append(RuleSlot(
            role=SLOT_ROLES[index],
            color=color.color,
            target=target,
            actual=color.percentage,
            variance=variance,
            within_margin=abs(variance) <= RULE_MARGIN,
        ))

    return RuleReport(
        follows_rule=check_design_rule(colors),
        margin=RULE_MARGIN,
        targets=list(RULE_TARGETS),
        slots=slots,
    )
