"""Day column layout: one consistent set of sizes for label, donut and meal cards.

All values are PDF points. The solver prefers the target card height, shrinks
cards when the body is short and never returns a card taller than what fits.
"""
import math
from typing import Tuple

from mealboard.domain.Layout import LayoutPlan
from mealboard.utilities.constants import DONUT_HEIGHT_FACTOR


def clamp(value: float, lo: float, hi: float) -> float:
    """Bound value to [lo, hi]; anything non-finite resolves to lo."""
    if not math.isfinite(value):
        return lo
    if not math.isfinite(hi):
        return lo
    return min(max(value, lo), hi)


def solve_column_layout(
    body_height: float,
    slot_count: int,
    donut_bounds: Tuple[float, float],
    label_block_height: float,
    donut_spacing: float,
    card_gap: float,
    target_card_height: float,
    min_card_height: float,
) -> LayoutPlan:
    if slot_count < 1:
        raise ValueError(f"slot_count must be at least 1, got {slot_count}")
    min_radius, max_radius = donut_bounds
    donut_radius = clamp(body_height * DONUT_HEIGHT_FACTOR, min_radius, max_radius)
    donut_block_height = donut_radius * 2 + donut_spacing
    available_for_cards = max(body_height - label_block_height - donut_block_height, 0)
    if available_for_cards > 0:
        # gaps alone can eat the space; cards shrink to zero, never below
        max_card_height = max((available_for_cards - card_gap * (slot_count - 1)) / slot_count, 0)
    else:
        max_card_height = min_card_height
    card_height = clamp(target_card_height, min(min_card_height, max_card_height), max_card_height)

    return LayoutPlan(
        donut_radius=donut_radius,
        donut_block_height=donut_block_height,
        donut_spacing=donut_spacing,
        label_block_height=label_block_height,
        card_height=card_height,
        card_gap=card_gap,
        body_height=body_height,
        slot_count=slot_count,
    )


def fits(plan: LayoutPlan, epsilon: float = 1e-6) -> bool:
    return plan.column_usage() <= plan.body_height + epsilon


__all__ = ['clamp', 'solve_column_layout', 'fits']
