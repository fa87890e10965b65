"""Split a bar width between the four food categories with no gap at the end.

The last category with a nonzero share takes whatever width is left, so the
segments always add up to exactly ``total_width``; rounding drift shows up in
that final segment only.
"""
from typing import List

from mealboard.domain.Dashboard import Breakdown
from mealboard.utilities.constants import CATEGORY_KEYS


def proportion_bar(breakdown: Breakdown, total_width: float) -> List[float]:
    """Segment widths in category display order."""
    values = [max(breakdown.value_for(key), 0.0) for key in CATEGORY_KEYS]
    total = sum(values)
    if total == 0:
        return [0.0] * len(values)

    last_nonzero = max(i for i, v in enumerate(values) if v > 0)
    widths: List[float] = []
    assigned = 0.0
    for index, value in enumerate(values):
        if value <= 0:
            widths.append(0.0)
        elif index == last_nonzero:
            widths.append(total_width - assigned)
        else:
            width = min(value / total * total_width, total_width - assigned)
            widths.append(width)
            assigned += width
    return widths


__all__ = ['proportion_bar']
