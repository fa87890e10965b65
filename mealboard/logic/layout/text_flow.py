"""Greedy word wrapping inside a fixed-width box."""
import re
from typing import Callable, List, Optional

from reportlab.pdfbase.pdfmetrics import stringWidth

from mealboard.utilities.constants import ELLIPSIS

Measurer = Callable[[str], float]

_TRAILING_PERIODS = re.compile(r'\.*$')


def font_measurer(font_name: str, font_size: float) -> Measurer:
    """Width function for a registered ReportLab font at a fixed size."""
    def measure(text: str) -> float:
        return stringWidth(text, font_name, font_size)
    return measure


def wrap(text: str, measure: Measurer, max_width: float, max_lines: Optional[int] = None) -> List[str]:
    """Split text into lines no wider than max_width.

    When more than max_lines lines are needed, the output is cut to max_lines
    and the last kept line ends with an ellipsis instead of its trailing periods.
    A word wider than max_width on its own still gets its own line.
    """
    if not text:
        return []
    lines: List[str] = []
    current = ''
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if measure(candidate) <= max_width:
            current = candidate
        else:
            if current:
                lines.append(current)
            current = word
    if current:
        lines.append(current)

    if max_lines is not None and len(lines) > max_lines:
        if max_lines <= 0:
            return []
        trimmed = lines[:max_lines]
        trimmed[-1] = _TRAILING_PERIODS.sub('', trimmed[-1], count=1) + ELLIPSIS
        return trimmed
    return lines


def fit_line(text: str, measure: Measurer, max_width: float) -> str:
    """Single line no wider than max_width, cut at a character when one word is too long."""
    lines = wrap(text, measure, max_width, 1)
    if not lines:
        return ''
    line = lines[0]
    if measure(line) <= max_width:
        return line
    base = line[:-len(ELLIPSIS)] if line.endswith(ELLIPSIS) else line
    while base and measure(base.rstrip() + ELLIPSIS) > max_width:
        base = base[:-1]
    base = base.rstrip()
    return base + ELLIPSIS if base else ''


__all__ = ['Measurer', 'font_measurer', 'wrap', 'fit_line']
