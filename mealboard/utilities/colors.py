"""Hex color parsing for palette entries coming from user records."""
import re

from reportlab.lib.colors import Color, HexColor

FALLBACK_HEX = "#808080"
_HEX_PATTERN = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


def parse_color(value: str, fallback: str = FALLBACK_HEX) -> Color:
    """ReportLab color for '#rgb' / '#rrggbb'; anything else maps to the fallback."""
    match = _HEX_PATTERN.match((value or '').strip())
    if not match:
        return HexColor(fallback)
    digits = match.group(1)
    if len(digits) == 3:
        digits = ''.join(ch * 2 for ch in digits)
    return HexColor(f"#{digits}")


__all__ = ['parse_color']
