"""Page geometry, typography, card sizing, category order and default palette for the dashboard page."""
from typing import Final

# Page geometry (landscape US Letter, in inches unless suffixed _PT)
PDF_POINTS_PER_INCH: Final[int] = 72
LETTER_WIDTH_IN: Final[float] = 11
LETTER_HEIGHT_IN: Final[float] = 8.5
PAGE_MARGIN_IN: Final[float] = 0.35
HEADER_BLOCK_HEIGHT_IN: Final[float] = 1.45
HEADER_GAP_IN: Final[float] = 0.2
LEGEND_WIDTH_IN: Final[float] = 3.6
LEGEND_GAP_IN: Final[float] = 0.3

# Grid
DAY_COLUMN_COUNT: Final[int] = 7
DAY_COLUMN_GUTTER_IN: Final[float] = 0.1
DAY_COLUMN_MEAL_SLOTS: Final[int] = 3
MEAL_CARD_GAP_IN: Final[float] = 0.08

# Charts
DONUT_RADIUS_IN: Final[float] = 0.42
DONUT_MIN_RADIUS_FACTOR: Final[float] = 0.65
DONUT_HEIGHT_FACTOR: Final[float] = 0.12
DONUT_INNER_RATIO: Final[float] = 0.55
BRAND_CIRCLE_DIAMETER_IN: Final[float] = 0.75

# Typography
HEADING_FONT: Final[str] = "Helvetica-Bold"
BODY_FONT: Final[str] = "Helvetica"
HEADING_FONT_SIZE_PT: Final[float] = 32
SUBHEAD_FONT_SIZE_PT: Final[float] = 24
BODY_FONT_SIZE_PT: Final[float] = 11.5
LABEL_FONT_SIZE_PT: Final[float] = 9
LABEL_BLOCK_SPACING_PT: Final[float] = 12
DONUT_BLOCK_SPACING_PT: Final[float] = 10

# Cards
CARD_TARGET_HEIGHT_PT: Final[float] = 138
CARD_MIN_HEIGHT_PT: Final[float] = 104
CARD_IMAGE_RATIO: Final[float] = 0.46
CARD_PADDING_PT: Final[float] = 10
CARD_SUMMARY_MAX_LINES: Final[int] = 3
CARD_TIP_MAX_LINES: Final[int] = 2

# Single card snapshot export
CARD_EXPORT_WIDTH_IN: Final[float] = 4
CARD_EXPORT_HEIGHT_IN: Final[float] = 6
CARD_EXPORT_PADDING_IN: Final[float] = 0.25

TITLE_ACCENT_HEX: Final[str] = "#f48a1f"
ELLIPSIS: Final[str] = "…"

AWAITING_NOTES_TEXT: Final[str] = "Awaiting notes…"
EMPTY_SLOT_HINT: Final[str] = "Drop a meal photo or use the wizard to capture this slot."

CATEGORY_KEYS: Final[tuple[str, ...]] = ("vegFruit", "protein", "healthyCarbs", "pauseFood")
CATEGORY_ORDER: Final[tuple[dict[str, str], ...]] = (
    {"key": "vegFruit", "label": "Always Food"},
    {"key": "protein", "label": "Fuel Food · Protein"},
    {"key": "healthyCarbs", "label": "Fuel Food · Whole Grain"},
    {"key": "pauseFood", "label": "Pause Food"},
)

DEFAULT_PALETTE: Final[dict[str, str]] = {
    "vegFruit": "#4fa742",
    "healthyCarbs": "#f5d957",
    "protein": "#f59f1a",
    "pauseFood": "#f2899a",
    "neutral": "#d2d2d2",
    "canvasBg": "#ffffff",
}

DEFAULT_CLIENT_NAME: Final[str] = "Maria"
DEFAULT_WEEK_LABEL: Final[str] = "tracked meals"


def inches_to_points(value: float = 0) -> float:
    return value * PDF_POINTS_PER_INCH


def points_to_inches(value: float = 0) -> float:
    return value / PDF_POINTS_PER_INCH
