"""Dashboard domain entities: palette, breakdowns, meals, days and the weekly model."""
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from mealboard.utilities.constants import CATEGORY_KEYS, DEFAULT_PALETTE

_FROZEN = ConfigDict(frozen=True, populate_by_name=True)

# Category key (as used in palettes and raw records) -> Breakdown attribute
CATEGORY_FIELDS: Dict[str, str] = {
    "vegFruit": "veg_fruit",
    "healthyCarbs": "healthy_carbs",
    "protein": "protein",
    "pauseFood": "pause_food",
}


class Breakdown(BaseModel):
    model_config = _FROZEN

    veg_fruit: float = Field(0.0, alias="vegFruit")
    healthy_carbs: float = Field(0.0, alias="healthyCarbs")
    protein: float = 0.0
    pause_food: float = Field(0.0, alias="pauseFood")

    @classmethod
    def zero(cls) -> "Breakdown":
        return cls()

    def value_for(self, key: str) -> float:
        return getattr(self, CATEGORY_FIELDS[key])

    def total(self) -> float:
        return self.veg_fruit + self.healthy_carbs + self.protein + self.pause_food

    def as_dict(self) -> Dict[str, float]:
        """Values keyed by category key, in display order."""
        return {key: self.value_for(key) for key in CATEGORY_KEYS}


class Palette(BaseModel):
    model_config = _FROZEN

    veg_fruit: str = Field(DEFAULT_PALETTE["vegFruit"], alias="vegFruit")
    healthy_carbs: str = Field(DEFAULT_PALETTE["healthyCarbs"], alias="healthyCarbs")
    protein: str = DEFAULT_PALETTE["protein"]
    pause_food: str = Field(DEFAULT_PALETTE["pauseFood"], alias="pauseFood")
    neutral: str = DEFAULT_PALETTE["neutral"]
    canvas_bg: str = Field(DEFAULT_PALETTE["canvasBg"], alias="canvasBg")

    def color_for(self, key: str) -> str:
        if key in CATEGORY_FIELDS:
            return getattr(self, CATEGORY_FIELDS[key])
        if key == "canvasBg":
            return self.canvas_bg
        return getattr(self, key, self.neutral)


class Category(BaseModel):
    model_config = _FROZEN

    key: str
    label: str


class ImageRef(BaseModel):
    """Opaque image payload (a base64 data URL) plus its MIME type."""
    model_config = _FROZEN

    encoded_payload: str = Field(alias="encodedPayload")
    mime_type: str = Field("application/octet-stream", alias="mimeType")


class Meal(BaseModel):
    model_config = _FROZEN

    id: str
    title: str
    breakdown: Breakdown = Field(default_factory=Breakdown)
    summary_text: str = Field("", alias="summaryText")
    tip_text: str = Field("", alias="tipText")
    image: Optional[ImageRef] = None
    has_data: bool = Field(False, alias="hasData")


class Day(BaseModel):
    model_config = _FROZEN

    label: str
    summary: Breakdown = Field(default_factory=Breakdown)
    meals: Tuple[Meal, ...] = ()


class DashboardModel(BaseModel):
    model_config = _FROZEN

    client_name: str = Field(alias="clientName")
    client_title: str = Field(alias="clientTitle")
    week_label: str = Field(alias="weekLabel")
    title_line: str = Field(alias="titleLine")
    palette: Palette = Field(default_factory=Palette)
    days: Tuple[Day, ...] = ()
    category_order: Tuple[Category, ...] = Field((), alias="categoryOrder")

    def to_dict(self) -> dict:
        """JSON-ready dict using the camelCase keys the normalizer accepts."""
        return self.model_dump(by_alias=True, mode="json")


__all__ = ["CATEGORY_FIELDS", "Breakdown", "Palette", "Category", "ImageRef", "Meal", "Day", "DashboardModel"]
