"""Resolved layout values for one page render and the metrics handed back to callers."""
from pydantic import BaseModel, ConfigDict, Field

from mealboard.utilities import constants as C
from mealboard.utilities.constants import PDF_POINTS_PER_INCH


class RenderSettings(BaseModel):
    """Page geometry for a dashboard render. Inches unless the name ends in _pt."""
    model_config = ConfigDict(frozen=True)

    page_width_in: float = Field(C.LETTER_WIDTH_IN, gt=0)
    page_height_in: float = Field(C.LETTER_HEIGHT_IN, gt=0)
    margin_in: float = Field(C.PAGE_MARGIN_IN, ge=0)
    header_height_in: float = Field(C.HEADER_BLOCK_HEIGHT_IN, ge=0)
    header_gap_in: float = Field(C.HEADER_GAP_IN, ge=0)
    legend_width_in: float = Field(C.LEGEND_WIDTH_IN, ge=0)
    legend_gap_in: float = Field(C.LEGEND_GAP_IN, ge=0)
    column_gutter_in: float = Field(C.DAY_COLUMN_GUTTER_IN, ge=0)
    card_gap_in: float = Field(C.MEAL_CARD_GAP_IN, ge=0)
    donut_radius_in: float = Field(C.DONUT_RADIUS_IN, gt=0)
    donut_min_radius_factor: float = Field(C.DONUT_MIN_RADIUS_FACTOR, gt=0, le=1)
    target_card_height_pt: float = Field(C.CARD_TARGET_HEIGHT_PT, gt=0)
    min_card_height_pt: float = Field(C.CARD_MIN_HEIGHT_PT, gt=0)


class LayoutPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    donut_radius: float
    donut_block_height: float
    donut_spacing: float
    label_block_height: float
    card_height: float
    card_gap: float
    body_height: float
    slot_count: int

    def column_usage(self) -> float:
        """Height used by label, donut block and the stacked cards."""
        cards = self.card_height * self.slot_count + self.card_gap * max(self.slot_count - 1, 0)
        return self.label_block_height + self.donut_block_height + cards


class RenderMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    width_pt: float
    height_pt: float
    dpi: int = PDF_POINTS_PER_INCH
    column_width_pt: float
    body_height_pt: float
    card_height_pt: float
    card_gap_pt: float
    label_block_pt: float
    donut_block_pt: float
    donut_radius_pt: float
    meal_slots: int

    @property
    def width_in(self) -> float:
        return self.width_pt / self.dpi

    @property
    def height_in(self) -> float:
        return self.height_pt / self.dpi

    @property
    def column_width_in(self) -> float:
        return self.column_width_pt / self.dpi

    def column_usage(self) -> float:
        card_stack = self.card_height_pt * self.meal_slots + self.card_gap_pt * (self.meal_slots - 1)
        return self.label_block_pt + self.donut_block_pt + card_stack

    def overflow(self) -> float:
        """Points by which a day column exceeds the body; <= 0 means it fits."""
        return self.column_usage() - self.body_height_pt

    def to_dict(self) -> dict:
        data = self.model_dump()
        data.update(
            width_in=self.width_in,
            height_in=self.height_in,
            column_width_in=self.column_width_in,
            column_usage_pt=self.column_usage(),
        )
        return data


class RenderResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    pdf_bytes: bytes
    metrics: RenderMetrics
    title_line: str = ""


class CardSnapshotMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    width_in: float
    height_in: float
    padding_in: float
    dpi: int = PDF_POINTS_PER_INCH


class CardSnapshotResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    pdf_bytes: bytes
    metrics: CardSnapshotMetrics


__all__ = ["RenderSettings", "LayoutPlan", "RenderMetrics", "RenderResult", "CardSnapshotMetrics", "CardSnapshotResult"]
