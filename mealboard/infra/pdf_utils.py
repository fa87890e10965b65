"""Weekly dashboard PDF composition.

render_dashboard_pdf(raw) runs three phases on a fresh ReportLab canvas:
normalize the record, solve the column layout once, then draw header, legend
and the 7 day columns of 3 meal cards. Nothing is written to disk here; the
caller gets the PDF bytes and the resolved layout metrics.
"""
import io
import logging
from typing import List, Optional

from reportlab.lib.colors import Color
from reportlab.pdfgen import canvas

from mealboard.domain.Dashboard import Breakdown, DashboardModel, Day, Meal
from mealboard.domain.Layout import LayoutPlan, RenderMetrics, RenderResult, RenderSettings
from mealboard.infra.image_cache import ImageCache
from mealboard.logic.charts.allocation_bar import proportion_bar
from mealboard.logic.charts.donut import Segment, draw_donut, render_donut
from mealboard.logic.layout.column_solver import clamp, solve_column_layout
from mealboard.logic.layout.image_placement import Box, place_image
from mealboard.logic.layout.text_flow import fit_line, font_measurer, wrap
from mealboard.logic.normalize.dashboard import compute_overall_summary, normalize
from mealboard.utilities import constants as C
from mealboard.utilities.colors import parse_color
from mealboard.utilities.errors import DocumentSerializationError

logger = logging.getLogger(__name__)

WHITE = Color(1, 1, 1)
TEXT_DARK = Color(25 / 255, 25 / 255, 25 / 255)
TEXT_MUTED = Color(111 / 255, 111 / 255, 111 / 255)
PLACEHOLDER_BG = Color(247 / 255, 247 / 255, 247 / 255)
PLACEHOLDER_STROKE = Color(210 / 255, 210 / 255, 210 / 255)
BAR_TRACK = Color(0.93, 0.93, 0.93)

BRAND_MARK_TEXT = "n"
LEGEND_PADDING = 10
CARD_TITLE_GAP = 12
CARD_RESERVED_BELOW_IMAGE = 48
CARD_MIN_IMAGE_HEIGHT = 40
BAR_HEIGHT = 8
BAR_SPACING = 14
TIP_SPACING = 10


class _RenderContext:
    """Everything the draw helpers need for one page. Discarded after the render."""

    def __init__(self, pdf: canvas.Canvas, model: DashboardModel, settings: RenderSettings, layout: LayoutPlan):
        self.pdf = pdf
        self.model = model
        self.palette = model.palette
        self.layout = layout
        self.image_cache = ImageCache()

        self.page_width = C.inches_to_points(settings.page_width_in)
        self.page_height = C.inches_to_points(settings.page_height_in)
        self.margin = C.inches_to_points(settings.margin_in)
        self.header_height = C.inches_to_points(settings.header_height_in)
        self.legend_width = C.inches_to_points(settings.legend_width_in)
        self.legend_gap = C.inches_to_points(settings.legend_gap_in)
        self.legend_x = self.page_width - self.margin - self.legend_width
        self.body_top_y = body_top(settings)
        self.gutter = C.inches_to_points(settings.column_gutter_in)
        self.column_width = column_width(settings)
        self.legend_summary = compute_overall_summary(list(model.days))

        self.measure_body = font_measurer(C.BODY_FONT, C.LABEL_FONT_SIZE_PT)
        self.measure_title = font_measurer(C.HEADING_FONT, C.BODY_FONT_SIZE_PT)


def body_top(settings: RenderSettings) -> float:
    return (C.inches_to_points(settings.page_height_in) - C.inches_to_points(settings.margin_in)
            - C.inches_to_points(settings.header_height_in) - C.inches_to_points(settings.header_gap_in))


def body_height(settings: RenderSettings) -> float:
    return body_top(settings) - C.inches_to_points(settings.margin_in)


def column_width(settings: RenderSettings) -> float:
    printable = C.inches_to_points(settings.page_width_in) - C.inches_to_points(settings.margin_in) * 2
    total_gutter = C.inches_to_points(settings.column_gutter_in) * (C.DAY_COLUMN_COUNT - 1)
    return (printable - total_gutter) / C.DAY_COLUMN_COUNT


def plan_layout(settings: RenderSettings) -> LayoutPlan:
    """Solve the day column layout for the given page geometry."""
    max_radius = C.inches_to_points(settings.donut_radius_in)
    return solve_column_layout(
        body_height=body_height(settings),
        slot_count=C.DAY_COLUMN_MEAL_SLOTS,
        donut_bounds=(max_radius * settings.donut_min_radius_factor, max_radius),
        label_block_height=C.LABEL_FONT_SIZE_PT + C.LABEL_BLOCK_SPACING_PT,
        donut_spacing=C.DONUT_BLOCK_SPACING_PT,
        card_gap=C.inches_to_points(settings.card_gap_in),
        target_card_height=settings.target_card_height_pt,
        min_card_height=settings.min_card_height_pt,
    )


def render_dashboard_pdf(raw, settings: Optional[RenderSettings] = None) -> RenderResult:
    """Render the weekly dashboard page and return (pdf bytes, layout metrics).

    Raises AssetDecodeError when an embedded image cannot be decoded and
    DocumentSerializationError when ReportLab cannot write the document.
    """
    settings = settings or RenderSettings()
    model = normalize(raw)
    layout = plan_layout(settings)
    logger.debug("Column layout: %s", layout)

    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=(C.inches_to_points(settings.page_width_in),
                                       C.inches_to_points(settings.page_height_in)))
    pdf.setTitle(model.title_line)
    pdf.setCreator("mealboard")
    ctx = _RenderContext(pdf, model, settings, layout)

    _draw_header_block(ctx)
    _draw_day_columns(ctx)

    try:
        pdf.showPage()
        pdf.save()
    except Exception as e:
        logger.exception("Failed to serialize dashboard PDF")
        raise DocumentSerializationError(f"Unable to write dashboard PDF: {e}") from e

    metrics = RenderMetrics(
        width_pt=ctx.page_width,
        height_pt=ctx.page_height,
        column_width_pt=ctx.column_width,
        body_height_pt=layout.body_height,
        card_height_pt=layout.card_height,
        card_gap_pt=layout.card_gap,
        label_block_pt=layout.label_block_height,
        donut_block_pt=layout.donut_block_height,
        donut_radius_pt=layout.donut_radius,
        meal_slots=layout.slot_count,
    )
    if metrics.overflow() > 0:
        logger.warning("Day columns overflow the body by %.2fpt", metrics.overflow())
    logger.info("Rendered dashboard '%s' (%d images decoded, card %.1fpt)",
                model.title_line, ctx.image_cache.misses, layout.card_height)
    return RenderResult(pdf_bytes=buf.getvalue(), metrics=metrics, title_line=model.title_line)


# --- Header and legend ---

def _draw_header_block(ctx: _RenderContext) -> None:
    pdf = ctx.pdf
    top_y = ctx.page_height - ctx.margin
    title_size = C.HEADING_FONT_SIZE_PT + 2
    subhead_size = C.SUBHEAD_FONT_SIZE_PT - 6
    title_width = ctx.legend_x - ctx.margin - ctx.legend_gap

    title = fit_line(ctx.model.client_title, font_measurer(C.HEADING_FONT, title_size), title_width)
    pdf.setFont(C.HEADING_FONT, title_size)
    pdf.setFillColor(parse_color(C.TITLE_ACCENT_HEX))
    pdf.drawString(ctx.margin, top_y - title_size, title)

    week = fit_line(ctx.model.week_label, font_measurer(C.HEADING_FONT, subhead_size), title_width)
    pdf.setFont(C.HEADING_FONT, subhead_size)
    pdf.setFillColor(TEXT_DARK)
    pdf.drawString(ctx.margin, top_y - title_size - subhead_size - 6, week)

    _draw_legend(ctx, x=ctx.legend_x, y=top_y, width=ctx.legend_width)


def _donut_segments(ctx: _RenderContext, summary: Breakdown) -> List[Segment]:
    """Category segments, or a single neutral ring when there is nothing to show."""
    segments = [
        Segment(summary.value_for(category.key), ctx.palette.color_for(category.key))
        for category in ctx.model.category_order
    ]
    if sum(max(s.value, 0) for s in segments) <= 0:
        return [Segment(100.0, ctx.palette.neutral)]
    return segments


def _draw_legend(ctx: _RenderContext, x: float, y: float, width: float) -> None:
    pdf = ctx.pdf
    padding = LEGEND_PADDING
    radius = min(ctx.layout.donut_radius, width / 2.2)
    center_x = x + radius + padding
    center_y = y - padding - radius

    drawing = render_donut((center_x, center_y), radius, C.DONUT_INNER_RATIO,
                           _donut_segments(ctx, ctx.legend_summary))
    draw_donut(pdf, drawing, ctx.palette.canvas_bg)

    brand_size = C.inches_to_points(C.BRAND_CIRCLE_DIAMETER_IN)
    brand_cx = x + width - brand_size / 2 - padding
    brand_cy = center_y + radius
    pdf.setFillColor(parse_color(ctx.palette.pause_food))
    pdf.circle(brand_cx, brand_cy, brand_size / 2, stroke=0, fill=1)
    pdf.setFillColor(WHITE)
    pdf.setFont(C.HEADING_FONT, 14)
    pdf.drawCentredString(brand_cx, brand_cy - 5, BRAND_MARK_TEXT)

    list_x = center_x + radius + padding
    list_y = center_y + radius - padding
    line_height = C.BODY_FONT_SIZE_PT + 2
    pdf.setFont(C.BODY_FONT, C.BODY_FONT_SIZE_PT)
    for index, category in enumerate(ctx.model.category_order):
        row_y = list_y - index * line_height
        pdf.setFillColor(parse_color(ctx.palette.color_for(category.key)))
        pdf.rect(list_x, row_y - 5, 9, 9, stroke=0, fill=1)
        pdf.setFillColor(TEXT_DARK)
        pdf.drawString(list_x + 14, row_y - C.BODY_FONT_SIZE_PT, category.label)


# --- Day columns and cards ---

def _draw_day_columns(ctx: _RenderContext) -> None:
    for index, day in enumerate(ctx.model.days[:C.DAY_COLUMN_COUNT]):
        _draw_day_column(ctx, day, index)


def _draw_day_column(ctx: _RenderContext, day: Day, column_index: int) -> None:
    pdf = ctx.pdf
    layout = ctx.layout
    column_x = ctx.margin + column_index * (ctx.column_width + ctx.gutter)
    cursor_y = ctx.body_top_y

    label = fit_line(day.label.upper(), font_measurer(C.HEADING_FONT, C.LABEL_FONT_SIZE_PT), ctx.column_width)
    pdf.setFont(C.HEADING_FONT, C.LABEL_FONT_SIZE_PT)
    pdf.setFillColor(TEXT_DARK)
    pdf.drawString(column_x, cursor_y - C.LABEL_FONT_SIZE_PT, label)
    cursor_y -= layout.label_block_height

    radius = min(layout.donut_radius, ctx.column_width * 0.42)
    drawing = render_donut((column_x + radius, cursor_y - radius), radius, C.DONUT_INNER_RATIO,
                           _donut_segments(ctx, day.summary))
    draw_donut(pdf, drawing, ctx.palette.canvas_bg)
    cursor_y -= radius * 2 + layout.donut_spacing

    for meal in day.meals[:C.DAY_COLUMN_MEAL_SLOTS]:
        cursor_y = _draw_meal_card(ctx, meal, x=column_x, width=ctx.column_width,
                                   top_y=cursor_y, card_height=layout.card_height)
        cursor_y -= layout.card_gap


def _draw_meal_card(ctx: _RenderContext, meal: Meal, x: float, width: float, top_y: float, card_height: float) -> float:
    """Draw one card below top_y and return its bottom edge."""
    pdf = ctx.pdf
    padding = C.CARD_PADDING_PT
    inner_width = width - padding * 2
    card_y = top_y - card_height

    pdf.setFillColor(WHITE)
    pdf.setStrokeColor(parse_color(ctx.palette.neutral))
    pdf.setLineWidth(0.8)
    pdf.rect(x, card_y, width, card_height, stroke=1, fill=1)

    title = fit_line(meal.title, ctx.measure_title, inner_width)
    pdf.setFont(C.HEADING_FONT, C.BODY_FONT_SIZE_PT)
    pdf.setFillColor(TEXT_DARK)
    pdf.drawString(x + padding, top_y - padding - C.BODY_FONT_SIZE_PT, title)

    max_image_height = max(CARD_MIN_IMAGE_HEIGHT,
                           card_height - (C.BODY_FONT_SIZE_PT + padding * 2 + CARD_RESERVED_BELOW_IMAGE))
    image_height = clamp(max_image_height, CARD_MIN_IMAGE_HEIGHT, card_height * C.CARD_IMAGE_RATIO)
    image_y = top_y - padding - C.BODY_FONT_SIZE_PT - CARD_TITLE_GAP - image_height
    _draw_meal_image(ctx, meal, Box(x + padding, image_y, inner_width, image_height))

    bar_y = image_y - BAR_SPACING
    _draw_allocation_bar(ctx, meal.breakdown, x + padding, bar_y, inner_width, BAR_HEIGHT)

    summary_lines = wrap(meal.summary_text or C.AWAITING_NOTES_TEXT, ctx.measure_body,
                         inner_width, C.CARD_SUMMARY_MAX_LINES)
    text_cursor = _draw_text_lines(pdf, summary_lines, x + padding, bar_y - BAR_SPACING, TEXT_MUTED)

    tip_text = meal.tip_text or ("" if meal.has_data else C.EMPTY_SLOT_HINT)
    if tip_text:
        tip_lines = wrap(tip_text, ctx.measure_body, inner_width, C.CARD_TIP_MAX_LINES)
        _draw_text_lines(pdf, tip_lines, x + padding, text_cursor - TIP_SPACING, TEXT_DARK)

    return card_y


def _draw_meal_image(ctx: _RenderContext, meal: Meal, box: Box) -> None:
    decoded = ctx.image_cache.get(meal.image.encoded_payload) if meal.image else None
    if decoded is None:
        _draw_image_placeholder(ctx.pdf, box)
        return
    placement = place_image((decoded.width, decoded.height), box)
    ctx.pdf.drawImage(decoded.reader, placement.x, placement.y,
                      width=placement.width, height=placement.height, mask='auto')


def _draw_image_placeholder(pdf: canvas.Canvas, box: Box) -> None:
    """Light box with both diagonals, standing in for a missing photo."""
    x, y, width, height = box
    pdf.saveState()
    pdf.setFillColor(PLACEHOLDER_BG)
    pdf.setStrokeColor(PLACEHOLDER_STROKE)
    pdf.setLineWidth(0.75)
    pdf.rect(x, y, width, height, stroke=1, fill=1)
    pdf.setLineWidth(0.5)
    pdf.line(x + 6, y + 6, x + width - 6, y + height - 6)
    pdf.line(x + width - 6, y + 6, x + 6, y + height - 6)
    pdf.restoreState()


def _draw_allocation_bar(ctx: _RenderContext, breakdown: Breakdown, x: float, y: float,
                         width: float, height: float) -> None:
    pdf = ctx.pdf
    pdf.saveState()
    pdf.setFillColor(BAR_TRACK)
    pdf.rect(x, y, width, height, stroke=0, fill=1)
    cursor = x
    widths = proportion_bar(breakdown, width)
    for category, segment_width in zip(ctx.model.category_order, widths):
        if segment_width <= 0:
            continue
        pdf.setFillColor(parse_color(ctx.palette.color_for(category.key)))
        pdf.rect(cursor, y, segment_width, height, stroke=0, fill=1)
        cursor += segment_width
    pdf.setStrokeColor(parse_color(ctx.palette.neutral))
    pdf.setLineWidth(0.5)
    pdf.rect(x, y, width, height, stroke=1, fill=0)
    pdf.restoreState()


def _draw_text_lines(pdf: canvas.Canvas, lines: List[str], x: float, start_y: float, color: Color,
                     size: float = C.LABEL_FONT_SIZE_PT, font: str = C.BODY_FONT) -> float:
    """Draw lines top-down from start_y and return the cursor below the last one."""
    line_height = size + 2
    cursor = start_y
    pdf.setFont(font, size)
    pdf.setFillColor(color)
    for line in lines:
        pdf.drawString(x, cursor - size, line)
        cursor -= line_height
    return cursor


__all__ = ['render_dashboard_pdf', 'plan_layout', 'body_height', 'column_width']
