"""Dashboard normalization: coerce a loosely shaped export record into a DashboardModel.

The incoming record usually comes straight from the classification service or
the browser and may have any number of days/meals, missing keys, strings where
numbers belong, and so on. Everything here is pure; nothing raises for bad
shape, it is clamped, rescaled or replaced by a placeholder instead.

Accepted record (all keys optional):
{
  'clientName': str, 'weekLabel': str,
  'palette': {'vegFruit': '#hex', ..., 'neutral': '#hex', 'canvasBg': '#hex'},
  'days': [
     {'label': str,
      'meals': [
         {'id': str, 'title': str,
          'breakdown': {'vegFruit': n, 'healthyCarbs': n, 'protein': n, 'pauseFood': n,
                        'summary': str, 'adjustmentTips': str},
          'generatedImageDataUrl': 'data:image/png;base64,...',
          'source': {...}},
         ...]},
     ...]
}
"""
import math
import re
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from mealboard.domain.Dashboard import (
    CATEGORY_FIELDS,
    Breakdown,
    Category,
    DashboardModel,
    Day,
    ImageRef,
    Meal,
    Palette,
)
from mealboard.utilities import config
from mealboard.utilities.constants import (
    CATEGORY_KEYS,
    CATEGORY_ORDER,
    DAY_COLUMN_COUNT,
    DAY_COLUMN_MEAL_SLOTS,
    DEFAULT_PALETTE,
)

SUM_TOLERANCE = 0.5
_MIME_PATTERN = re.compile(r'^data:(.*?);', re.IGNORECASE)


def _round1(value: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def _as_mapping(value: Any) -> Dict[str, Any]:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    if isinstance(value, Mapping):
        return dict(value)
    return {}


def _pick(mapping: Mapping, *keys: str, default: Any = None) -> Any:
    """First non-None value among the given key synonyms."""
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return value
    return default


def _clamp_percent(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return min(max(number, 0.0), 100.0)


def sanitize_name(value: Any, fallback: str) -> str:
    trimmed = str(value).strip() if value is not None else ''
    return trimmed or fallback


def format_client_heading(client_name: Any = None, week_label: Any = None) -> Dict[str, str]:
    """Build the heading strings: 'James' tracked meals', 'Maria's week 3'..."""
    name = sanitize_name(client_name, config.DEFAULT_CLIENT_NAME)
    week = sanitize_name(week_label, config.DEFAULT_WEEK_LABEL)
    possessive = f"{name}'" if name.lower().endswith('s') else f"{name}'s"
    return {
        'client_name': name,
        'client_title': possessive,
        'week_label': week,
        'title_line': f"{possessive} {week}",
    }


def normalize_palette(raw_palette: Any = None) -> Palette:
    raw = _as_mapping(raw_palette)
    colors = {}
    for key, default in DEFAULT_PALETTE.items():
        snake = CATEGORY_FIELDS.get(key, 'canvas_bg' if key == 'canvasBg' else key)
        value = raw.get(key) or raw.get(snake)
        colors[key] = value if isinstance(value, str) and value.strip() else default
    return Palette(**colors)


def normalize_breakdown(raw: Any = None) -> Breakdown:
    """Clamp every category to [0, 100] and rescale to ~100 when the sum drifts."""
    data = _as_mapping(raw)
    parsed = {key: _clamp_percent(_pick(data, key, CATEGORY_FIELDS[key], default=0)) for key in CATEGORY_KEYS}
    total = sum(parsed.values())
    if total > 0 and abs(total - 100) > SUM_TOLERANCE:
        parsed = {key: _round1(value * 100 / total) for key, value in parsed.items()}
    return Breakdown(**parsed)


def aggregate_day_percentages(meals: List[Meal]) -> Breakdown:
    """Per-category mean over the meals that carry data; all zero when none do."""
    eligible = [meal.breakdown for meal in meals if meal is not None and meal.has_data]
    if not eligible:
        return Breakdown.zero()
    return Breakdown(**{
        key: _round1(sum(b.value_for(key) for b in eligible) / len(eligible))
        for key in CATEGORY_KEYS
    })


def compute_overall_summary(days: List[Day]) -> Breakdown:
    """Week-level mean of the day summaries, used by the legend donut."""
    summaries = [day.summary for day in days if day is not None and day.summary is not None]
    if not summaries:
        return Breakdown(vegFruit=25, healthyCarbs=25, protein=25, pauseFood=25)
    return Breakdown(**{
        key: sum(s.value_for(key) for s in summaries) / len(summaries)
        for key in CATEGORY_KEYS
    })


def extract_mime_type(data_url: str) -> str:
    match = _MIME_PATTERN.match(data_url or '')
    return match.group(1) if match else 'application/octet-stream'


def _image_from_data_url(data_url: Any) -> Optional[ImageRef]:
    if not data_url or not isinstance(data_url, str):
        return None
    return ImageRef(encodedPayload=data_url, mimeType=extract_mime_type(data_url))


def derive_meal_image(meal: Mapping) -> Optional[ImageRef]:
    """Find the image payload among the shapes the upstream service produces."""
    image = meal.get('image')
    if isinstance(image, (Mapping, BaseModel)):
        image = _as_mapping(image)
        payload = _pick(image, 'encodedPayload', 'encoded_payload')
        if isinstance(payload, str) and payload:
            mime = _pick(image, 'mimeType', 'mime_type') or extract_mime_type(payload)
            return ImageRef(encodedPayload=payload, mimeType=mime)
    elif isinstance(image, str) and image.startswith('data:'):
        return _image_from_data_url(image)

    if meal.get('generatedImageDataUrl'):
        return _image_from_data_url(meal['generatedImageDataUrl'])

    source = meal.get('source')
    if not source:
        return None
    if isinstance(source, str):
        return _image_from_data_url(source) if source.startswith('data:') else None
    if not isinstance(source, Mapping):
        return None
    if source.get('dataUrl'):
        return _image_from_data_url(source['dataUrl'])
    if source.get('type') == 'inline-image' and source.get('value'):
        return _image_from_data_url(source['value'])
    if source.get('type') == 'image' and source.get('base64'):
        mime = source.get('mimeType') or 'image/png'
        return _image_from_data_url(f"data:{mime};base64,{source['base64']}")
    return None


def _placeholder_meal(day_index: int, slot_index: int) -> Meal:
    return Meal(
        id=f"day-{day_index + 1}-placeholder-{slot_index + 1}",
        title=f"Meal {slot_index + 1}",
        breakdown=Breakdown.zero(),
        hasData=False,
    )


def normalize_meal(raw: Mapping, day_index: int, slot_index: int) -> Meal:
    raw_breakdown = raw.get('breakdown')
    if isinstance(raw_breakdown, BaseModel):
        raw_breakdown = _as_mapping(raw_breakdown)
    nested = raw_breakdown if isinstance(raw_breakdown, Mapping) else {}
    if 'hasData' in raw or 'has_data' in raw:
        has_data = bool(_pick(raw, 'hasData', 'has_data'))
    else:
        has_data = isinstance(raw_breakdown, Mapping)
    summary = _pick(raw, 'summaryText', 'summary_text', default=nested.get('summary') or '')
    tips = _pick(raw, 'tipText', 'tip_text', default=nested.get('adjustmentTips') or '')
    return Meal(
        id=str(raw.get('id') or f"day-{day_index + 1}-meal-{slot_index + 1}"),
        title=sanitize_name(raw.get('title'), f"Meal {slot_index + 1}"),
        breakdown=normalize_breakdown(nested),
        summaryText=str(summary),
        tipText=str(tips),
        image=derive_meal_image(raw),
        hasData=has_data,
    )


def normalize_meals_for_day(raw_meals: Any, day_index: int) -> List[Meal]:
    """Exactly DAY_COLUMN_MEAL_SLOTS meals: extras dropped, gaps backfilled."""
    if isinstance(raw_meals, (list, tuple)):
        existing = [_as_mapping(m) for m in raw_meals if isinstance(m, (Mapping, BaseModel))]
    else:
        existing = []
    meals = [normalize_meal(m, day_index, slot) for slot, m in enumerate(existing[:DAY_COLUMN_MEAL_SLOTS])]
    while len(meals) < DAY_COLUMN_MEAL_SLOTS:
        meals.append(_placeholder_meal(day_index, len(meals)))
    return meals


def normalize(raw: Any = None) -> DashboardModel:
    """Turn any export record into the canonical fixed 7 x 3 dashboard."""
    data = _as_mapping(raw)
    raw_days = data.get('days')
    if not isinstance(raw_days, (list, tuple)):
        raw_days = []

    days = []
    for index in range(DAY_COLUMN_COUNT):
        source = _as_mapping(raw_days[index]) if index < len(raw_days) else {}
        meals = normalize_meals_for_day(source.get('meals') or [], index)
        days.append(Day(
            label=sanitize_name(source.get('label'), f"Day {index + 1}"),
            summary=aggregate_day_percentages(meals),
            meals=tuple(meals),
        ))

    heading = format_client_heading(
        _pick(data, 'clientName', 'client_name'),
        _pick(data, 'weekLabel', 'week_label'),
    )
    return DashboardModel(
        **heading,
        palette=normalize_palette(data.get('palette')),
        days=tuple(days),
        category_order=tuple(Category(**category) for category in CATEGORY_ORDER),
    )


normalize_dashboard_for_export = normalize

__all__ = [
    'normalize', 'normalize_dashboard_for_export', 'normalize_breakdown', 'normalize_palette',
    'normalize_meals_for_day', 'aggregate_day_percentages', 'compute_overall_summary',
    'format_client_heading', 'derive_meal_image', 'extract_mime_type',
]
