"""
Render a dashboard record, save the PDF and verify the day columns fit the page body.

Usage:
  python -m mealboard.utilities.layout_check [--input data.json] [--out dashboard.pdf]
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from mealboard.domain.Layout import RenderMetrics
from mealboard.infra.pdf_utils import render_dashboard_pdf
from mealboard.utilities import config
from mealboard.utilities.errors import DashboardRenderError, LayoutOverflowError

logger = logging.getLogger(__name__)


def check_fit(metrics: RenderMetrics, tolerance: float = config.LAYOUT_TOLERANCE_PT) -> float:
    """Return the column usage; raise LayoutOverflowError beyond the tolerance."""
    overflow = metrics.overflow()
    if overflow > tolerance:
        raise LayoutOverflowError(overflow)
    return metrics.column_usage()


def validate_export(input_path: Path, output_path: Path, tolerance: float = config.LAYOUT_TOLERANCE_PT) -> RenderMetrics:
    with open(input_path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    result = render_dashboard_pdf(data)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(result.pdf_bytes)
    logger.info("PDF saved to %s", output_path)

    usage = check_fit(result.metrics, tolerance)
    logger.info(
        "Layout check: body %.2fpt, column usage %.2fpt, card %.2fpt, donut radius %.2fpt",
        result.metrics.body_height_pt, usage, result.metrics.card_height_pt, result.metrics.donut_radius_pt,
    )
    return result.metrics


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument('--input', type=Path, default=config.SAMPLE_DASHBOARD_FILE)
    parser.add_argument('--out', type=Path, default=config.EXPORT_DIR / 'sample-dashboard.pdf')
    parser.add_argument('--tolerance', type=float, default=config.LAYOUT_TOLERANCE_PT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    try:
        validate_export(args.input, args.out, args.tolerance)
    except (LayoutOverflowError, DashboardRenderError, OSError, json.JSONDecodeError) as e:
        logger.error("Export validation failed: %s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
