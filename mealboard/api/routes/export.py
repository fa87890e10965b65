"""Export endpoints: dashboard PDF, layout metrics, normalized record and single card PDF."""
import logging
import re

from fastapi import APIRouter, HTTPException, Response

from mealboard.infra.card_pdf import render_card_snapshot_pdf
from mealboard.infra.pdf_utils import render_dashboard_pdf
from mealboard.logic.normalize.dashboard import normalize
from mealboard.utilities.errors import AssetDecodeError, DashboardRenderError
from mealboard.utilities.validators import CardSnapshotInput, DashboardExportInput

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)

_FILENAME_UNSAFE = re.compile(r'[^A-Za-z0-9]+')


def _pdf_filename(title: str) -> str:
    slug = _FILENAME_UNSAFE.sub('_', title).strip('_').lower()
    return f"{slug or 'meal_dashboard'}.pdf"


def _pdf_response(pdf_bytes: bytes, filename: str, extra_headers: dict = None) -> Response:
    headers = {"Content-Disposition": f"attachment; filename={filename}"}
    headers.update(extra_headers or {})
    return Response(content=pdf_bytes, media_type="application/pdf", headers=headers)


def _render_or_raise(record: dict):
    try:
        return render_dashboard_pdf(record)
    except AssetDecodeError as e:
        logger.warning("Dashboard export rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    except DashboardRenderError as e:
        logger.exception("Dashboard export failed")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/dashboard/pdf")
def export_dashboard_pdf(payload: DashboardExportInput):
    """Weekly dashboard as a one-page PDF download; layout figures go in X-Layout-* headers."""
    result = _render_or_raise(payload.to_record())
    metrics = result.metrics
    return _pdf_response(result.pdf_bytes, _pdf_filename(result.title_line), {
        "X-Layout-Card-Height": f"{metrics.card_height_pt:.2f}",
        "X-Layout-Donut-Radius": f"{metrics.donut_radius_pt:.2f}",
        "X-Layout-Overflow": f"{metrics.overflow():.2f}",
    })


@router.post("/dashboard/layout")
def dashboard_layout(payload: DashboardExportInput):
    """Render without returning the document; only the resolved layout metrics."""
    result = _render_or_raise(payload.to_record())
    data = result.metrics.to_dict()
    data["fits"] = result.metrics.overflow() <= 0
    return data


@router.post("/dashboard/normalize")
def normalize_dashboard(payload: DashboardExportInput):
    return normalize(payload.to_record()).to_dict()


@router.post("/card/pdf")
def export_card_pdf(payload: CardSnapshotInput):
    try:
        result = render_card_snapshot_pdf(payload.data_url)
    except AssetDecodeError as e:
        logger.warning("Card export rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    except DashboardRenderError as e:
        logger.exception("Card export failed")
        raise HTTPException(status_code=500, detail=str(e))
    return _pdf_response(result.pdf_bytes, "meal_card.pdf")
