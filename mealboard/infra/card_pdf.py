"""Single-card export: a captured card image centered on a small portrait page."""
import io
import logging

from reportlab.pdfgen import canvas

from mealboard.domain.Layout import CardSnapshotMetrics, CardSnapshotResult
from mealboard.infra.image_cache import data_url_to_bytes, decode_image
from mealboard.logic.layout.image_placement import Box, place_image
from mealboard.utilities import constants as C
from mealboard.utilities.errors import AssetDecodeError, DocumentSerializationError

logger = logging.getLogger(__name__)


def render_card_snapshot_pdf(data_url: str) -> CardSnapshotResult:
    payload = data_url_to_bytes(data_url)
    if payload is None or not payload.data:
        raise AssetDecodeError("Unable to capture this layout. Please try again after the page settles.")
    image = decode_image(payload.data, payload.mime_type)

    page_width = C.inches_to_points(C.CARD_EXPORT_WIDTH_IN)
    page_height = C.inches_to_points(C.CARD_EXPORT_HEIGHT_IN)
    padding = C.inches_to_points(C.CARD_EXPORT_PADDING_IN)
    placement = place_image(
        (image.width, image.height),
        Box(padding, padding, page_width - padding * 2, page_height - padding * 2),
    )

    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=(page_width, page_height))
    pdf.setCreator("mealboard")
    pdf.drawImage(image.reader, placement.x, placement.y,
                  width=placement.width, height=placement.height, mask='auto')
    try:
        pdf.showPage()
        pdf.save()
    except Exception as e:
        logger.exception("Failed to serialize card snapshot PDF")
        raise DocumentSerializationError(f"Unable to write card PDF: {e}") from e

    logger.info("Rendered card snapshot %dx%d -> %.1fx%.1fpt",
                image.width, image.height, placement.width, placement.height)
    return CardSnapshotResult(
        pdf_bytes=buf.getvalue(),
        metrics=CardSnapshotMetrics(
            width_in=C.CARD_EXPORT_WIDTH_IN,
            height_in=C.CARD_EXPORT_HEIGHT_IN,
            padding_in=C.CARD_EXPORT_PADDING_IN,
        ),
    )


__all__ = ['render_card_snapshot_pdf']
