import base64
import io
import json
import unittest
from unittest import mock

from PIL import Image

from mealboard.domain.Layout import RenderSettings
from mealboard.infra import image_cache
from mealboard.infra.pdf_utils import body_height, column_width, plan_layout, render_dashboard_pdf
from mealboard.utilities import config
from mealboard.utilities.errors import AssetDecodeError, DocumentSerializationError


def _png_data_url(size=(64, 48)):
    buf = io.BytesIO()
    Image.new("RGB", size, (79, 167, 66)).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


class TestRenderDashboardPdf(unittest.TestCase):

    def test_empty_record_renders_full_page(self):
        result = render_dashboard_pdf({})
        self.assertTrue(result.pdf_bytes.startswith(b"%PDF"))
        metrics = result.metrics
        self.assertAlmostEqual(metrics.width_pt, 792)
        self.assertAlmostEqual(metrics.height_pt, 612)
        self.assertAlmostEqual(metrics.width_in, 11)
        self.assertAlmostEqual(metrics.height_in, 8.5)
        self.assertEqual(metrics.meal_slots, 3)

    def test_letter_layout_figures(self):
        metrics = render_dashboard_pdf(None).metrics
        self.assertAlmostEqual(metrics.body_height_pt, 442.8)
        self.assertAlmostEqual(metrics.donut_radius_pt, 30.24)
        self.assertAlmostEqual(metrics.card_height_pt, 113.27, places=2)
        self.assertLessEqual(metrics.overflow(), 1e-6)

    def test_metrics_match_layout_plan(self):
        settings = RenderSettings()
        plan = plan_layout(settings)
        metrics = render_dashboard_pdf({}, settings).metrics
        self.assertEqual(metrics.card_height_pt, plan.card_height)
        self.assertEqual(metrics.donut_radius_pt, plan.donut_radius)
        self.assertEqual(metrics.body_height_pt, body_height(settings))
        self.assertEqual(metrics.column_width_pt, column_width(settings))
        self.assertAlmostEqual(metrics.column_usage(), plan.column_usage())

    def test_short_page_still_fits(self):
        metrics = render_dashboard_pdf({}, RenderSettings(page_height_in=5)).metrics
        self.assertLess(metrics.card_height_pt, 104)
        self.assertLessEqual(metrics.overflow(), 1e-6)

    def test_sample_dashboard(self):
        with open(config.SAMPLE_DASHBOARD_FILE, 'r', encoding='utf-8') as f:
            data = json.load(f)
        result = render_dashboard_pdf(data)
        self.assertTrue(result.pdf_bytes.startswith(b"%PDF"))
        self.assertTrue(result.pdf_bytes.rstrip().endswith(b"%%EOF"))

    def test_shared_image_decoded_once(self):
        url = _png_data_url()
        record = {"days": [
            {"label": "Mon", "meals": [{"title": "A", "image": url}, {"title": "B", "image": url}]},
            {"label": "Tue", "meals": [{"title": "C", "generatedImageDataUrl": url}]},
        ]}
        with mock.patch.object(image_cache, "decode_image", wraps=image_cache.decode_image) as spy:
            render_dashboard_pdf(record)
        self.assertEqual(spy.call_count, 1)

    def test_non_base64_image_uses_placeholder(self):
        record = {"days": [{"meals": [{"title": "Toast", "image": "data:image/png,raw"}]}]}
        self.assertTrue(render_dashboard_pdf(record).pdf_bytes.startswith(b"%PDF"))

    def test_undecodable_image_fails(self):
        bad = "data:image/png;base64," + base64.b64encode(b"not an image").decode("ascii")
        record = {"days": [{"meals": [{"title": "Toast", "image": bad}]}]}
        with self.assertRaises(AssetDecodeError):
            render_dashboard_pdf(record)

    def test_oversized_image_fails_as_decode_error(self):
        record = {"days": [{"meals": [{"title": "Huge", "image": _png_data_url((200, 200))}]}]}
        with mock.patch.object(Image, "MAX_IMAGE_PIXELS", 1000):
            with self.assertRaises(AssetDecodeError):
                render_dashboard_pdf(record)

    def test_result_carries_title_line(self):
        self.assertEqual(render_dashboard_pdf({"clientName": "James"}).title_line, "James' tracked meals")

    def test_single_overlong_words_render(self):
        record = {
            "clientName": "Bartholomew" * 12,
            "days": [{"label": "X" * 80, "meals": [{"title": "Cauliflowerrisotto" * 6}]}],
        }
        self.assertTrue(render_dashboard_pdf(record).pdf_bytes.startswith(b"%PDF"))

    def test_serialization_failure_is_wrapped(self):
        with mock.patch("reportlab.pdfgen.canvas.Canvas.save", side_effect=IOError("disk gone")):
            with self.assertRaises(DocumentSerializationError):
                render_dashboard_pdf({})

    def test_long_text_does_not_break_render(self):
        record = {
            "clientName": "A" * 150,
            "weekLabel": "week " * 30,
            "days": [{"label": "Wednesday " * 5, "meals": [{
                "title": "An extraordinarily long meal title that will never fit " * 3,
                "breakdown": {"vegFruit": 300, "protein": -4, "healthyCarbs": "x", "pauseFood": 10},
                "summaryText": "word " * 200,
                "tipText": "tip " * 200,
            }]}],
        }
        result = render_dashboard_pdf(record)
        self.assertTrue(result.pdf_bytes.startswith(b"%PDF"))

    def test_extra_days_ignored(self):
        record = {"days": [{"label": f"Day {i}"} for i in range(10)]}
        self.assertTrue(render_dashboard_pdf(record).pdf_bytes.startswith(b"%PDF"))


if __name__ == '__main__':
    unittest.main()
