import base64
import io
import unittest

from PIL import Image

from mealboard.infra.card_pdf import render_card_snapshot_pdf
from mealboard.utilities.errors import AssetDecodeError


def _capture(size=(300, 420), fmt="PNG", mime="image/png"):
    buf = io.BytesIO()
    Image.new("RGB", size, (255, 255, 255)).save(buf, format=fmt)
    return f"data:{mime};base64," + base64.b64encode(buf.getvalue()).decode("ascii")


class TestCardSnapshotPdf(unittest.TestCase):

    def test_png_capture(self):
        result = render_card_snapshot_pdf(_capture())
        self.assertTrue(result.pdf_bytes.startswith(b"%PDF"))
        self.assertEqual((result.metrics.width_in, result.metrics.height_in), (4, 6))
        self.assertEqual(result.metrics.padding_in, 0.25)

    def test_jpeg_capture(self):
        result = render_card_snapshot_pdf(_capture((800, 600), "JPEG", "image/jpeg"))
        self.assertTrue(result.pdf_bytes.startswith(b"%PDF"))

    def test_empty_payload(self):
        with self.assertRaises(AssetDecodeError) as ctx:
            render_card_snapshot_pdf("data:image/png;base64,")
        self.assertIn("Unable to capture", str(ctx.exception))

    def test_not_base64(self):
        with self.assertRaises(AssetDecodeError):
            render_card_snapshot_pdf("data:image/png,plain")

    def test_unsupported_format(self):
        with self.assertRaises(AssetDecodeError):
            render_card_snapshot_pdf(_capture(fmt="GIF", mime="image/gif"))


if __name__ == '__main__':
    unittest.main()
