import unittest

from reportlab.pdfbase.pdfmetrics import stringWidth

from mealboard.logic.layout.text_flow import fit_line, font_measurer, wrap


def five_per_char(text):
    return len(text) * 5


class TestWrap(unittest.TestCase):

    def test_truncates_with_ellipsis(self):
        lines = wrap("a very long sentence that keeps going and going", five_per_char, 50, 2)
        self.assertEqual(len(lines), 2)
        self.assertEqual(lines[0], "a very")
        self.assertEqual(lines[1], "long…")

    def test_trailing_periods_replaced(self):
        lines = wrap("One. Two... Three. Four.", five_per_char, 25, 2)
        self.assertEqual(lines, ["One.", "Two…"])

    def test_exact_fit_has_no_ellipsis(self):
        lines = wrap("alpha beta", five_per_char, 25, 2)
        self.assertEqual(lines, ["alpha", "beta"])

    def test_unbounded_lines(self):
        lines = wrap("a b c d e f", five_per_char, 15)
        self.assertEqual(lines, ["a b", "c d", "e f"])

    def test_empty_text(self):
        self.assertEqual(wrap("", five_per_char, 50, 2), [])
        self.assertEqual(wrap("   ", five_per_char, 50, 2), [])
        self.assertEqual(wrap(None, five_per_char, 50, 2), [])

    def test_overlong_word_gets_own_line(self):
        lines = wrap("supercalifragilistic is long", five_per_char, 20)
        self.assertEqual(lines, ["supercalifragilistic", "is", "long"])

    def test_whitespace_collapsed(self):
        self.assertEqual(wrap("a \n  b\tc", five_per_char, 100), ["a b c"])

    def test_every_line_fits(self):
        text = "Mostly pause food. Enjoy it, then plan a veggie-heavy lunch tomorrow with whole grains."
        measure = font_measurer("Helvetica", 9)
        for line in wrap(text, measure, 80):
            if " " in line:
                self.assertLessEqual(measure(line), 80)


class TestFitLine(unittest.TestCase):

    def test_short_text_unchanged(self):
        self.assertEqual(fit_line("alpha beta", five_per_char, 50), "alpha beta")

    def test_single_long_word_is_clipped(self):
        self.assertEqual(fit_line("Supercalifragilistic", five_per_char, 50), "Supercali…")

    def test_ellipsis_stays_inside_width(self):
        line = fit_line("alpha beta gamma", five_per_char, 50)
        self.assertEqual(line, "alpha bet…")
        self.assertLessEqual(five_per_char(line), 50)

    def test_empty_and_too_narrow(self):
        self.assertEqual(fit_line("", five_per_char, 50), "")
        self.assertEqual(fit_line("word", five_per_char, 3), "")

    def test_real_font_title(self):
        measure = font_measurer("Helvetica-Bold", 11.5)
        line = fit_line("Cauliflowerrisotto" * 6, measure, 79.77)
        self.assertTrue(line.endswith("…"))
        self.assertLessEqual(measure(line), 79.77)


class TestFontMeasurer(unittest.TestCase):

    def test_matches_reportlab(self):
        measure = font_measurer("Helvetica-Bold", 11.5)
        self.assertAlmostEqual(measure("Chicken wrap"), stringWidth("Chicken wrap", "Helvetica-Bold", 11.5))
        self.assertGreater(measure("wider text"), measure("wide"))


if __name__ == '__main__':
    unittest.main()
