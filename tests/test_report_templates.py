import unittest
from datetime import date

from backend.app.mock_analysis import generate_mock_analysis
from backend.app.report_templates import confidence_percent, render_report, render_text_report
from backend.app.schemas import Classification, Language


class TestReportTemplates(unittest.TestCase):

    def test_unsafe_report(self):
        report = render_report(Classification.UNSAFE, 0.91)
        self.assertIn("DO NOT CONSUME", report.explanation)
        self.assertIn("91%", report.html)
        self.assertIn("DO NOT CONSUME", report.html)
        self.assertEqual(len(report.actions), 5)

    def test_accepts_band_value(self):
        self.assertEqual(render_report("Unsafe", 0.91), render_report(Classification.UNSAFE, 0.91))

    def test_each_band_has_content(self):
        for band in Classification:
            with self.subTest(band=band):
                report = render_report(band, 0.8)
                self.assertTrue(report.explanation)
                self.assertIn("80%", report.html)
                self.assertGreaterEqual(len(report.actions), 4)

    def test_clean_and_needs_testing_titles(self):
        self.assertIn("Clean Water", render_report(Classification.CLEAN, 0.9).html)
        self.assertIn("Requires Laboratory Testing", render_report(Classification.NEEDS_TESTING, 0.7).html)

    def test_confidence_percent_rounds_half_up(self):
        self.assertEqual(confidence_percent(0.925), 93)
        self.assertEqual(confidence_percent(0.8300000000000001), 83)
        self.assertEqual(confidence_percent(0.0), 0)

    def test_unknown_band_is_rejected(self):
        with self.assertRaises(ValueError):
            render_report("Murky", 0.5)

    def test_text_report(self):
        result = generate_mock_analysis("sample1.jpg", "karachi")
        text = render_text_report(result, generated_on=date(2024, 1, 15))
        self.assertIn("Classification: Unsafe", text)
        self.assertIn("Confidence: 90%", text)
        self.assertIn("Location: karachi", text)
        self.assertIn("1. DO NOT consume this water", text)
        self.assertIn("5. Use water purification tablets", text)
        self.assertIn("Generated on: 2024-01-15", text)

    def test_text_report_headings_follow_language(self):
        result = generate_mock_analysis("sample1.jpg", "karachi")
        text = render_text_report(result, generated_on=date(2024, 1, 15), language=Language.UR)
        self.assertTrue(text.startswith("پانی کے معیار کی تجزیاتی رپورٹ"))
        self.assertIn("درجہ بندی: Unsafe", text)
        self.assertIn("اعتماد: 90%", text)
        self.assertNotIn("Classification:", text)


if __name__ == '__main__':
    unittest.main()
