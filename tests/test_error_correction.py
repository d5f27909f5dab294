import unittest

from error_correction import LEVEL_ORDER, ErrorCorrection


class TestErrorCorrection(unittest.TestCase):
    def test_format_bits(self):
        self.assertEqual(0b01, ErrorCorrection.LOW)
        self.assertEqual(0b00, ErrorCorrection.MEDIUM)
        self.assertEqual(0b11, ErrorCorrection.QUARTILE)
        self.assertEqual(0b10, ErrorCorrection.HIGH)

    def test_labels_and_index(self):
        self.assertEqual(["L", "M", "Q", "H"], [level.label for level in LEVEL_ORDER])
        self.assertEqual([0, 1, 2, 3], [level.index for level in LEVEL_ORDER])

    def test_parse(self):
        self.assertEqual(ErrorCorrection.LOW, ErrorCorrection.parse("L"))
        self.assertEqual(ErrorCorrection.MEDIUM, ErrorCorrection.parse("m"))
        self.assertEqual(ErrorCorrection.QUARTILE, ErrorCorrection.parse("quartile"))
        self.assertEqual(ErrorCorrection.HIGH, ErrorCorrection.parse(" H "))
        self.assertEqual(ErrorCorrection.HIGH, ErrorCorrection.parse(ErrorCorrection.HIGH))

    def test_parse_rejects_unknown_levels(self):
        self.assertRaises(ValueError, lambda: ErrorCorrection.parse("X"))
        self.assertRaises(ValueError, lambda: ErrorCorrection.parse(""))
        self.assertRaises(ValueError, lambda: ErrorCorrection.parse(1))
        self.assertRaises(ValueError, lambda: ErrorCorrection.parse(None))
