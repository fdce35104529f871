"""
Nearest-colour pH matching against the fixed reference palette.
Run from project root: python -m pytest tests/ -v
"""
import unittest

import numpy as np

from utils_color import hex_to_rgb
from utils_ph import (
    PH_COLOR_MAP,
    PH_EXAMPLES,
    analyze_color,
    get_ph_description,
    get_ph_example,
    get_reference_color,
    match_ph,
    reference_chart,
)


def _sq_dist(a, b):
    return sum((x - y) ** 2 for x, y in zip(a, b))


class TestReferenceTables(unittest.TestCase):

    def test_palette_covers_every_integer_ph_once(self):
        self.assertEqual([e.ph for e in PH_COLOR_MAP], list(range(15)))

    def test_palette_colors_are_distinct(self):
        colors = [e.color for e in PH_COLOR_MAP]
        self.assertEqual(len(set(colors)), 15)

    def test_examples_are_sparse(self):
        self.assertEqual(len(PH_EXAMPLES), 12)
        for ph in (0, 11, 13):
            self.assertNotIn(ph, PH_EXAMPLES)

    def test_tables_are_read_only(self):
        with self.assertRaises(TypeError):
            PH_EXAMPLES[11] = "Ammonia"
        with self.assertRaises(AttributeError):
            PH_COLOR_MAP[7].description = "Basic"


class TestMatchPh(unittest.TestCase):

    def test_palette_colors_match_themselves(self):
        for entry in PH_COLOR_MAP:
            with self.subTest(ph=entry.ph):
                self.assertEqual(match_ph(entry.rgb), entry.ph)

    def test_result_always_in_range(self):
        for r in range(0, 256, 15):
            for g in range(0, 256, 15):
                for b in range(0, 256, 15):
                    ph = match_ph((r, g, b))
                    self.assertIsInstance(ph, int)
                    self.assertTrue(0 <= ph <= 14)

    def test_random_colors_agree_with_brute_force(self):
        rng = np.random.default_rng(7)
        for rgb in rng.integers(0, 256, size=(300, 3)):
            rgb = tuple(int(c) for c in rgb)
            dists = [_sq_dist(rgb, e.rgb) for e in PH_COLOR_MAP]
            self.assertEqual(match_ph(rgb), dists.index(min(dists)))

    def test_tie_between_neutral_and_weak_base_goes_to_lower_ph(self):
        # #00c078 is exactly equidistant from #00ff00 (pH 7) and #00ccff (pH 8)
        point = hex_to_rgb("#00c078")
        self.assertEqual(_sq_dist(point, hex_to_rgb("#00ff00")),
                         _sq_dist(point, hex_to_rgb("#00ccff")))
        self.assertEqual(match_ph(point), 7)

    def test_exact_midpoint_goes_to_lower_ph(self):
        midpoint = (0, (255 + 204) / 2, (0 + 255) / 2)
        self.assertEqual(match_ph(midpoint), 7)

    def test_pure_red_is_strong_acid_not_ph_14(self):
        self.assertEqual(match_ph((255, 0, 0)), 0)
        self.assertEqual(match_ph((255, 0, 40)), 14)

    def test_dark_color_still_gets_a_definite_ph(self):
        # No confidence cut-off: black snaps to whatever is nearest
        self.assertEqual(match_ph((0, 0, 0)), 12)


class TestLookups(unittest.TestCase):

    def test_description(self):
        self.assertEqual(get_ph_description(7), "Neutral")
        self.assertEqual(get_ph_description(0), "Strong acid")
        self.assertEqual(get_ph_description(13), "Very strong base")
        self.assertEqual(get_ph_description(None), "")
        self.assertEqual(get_ph_description(15), "")

    def test_example(self):
        self.assertEqual(get_ph_example(1), "Stomach acid")
        self.assertEqual(get_ph_example(7), "Pure water")
        self.assertIsNone(get_ph_example(11))
        self.assertIsNone(get_ph_example(None))

    def test_reference_color(self):
        self.assertEqual(get_reference_color(8), "#00ccff")
        self.assertEqual(get_reference_color(99), "")


class TestAnalyzeColor(unittest.TestCase):

    def test_manual_green_is_neutral_pure_water(self):
        result = analyze_color(hex_to_rgb("#00ff00"))
        self.assertEqual(result.ph, 7)
        self.assertEqual(result.description, "Neutral")
        self.assertEqual(result.example, "Pure water")
        self.assertEqual(result.color, "#00ff00")
        self.assertEqual(result.reference_color, "#00ff00")
        self.assertEqual(result.distance, 0.0)

    def test_off_palette_color_reports_closest_reference(self):
        result = analyze_color((10, 250, 5))
        self.assertEqual(result.ph, 7)
        self.assertEqual(result.color, "#0afa05")
        self.assertEqual(result.reference_color, "#00ff00")
        self.assertGreater(result.distance, 0)

    def test_missing_example_is_none(self):
        result = analyze_color(hex_to_rgb("#6600cc"))
        self.assertEqual(result.ph, 11)
        self.assertIsNone(result.example)
        self.assertIsNone(result.to_dict()["example"])

    def test_reference_chart(self):
        chart = reference_chart()
        self.assertEqual(len(chart["palette"]), 15)
        self.assertEqual(chart["palette"][7], {"ph": 7, "color": "#00ff00", "description": "Neutral"})
        phs = [item["ph"] for item in chart["examples"]]
        self.assertEqual(phs, sorted(PH_EXAMPLES))
        self.assertEqual(chart["examples"][0]["color"], "#ff3300")


if __name__ == "__main__":
    unittest.main()
