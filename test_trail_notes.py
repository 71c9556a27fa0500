import json
import tempfile
import unittest
from pathlib import Path

import trail_notes

NOTES = {
    "Legs": [
        {"Leg": 1, "Vlog": "1,2", "To": "Lali Kharka", "Length": 12.0, "Climb": 1234,
         "Descent": 820, "Route": 4, "Trail": 1, "Quality": 1, "Lodge": "C", "Notes": "Steep."},
        {"Leg": 2, "Vlog": 3, "To": "Ghunsa", "Length": 9.5, "Climb": 600,
         "Descent": 100, "Route": 5, "Trail": 3, "Quality": 2, "Lodge": "G", "Notes": "Easy."},
    ],
    "Waypoints": [
        {"Leg": 1, "Name": "Camp", "Notes": "Water here.", "Elevation": 4567},
    ],
    "Passes": [
        {"Leg": 2, "Pass": "Sele La", "Height": 4290},
    ],
}


class QualityStringTests(unittest.TestCase):
    def test_one_star_depends_on_what_is_rated(self):
        self.assertEqual(trail_notes.quality_string(1, "T"), "1/5 (major problems)")
        self.assertEqual(trail_notes.quality_string(1, "S"), "1/5 (awful)")
        self.assertEqual(trail_notes.quality_string(1, "H"), "1/5 (basic)")
        self.assertEqual(trail_notes.quality_string(1, "?"), "1/5")

    def test_other_ratings(self):
        self.assertEqual(trail_notes.quality_string(4, "T"), "4/5 (above average)")
        self.assertEqual(trail_notes.quality_string(0, "T"), "(unknown)")

    def test_vlog_days(self):
        self.assertEqual(trail_notes.parse_vlog_days("1,2"), [1, 2])
        self.assertEqual(trail_notes.parse_vlog_days(3), [3])
        self.assertEqual(trail_notes.parse_vlog_days(7.0), [7])
        self.assertEqual(trail_notes.parse_vlog_days(None), [])
        with self.assertRaises(ValueError):
            trail_notes.parse_vlog_days("1,x")


class BuildLegsTests(unittest.TestCase):
    def test_legs_are_chained_and_annotated(self):
        first, second = trail_notes.build_legs(NOTES)

        self.assertEqual(first.from_, "Taplejung")
        self.assertEqual(second.from_, "Lali Kharka")
        self.assertEqual(first.days, [1, 2])
        self.assertEqual(second.days, [3])
        self.assertEqual([w.name for w in first.waypoints], ["Camp"])
        self.assertEqual(second.waypoints, [])
        self.assertEqual([p.name for p in second.passes], ["Sele La"])
        self.assertEqual(first.lodge_string, "campsite")
        self.assertEqual(first.quality_string, "1/5 (awful)")
        self.assertEqual(second.quality_string, "2/5 (below average)")


class RenderTests(unittest.TestCase):
    def test_render_with_maps(self):
        md = trail_notes.render_trail_notes(trail_notes.build_legs(NOTES), maps=True)

        self.assertIn("slug: trail-notes\n", md)
        self.assertIn("## Leg 1: Taplejung to Lali Kharka", md)
        self.assertIn("**L001 Camp (4,570 m / 15,000 ft)**: Water here.", md)
        self.assertIn("| Length | 12.0 km | 7.5 miles |", md)
        self.assertIn("| Climb / descent | 1,230 / 820 m | 4,050 / 2,690 ft |", md)
        self.assertIn("Accommodation: campsite - 1/5 (awful)", md)
        self.assertIn("/maps3/L002.jpg", md)
        self.assertIn("/elev3/E001.png#elev001", md)

    def test_render_without_maps(self):
        md = trail_notes.render_trail_notes(trail_notes.build_legs(NOTES), maps=False)
        self.assertIn("slug: trail-notes-no-maps\n", md)
        self.assertIn("title: Trail notes (no maps)\n", md)
        self.assertNotIn("/maps3/", md)

    def test_create_trail_notes_writes_both_versions(self):
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "trailnotes.json"
            source.write_text(json.dumps(NOTES))
            written = trail_notes.create_trail_notes(source, Path(tmp) / "out")
            self.assertEqual([p.name for p in written], ["trail-notes.en.md", "trail-notes-no-maps.en.md"])
            self.assertTrue(all(p.exists() for p in written))

    def test_missing_source(self):
        with self.assertRaises(RuntimeError):
            trail_notes.create_trail_notes(Path("/nonexistent/trailnotes.json"), Path("/tmp"))


if __name__ == "__main__":
    unittest.main()
