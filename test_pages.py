import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pages
from day_data import VideoData

START = datetime(2020, 3, 1, 15, 0, tzinfo=timezone.utc)


def trek(video_days=8, zero_day_after=1):
    """Consecutive GHT days with one zero day slotted in after zero_day_after."""
    data = []
    key = 1
    position = 0
    while position < video_days:
        if key == zero_day_after + 1:
            data.append(VideoData(expedition="ght", type="day", key=key, rest="REST",
                                  date=datetime(2019, 4, key, tzinfo=timezone.utc)))
        else:
            data.append(VideoData(
                expedition="ght", type="day", key=key, has_video=True,
                title=f"Episode {key}.", highlights=f"Today I hiked {key}.",
                date=datetime(2019, 4, key, tzinfo=timezone.utc),
                live_time=START + timedelta(days=position), position=position,
                video={"id": f"vid{key}"},
            ))
            position += 1
        key += 1
    return data


class BuildPagesTests(unittest.TestCase):
    def test_a_summary_every_seven_episodes_plus_the_remainder(self):
        day_pages, weeks = pages.build_pages(trek(), {1: "img-one", 3: "img-three"})

        self.assertEqual([p.day for p in day_pages], [1, 3, 4, 5, 6, 7, 8, 9])
        self.assertEqual(len(weeks), 2)

        first, second = weeks
        self.assertEqual((first.day_start, first.day_end), (1, 8))
        self.assertEqual([d.day for d in first.days], [1, 2, 3, 4, 5, 6, 7, 8])
        self.assertFalse(first.days[1].has_video)
        self.assertEqual(first.image, "img-one")
        self.assertEqual(first.publish_date, (START + timedelta(days=6, minutes=30)).isoformat())

        self.assertEqual((second.week, second.day_start, second.day_end), (2, 9, 9))
        self.assertEqual(second.week_padded, "02")

    def test_days_without_video_id_are_not_published(self):
        data = trek(video_days=2)
        data[-1].video = None
        day_pages, weeks = pages.build_pages(data, {})
        self.assertEqual([p.day for p in day_pages], [1])
        self.assertEqual(len(weeks), 1)


class RenderPagesTests(unittest.TestCase):
    def test_day_page(self):
        page = pages.build_day_page(trek()[0], {1: "img-one"})
        md = pages.render_day_page(page)

        self.assertTrue(md.startswith("---\ntype: report\n"))
        self.assertIn("slug: day-001\n", md)
        self.assertIn('title: "Day 1 - Episode 1"\n', md)
        self.assertIn('description: "Today I hiked 1."\n', md)
        self.assertIn('image: "/v1553075075/img-one.jpg"\n', md)
        self.assertIn(f"publishDate: {START.isoformat()}\n", md)
        self.assertIn("https://www.youtube.com/embed/vid1", md)

    def test_pages_without_an_image_have_no_image_line(self):
        md = pages.render_day_page(pages.build_day_page(trek()[0], {}))
        self.assertNotIn("image:", md)
        self.assertIn('description: "Today I hiked 1."\nkeywords: []\n', md)

        _, weeks = pages.build_pages(trek(), {})
        self.assertNotIn("image:", pages.render_week_page(weeks[0]))

    def test_week_page_lists_zero_days(self):
        _, weeks = pages.build_pages(trek(), {})
        md = pages.render_week_page(weeks[0])

        self.assertIn('title: "Weekly summary #1"\n', md)
        self.assertIn("This is a weekly summary of the trek from day 1 to 8.\n", md)
        self.assertIn("## Day 2\n\nRest day\n", md)
        self.assertIn("## Day 3\n\nToday I hiked 3.\n\n<iframe", md)

    def test_write_pages(self):
        with tempfile.TemporaryDirectory() as tmp:
            written = pages.write_pages(trek(), Path(tmp), images={})
            names = sorted(p.name for p in written)
            self.assertIn("day-001.en.md", names)
            self.assertIn("week-01.en.md", names)
            self.assertIn("week-02.en.md", names)
            self.assertNotIn("day-002.en.md", names)
            self.assertTrue((Path(tmp) / "day-009.en.md").exists())


if __name__ == "__main__":
    unittest.main()
