"""
Expedition Vlog Publisher — Static Site Pages
Writes a Hugo content page for every GHT episode and a weekly summary page
for every seven episodes.
"""
import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path

from jinja2 import Environment

from config import PAGE_AUTHOR, PAGE_IMAGE_PREFIX, PAGE_IMAGES_FILE, DAYS_PER_WEEK_SUMMARY
from day_data import VideoData

_jinja_env = Environment(keep_trailing_newline=True)
Template = _jinja_env.from_string

EMBED = (
    '<iframe class="youtube75" src="https://www.youtube.com/embed/{{ day.youtube_id }}" '
    'frameborder="0" allow="accelerometer; autoplay; encrypted-media; gyroscope; '
    'picture-in-picture" allowfullscreen></iframe>'
)

DAY_TEMPLATE = Template("""\
---
type: report
date: {{ day.actual_date }}
publishDate: {{ day.publish_date }}
slug: day-{{ day.day_padded }}
translationKey: day-{{ day.day_padded }}
title: {{ ("Day " ~ day.day ~ " - " ~ day.title) | tojson }}
description: {{ day.highlights | tojson }}
{% if day.image -%}
image: "{{ image_prefix }}{{ day.image }}.jpg"
{% endif -%}
keywords: []
author: {{ author }}
featured: true
social_posts: true
social_date: {{ day.social_date }}
hashtags: "#vlog"
title_has_context: false
---

{{ day.highlights }}

""" + EMBED + """

""")

WEEK_TEMPLATE = Template("""\
---
type: report
date: {{ week.actual_date }}
publishDate: {{ week.publish_date }}
slug: week-{{ week.week_padded }}
translationKey: week-{{ week.week_padded }}
title: "Weekly summary #{{ week.week }}"
description: A summary of the vlog episodes from week {{ week.week }}
{% if week.image -%}
image: "{{ image_prefix }}{{ week.image }}.jpg"
{% endif -%}
keywords: []
author: {{ author }}
featured: false
social_posts: true
social_date: {{ week.social_date }}
hashtags: "#vlog"
title_has_context: false
---

This is a weekly summary of the trek from day {{ week.day_start }} to {{ week.day_end }}.
{% for day in week.days %}
## Day {{ day.day }}

{% if day.has_video -%}
{{ day.highlights }}

""" + EMBED + """
{%- else -%}
{{ day.no_video_description }}
{%- endif %}
{% endfor %}""")


@dataclass
class DayPage:
    day: int
    day_padded: str
    has_video: bool
    actual_date: str = ""
    publish_date: str = ""
    social_date: str = ""
    title: str = ""
    highlights: str = ""
    image: str = ""
    youtube_id: str = ""
    no_video_description: str = ""


@dataclass
class WeekPage:
    week: int
    days: list[DayPage] = field(default_factory=list)
    actual_date: str = ""
    publish_date: str = ""
    social_date: str = ""
    image: str = ""
    day_start: int = 0
    day_end: int = 0

    @property
    def week_padded(self) -> str:
        return f"{self.week:02d}"

    @property
    def has_video(self) -> bool:
        return any(d.has_video for d in self.days)


def _iso(value: datetime | None) -> str:
    return value.isoformat() if value else ""


def load_page_images(path: Path = PAGE_IMAGES_FILE) -> dict[int, str]:
    """Day number -> Cloudinary image name (without extension)."""
    if not path.exists():
        print(f"[Pages] WARNING: no page image map at {path}")
        return {}
    return {int(k): v for k, v in json.loads(path.read_text()).items()}


def build_day_page(item: VideoData, images: dict[int, str]) -> DayPage:
    if not item.has_video or not item.video_id:
        return DayPage(
            day=item.key,
            day_padded=f"{item.key:03d}",
            has_video=False,
            actual_date=_iso(item.date),
            no_video_description=item.zero_day_description(),
        )
    return DayPage(
        day=item.key,
        day_padded=f"{item.key:03d}",
        has_video=True,
        actual_date=_iso(item.date),
        publish_date=_iso(item.live_time),
        social_date=_iso(item.live_time),
        title=item.title.rstrip("."),
        highlights=item.highlights,
        image=images.get(item.key, ""),
        youtube_id=item.video_id,
    )


def render_day_page(page: DayPage) -> str:
    return DAY_TEMPLATE.render(day=page, author=PAGE_AUTHOR, image_prefix=PAGE_IMAGE_PREFIX)


def render_week_page(week: WeekPage) -> str:
    return WEEK_TEMPLATE.render(week=week, author=PAGE_AUTHOR, image_prefix=PAGE_IMAGE_PREFIX)


def _close_week(week: WeekPage, last: VideoData) -> None:
    """The summary goes out half an hour after the last episode of the week."""
    offset = timedelta(minutes=30)
    week.actual_date = _iso(last.date + offset) if last.date else ""
    week.publish_date = _iso(last.live_time + offset) if last.live_time else ""
    week.social_date = week.publish_date
    week.day_start = week.days[0].day
    week.day_end = week.days[-1].day
    week.image = next((d.image for d in week.days if d.has_video and d.image), "")


def build_pages(data: list[VideoData], images: dict[int, str]) -> tuple[list[DayPage], list[WeekPage]]:
    """
    Day pages for every GHT day with a video, and a week summary after
    every seven of them. Days without a video only appear in the summaries.
    A trailing partial week gets a summary too.
    """
    day_pages = []
    weeks = []
    week = WeekPage(week=1)
    last_video_item = None
    count = 0

    for item in data:
        if item.expedition != "ght" or not item.is_day:
            continue
        page = build_day_page(item, images)
        week.days.append(page)
        if not page.has_video:
            continue

        day_pages.append(page)
        last_video_item = item
        count += 1

        if count % DAYS_PER_WEEK_SUMMARY == 0:
            _close_week(week, item)
            weeks.append(week)
            week = WeekPage(week=week.week + 1)

    if week.has_video and last_video_item is not None:
        _close_week(week, last_video_item)
        weeks.append(week)

    return day_pages, weeks


def write_pages(data: list[VideoData], output_dir: Path, images: dict[int, str] | None = None) -> list[Path]:
    if images is None:
        images = load_page_images()
    day_pages, weeks = build_pages(data, images)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for page in day_pages:
        path = output_dir / f"day-{page.day_padded}.en.md"
        path.write_text(render_day_page(page), encoding="utf-8")
        written.append(path)
    for week in weeks:
        path = output_dir / f"week-{week.week_padded}.en.md"
        path.write_text(render_week_page(week), encoding="utf-8")
        written.append(path)

    print(f"[Pages] Wrote {len(day_pages)} day pages and {len(weeks)} weekly summaries to {output_dir}")
    return written
