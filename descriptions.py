"""
Expedition Vlog Publisher — Descriptions
Builds the per-day highlights sentence, the section index that closes every
description, and the full titles/descriptions in metric and imperial units.
"""
from dataclasses import dataclass

from config import (
    GHT_TITLE_TEMPLATE, ANT_TITLE_TEMPLATE, GHT_DAY_DESCRIPTION_TEMPLATE,
    GHT_TRAILER_DESCRIPTION_TEMPLATE, ANT_DAY_DESCRIPTION_TEMPLATE, GHT_ABOUT,
    GHT_GET_INVOLVED, GHT_TOTALS, SOLO_UNTIL_DAY, FLIGHT_DAYS,
    SECOND_PASS_INDEX_DAYS,
)
from day_data import VideoData
from formatting import comma, date_string, local_elevation, pluralize, title_case

YOUTU_BE = "https://youtu.be/"


@dataclass
class Section:
    name: str
    min: int = 0
    max: int = 0
    first_video_id: str = ""


def _ght_days(data: list[VideoData]) -> list[VideoData]:
    return [item for item in data if item.expedition == "ght" and item.is_day]


def build_sections(data: list[VideoData]) -> list[Section]:
    """Consecutive runs of the same section name, in record order."""
    sections = []
    current = None
    for item in _ght_days(data):
        if not item.section:
            continue
        if current is None or item.section != current.name:
            current = Section(name=item.section)
            sections.append(current)
        if item.key < current.min or current.min == 0:
            current.min = item.key
        if item.key > current.max or current.max == 0:
            current.max = item.key
        if not current.first_video_id and item.video_id:
            current.first_video_id = item.video_id
    return sections


def _index_day_line(item: VideoData, pointer: int, usa: bool) -> str:
    if not item.from_:
        return item.zero_day_description()

    if item.pass_:
        pass_name, pass_m, pass_ft = item.pass_, item.pass_m, item.pass_ft
        if item.key in SECOND_PASS_INDEX_DAYS:
            pass_name = item.second_pass
            pass_m, pass_ft = item.second_pass_m, item.second_pass_ft
        line = f"{title_case(item.to)} via {title_case(pass_name)} {local_elevation(pass_m, pass_ft, usa)}"
    else:
        line = title_case(item.to or item.from_)

    if item.end:
        line += f" {item.end}"
    if item.video_id:
        line += f" - {YOUTU_BE}{item.video_id}"
    if item.key == pointer:
        line += "  ⬅️ THIS EPISODE"
    return line


def build_index(pointer: int, data: list[VideoData], usa: bool, kind: str) -> str:
    """
    The index appended to each description. Day videos get a list of every
    day in their own section followed by the list of sections; the trailer
    only gets the list of sections.
    """
    sections = build_sections(data)
    current_section = ""
    for item in _ght_days(data):
        if item.section and item.key == pointer:
            current_section = item.section

    out = []

    if kind == "day":
        out.append(f"\n\n🔽 {current_section} Section\n")
        for item in _ght_days(data):
            if item.section != current_section:
                continue
            out.append(f"\nDay {item.key} - {_index_day_line(item, pointer, usa)}")

    out.append("\n\n🔽 Sections\n")
    for section in sections:
        line = f"\nDay {section.min} to {section.max} - {section.name} Section"
        if section.first_video_id:
            line += f" - {YOUTU_BE}{section.first_video_id}"
        if kind == "day" and section.name == current_section:
            line += "  ⬅️ THIS SECTION"
        out.append(line)

    return "".join(out)


def build_highlights(item: VideoData, usa: bool) -> str:
    """e.g. Today we hiked from Ghunsa (3,595 m) to Kambachen (4,050 m)."""
    narrator = "I" if item.key < SOLO_UNTIL_DAY else "we"
    transport = "flew" if item.key in FLIGHT_DAYS else "hiked"

    parts = []
    if item.to:
        parts.append(
            f"Today {narrator} {transport} from {title_case(item.from_)} "
            f"({local_elevation(item.from_m, item.from_ft, usa)}) to {title_case(item.to)} "
            f"({local_elevation(item.to_m, item.to_ft, usa)})"
        )
    if item.pass_:
        parts.append(f" via {title_case(item.pass_)} ({local_elevation(item.pass_m, item.pass_ft, usa)})")
    if item.second_pass:
        parts.append(
            f" and {title_case(item.second_pass)} "
            f"({local_elevation(item.second_pass_m, item.second_pass_ft, usa)})"
        )
    if item.end:
        parts.append(f" {item.end}")
    if item.to:
        parts.append(".")
    return "".join(parts)


def _totals(usa: bool) -> dict:
    return GHT_TOTALS["imperial" if usa else "metric"]


def _about(usa: bool) -> str:
    return GHT_ABOUT.format(**_totals(usa))


def _store(item: VideoData, usa: bool, title: str, description: str) -> None:
    if usa:
        item.full_title_usa = title
        item.full_description_usa = description
    else:
        item.full_title = title
        item.full_description = description


def render_ght_day(item: VideoData, usa: bool, index: str) -> None:
    title = GHT_TITLE_TEMPLATE.format(title=item.title, key=item.key)
    item.highlights = build_highlights(item, usa)
    item.date_string = date_string(item.date) if item.date else ""
    description = GHT_DAY_DESCRIPTION_TEMPLATE.format(
        key=item.key,
        date_string=item.date_string,
        section=item.section,
        highlights=item.highlights,
        about=_about(usa),
        get_involved=GHT_GET_INVOLVED,
        index=index,
    )
    _store(item, usa, title, description)


def render_ght_trailer(item: VideoData, usa: bool, index: str, episodes: int) -> None:
    description = GHT_TRAILER_DESCRIPTION_TEMPLATE.format(
        episodes=pluralize(episodes, "episode"),
        about=_about(usa),
        get_involved=GHT_GET_INVOLVED,
        index=index,
    )
    _store(item, usa, "The Great Himalaya Trail", description)


def render_ant_day(item: VideoData) -> None:
    item.full_title = ANT_TITLE_TEMPLATE.format(title=item.title, key=item.key)
    item.full_description = ANT_DAY_DESCRIPTION_TEMPLATE.format(
        day_and_date=item.day_and_date,
        long=item.long,
    )


def update_all_strings(data: list[VideoData]) -> None:
    """Render titles and descriptions for every record that has a video."""
    episodes = sum(1 for item in _ght_days(data) if item.has_video)
    for item in data:
        if item.expedition == "ant" and item.is_day:
            render_ant_day(item)
            continue
        if item.expedition != "ght" or not item.has_video:
            continue
        # Metric last so item.highlights is left in metric for the pages.
        for usa in (True, False):
            if item.is_day:
                render_ght_day(item, usa, build_index(item.key, data, usa, "day"))
            elif item.type == "trailer":
                render_ght_trailer(item, usa, build_index(0, data, usa, "trailer"), episodes)
    print(f"[Descriptions] Rendered strings for {comma(episodes)} GHT episodes")
