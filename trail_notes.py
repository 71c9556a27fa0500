"""
Expedition Vlog Publisher — Trail Notes
Renders the printable GHT trail notes page (with and without maps) from the
trail notes sheet export.
"""
import json
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import Environment

from config import TRAIL_NOTES_START, TRAIL_NOTES_BLANK_PAGE_LEGS
from formatting import comma, feet, miles, round_elevation

_jinja_env = Environment(keep_trailing_newline=True)
_jinja_env.filters.update(comma=comma, feet=feet, miles=miles, round=round_elevation)

LODGES = {
    "C": "campsite",
    "S": "shelter",
    "H": "homestay",
    "G": "guesthouse",
}

STATIC_BASE = "https://storage.googleapis.com/wilderness-prime-static"

TRAIL_NOTES_TEMPLATE = _jinja_env.from_string("""\
---
type: report
date: 2020-02-28T00:00:00+00:00
publishDate: 2020-02-28T00:00:00+00:00
slug: trail-notes{{ suffix }}
translationKey: trail-notes{{ suffix }}
title: Trail notes{% if not maps %} (no maps){% endif %}
description: Comprehensive trail notes for the Great Himalaya Trail{% if not maps %} (no maps){% endif %}.
image: "/v1553075075/{% if maps %}compass-390054_1920_hz27dl.jpg{% else %}compass-1753659_1920_h82a3n.jpg{% endif %}"
keywords: [trail-notes]
author: dave
featured: false
social_posts: false
social_date: 2020-02-28T00:00:00+00:00
hashtags: "#trail-notes"
title_has_context: false
---

<div class="no-print">

There are versions of this page [with maps](/expeditions/great-himalaya-trail/trail-notes/) or [with no maps](/expeditions/great-himalaya-trail/trail-notes-no-maps/).

# Trail notes

</div>
{% for leg in legs %}
<div class="no-page-break">

## Leg {{ leg.leg }}: {{ leg.from_ }} to {{ leg.to }}

{{ leg.notes }}

</div>
{% if leg.waypoints %}
<div class="no-page-break">

#### Waypoints <span class="print-only">(leg {{ leg.leg }})</span>
{% for w in leg.waypoints %}
**L{{ "%03d" | format(w.leg) }} {{ w.name }} ({{ w.elevation | round | comma }} m / {{ w.elevation | feet | round | comma }} ft)**: {{ w.notes }}
{% endfor %}
</div>
{% endif %}
<div class="no-page-break">

#### Ratings <span class="print-only">(leg {{ leg.leg }})</span>

Trail: {{ leg.trail_string }}  
Route: {{ leg.route_string }}  
Accommodation: {{ leg.lodge_string }} - {{ leg.quality_string }}  

</div>

<div class="no-page-break">

#### Stats <span class="print-only">(leg {{ leg.leg }})</span>

|   |   |  |
| - | - |- |
| Length | {{ "%.1f" | format(leg.length) }} km | {{ "%.1f" | format(leg.length | miles) }} miles |
| Climb / descent | {{ leg.climb | round | comma }} / {{ leg.descent | round | comma }} m | {{ leg.climb | feet | round | comma }} / {{ leg.descent | feet | round | comma }} ft |

</div>

<div class="no-page-break">

#### Elevation <span class="print-only">(leg {{ leg.leg }})</span>

![]({{ static_base }}/elev3/E{{ "%03d" | format(leg.leg) }}.png#elev{{ "%03d" | format(leg.leg) }})

</div>
{% if maps %}
<div class="no-page-break">

#### Map <span class="print-only">(leg {{ leg.leg }})</span>

![]({{ static_base }}/maps3/L{{ "%03d" | format(leg.leg) }}.jpg)

</div>

<div class="page-break"></div>
{% if leg.leg in blank_page_legs %}
<div class="print-only">

This page is intentionally left blank.

<div class="page-break"></div>

</div>
{% endif %}{% endif %}{% endfor %}""")


@dataclass
class Waypoint:
    leg: int
    name: str = ""
    notes: str = ""
    elevation: int = 0


@dataclass
class Pass:
    leg: int
    name: str = ""
    height: float = 0.0


@dataclass
class Leg:
    leg: int
    to: str = ""
    length: float = 0.0
    climb: float = 0.0
    descent: float = 0.0
    start: float = 0.0
    end: float = 0.0
    top: float = 0.0
    bottom: float = 0.0
    route: int = 0
    trail: int = 0
    quality: int = 0
    lodge: str = ""
    notes: str = ""
    vlog: object = None

    from_: str = ""
    waypoints: list[Waypoint] = field(default_factory=list)
    passes: list[Pass] = field(default_factory=list)
    days: list[int] = field(default_factory=list)
    trail_string: str = ""
    route_string: str = ""
    lodge_string: str = ""
    quality_string: str = ""


def quality_string(rating: int, kind: str) -> str:
    """
    kind is T (trail), R (route), or a lodge code. A rating of 1 means
    something different for paths and for places to sleep.
    """
    if rating == 1:
        if kind in ("T", "R"):
            return "1/5 (major problems)"
        if kind in ("C", "S"):
            return "1/5 (awful)"
        if kind in ("G", "H"):
            return "1/5 (basic)"
        return "1/5"
    return {
        2: "2/5 (below average)",
        3: "3/5 (average)",
        4: "4/5 (above average)",
        5: "5/5 (excellent)",
    }.get(rating, "(unknown)")


def parse_vlog_days(vlog) -> list[int]:
    """The Vlog column is either a number or a comma separated list of days."""
    if vlog is None or vlog == "":
        return []
    if isinstance(vlog, float) and vlog.is_integer():
        vlog = int(vlog)
    try:
        return [int(d) for d in str(vlog).split(",")]
    except ValueError as e:
        raise ValueError(f"Bad vlog days {vlog!r}: {e}") from e


def _lower_keys(raw: dict) -> dict:
    return {k.lower(): v for k, v in raw.items()}


def _leg_from_json(raw: dict) -> Leg:
    r = _lower_keys(raw)
    return Leg(
        leg=int(r.get("leg") or 0),
        to=r.get("to") or "",
        length=float(r.get("length") or 0),
        climb=float(r.get("climb") or 0),
        descent=float(r.get("descent") or 0),
        start=float(r.get("start") or 0),
        end=float(r.get("end") or 0),
        top=float(r.get("top") or 0),
        bottom=float(r.get("bottom") or 0),
        route=int(r.get("route") or 0),
        trail=int(r.get("trail") or 0),
        quality=int(r.get("quality") or 0),
        lodge=r.get("lodge") or "",
        notes=r.get("notes") or "",
        vlog=r.get("vlog"),
    )


def build_legs(notes: dict) -> list[Leg]:
    legs = [_leg_from_json(raw) for raw in notes.get("Legs", [])]
    waypoints = []
    for raw in notes.get("Waypoints", []):
        r = _lower_keys(raw)
        waypoints.append(Waypoint(
            leg=int(r.get("leg") or 0), name=r.get("name") or "",
            notes=r.get("notes") or "", elevation=int(r.get("elevation") or 0),
        ))
    passes = []
    for raw in notes.get("Passes", []):
        r = _lower_keys(raw)
        passes.append(Pass(leg=int(r.get("leg") or 0), name=r.get("pass") or "",
                           height=float(r.get("height") or 0)))

    for i, leg in enumerate(legs):
        leg.from_ = TRAIL_NOTES_START if i == 0 else legs[i - 1].to
        leg.waypoints = [w for w in waypoints if w.leg == leg.leg]
        leg.passes = [p for p in passes if p.leg == leg.leg]
        leg.days = parse_vlog_days(leg.vlog)
        leg.trail_string = quality_string(leg.trail, "T")
        leg.route_string = quality_string(leg.route, "R")
        leg.quality_string = quality_string(leg.quality, leg.lodge)
        leg.lodge_string = LODGES.get(leg.lodge, "unknown")
    return legs


def render_trail_notes(legs: list[Leg], maps: bool) -> str:
    return TRAIL_NOTES_TEMPLATE.render(
        legs=legs,
        maps=maps,
        suffix="" if maps else "-no-maps",
        static_base=STATIC_BASE,
        blank_page_legs=TRAIL_NOTES_BLANK_PAGE_LEGS,
    )


def create_trail_notes(source: Path, output_dir: Path) -> list[Path]:
    """Write trail-notes.en.md and trail-notes-no-maps.en.md."""
    try:
        notes = json.loads(source.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise RuntimeError(f"Trail notes file not found: {source}") from e
    legs = build_legs(notes)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for maps, name in ((True, "trail-notes.en.md"), (False, "trail-notes-no-maps.en.md")):
        path = output_dir / name
        path.write_text(render_trail_notes(legs, maps), encoding="utf-8")
        written.append(path)

    print(f"[TrailNotes] Wrote {len(legs)} legs to {output_dir}")
    return written
