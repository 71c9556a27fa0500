"""
Expedition Vlog Publisher — Formatting helpers
Unit conversion, number formatting and small text helpers shared by the
description, page and trail-notes renderers.
"""
import re
from datetime import datetime

FEET_PER_METRE = 3.28084
KM_PER_MILE = 1.60934

_WORD_START_RE = re.compile(r"(^|[\s\-/(])(\w)")


def comma(value) -> str:
    """Thousands separator. Floats are rounded to the nearest integer first."""
    if isinstance(value, float):
        value = round(value)
    if not isinstance(value, int):
        return "0"
    return f"{value:,}"


def feet(metres) -> float:
    return float(metres or 0) * FEET_PER_METRE


def miles(km) -> float:
    return float(km or 0) / KM_PER_MILE


def round_elevation(value) -> float:
    """Round to the nearest 100 at or above 10,000, otherwise the nearest 10."""
    value = float(value or 0)
    if value >= 10000:
        return round(value / 100.0) * 100.0
    return round(value / 10.0) * 10.0


def ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def date_string(date: datetime) -> str:
    """e.g. 3rd April"""
    return f"{date.day}{ordinal_suffix(date.day)} {date.strftime('%B')}"


def title_case(text: str) -> str:
    """The sheet has place names in capitals: "MESOKANTO LA" -> "Mesokanto La"."""
    if not text:
        return ""
    return _WORD_START_RE.sub(lambda m: m.group(1) + m.group(2).upper(), text.lower())


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    word = singular if count == 1 else (plural or singular + "s")
    return f"{comma(count)} {word}"


def local_elevation(metres: int, ft: int, usa: bool) -> str:
    if usa:
        return f"{comma(ft)} ft"
    return f"{comma(metres)} m"
