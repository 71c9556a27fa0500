"""
Expedition Vlog Publisher — Day Data
Loads the spreadsheet export of expedition days and works out each video's
identity (the base64 metadata "filename") and publish schedule.
"""
import base64
import binascii
import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path

from config import EXPEDITIONS, ZERO_DAY_DESCRIPTIONS

META_VERSION = 1

# Drive files are named D001..., D002... by day number.
FILENAME_RE = re.compile(r"^D([0-9]{3}).*$")

# JSON key (lower-cased) -> attribute. The sheet export uses Go-style keys.
_FIELDS = {
    "expedition": "expedition",
    "type": "type",
    "key": "key",
    "hasvideo": "has_video",
    "from": "from_",
    "fromm": "from_m",
    "fromft": "from_ft",
    "to": "to",
    "tom": "to_m",
    "toft": "to_ft",
    "pass": "pass_",
    "passm": "pass_m",
    "passft": "pass_ft",
    "secondpass": "second_pass",
    "secondpassm": "second_pass_m",
    "secondpassft": "second_pass_ft",
    "end": "end",
    "title": "title",
    "short": "short",
    "section": "section",
    "rest": "rest",
    "dayanddate": "day_and_date",
    "desc": "desc",
    "long": "long",
    "via": "via",
    "special": "special",
}

_INT_FIELDS = {
    "key", "from_m", "from_ft", "to_m", "to_ft", "pass_m", "pass_ft",
    "second_pass_m", "second_pass_ft",
}
_BOOL_FIELDS = {"has_video", "special"}


@dataclass
class VideoData:
    expedition: str = ""
    type: str = ""
    key: int = 0
    date: datetime | None = None
    has_video: bool = False
    from_: str = ""
    from_m: int = 0
    from_ft: int = 0
    to: str = ""
    to_m: int = 0
    to_ft: int = 0
    pass_: str = ""
    pass_m: int = 0
    pass_ft: int = 0
    second_pass: str = ""
    second_pass_m: int = 0
    second_pass_ft: int = 0
    end: str = ""
    title: str = ""
    short: str = ""
    section: str = ""
    rest: str = ""
    day_and_date: str = ""
    desc: str = ""
    long: str = ""
    via: str = ""
    special: bool = False

    # Schedule
    position: int = 0
    live_time: datetime | None = None

    # Attached during reconciliation
    file: dict | None = None
    thumbnail: dict | None = None
    video: dict | None = None
    playlist_item: dict | None = None

    # Rendered strings
    highlights: str = ""
    date_string: str = ""
    full_title: str = ""
    full_description: str = ""
    full_title_usa: str = ""
    full_description_usa: str = ""
    extra: dict = field(default_factory=dict)

    @property
    def is_day(self) -> bool:
        return self.type == "day"

    @property
    def video_id(self) -> str:
        return (self.video or {}).get("id", "")

    def meta(self) -> dict:
        return {
            "Version": META_VERSION,
            "Expedition": self.expedition,
            "Type": self.type,
            "Key": self.key,
        }

    def filename(self) -> str:
        """The base64 metadata string that identifies this record's video."""
        return encode_meta(self.meta())

    def zero_day_description(self) -> str:
        return ZERO_DAY_DESCRIPTIONS.get(self.rest, "")


def encode_meta(meta: dict) -> str:
    raw = json.dumps(meta, separators=(",", ":"))
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_meta(encoded: str) -> dict | None:
    """
    Decode a base64 metadata string. Returns None if the string isn't valid
    base64 (plenty of videos have other text that looks like a tag).
    Raises ValueError if it decodes but isn't metadata JSON.
    """
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return None
    return parse_meta_json(raw.decode("utf-8", errors="replace"))


def parse_meta_json(text: str) -> dict:
    try:
        meta = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid metadata JSON {text!r}: {e}") from e
    if not isinstance(meta, dict) or "Key" not in meta:
        raise ValueError(f"Metadata is missing a key: {text!r}")
    return meta


def parse_day_number(filename: str) -> int | None:
    match = FILENAME_RE.match(filename)
    if not match:
        return None
    return int(match.group(1))


def parse_date(value) -> datetime | None:
    if not value:
        return None
    date = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if date.hour == 23:
        # Some of the dates in the Google Sheet export are an hour early
        date += timedelta(hours=1)
    return date


def parse_bool(value) -> bool:
    """JSON or sheet-export boolean: true/false, 1/0, yes/no, or blank."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in ("true", "1", "yes", "y"):
        return True
    if text in ("false", "0", "no", "n", ""):
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def record_from_json(raw: dict) -> VideoData:
    item = VideoData()
    for json_key, value in raw.items():
        lowered = json_key.lower()
        if lowered == "date":
            item.date = parse_date(value)
            continue
        attr = _FIELDS.get(lowered)
        if attr is None:
            item.extra[json_key] = value
            continue
        if attr in _INT_FIELDS:
            value = int(value or 0)
        elif attr in _BOOL_FIELDS:
            value = parse_bool(value)
        elif value is None:
            value = ""
        else:
            value = str(value)
        setattr(item, attr, value)
    return item


def assign_schedule(data: list[VideoData]) -> None:
    """
    Number the days that get a video and give each a publish time, one day
    apart from the expedition's start time. GHT only counts days flagged
    with HasVideo; every Antarctica day has a video.
    """
    positions = {}
    for item in data:
        if not item.is_day or item.expedition not in EXPEDITIONS:
            continue
        if item.expedition == "ght" and not item.has_video:
            continue
        position = positions.get(item.expedition, 0)
        item.position = position
        start = EXPEDITIONS[item.expedition]["start_time"]
        item.live_time = start + timedelta(days=position)
        positions[item.expedition] = position + 1


def load_days(path: Path) -> list[VideoData]:
    """Read the day records JSON file. Records keep file order."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise RuntimeError(f"Day data file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Unable to parse day data {path}: {e}") from e
    if not isinstance(raw, list):
        raise ValueError(f"Day data {path} is not a list")

    data = [record_from_json(r) for r in raw]

    seen = set()
    for item in data:
        ident = (item.expedition, item.type, item.key)
        if ident in seen:
            raise ValueError(f"Duplicate day record: expedition {item.expedition}, "
                             f"type {item.type}, key {item.key}")
        seen.add(ident)

    assign_schedule(data)
    print(f"[DayData] Loaded {len(data)} records from {path}")
    return data


def find_item(data: list[VideoData], expedition: str, type_: str, key: int) -> VideoData | None:
    for item in data:
        if item.expedition == expedition and item.type == type_ and item.key == key:
            return item
    return None
