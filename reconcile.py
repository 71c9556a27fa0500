"""
Expedition Vlog Publisher — Reconciliation
Joins the three independently keyed collections into the day records:

  * Drive files, keyed by the D### day number in the filename
  * YouTube videos, keyed by the metadata tag in the description
  * Playlist items, keyed by video ID

Anything that can't be matched aborts the run.
"""
import json
from pathlib import Path

from day_data import VideoData, find_item
from drive_client import index_files_by_day
from youtube_client import extract_meta, video_is_current


def _needs_video(item: VideoData, expedition: str) -> bool:
    if item.expedition != expedition or not item.is_day:
        return False
    if expedition == "ght":
        return item.has_video
    return True


def attach_files(data: list[VideoData], files: list[dict], expedition: str) -> None:
    """Every day that needs a video must have a Drive file."""
    by_day = index_files_by_day(files, strict=True)
    for item in data:
        if not _needs_video(item, expedition):
            continue
        f = by_day.get(item.key)
        if f is None:
            raise RuntimeError(f"Can't find drive file for {expedition} day {item.key}")
        item.file = f
    print(f"[Reconcile] Matched {len(by_day)} drive files for {expedition}")


def attach_thumbnails(data: list[VideoData], files: list[dict], expedition: str) -> None:
    """Thumbnails are optional. Files not named by day are ignored."""
    by_day = index_files_by_day(files, strict=False)
    count = 0
    for item in data:
        if item.expedition != expedition or not item.is_day:
            continue
        item.thumbnail = by_day.get(item.key)
        if item.thumbnail:
            count += 1
    print(f"[Reconcile] Matched {count} thumbnails for {expedition}")


def attach_videos(data: list[VideoData], videos: list[dict], expedition: str | None = None) -> int:
    """
    Attach each video carrying metadata to its day record. Videos without
    metadata aren't ours and are skipped; videos for another expedition are
    skipped when expedition is given.
    """
    count = 0
    for video in videos:
        meta = extract_meta(video)
        if meta is None:
            continue
        if expedition and meta.get("Expedition") != expedition:
            continue

        item = find_item(data, meta.get("Expedition"), meta.get("Type"), meta.get("Key"))
        if item is None:
            raise RuntimeError(
                f"Can't find data item for video {video.get('id')} with expedition "
                f"{meta.get('Expedition')}, type {meta.get('Type')}, key {meta.get('Key')}"
            )
        if item.video is not None and item.video_id != video.get("id"):
            raise RuntimeError(f"Two videos for {item.expedition} {item.type} {item.key}: "
                               f"{item.video_id} and {video.get('id')}")
        item.video = video
        count += 1

    print(f"[Reconcile] Matched {count} videos")
    return count


def attach_playlist(data: list[VideoData], playlist_items: list[dict]) -> None:
    by_video = {}
    for pi in playlist_items:
        video_id = pi.get("snippet", {}).get("resourceId", {}).get("videoId")
        if video_id:
            by_video[video_id] = pi
    for item in data:
        if item.video_id:
            item.playlist_item = by_video.get(item.video_id)


def video_id_map(data: list[VideoData]) -> dict[str, str]:
    """filename (base64 meta) -> video ID"""
    return {item.filename(): item.video_id for item in data if item.video_id}


def save_video_ids(data: list[VideoData], path: Path) -> None:
    ids = video_id_map(data)
    path.write_text(json.dumps(ids, indent=2, sort_keys=True))
    print(f"[Reconcile] Saved {len(ids)} video IDs to {path}")


def load_video_ids(data: list[VideoData], path: Path) -> int:
    """Attach video IDs from the cache written by save_video_ids."""
    if not path.exists():
        raise RuntimeError(f"No video ID cache at {path}. Run the videos command first.")
    ids = json.loads(path.read_text())
    count = 0
    for item in data:
        video_id = ids.get(item.filename())
        if video_id:
            item.video = {"id": video_id}
            count += 1
    return count


def _in_place(item: VideoData, playlist_id: str) -> bool:
    if not playlist_id or not item.is_day:
        return True
    position = (item.playlist_item or {}).get("snippet", {}).get("position")
    return position == item.position


def plan_updates(data: list[VideoData], expedition: str, limit: int,
                 playlist_id: str = "") -> list[VideoData]:
    """
    Records to push this run, in order, at most limit of them. Videos that
    already carry the rendered strings and sit at their playlist position
    don't count toward the limit.
    """
    planned = []
    current = 0
    for item in data:
        if item.expedition != expedition:
            continue
        if item.expedition == "ght" and not item.has_video:
            continue
        if item.type not in ("day", "trailer"):
            continue
        if not item.full_title:
            continue
        if video_is_current(item) and _in_place(item, playlist_id):
            current += 1
            continue
        planned.append(item)
        if len(planned) >= limit:
            break
    print(f"[Reconcile] {current} videos up to date, {len(planned)} planned")
    return planned
