"""
Expedition Vlog Publisher — YouTube
Finds the channel's existing expedition videos, and inserts or updates them
with the rendered titles, descriptions, thumbnails and playlist positions.

Each video carries its identity as a [meta:<base64>] tag at the end of the
description, so videos can be matched back to day records whatever their
title says.
"""
import re
import time
from datetime import datetime, timezone
from pathlib import Path

from googleapiclient.discovery import build
from googleapiclient.http import MediaFileUpload

from config import (
    YOUTUBE_TOKEN_FILE, YOUTUBE_SCOPES, YOUTUBE_API_PARTS, YOUTUBE_CATEGORY_ID,
    YOUTUBE_PRIVACY, YOUTUBE_DEFAULT_LANGUAGE, YOUTUBE_USA_LANGUAGE,
    YOUTUBE_AUDIO_LANGUAGE, YOUTUBE_PLAYLIST_ITEM_PARTS, LEGACY_META_LANGUAGE,
    LEGACY_META_TITLE,
)
from credentials import load_credentials
from day_data import VideoData, decode_meta, parse_meta_json

META_TAG_RE = re.compile(r"\[meta:([A-Za-z0-9+/=]+)\]")

# Retry settings for resumable uploads
MAX_RETRIES = 5
RETRY_BACKOFF = 2  # exponential backoff base (seconds)

# Status fields that can be written back on update
_WRITABLE_STATUS = (
    "privacyStatus", "publishAt", "embeddable", "license",
    "publicStatsViewable", "selfDeclaredMadeForKids",
)


def get_authenticated_service():
    """Build an authenticated YouTube API service."""
    creds = load_credentials(YOUTUBE_TOKEN_FILE, YOUTUBE_SCOPES, "YOUTUBE")
    return build("youtube", "v3", credentials=creds, cache_discovery=False)


def list_my_videos(service) -> list[dict]:
    """All videos on the authenticated channel with snippet, localizations and status."""
    videos = []
    page_token = None
    while True:
        search = service.search().list(
            part="id", type="video", forMine=True, maxResults=50, pageToken=page_token,
        ).execute()
        ids = [v["id"]["videoId"] for v in search.get("items", [])]
        if ids:
            response = service.videos().list(part=YOUTUBE_API_PARTS, id=",".join(ids)).execute()
            videos.extend(response.get("items", []))
        page_token = search.get("nextPageToken")
        if not page_token:
            break

    print(f"[YouTube] {len(videos)} videos on channel")
    return videos


def meta_tag(item: VideoData) -> str:
    return f"[meta:{item.filename()}]"


def extract_meta(video: dict) -> dict | None:
    """
    The metadata dict for a video, or None if it has none. Falls back to
    the JSON stored in the "eo" localisation by older versions of the tool.
    """
    description = video.get("snippet", {}).get("description", "")
    match = META_TAG_RE.search(description)
    if match:
        meta = decode_meta(match.group(1))
        if meta is not None:
            return meta

    legacy = (video.get("localizations") or {}).get(LEGACY_META_LANGUAGE)
    if legacy and legacy.get("title") == LEGACY_META_TITLE:
        try:
            return parse_meta_json(legacy.get("description", ""))
        except ValueError as e:
            raise ValueError(f"Unable to parse meta data for video {video.get('id')}: {e}") from e
    return None


def _with_tag(description: str, item: VideoData) -> str:
    return f"{description.rstrip()}\n\n{meta_tag(item)}"


def build_video_body(item: VideoData, video: dict | None = None, now: datetime | None = None) -> dict:
    """
    Request body for videos().insert/update. Metric strings are the default
    language; imperial strings go in the en-US localisation.
    """
    now = now or datetime.now(timezone.utc)
    video = video or {}

    snippet = {
        "title": item.full_title[:100].strip(),
        "description": _with_tag(item.full_description, item),
        "categoryId": YOUTUBE_CATEGORY_ID,
        "defaultLanguage": YOUTUBE_DEFAULT_LANGUAGE,
        "defaultAudioLanguage": YOUTUBE_AUDIO_LANGUAGE,
    }
    # An update replaces the whole snippet
    existing_tags = (video.get("snippet") or {}).get("tags")
    if existing_tags:
        snippet["tags"] = list(existing_tags)

    localizations = {
        lang: loc for lang, loc in (video.get("localizations") or {}).items()
        if lang != LEGACY_META_LANGUAGE
    }
    if item.full_title_usa:
        localizations[YOUTUBE_USA_LANGUAGE] = {
            "title": item.full_title_usa[:100].strip(),
            "description": _with_tag(item.full_description_usa, item),
        }

    existing_status = video.get("status") or {}
    status = {k: existing_status[k] for k in _WRITABLE_STATUS if k in existing_status}
    status.setdefault("privacyStatus", YOUTUBE_PRIVACY)
    if status["privacyStatus"] == "private" and item.live_time and item.live_time > now:
        status["publishAt"] = item.live_time.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    body = {"snippet": snippet, "status": status}
    if localizations:
        body["localizations"] = localizations
    if video.get("id"):
        body["id"] = video["id"]
    return body


def video_is_current(item: VideoData) -> bool:
    """True when the item's video already carries the rendered strings."""
    if not item.video:
        return False
    body = build_video_body(item, item.video)
    snippet = item.video.get("snippet") or {}
    if snippet.get("title") != body["snippet"]["title"]:
        return False
    if snippet.get("description") != body["snippet"]["description"]:
        return False

    existing = item.video.get("localizations") or {}
    if LEGACY_META_LANGUAGE in existing:
        return False
    wanted = body.get("localizations", {}).get(YOUTUBE_USA_LANGUAGE)
    if wanted and existing.get(YOUTUBE_USA_LANGUAGE) != wanted:
        return False
    return True


def insert_video(service, body: dict, media_path: Path) -> dict:
    """Upload a new video. Returns the created video resource."""
    media = MediaFileUpload(
        str(media_path),
        mimetype="video/*",
        resumable=True,
        chunksize=1024 * 1024 * 8,  # 8 MB chunks
    )

    request = service.videos().insert(
        part=",".join(body.keys()),
        body=body,
        media_body=media,
    )

    # Resumable upload with retry
    retries = 0
    response = None

    print(f"[YouTube] Uploading: {body['snippet']['title']}")
    while response is None:
        try:
            status, response = request.next_chunk()
            if status:
                pct = int(status.progress() * 100)
                print(f"  ... {pct}% uploaded")
        except Exception as e:
            retries += 1
            if retries > MAX_RETRIES:
                raise RuntimeError(f"Upload failed after {MAX_RETRIES} retries: {e}") from e
            wait = RETRY_BACKOFF ** retries
            print(f"  [retry {retries}/{MAX_RETRIES}] Error: {e}. Waiting {wait}s...")
            time.sleep(wait)

    print(f"[YouTube] Inserted https://youtu.be/{response['id']}")
    return response


def update_video(service, body: dict) -> dict:
    print(f"[YouTube] Updating {body['id']}: {body['snippet']['title']}")
    return service.videos().update(part=",".join(k for k in body if k != "id"), body=body).execute()


def set_thumbnail(service, video_id: str, image_path: Path) -> None:
    media = MediaFileUpload(str(image_path), mimetype="image/jpeg")
    service.thumbnails().set(videoId=video_id, media_body=media).execute()
    print(f"[YouTube] Thumbnail set for {video_id}")


def list_playlist(service, playlist_id: str) -> list[dict]:
    items = []
    page_token = None
    while True:
        response = service.playlistItems().list(
            part=YOUTUBE_PLAYLIST_ITEM_PARTS, playlistId=playlist_id,
            maxResults=50, pageToken=page_token,
        ).execute()
        items.extend(response.get("items", []))
        page_token = response.get("nextPageToken")
        if not page_token:
            break
    return items


def ensure_playlist_position(service, playlist_id: str, item: VideoData) -> dict | None:
    """Add the item's video to the playlist, or move it to its position."""
    if not playlist_id or not item.video_id:
        return None

    snippet = {
        "playlistId": playlist_id,
        "position": item.position,
        "resourceId": {"kind": "youtube#video", "videoId": item.video_id},
    }

    if item.playlist_item is None:
        print(f"[YouTube] Adding {item.video_id} to playlist at {item.position}")
        item.playlist_item = service.playlistItems().insert(
            part="snippet", body={"snippet": snippet},
        ).execute()
    elif item.playlist_item.get("snippet", {}).get("position") != item.position:
        print(f"[YouTube] Moving {item.video_id} to playlist position {item.position}")
        item.playlist_item = service.playlistItems().update(
            part="snippet", body={"id": item.playlist_item["id"], "snippet": snippet},
        ).execute()
    return item.playlist_item
