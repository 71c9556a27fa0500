"""
Expedition Vlog Publisher — Pipeline Orchestrator
Runs one of the publishing jobs:

  videos       match days to Drive files and YouTube videos, then push titles,
               descriptions, uploads, thumbnails and playlist positions
  pages        write the static site day and week pages
  thumbnails   render thumbnail previews from a local folder
  trail-notes  write the trail notes pages
"""
import argparse
import sys
import traceback

import day_data
import descriptions
import drive_client
import pages
import reconcile
import thumbnails
import trail_notes
import youtube_client
from config import (
    DAYS_FILE, ANT_DAYS_FILE, EXPEDITIONS, DOWNLOAD_DIR, VIDEO_IDS_CACHE,
    PAGE_OUTPUT_DIR, THUMBNAIL_IMPORT_DIR, THUMBNAIL_OUTPUT_DIR,
    TRAIL_NOTES_FILE, TRAIL_NOTES_OUTPUT_DIR, YOUTUBE_UPDATE_LIMIT,
    YOUTUBE_CHANNEL_ID,
)


def fatal(step: str, e: Exception, code: int):
    print(f"FATAL: {step} failed: {e}")
    traceback.print_exc()
    sys.exit(code)


def banner(text: str):
    print("=" * 60)
    print(f"  {text}")
    print("=" * 60)


def days_file(expedition: str):
    return ANT_DAYS_FILE if expedition == "ant" else DAYS_FILE


def push_thumbnail(youtube, drive, item):
    src = drive_client.download_file(drive, item.thumbnail["id"], DOWNLOAD_DIR / item.thumbnail["name"])
    dest = DOWNLOAD_DIR / f"thumbnail-{item.expedition}-{item.key:03d}.jpg"
    with src.open("rb") as f:
        dest.write_bytes(thumbnails.transform_image(item, f))
    youtube_client.set_thumbnail(youtube, item.video_id, dest)


def push_item(youtube, drive, item, playlist_id: str, skip_upload: bool = False,
              with_thumbnails: bool = False, dry_run: bool = False) -> str:
    """
    Update or insert one video. Returns what was done: "updated",
    "inserted", "skipped" or "planned" (dry run).
    """
    body = youtube_client.build_video_body(item, item.video)

    if dry_run:
        action = "update" if item.video else "insert"
        print(f"[DRY RUN] Would {action} {item.type} {item.key}: {body['snippet']['title']}")
        return "planned"

    if item.video:
        youtube_client.update_video(youtube, body)
        result = "updated"
    elif skip_upload:
        print(f"  Skipping upload of {item.type} {item.key} (--skip-upload)")
        return "skipped"
    elif item.file is None:
        print(f"[YouTube] WARNING: no drive file for {item.type} {item.key}, can't upload")
        return "skipped"
    else:
        media = drive_client.download_file(drive, item.file["id"], DOWNLOAD_DIR / item.file["name"])
        item.video = youtube_client.insert_video(youtube, body, media)
        result = "inserted"

    if with_thumbnails and item.thumbnail:
        push_thumbnail(youtube, drive, item)

    if item.is_day:
        youtube_client.ensure_playlist_position(youtube, playlist_id, item)

    return result


def run_videos(expedition: str, limit: int, skip_upload: bool = False,
               with_thumbnails: bool = False, dry_run: bool = False):
    """Reconcile and push up to limit videos for one expedition."""
    banner(f"VLOG PUBLISHER — Videos ({EXPEDITIONS[expedition]['name']})")
    settings = EXPEDITIONS[expedition]

    # ── Step 1: Load day data ────────────────────────────────────────────
    print("\n[1/5] Loading day data...")
    try:
        data = day_data.load_days(days_file(expedition))
    except Exception as e:
        fatal("Loading day data", e, 1)

    # ── Step 2: Match Drive files ────────────────────────────────────────
    print("\n[2/5] Matching Drive files...")
    try:
        drive = drive_client.get_drive_service()
        files = drive_client.list_files_in_folder(drive, settings["video_folder"])
        if not files:
            raise RuntimeError("No files found")
        reconcile.attach_files(data, files, expedition)
        if settings["thumbnail_folder"]:
            thumbs = drive_client.list_files_in_folder(drive, settings["thumbnail_folder"])
            reconcile.attach_thumbnails(data, thumbs, expedition)
    except Exception as e:
        fatal("Matching Drive files", e, 2)

    # ── Step 3: Match YouTube videos ─────────────────────────────────────
    print("\n[3/5] Matching YouTube videos...")
    try:
        youtube = youtube_client.get_authenticated_service()
        videos = youtube_client.list_my_videos(youtube)
        reconcile.attach_videos(data, videos, expedition)
        if settings["playlist"]:
            reconcile.attach_playlist(data, youtube_client.list_playlist(youtube, settings["playlist"]))
    except Exception as e:
        fatal("Matching YouTube videos", e, 3)

    # ── Step 4: Render strings ───────────────────────────────────────────
    print("\n[4/5] Rendering titles and descriptions...")
    try:
        descriptions.update_all_strings(data)
        reconcile.save_video_ids(data, VIDEO_IDS_CACHE)
    except Exception as e:
        fatal("Rendering strings", e, 4)

    # ── Step 5: Push to YouTube ──────────────────────────────────────────
    print(f"\n[5/5] Pushing to YouTube channel {YOUTUBE_CHANNEL_ID}...")
    counts = {}
    try:
        for item in reconcile.plan_updates(data, expedition, limit, settings["playlist"]):
            result = push_item(youtube, drive, item, settings["playlist"],
                               skip_upload=skip_upload, with_thumbnails=with_thumbnails,
                               dry_run=dry_run)
            counts[result] = counts.get(result, 0) + 1
        if not dry_run:
            reconcile.save_video_ids(data, VIDEO_IDS_CACHE)
    except Exception as e:
        fatal("Pushing to YouTube", e, 5)

    summary = ", ".join(f"{n} {k}" for k, n in sorted(counts.items())) or "nothing to do"
    print("\n" + "=" * 60)
    print(f"  Videos complete! {summary}")
    print("=" * 60)


def run_pages(offline: bool = False):
    banner("VLOG PUBLISHER — Pages")

    print("\n[1/3] Loading day data...")
    try:
        data = day_data.load_days(DAYS_FILE)
    except Exception as e:
        fatal("Loading day data", e, 1)

    print("\n[2/3] Matching YouTube videos...")
    try:
        if offline:
            count = reconcile.load_video_ids(data, VIDEO_IDS_CACHE)
            print(f"  {count} video IDs from {VIDEO_IDS_CACHE}")
        else:
            youtube = youtube_client.get_authenticated_service()
            reconcile.attach_videos(data, youtube_client.list_my_videos(youtube), "ght")
    except Exception as e:
        fatal("Matching YouTube videos", e, 3)

    print("\n[3/3] Writing pages...")
    try:
        descriptions.update_all_strings(data)
        pages.write_pages(data, PAGE_OUTPUT_DIR)
    except Exception as e:
        fatal("Writing pages", e, 4)


def run_thumbnails(expedition: str):
    banner("VLOG PUBLISHER — Thumbnail previews")
    try:
        data = day_data.load_days(days_file(expedition))
        if not THUMBNAIL_IMPORT_DIR.exists():
            raise RuntimeError(f"Thumbnail import folder {THUMBNAIL_IMPORT_DIR} doesn't exist")
        thumbnails.preview_thumbnails(data, THUMBNAIL_IMPORT_DIR, THUMBNAIL_OUTPUT_DIR)
    except Exception as e:
        fatal("Thumbnail preview", e, 1)


def run_trail_notes():
    banner("VLOG PUBLISHER — Trail notes")
    try:
        trail_notes.create_trail_notes(TRAIL_NOTES_FILE, TRAIL_NOTES_OUTPUT_DIR)
    except Exception as e:
        fatal("Trail notes", e, 1)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Expedition vlog publisher")
    sub = parser.add_subparsers(dest="command", required=True)

    videos = sub.add_parser("videos", help="Update and upload YouTube videos")
    videos.add_argument("--expedition", choices=sorted(EXPEDITIONS), default="ght")
    videos.add_argument(
        "--limit", type=int, default=YOUTUBE_UPDATE_LIMIT,
        help="Maximum number of videos to touch this run"
    )
    videos.add_argument(
        "--skip-upload", action="store_true",
        help="Only update existing videos, don't upload new ones"
    )
    videos.add_argument(
        "--thumbnails", action="store_true",
        help="Render and set thumbnails for the videos touched"
    )
    videos.add_argument(
        "--dry-run", action="store_true",
        help="Reconcile and render, but only print what would be pushed"
    )

    page_cmd = sub.add_parser("pages", help="Write static site pages")
    page_cmd.add_argument(
        "--offline", action="store_true",
        help="Use the cached video IDs instead of calling YouTube"
    )

    thumbs = sub.add_parser("thumbnails", help="Preview thumbnails from a local folder")
    thumbs.add_argument("--expedition", choices=sorted(EXPEDITIONS), default="ght")

    sub.add_parser("trail-notes", help="Write the trail notes pages")

    args = parser.parse_args(argv)
    if args.command == "videos":
        run_videos(args.expedition, args.limit, skip_upload=args.skip_upload,
                   with_thumbnails=args.thumbnails, dry_run=args.dry_run)
    elif args.command == "pages":
        run_pages(offline=args.offline)
    elif args.command == "thumbnails":
        run_thumbnails(args.expedition)
    elif args.command == "trail-notes":
        run_trail_notes()


if __name__ == "__main__":
    main()
