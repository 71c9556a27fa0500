"""
Expedition Vlog Publisher — Google Drive
Lists the raw video and thumbnail files in the expedition folders and
downloads them for upload.
"""
import io
from pathlib import Path

from googleapiclient.discovery import build
from googleapiclient.http import MediaIoBaseDownload

from config import DRIVE_TOKEN_FILE, DRIVE_SCOPES, DRIVE_PAGE_SIZE
from credentials import load_credentials
from day_data import parse_day_number


def get_drive_service():
    """Build an authenticated Drive v3 service."""
    creds = load_credentials(DRIVE_TOKEN_FILE, DRIVE_SCOPES, "DRIVE")
    return build("drive", "v3", credentials=creds, cache_discovery=False)


def list_files_in_folder(service, folder_id: str) -> list[dict]:
    """Every file directly inside folder_id, as {"id", "name"} dicts."""
    if not folder_id:
        raise RuntimeError("Drive folder ID is not configured")

    files = []
    page_token = None
    while True:
        response = service.files().list(
            q=f"'{folder_id}' in parents",
            pageSize=DRIVE_PAGE_SIZE,
            fields="nextPageToken, files(id, name)",
            pageToken=page_token,
        ).execute()
        files.extend(response.get("files", []))
        page_token = response.get("nextPageToken")
        if not page_token:
            break

    print(f"[Drive] {len(files)} files in folder {folder_id}")
    return files


def index_files_by_day(files: list[dict], strict: bool = True) -> dict[int, dict]:
    """
    Map day number -> file using the D### filename prefix. A file that
    doesn't follow the convention is an error when strict, otherwise it's
    skipped.
    """
    by_day = {}
    for f in files:
        day = parse_day_number(f["name"])
        if day is None:
            if strict:
                raise ValueError(f"File with unknown filename: {f['name']}")
            continue
        if day in by_day:
            raise ValueError(f"Two files for day {day}: {by_day[day]['name']} and {f['name']}")
        by_day[day] = f
    return by_day


def download_file(service, file_id: str, dest: Path) -> Path:
    """Download a Drive file to dest."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    request = service.files().get_media(fileId=file_id)
    with io.FileIO(dest, "wb") as fh:
        downloader = MediaIoBaseDownload(fh, request)
        done = False
        while not done:
            status, done = downloader.next_chunk()
            if status:
                print(f"  ... {int(status.progress() * 100)}% downloaded")
    print(f"[Drive] Downloaded {file_id} -> {dest}")
    return dest
