"""
Expedition Vlog Publisher — Configuration
"""
import os
from datetime import datetime, timezone
from pathlib import Path

# ── Paths ────────────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).parent
ASSETS_DIR = PROJECT_ROOT / "assets"
OUTPUT_DIR = PROJECT_ROOT / "output"
DAYS_FILE = Path(os.environ.get("VLOG_DAYS_FILE", PROJECT_ROOT / "ght_data.json"))
ANT_DAYS_FILE = Path(os.environ.get("VLOG_ANT_DAYS_FILE", PROJECT_ROOT / "ant_data.json"))
TRAIL_NOTES_FILE = Path(os.environ.get("VLOG_TRAIL_NOTES_FILE", PROJECT_ROOT / "trailnotes.json"))
VIDEO_IDS_CACHE = PROJECT_ROOT / "video_ids.json"
PAGE_IMAGES_FILE = PROJECT_ROOT / "page_images.json"
DOWNLOAD_DIR = OUTPUT_DIR / "downloads"

# Static site content folders
PAGE_OUTPUT_DIR = Path(os.environ.get("VLOG_PAGE_OUTPUT_DIR", OUTPUT_DIR / "pages"))
TRAIL_NOTES_OUTPUT_DIR = Path(os.environ.get("VLOG_TRAIL_NOTES_OUTPUT_DIR", OUTPUT_DIR / "trail-notes"))

# Local thumbnail previews
THUMBNAIL_IMPORT_DIR = Path(os.environ.get("VLOG_THUMBNAIL_IMPORT_DIR", OUTPUT_DIR / "thumbnails-in"))
THUMBNAIL_OUTPUT_DIR = Path(os.environ.get("VLOG_THUMBNAIL_OUTPUT_DIR", OUTPUT_DIR / "thumbnails-out"))

# ── Google API ───────────────────────────────────────────────────────────────
CREDENTIALS_DIR = Path(os.environ.get("VLOG_CREDENTIALS_DIR", Path.home() / ".credentials"))
YOUTUBE_CLIENT_SECRETS_FILE = CREDENTIALS_DIR / "youtube_secret.json"
DRIVE_CLIENT_SECRETS_FILE = CREDENTIALS_DIR / "drive_secret.json"
YOUTUBE_TOKEN_FILE = PROJECT_ROOT / "youtube_token.json"
DRIVE_TOKEN_FILE = PROJECT_ROOT / "drive_token.json"

YOUTUBE_SCOPES = ["https://www.googleapis.com/auth/youtube"]
DRIVE_SCOPES = ["https://www.googleapis.com/auth/drive"]

DRIVE_PAGE_SIZE = 50

# ── Expedition Settings ──────────────────────────────────────────────────────
# Each expedition has its own Drive folders, playlist and publish schedule.
# Videos go live one per day starting from START_TIME, in record order.
EXPEDITIONS = {
    "ght": {
        "name": "The Great Himalaya Trail",
        "video_folder": os.environ.get("GHT_VIDEO_FOLDER_ID", ""),
        "thumbnail_folder": os.environ.get("GHT_THUMBNAIL_FOLDER_ID", ""),
        "playlist": os.environ.get("GHT_PLAYLIST_ID", ""),
        "start_time": datetime(2020, 3, 1, 15, 0, tzinfo=timezone.utc),
    },
    "ant": {
        "name": "Antarctica",
        "video_folder": os.environ.get("ANT_VIDEO_FOLDER_ID", ""),
        "thumbnail_folder": os.environ.get("ANT_THUMBNAIL_FOLDER_ID", ""),
        "playlist": os.environ.get("ANT_PLAYLIST_ID", ""),
        "start_time": datetime(2020, 11, 1, 15, 0, tzinfo=timezone.utc),
    },
}

# Mathi joined on day 31; day 30 was the flight out of Simikot.
SOLO_UNTIL_DAY = 31
FLIGHT_DAYS = {30}

# The section index lists the second pass for these days (Mesokanto La).
SECOND_PASS_INDEX_DAYS = {117}

# Route totals quoted in the descriptions.
GHT_TOTALS = {
    "metric": {
        "total": "1,400 km",
        "max": "6,200 m",
        "avg": "3,750 m",
        "change": "1,600 m",
    },
    "imperial": {
        "total": "900 miles",
        "max": "20,300 ft",
        "avg": "12,300 ft",
        "change": "5,200 ft",
    },
}

ZERO_DAY_DESCRIPTIONS = {
    "ADMIN": "Admin day",
    "ALT": "Acclimatisation day",
    "REST": "Rest day",
    "SICK": "Sick day",
    "WEATHER": "Waiting for the weather",
}

# ── YouTube Settings ─────────────────────────────────────────────────────────
YOUTUBE_CHANNEL_ID = os.environ.get("YOUTUBE_CHANNEL_ID", "UCFDggPICIlCHp3iOWMYt8cg")
YOUTUBE_CATEGORY_ID = "19"  # Travel & Events
YOUTUBE_PRIVACY = "private"  # new uploads stay private until publishAt
YOUTUBE_DEFAULT_LANGUAGE = "en-GB"  # metric strings
YOUTUBE_USA_LANGUAGE = "en-US"  # imperial strings
YOUTUBE_AUDIO_LANGUAGE = "en"
YOUTUBE_API_PARTS = "snippet,localizations,status"
YOUTUBE_PLAYLIST_ITEM_PARTS = "snippet"
YOUTUBE_UPDATE_LIMIT = 10  # videos touched per run; keeps within the daily quota

# Legacy videos stored the metadata JSON in this localisation.
LEGACY_META_LANGUAGE = "eo"
LEGACY_META_TITLE = "youtube-tool-meta-data"

# ── Templates ────────────────────────────────────────────────────────────────
GHT_TITLE_TEMPLATE = "{title} Great Himalaya Trail Day {key}"
ANT_TITLE_TEMPLATE = "{title} Antarctica Day {key}"

GHT_ABOUT = (
    "The concept of the Great Himalaya Trail is to follow the highest elevation "
    "continuous hiking route across the Himalayas. The Nepal section stretches for "
    "{total} from Kanchenjunga in the east to Humla in the west. It winds through the "
    "mountains with an average elevation of {avg}, and up to {max}, with an average "
    "elevation change of {change} per day. The route includes parts of the more "
    "commercialised treks, linking them together with sections that are so remote "
    "even the locals seldom hike there."
)

GHT_GET_INVOLVED = (
    "🔽 Get Involved\n\n"
    "If you're thinking about hiking the GHT yourself, join our WhatsApp group: "
    "https://chat.whatsapp.com/D5kC4kBc7SALDE8WctMmrH\n\n"
    "More info about our preparation for the trek: "
    "https://www.wildernessprime.com/expeditions/great-himalaya-trail/\n\n"
    "Our logistics were arranged by Narayan at Mac Trek: http://www.mactreks.com/\n\n"
    "Music in this episode by Blue Dot Sessions: https://www.sessions.blue/"
)

GHT_DAY_DESCRIPTION_TEMPLATE = (
    "Day {key} of the Great Himalaya Trail - {date_string} in the {section} section. {highlights}\n\n"
    "🔽 The Great Himalaya Trail\n\n"
    "Hi, I'm Dave Brophy. From April to September 2019 Mathi and I thru-hiked the "
    "Great Himalaya Trail across Nepal.\n\n"
    "{about}\n\n"
    "{get_involved}"
    "{index}\n\n"
)

GHT_TRAILER_DESCRIPTION_TEMPLATE = (
    "Hi, I'm Dave Brophy. From April to September 2019 Mathi and I thru-hiked the "
    "Great Himalaya Trail across Nepal. This vlog follows our progress, with "
    "{episodes} - one for each day of our hike.\n\n"
    "{about}\n\n"
    "{get_involved}"
    "{index}\n\n"
)

ANT_DAY_DESCRIPTION_TEMPLATE = (
    "Antarctica expedition - {day_and_date}.\n\n"
    "{long}\n\n"
    "The Antarctic Peninsular\n\n"
    "Hi, I'm Dave Brophy. In January 2020 I sailed on the Icebird Yacht from Argentina "
    "to the Antarctic Peninsular for a month of ski mountaineering.\n\n"
    "If you'd like more information about the trip, see: https://www.ski-antarctica.com/\n\n"
    "More info about my preparation: https://www.wildernessprime.com/expeditions/antarctica/\n\n"
    "Music in this episode by Blue Dot Sessions: https://www.sessions.blue/\n\n"
)

# ── Page Settings ────────────────────────────────────────────────────────────
PAGE_AUTHOR = "dave"
PAGE_IMAGE_PREFIX = "/v1553075075/"
DAYS_PER_WEEK_SUMMARY = 7
TRAIL_NOTES_START = "Taplejung"
# Extra blank page in print so each map lands on a facing page.
TRAIL_NOTES_BLANK_PAGE_LEGS = {22, 62, 87}

# ── Thumbnail Settings ───────────────────────────────────────────────────────
THUMBNAIL_WIDTH = 1280
THUMBNAIL_HEIGHT = 720
THUMBNAIL_FONT_SIZE = 75
THUMBNAIL_BOLD_FONT = ASSETS_DIR / "JosefinSans-Bold.ttf"
THUMBNAIL_REGULAR_FONT = ASSETS_DIR / "JosefinSans-Regular.ttf"
