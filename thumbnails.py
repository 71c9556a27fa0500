"""
Expedition Vlog Publisher — Thumbnails
Crops a photo to 1280x720 and overlays the expedition name and the day
caption on translucent black bands, with Pillow.
"""
import io
import os
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont, ImageOps

from config import (
    EXPEDITIONS, THUMBNAIL_WIDTH, THUMBNAIL_HEIGHT, THUMBNAIL_FONT_SIZE,
    THUMBNAIL_BOLD_FONT, THUMBNAIL_REGULAR_FONT,
)
from day_data import VideoData, parse_day_number

BAND_COLOR = (0, 0, 0, 128)
TEXT_COLOR = (255, 255, 255, 255)


# ── Font helpers ─────────────────────────────────────────────────────────────
def get_font(size: int, bold: bool = False) -> ImageFont.FreeTypeFont:
    font_candidates = [
        THUMBNAIL_BOLD_FONT if bold else THUMBNAIL_REGULAR_FONT,
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf" if bold
        else "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    ]
    for fp in font_candidates:
        if os.path.exists(fp):
            return ImageFont.truetype(str(fp), size)
    return ImageFont.load_default(size)


def caption(item: VideoData) -> str:
    return f"Day {item.key}: {item.short}"


def transform_image(item: VideoData, src) -> bytes:
    """
    src is a path or file object with the source photo. Returns JPEG bytes.
    Day 0 (and the trailer) only gets the expedition name.
    """
    img = Image.open(src)
    img = ImageOps.exif_transpose(img)
    img = ImageOps.fit(
        img.convert("RGB"), (THUMBNAIL_WIDTH, THUMBNAIL_HEIGHT),
        method=Image.LANCZOS, centering=(0.5, 0.5),
    ).convert("RGBA")

    bold = get_font(THUMBNAIL_FONT_SIZE, bold=True)
    regular = get_font(THUMBNAIL_FONT_SIZE, bold=False)
    title = EXPEDITIONS.get(item.expedition, EXPEDITIONS["ght"])["name"]

    overlay = Image.new("RGBA", img.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    draw.rectangle([280, 90, img.width, 225], fill=BAND_COLOR)

    text = None
    if item.key > 0:
        text = caption(item)
        text_w = int(round(draw.textlength(text, font=regular)))
        draw.rectangle([0, 500, text_w + 100, 635], fill=BAND_COLOR)

    img = Image.alpha_composite(img, overlay)

    draw = ImageDraw.Draw(img)
    draw.text((320, 180), title, font=bold, fill=TEXT_COLOR, anchor="ls")
    if text:
        draw.text((50, 590), text, font=regular, fill=TEXT_COLOR, anchor="ls")

    out = io.BytesIO()
    img.convert("RGB").save(out, format="JPEG", quality=90)
    return out.getvalue()


def preview_thumbnails(data: list[VideoData], import_dir: Path, output_dir: Path) -> list[Path]:
    """Render thumbnails for the D### photos in import_dir into output_dir."""
    by_key = {item.key: item for item in data if item.is_day}
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for path in sorted(import_dir.iterdir()):
        day = parse_day_number(path.name)
        if day is None:
            continue
        item = by_key.get(day)
        if item is None:
            continue

        print(f"[Thumbnails] Rendering day {day} from {path.name}")
        dest = output_dir / path.name
        with path.open("rb") as f:
            dest.write_bytes(transform_image(item, f))
        written.append(dest)

    print(f"[Thumbnails] Wrote {len(written)} previews to {output_dir}")
    return written
