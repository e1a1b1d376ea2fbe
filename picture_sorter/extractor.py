"""Extractor: read the capture date of an image file.

The EXIF DateTimeOriginal tag is read with Pillow + piexif, then with
exifread. When neither yields a usable date the filesystem creation time is
used instead, so decoding problems never reach the caller. A file that can't
be opened at all (missing, unreadable) still raises.
"""
from pathlib import Path
from datetime import date, datetime
from typing import BinaryIO, Optional
import logging
import os

from PIL import Image
import piexif
import exifread

EXIF_DATE_FORMAT = "%Y:%m:%d"
EXIFREAD_DATE_TAG = "EXIF DateTimeOriginal"


def parse_exif_date(value) -> Optional[date]:
    """Return the date portion of an EXIF 'YYYY:MM:DD HH:MM:SS' value, or None."""
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="ignore")
    value = str(value).replace("\x00", "").strip()
    try:
        return datetime.strptime(value[:10], EXIF_DATE_FORMAT).date()
    except ValueError:
        return None


def filesystem_date(path: Path) -> date:
    """Creation date of `path` as reported by the filesystem.

    Uses st_birthtime where the platform records it, st_ctime on Windows
    (creation time there) and st_mtime elsewhere.
    """
    st = os.stat(path)
    ts = getattr(st, "st_birthtime", None)
    if ts is None:
        ts = st.st_ctime if os.name == "nt" else st.st_mtime
    return datetime.fromtimestamp(ts).date()


def _date_from_pillow(fh: BinaryIO) -> Optional[date]:
    with Image.open(fh) as img:
        exif_bytes = img.info.get("exif")
    if not exif_bytes:
        return None
    exif = piexif.load(exif_bytes)
    return parse_exif_date(exif.get("Exif", {}).get(piexif.ExifIFD.DateTimeOriginal))


def _date_from_exifread(fh: BinaryIO) -> Optional[date]:
    tags = exifread.process_file(fh, details=False, stop_tag="DateTimeOriginal")
    tag = tags.get(EXIFREAD_DATE_TAG)
    return parse_exif_date(str(tag)) if tag is not None else None


def _embedded_date(fh: BinaryIO, path: Path) -> Optional[date]:
    for reader in (_date_from_pillow, _date_from_exifread):
        fh.seek(0)
        try:
            found = reader(fh)
        except Exception as exc:
            logging.debug("%s could not read %s: %s", reader.__name__, path, exc)
            continue
        if found is not None:
            return found
    return None


def extract_date(path) -> date:
    """Return the best-known capture date for the image at `path`.

    The file handle is closed before returning so the caller can move the file
    straight away.
    """
    path = Path(path)
    with open(path, "rb") as fh:
        captured = _embedded_date(fh, path)
    if captured is not None:
        return captured
    logging.debug("No capture date tag in %s, using filesystem time", path)
    return filesystem_date(path)
