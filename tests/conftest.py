import os
from datetime import datetime
from pathlib import Path

import piexif
import pytest
from PIL import Image

FORMATS = {".jpg": "JPEG", ".jpeg": "JPEG", ".png": "PNG", ".gif": "GIF"}


def exif_block(taken) -> bytes:
    if isinstance(taken, str):
        taken = taken.encode("ascii")
    return piexif.dump({"0th": {}, "Exif": {piexif.ExifIFD.DateTimeOriginal: taken}})


def set_file_time(path: Path, when: datetime) -> None:
    ts = when.timestamp()
    os.utime(path, (ts, ts))


@pytest.fixture
def make_image():
    """Write a small real image; `taken` adds a DateTimeOriginal tag (JPEG and PNG)."""

    def _make(path: Path, taken=None, file_time: datetime = None) -> Path:
        path = Path(path)
        fmt = FORMATS[path.suffix.lower()]
        img = Image.new("RGB", (8, 8), (200, 30, 30))
        if fmt == "GIF":
            img = img.convert("P")
        if taken is not None:
            img.save(path, fmt, exif=exif_block(taken))
        else:
            img.save(path, fmt)
        if file_time is not None:
            set_file_time(path, file_time)
        return path

    return _make


@pytest.fixture
def source(tmp_path):
    d = tmp_path / "source"
    d.mkdir()
    return d


@pytest.fixture
def dest(tmp_path):
    d = tmp_path / "dest"
    d.mkdir()
    return d


def has_birthtime(path: Path) -> bool:
    return getattr(os.stat(path), "st_birthtime", None) is not None or os.name == "nt"
