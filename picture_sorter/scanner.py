"""Scanner: list the eligible image files directly under a source directory."""
from pathlib import Path
from typing import Iterable, List

from .config import DEFAULT_EXTENSIONS, normalize_extensions
from .errors import EnumerationError
from .models import SourceFile


def scan_images(source, extensions: Iterable[str] = None) -> List[SourceFile]:
    """Return a snapshot of the image files in `source`.

    Args:
        source: directory to scan (subdirectories are not entered)
        extensions: optional extensions to include (case-insensitive)
    """
    p = Path(source)
    exts = normalize_extensions(extensions) if extensions else DEFAULT_EXTENSIONS

    try:
        entries = sorted(p.iterdir())
    except OSError as exc:
        raise EnumerationError(f"Cannot read source directory {source}: {exc}") from exc

    files = []
    for fp in entries:
        if fp.suffix.lower() not in exts:
            continue
        if not fp.is_file():
            continue
        files.append(SourceFile.from_path(fp))
    return files
