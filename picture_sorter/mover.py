"""Mover: move files into their grouped folders, replacing same-named files."""
from pathlib import Path
import errno
import logging
import os
import shutil


def move_file(src: Path, dest_dir: Path, return_status: bool = False):
    """Move `src` into `dest_dir`. Returns destination Path.

    Behavior:
    - The destination keeps the original file name
    - An existing file with the same name is overwritten (last write wins)
    - Across filesystems the move falls back to copy + delete
    """
    src = Path(src)
    dest = Path(dest_dir) / src.name
    replaced = dest.exists()

    try:
        os.replace(src, dest)
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise
        shutil.move(str(src), str(dest))

    logging.debug("Moved %s -> %s%s", src, dest, " (replaced)" if replaced else "")
    if return_status:
        return dest, "replaced" if replaced else "moved"
    return dest
