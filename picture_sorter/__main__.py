"""Command line entry point: python -m picture_sorter SOURCE DEST"""
import argparse
import logging
import sys
from pathlib import Path

from picture_sorter.config import SorterConfig, load_config
from picture_sorter.errors import PictureSorterError
from picture_sorter.models import BatchStatus
from picture_sorter.processor import BatchProcessor


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="picture_sorter",
        description="Move photos into YYYY-MM folders using their capture date")
    parser.add_argument("src", type=Path, help="folder holding the images")
    parser.add_argument("dst", type=Path, help="folder receiving the YYYY-MM subfolders")
    parser.add_argument("--config", type=Path, help="JSON settings file")
    parser.add_argument("--workers", type=int, help="worker threads (default: CPU count)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    def progress(done: int, total: int, message: str):
        if done:
            print(f"[{done}/{total}] {message}")

    try:
        config = load_config(args.config) if args.config else SorterConfig()
        config = config.with_workers(args.workers)
        report = BatchProcessor(config).run(args.src, args.dst, progress)
    except PictureSorterError as exc:
        logging.critical("%s", exc)
        return 2

    if report.status is BatchStatus.NO_ELIGIBLE_FILES:
        print(f"No image files found in {report.source}")
        return 0
    print(f"Done: {report.succeeded} moved, {report.failed} failed, {report.skipped} skipped")
    for failure in report.failures:
        print(f"  {failure}", file=sys.stderr)
    return 0 if report.status is BatchStatus.COMPLETED else 1


if __name__ == "__main__":
    sys.exit(main())
