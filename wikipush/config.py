"""Run configuration, built once from the command line."""

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from wikipush.durations import parse_duration
from wikipush.errors import SetupError
from wikipush.logging_config import get_log_dir

DEFAULT_EXTENSION = ".txt"
DEFAULT_PAUSE = "500ms"
DEFAULT_SUMMARY = "Bulk upload by wikipush"

DONE_DIR = "done"
DUPE_DIR = "dupes"
SKIP_DIR = "skipped"

# Output directories with the description used in messages
OUTPUT_DIRS = [
    (DONE_DIR, "done"),
    (DUPE_DIR, "duplicates"),
    (SKIP_DIR, "skipped"),
]


@dataclass(frozen=True)
class Config:
    run: bool = False
    extension: str = DEFAULT_EXTENSION
    url: str = ""
    pause: float = 0.5
    summary: str = DEFAULT_SUMMARY
    work_dir: Path = Path(".")
    log_dir: Optional[Path] = None
    verbose: bool = False

    @property
    def done_dir(self) -> Path:
        return self.work_dir / DONE_DIR

    @property
    def dupe_dir(self) -> Path:
        return self.work_dir / DUPE_DIR

    @property
    def skip_dir(self) -> Path:
        return self.work_dir / SKIP_DIR

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Config":
        """Build a Config from parsed arguments. Raises SetupError on bad values."""
        try:
            pause = parse_duration(args.pause)
        except ValueError as e:
            raise SetupError(f"Invalid -pause value: {e}") from e

        return cls(
            run=args.run,
            extension=args.ext,
            url=args.url or "",
            pause=pause,
            summary=args.summary,
            work_dir=Path(args.dir),
            log_dir=Path(args.log_dir) if args.log_dir else None,
            verbose=args.verbose,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wikipush",
        description="Bulk upload text files to a MediaWiki. "
        "Without -run, only reports how many files would be uploaded.",
    )
    parser.add_argument(
        "-run", "--run",
        action="store_true",
        help="actually perform the upload",
    )
    parser.add_argument(
        "-ext", "--ext",
        default=DEFAULT_EXTENSION,
        help="file extension (including dot)",
    )
    parser.add_argument(
        "-url", "--url",
        default=os.environ.get("WIKIPUSH_URL", ""),
        help="API url (typically http://.../w/api.php); defaults to $WIKIPUSH_URL",
    )
    parser.add_argument(
        "-pause", "--pause",
        default=DEFAULT_PAUSE,
        help="wait time before each page fetch (e.g. 500ms, 1.5s, 2m)",
    )
    parser.add_argument(
        "-summary", "--summary",
        default=DEFAULT_SUMMARY,
        help="message for the revision log",
    )
    parser.add_argument(
        "-dir", "--dir",
        default=".",
        help="directory holding the files to upload (default: current directory)",
    )
    parser.add_argument(
        "-log-dir", "--log-dir",
        dest="log_dir",
        default=get_log_dir(),
        help="also write a log file into this directory (default: $LOG_DIR)",
    )
    parser.add_argument(
        "-verbose", "--verbose",
        action="store_true",
        help="log debug messages",
    )
    return parser
