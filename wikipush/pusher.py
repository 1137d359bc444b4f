#!/usr/bin/env python3
"""
Bulk upload of local text files to a wiki.

Each file matching the configured extension is compared against the wiki page
of the same name and then moved into one of three directories:

- done/:    the page didn't exist and was created from the file
- skipped/: the page already exists with the same content
- dupes/:   the page already exists with different content (needs a human)

Files that can't be read, fetched or uploaded stay where they are.
"""

import enum
import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TextIO

from wikipush.config import OUTPUT_DIRS, Config
from wikipush.durations import format_duration
from wikipush.errors import SetupError, WikiAPIError
from wikipush.filename_utils import filename_to_title, glob_pattern
from wikipush.wiki_api import WikiAPI

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    UPLOADED = "uploaded"
    DUPLICATE = "duplicate"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass
class FileResult:
    """What happened to one file."""

    path: Path
    title: Optional[str]
    outcome: Outcome
    move_error: bool = False


@dataclass
class Summary:
    """Counters for a run."""

    total: int = 0
    uploaded: int = 0
    duplicate: int = 0
    skipped: int = 0
    error: int = 0
    move_error: int = 0
    results: list[FileResult] = field(default_factory=list)

    def add(self, result: FileResult):
        self.results.append(result)
        if result.outcome is Outcome.UPLOADED:
            self.uploaded += 1
        elif result.outcome is Outcome.DUPLICATE:
            self.duplicate += 1
        elif result.outcome is Outcome.SKIPPED:
            self.skipped += 1
        else:
            self.error += 1
        if result.move_error:
            self.move_error += 1

    def report(self, config: Config) -> list[str]:
        """Lines of the final report."""
        lines = [
            "Done.",
            f"Out of {self.total} files,",
            f"{self.uploaded} were uploaded successfully (see {config.done_dir.name} directory),",
            f"{self.duplicate} were skipped because a page with different content "
            f"already existed (see {config.dupe_dir.name} directory),",
            f"{self.skipped} were skipped because they were already in the wiki "
            f"(see {config.skip_dir.name} directory).",
            f"{self.error} couldn't be processed because of errors.",
        ]
        if self.move_error > 0:
            lines.append(
                f"Additionally, {self.move_error} files couldn't be moved into the "
                "correct directory after they were processed."
            )
        return lines


def find_files(config: Config) -> list[Path]:
    """Files to upload, in name order. Discovered once per run."""
    try:
        return sorted(config.work_dir.glob(glob_pattern(config.extension)))
    except (ValueError, OSError) as e:
        raise SetupError(f"Error reading filenames: {e}") from e


def check_dir(directory: Path, description: str):
    """Create directory if needed and make sure it's empty."""
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SetupError(f'Error creating {description} directory "{directory}": {e}') from e

    try:
        is_empty = next(directory.iterdir(), None) is None
    except OSError as e:
        raise SetupError(
            f'Error checking if {description} directory "{directory}" is empty: {e}'
        ) from e

    if not is_empty:
        raise SetupError(f'Please make sure the {description} directory "{directory}" is empty.')


def prepare_output_dirs(config: Config):
    for name, description in OUTPUT_DIRS:
        check_dir(config.work_dir / name, description)


def _read_line(stdin: TextIO, what: str) -> str:
    try:
        line = stdin.readline()
    except (OSError, ValueError) as e:
        raise SetupError(f"Error reading {what}: {e}") from e
    if not line:
        raise SetupError(f"Error reading {what}: end of input")
    return line.rstrip("\r\n")


def prompt_credentials(
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> tuple[str, str]:
    """Ask for username and password. The password is echoed."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    stdout.write("Enter username: ")
    stdout.flush()
    username = _read_line(stdin, "username")

    stdout.write("Enter password (will be echoed): ")
    stdout.flush()
    password = _read_line(stdin, "password")

    return username, password


def move_file(path: Path, target_dir: Path) -> bool:
    """Move path into target_dir keeping its name. Returns False on failure."""
    try:
        path.rename(target_dir / path.name)
    except OSError as e:
        logger.error(
            f'Error moving file "{path.name}" into "{target_dir.name}" directory, skipping... ({e})'
        )
        return False
    return True


def process_file(path: Path, api: WikiAPI, config: Config) -> FileResult:
    """Fetch, classify and move a single file."""
    try:
        local = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading file {path.name}, skipping... ({e})")
        return FileResult(path, None, Outcome.ERROR)

    title = filename_to_title(path.name, config.extension)

    time.sleep(config.pause)

    try:
        page = api.read_page(title)
    except WikiAPIError as e:
        logger.error(f"Error fetching page {title}, skipping... ({e})")
        return FileResult(path, title, Outcome.ERROR)

    if not page.revisions:
        try:
            api.edit({"title": title, "summary": config.summary, "text": local})
        except WikiAPIError as e:
            logger.error(f"Error uploading page {title}, skipping... ({e})")
            return FileResult(path, title, Outcome.ERROR)

        logger.info(f'Successfully uploaded "{title}", page didn\'t exist before.')
        outcome, target = Outcome.UPLOADED, config.done_dir
    else:
        logger.debug(f"Number of revisions: {len(page.revisions)}")
        remote = page.revisions[0].body

        if local.strip() == remote.strip():
            logger.info(f'Skipped "{title}", because it\'s already in the wiki.')
            outcome, target = Outcome.SKIPPED, config.skip_dir
        else:
            logger.info(f'Duplicate page "{title}" with different content.')
            outcome, target = Outcome.DUPLICATE, config.dupe_dir

    moved = move_file(path, target)
    return FileResult(path, title, outcome, move_error=not moved)


def push_files(files: list[Path], api: WikiAPI, config: Config) -> Summary:
    """Process every file in order. Per-file failures never stop the loop."""
    summary = Summary(total=len(files))
    for path in files:
        summary.add(process_file(path, api, config))
    return summary


def run(
    config: Config,
    api: Optional[WikiAPI] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> Optional[Summary]:
    """
    Run a complete upload (or dry run).

    Args:
        config: Run configuration
        api: Wiki client (created from config.url if not provided)
        stdin: Stream to read credentials from (default: sys.stdin)
        stdout: Stream for prompts and the report (default: sys.stdout)

    Returns:
        Summary of the run, or None when nothing was attempted

    Raises:
        SetupError: for problems that stop the whole run
        WikiAPIError: if logging in fails (nothing else escapes the loop)
    """
    stdout = stdout or sys.stdout

    files = find_files(config)

    if not config.run:
        print(f"{len(files)} files would be uploaded.", file=stdout)
        if files:
            print("Start wikipush with `-run' flag to perform the upload.", file=stdout)
        return None

    if not files:
        print("No files found.", file=stdout)
        return None

    if not config.url:
        raise SetupError(
            "Missing URL: Please specify your MediaWiki API URL using the `-url' flag."
        )

    prepare_output_dirs(config)

    if api is None:
        api = WikiAPI(api_url=config.url, user_agent="wikipush")

    username, password = prompt_credentials(stdin, stdout)

    with api.logged_in(username, password):
        print(f"{len(files)} files will be uploaded.", file=stdout)
        print(
            f"This will take at least {format_duration(config.pause * len(files))} "
            "with the current throttle setting.",
            file=stdout,
        )

        summary = push_files(files, api, config)

        for line in summary.report(config):
            print(line, file=stdout)

    return summary
