"""
wikipush: bulk upload of local text files to a MediaWiki.

Provides:
- WikiAPI: MediaWiki API client (login, read, edit, logout)
- run: the upload pipeline (dry run or real run)
- Config: run configuration built from the command line
- setup_logging: Logging configuration for console and file output
"""

from wikipush.config import Config
from wikipush.errors import SetupError, WikiAPIError, WikipushError
from wikipush.logging_config import setup_logging, get_log_dir
from wikipush.pusher import Outcome, Summary, run
from wikipush.wiki_api import Page, Revision, WikiAPI

__version__ = "1.0.0"

__all__ = [
    "Config",
    "Outcome",
    "Page",
    "Revision",
    "SetupError",
    "Summary",
    "WikiAPI",
    "WikiAPIError",
    "WikipushError",
    "get_log_dir",
    "run",
    "setup_logging",
]
