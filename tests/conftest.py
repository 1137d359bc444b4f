"""Pytest configuration and shared fixtures."""

import sys
from contextlib import contextmanager
from pathlib import Path

import pytest

# Add project root to path for all tests
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wikipush.config import Config
from wikipush.errors import WikiAPIError
from wikipush.wiki_api import Page, Revision


class FakeWiki:
    """In-memory stand-in for WikiAPI that records every call."""

    def __init__(self, pages=None, fail_read=(), fail_edit=(), fail_login=False):
        # title -> latest body; a missing title is a page that doesn't exist
        self.pages = dict(pages or {})
        self.fail_read = set(fail_read)
        self.fail_edit = set(fail_edit)
        self.fail_login = fail_login
        self.calls = []
        self.edits = []

    def login(self, username, password):
        self.calls.append(("login", username, password))
        if self.fail_login:
            raise WikiAPIError("Login failed: WrongPass")

    def logout(self):
        self.calls.append(("logout",))

    @contextmanager
    def logged_in(self, username, password):
        self.login(username, password)
        try:
            yield self
        finally:
            self.logout()

    def read_page(self, title):
        self.calls.append(("read_page", title))
        if title in self.fail_read:
            raise WikiAPIError(f"fetching page {title} failed: timeout")
        if title not in self.pages:
            return Page(title=title)
        return Page(title=title, revisions=[Revision(body=self.pages[title])])

    def edit(self, fields):
        self.calls.append(("edit", fields["title"]))
        if fields["title"] in self.fail_edit:
            raise WikiAPIError(f"Edit of {fields['title']} failed: protectedpage")
        self.edits.append(fields)
        self.pages[fields["title"]] = fields["text"]

    def call_names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_wiki():
    return FakeWiki()


@pytest.fixture
def work_dir(tmp_path):
    """Directory holding the files to upload."""
    directory = tmp_path / "upload"
    directory.mkdir()
    return directory


@pytest.fixture
def run_config(work_dir):
    """Config for a real (non dry) run without throttling."""
    return Config(
        run=True,
        url="https://wiki.example.com/w/api.php",
        pause=0.0,
        work_dir=work_dir,
    )


@pytest.fixture
def temp_log_dir(tmp_path):
    """Provide a temporary directory for log files."""
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    return log_dir


@pytest.fixture
def sample_revisions_response():
    """Sample MediaWiki API response (formatversion=2) for an existing page."""
    return {
        "batchcomplete": True,
        "query": {
            "pages": [
                {
                    "pageid": 42,
                    "ns": 0,
                    "title": "Main Page",
                    "revisions": [
                        {
                            "revid": 1001,
                            "timestamp": "2024-01-01T00:00:00Z",
                            "slots": {
                                "main": {
                                    "contentmodel": "wikitext",
                                    "content": "Welcome to the wiki.",
                                }
                            },
                        }
                    ],
                }
            ]
        },
    }
