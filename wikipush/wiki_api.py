#!/usr/bin/env python3
"""
MediaWiki API client for wikipush.

Provides the few operations a bulk upload needs:
- Login/logout with a bot or user account
- Reading the latest revision of a page
- Creating or overwriting a page
- Proper logging

Usage:
    from wikipush.wiki_api import WikiAPI

    api = WikiAPI(api_url="https://wiki.example.com/w/api.php")
    with api.logged_in("user", "secret"):
        page = api.read_page("Main Page")
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional

import requests

from wikipush.errors import WikiAPIError


@dataclass
class Revision:
    """One historical version of a page."""

    body: str
    revid: Optional[int] = None
    timestamp: Optional[str] = None


@dataclass
class Page:
    """A wiki page with its revisions, newest first."""

    title: str
    revisions: list[Revision] = field(default_factory=list)

    @property
    def exists(self) -> bool:
        return bool(self.revisions)


class WikiAPI:
    """MediaWiki API client with session handling."""

    def __init__(
        self,
        api_url: str,
        user_agent: str = "wikipush",
        timeout: float = 30.0,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the Wiki API client.

        Args:
            api_url: MediaWiki API endpoint (e.g., https://wiki.example.com/w/api.php)
            user_agent: User agent string sent with every request
            timeout: Request timeout in seconds
            logger: Logger instance (creates one if not provided)
        """
        self.api_url = api_url
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

        self._csrf_token: Optional[str] = None

        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept": "application/json",
        })

    def request(
        self,
        params: dict,
        description: str = "API request",
        method: str = "GET",
    ) -> dict:
        """
        Make a single API request.

        Args:
            params: Parameters for the API call (sent as query string for GET,
                form body for POST)
            description: Human-readable description for logging
            method: "GET" or "POST"

        Returns:
            JSON response as dict

        Raises:
            WikiAPIError: on transport failures, undecodable responses and
                API-level errors
        """
        params = dict(params)
        params["format"] = "json"
        params["formatversion"] = "2"

        try:
            if method == "POST":
                response = self.session.post(self.api_url, data=params, timeout=self.timeout)
            else:
                response = self.session.get(self.api_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise WikiAPIError(f"{description} failed: {e}") from e
        except ValueError as e:
            raise WikiAPIError(f"{description} returned invalid JSON: {e}") from e

        if "error" in data:
            error = data["error"]
            code = error.get("code", "unknown")
            info = error.get("info", "")
            raise WikiAPIError(f"{description} failed: {code}: {info}")

        return data

    def get_token(self, token_type: str = "csrf") -> str:
        """Fetch a fresh token of the given type (login, csrf, ...)."""
        data = self.request(
            {"action": "query", "meta": "tokens", "type": token_type},
            f"fetching {token_type} token",
        )
        try:
            return data["query"]["tokens"][f"{token_type}token"]
        except KeyError as e:
            raise WikiAPIError(f"No {token_type} token in response") from e

    def csrf_token(self) -> str:
        if self._csrf_token is None:
            self._csrf_token = self.get_token("csrf")
        return self._csrf_token

    def login(self, username: str, password: str):
        """
        Log in to the wiki. Subsequent requests use the session cookies.

        Raises:
            WikiAPIError: if the credentials are rejected or the wiki is unreachable
        """
        token = self.get_token("login")
        data = self.request(
            {
                "action": "login",
                "lgname": username,
                "lgpassword": password,
                "lgtoken": token,
            },
            "logging in",
            method="POST",
        )

        result = data.get("login", {})
        if result.get("result") != "Success":
            reason = result.get("reason") or result.get("result", "unknown result")
            raise WikiAPIError(f"Login failed: {reason}")

        self._csrf_token = None
        self.logger.info(f"Logged in as {result.get('lgusername', username)}")

    def logout(self):
        """End the session. Failures are logged, never raised."""
        try:
            self.request(
                {"action": "logout", "token": self.csrf_token()},
                "logging out",
                method="POST",
            )
        except WikiAPIError as e:
            self.logger.warning(f"Logout failed: {e}")
        else:
            self.logger.debug("Logged out")
        finally:
            self._csrf_token = None

    @contextmanager
    def logged_in(self, username: str, password: str) -> Iterator["WikiAPI"]:
        """Log in, and log out exactly once when the block exits."""
        self.login(username, password)
        try:
            yield self
        finally:
            self.logout()

    def read_page(self, title: str) -> Page:
        """
        Fetch the current revision of a page.

        Args:
            title: Wiki page title

        Returns:
            Page whose revisions list is empty if the page doesn't exist
        """
        data = self.request(
            {
                "action": "query",
                "prop": "revisions",
                "titles": title,
                "rvprop": "ids|timestamp|content",
                "rvslots": "main",
            },
            f"fetching page {title}",
        )

        pages = data.get("query", {}).get("pages", [])
        if not pages:
            raise WikiAPIError(f"No page data returned for {title}")

        page_data = pages[0]
        if page_data.get("invalid"):
            raise WikiAPIError(
                f"Invalid title {title}: {page_data.get('invalidreason', 'unknown reason')}"
            )

        page = Page(title=page_data.get("title", title))
        for rev in page_data.get("revisions", []):
            slot = rev.get("slots", {}).get("main", {})
            body = slot.get("content", rev.get("content", ""))
            page.revisions.append(
                Revision(body=body, revid=rev.get("revid"), timestamp=rev.get("timestamp"))
            )
        return page

    def edit(self, fields: dict):
        """
        Create or overwrite a page.

        Args:
            fields: Edit parameters, at least title, summary and text

        Raises:
            WikiAPIError: if the edit is rejected
        """
        params = {"action": "edit", "token": self.csrf_token()}
        params.update(fields)

        data = self.request(params, f"editing page {fields.get('title')}", method="POST")

        result = data.get("edit", {}).get("result")
        if result != "Success":
            raise WikiAPIError(f"Edit of {fields.get('title')} failed: {result or 'no result'}")
