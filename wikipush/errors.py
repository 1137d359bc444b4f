"""Exceptions raised by wikipush."""


class WikipushError(Exception):
    """Base error for the project."""


class SetupError(WikipushError):
    """A problem that stops the whole run before or while it starts."""


class WikiAPIError(WikipushError):
    """The wiki could not be reached or rejected a request."""
