#!/usr/bin/env python3
"""
Filename utilities for wikipush.

Converts between local file names and wiki page titles.
"""


def filename_to_title(filename: str, extension: str = ".txt") -> str:
    """
    Convert a local filename to a wiki page title.

    Args:
        filename: Name of the local file (e.g., "Main Page.txt")
        extension: Suffix to strip, including the dot

    Returns:
        Wiki page title (e.g., "Main Page")

    Only a trailing occurrence of the extension is removed; a name without
    it is returned unchanged.
    """
    if extension and filename.endswith(extension):
        return filename[: -len(extension)]
    return filename


def glob_pattern(extension: str) -> str:
    """Pattern matching every file in a directory with the given extension."""
    return "*" + extension
