"""
quicknotes - A Textual TUI for keeping short notes

A small terminal note-taking application built with the Textual framework.
Notes have a title, a body and a last-modified timestamp, can be searched,
reordered by drag and drop, and are persisted as JSON in the platform's
user data directory.
"""

__version__ = "0.1.0"

# Version tuple for programmatic comparison
VERSION_TUPLE = (0, 1, 0)

__all__ = [
    "__version__",
    "VERSION_TUPLE",
]
