"""Tikibase package root."""

from tikibase.exceptions import IssueError, TikibaseError

__all__ = ["__version__", "IssueError", "TikibaseError"]

__version__ = "0.1.0"
