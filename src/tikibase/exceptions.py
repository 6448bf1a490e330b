"""Exceptions raised while loading and repairing a Tikibase."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tikibase.issue import Issue


class TikibaseError(RuntimeError):
    """Base class for all errors raised by this package."""


class IssueError(TikibaseError):
    """A failure that is reported to the user as an Issue.

    Loaders raise this for files or directories they cannot use. The
    directory walk catches it and collects ``issue`` next to the data that
    did load, so a single broken file never aborts the run.
    """

    def __init__(self, issue: Issue):
        super().__init__(issue.message())
        self.issue = issue


class PathEscapesRootError(TikibaseError):
    """A relative path climbs above the root of the Tikibase."""

    def __init__(self, path: str):
        super().__init__(f"path {path!r} escapes the Tikibase root")
        self.path = path


class UnclosedBacktickError(TikibaseError):
    def __init__(self, start: int):
        super().__init__(f"unclosed backtick at position {start}")
        self.start = start
