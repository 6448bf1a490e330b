from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Iterator
import logging
import os

from tikibase import paths
from tikibase.config import CONFIG_FILE_NAME, Config, load_config
from tikibase.database.document import Document
from tikibase.exceptions import IssueError
from tikibase.issue import CannotReadDirectory, Issue
from tikibase.location import Location

logger = logging.getLogger(__name__)


class EntryType(StrEnum):
    CONFIGURATION = "configuration"
    DIRECTORY = "directory"
    DOCUMENT = "document"
    IGNORED = "ignored"
    RESOURCE = "resource"

    @classmethod
    def from_name(cls, name: str) -> EntryType:
        """Classify a file name or a link target by its spelling alone."""
        base = paths.basename(name)
        if base == CONFIG_FILE_NAME:
            return cls.CONFIGURATION
        if base.startswith("."):
            return cls.IGNORED
        if name.endswith("/"):
            return cls.DIRECTORY
        if base.lower().endswith(".md"):
            return cls.DOCUMENT
        return cls.RESOURCE


@dataclass(frozen=True)
class Resource:
    path: str


@dataclass
class Directory:
    """A directory of the Tikibase, owning everything below it."""

    relative_path: str
    config: Config
    dirs: dict[str, Directory] = field(default_factory=dict)
    docs: dict[str, Document] = field(default_factory=dict)
    resources: dict[str, Resource] = field(default_factory=dict)

    @classmethod
    def load(
        cls, root: Path, relative_path: str, parent_config: Config
    ) -> tuple[Directory, list[Issue]]:
        """Loads the directory tree, collecting the issues of unusable parts."""
        issues: list[Issue] = []
        try:
            config = parent_config.merge(load_config(root, relative_path))
        except IssueError as error:
            return cls(relative_path=relative_path, config=parent_config), [error.issue]
        directory = cls(relative_path=relative_path, config=config)
        try:
            entries = sorted(os.scandir(root / relative_path), key=lambda entry: entry.name)
        except OSError as error:
            issue = CannotReadDirectory(Location(relative_path or "."), str(error))
            return directory, [issue]
        for entry in entries:
            name = entry.name
            if config.is_ignored(name):
                continue
            path = paths.join(relative_path, name)
            if entry.is_dir():
                if name.startswith("."):
                    continue
                child, child_issues = cls.load(root, path, config)
                directory.dirs[name] = child
                issues.extend(child_issues)
                continue
            kind = EntryType.from_name(name)
            if kind == EntryType.DOCUMENT:
                try:
                    directory.docs[name] = Document.load(root, path)
                except IssueError as error:
                    issues.append(error.issue)
                except (OSError, UnicodeError) as error:
                    issues.append(CannotReadDirectory(Location(path), str(error)))
            elif kind == EntryType.RESOURCE:
                directory.resources[name] = Resource(path)
        logger.debug(
            "loaded directory %r: %d documents, %d resources",
            relative_path,
            len(directory.docs),
            len(directory.resources),
        )
        return directory, issues

    def get_dir(self, path: str) -> Directory | None:
        path = path.rstrip("/")
        if not path:
            return self
        head, rest = paths.split_first(path)
        child = self.dirs.get(head)
        if child is None or rest is None:
            return child
        return child.get_dir(rest)

    def get_doc(self, path: str) -> Document | None:
        head, rest = paths.split_first(path)
        if rest is None:
            return self.docs.get(head)
        child = self.dirs.get(head)
        return child.get_doc(rest) if child is not None else None

    def has_resource(self, path: str) -> bool:
        head, rest = paths.split_first(path)
        if rest is None:
            return head in self.resources
        child = self.dirs.get(head)
        return child is not None and child.has_resource(rest)

    def has_dir(self, path: str) -> bool:
        return self.get_dir(path) is not None

    def config_for(self, doc_path: str) -> Config:
        """The effective configuration of the directory containing ``doc_path``."""
        directory = self.get_dir(paths.dirname(doc_path))
        return directory.config if directory is not None else self.config

    def documents(self) -> Iterator[tuple[Directory, Document]]:
        """All documents with their directory, in path order."""
        for name in sorted(self.docs):
            yield self, self.docs[name]
        for name in sorted(self.dirs):
            yield from self.dirs[name].documents()

    def all_resources(self) -> Iterator[Resource]:
        for name in sorted(self.resources):
            yield self.resources[name]
        for name in sorted(self.dirs):
            yield from self.dirs[name].all_resources()
