from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from tikibase.config import Config
from tikibase.database.directory import Directory, Resource
from tikibase.database.document import Document
from tikibase.issue import Issue


@dataclass
class Tikibase:
    """A loaded Tikibase: the root on disk and the directory tree under it."""

    root: Path
    dir: Directory

    @classmethod
    def load(cls, root: Path) -> tuple[Tikibase, list[Issue]]:
        directory, issues = Directory.load(root, "", Config())
        return cls(root=root, dir=directory), issues

    def get_doc(self, path: str) -> Document | None:
        return self.dir.get_doc(path)

    def documents(self) -> Iterator[Document]:
        for _, doc in self.dir.documents():
            yield doc

    def resources(self) -> Iterator[Resource]:
        return self.dir.all_resources()

    def config_for(self, doc_path: str) -> Config:
        return self.dir.config_for(doc_path)

    def save(self, doc: Document) -> None:
        doc.save(self.root)
