from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator
import logging

from tikibase import paths
from tikibase.database.line import Line, Reference
from tikibase.database.section import Section, is_fence
from tikibase.exceptions import IssueError, PathEscapesRootError
from tikibase.issue import EmptyDocument, NoTitleSection, UnclosedFence
from tikibase.location import Location

OCCURRENCES_TITLE = "occurrences"
OCCURRENCES_TITLE_LINE = "### occurrences"

logger = logging.getLogger(__name__)


@dataclass
class Document:
    """A parsed Markdown file.

    The "occurrences" section is kept apart from ``content_sections`` and is
    always written last.
    """

    path: str
    title_section: Section
    content_sections: list[Section] = field(default_factory=list)
    occurrences_section: Section | None = None

    @classmethod
    def from_text(cls, path: str, text: str) -> Document:
        # only "\n" ends a line, other Unicode line breaks are prose
        lines = [line.removesuffix("\r") for line in text.split("\n")]
        if lines[-1] == "":
            lines.pop()
        if not lines:
            raise IssueError(EmptyDocument(Location(path)))
        sections: list[Section] = []
        inside_fence = False
        fence_line = 0
        for number, line_text in enumerate(lines):
            if is_fence(line_text):
                inside_fence = not inside_fence
                fence_line = number
            elif line_text.startswith("#") and not inside_fence:
                sections.append(Section(line_number=number, title_line=line_text))
                continue
            if not sections:
                raise IssueError(NoTitleSection(Location(path, number)))
            sections[-1].body.append(Line(line_text, number))
        if inside_fence:
            raise IssueError(
                UnclosedFence(Location(path, fence_line, 0, len(lines[fence_line])))
            )
        title_section, *rest = sections
        content_sections: list[Section] = []
        occurrences_section: Section | None = None
        for section in rest:
            if occurrences_section is None and section.human_title == OCCURRENCES_TITLE:
                occurrences_section = section
                continue
            content_sections.append(section)
        return cls(
            path=path,
            title_section=title_section,
            content_sections=content_sections,
            occurrences_section=occurrences_section,
        )

    @classmethod
    def load(cls, root: Path, path: str) -> Document:
        text = (root / path).read_text(encoding="utf-8")
        return cls.from_text(path, text)

    @property
    def human_title(self) -> str:
        return self.title_section.human_title

    @property
    def directory(self) -> str:
        return paths.dirname(self.path)

    def sections(self) -> Iterator[Section]:
        """The title section and the content sections."""
        yield self.title_section
        yield from self.content_sections

    def all_sections(self) -> Iterator[Section]:
        yield from self.sections()
        if self.occurrences_section is not None:
            yield self.occurrences_section

    def anchors(self) -> set[str]:
        return {section.anchor for section in self.all_sections()}

    def section_with_title(self, human_title: str) -> Section | None:
        for section in self.content_sections:
            if section.human_title == human_title:
                return section
        return None

    def last_line_number(self) -> int:
        return list(self.all_sections())[-1].last_line_number

    def lines_count(self) -> int:
        return self.last_line_number() + 1

    def references(self) -> Iterator[tuple[Line, Reference]]:
        """References in the title and content sections."""
        for section in self.sections():
            for line in section.lines():
                for reference in line.references:
                    yield line, reference

    def occurrence_references(self) -> Iterator[tuple[Line, Reference]]:
        if self.occurrences_section is None:
            return
        for line in self.occurrences_section.lines():
            for reference in line.references:
                yield line, reference

    def links_to(self, path: str) -> bool:
        """Whether any reference in this document resolves to ``path``."""
        for _, reference in self.references():
            if self.resolve(reference.target) == path:
                return True
        for _, reference in self.occurrence_references():
            if self.resolve(reference.target) == path:
                return True
        return False

    def resolve(self, target: str) -> str | None:
        """The root-relative path a link target points to, None for external or invalid targets."""
        file_part = target.partition("#")[0]
        if not file_part or file_part.startswith("http"):
            return None
        try:
            return paths.normalize(paths.join(self.directory, file_part))
        except PathEscapesRootError:
            return None

    def remove_section(self, section: Section) -> None:
        self.content_sections.remove(section)
        self.renumber()

    def renumber(self) -> None:
        """Recompute line numbers after sections were added, removed or moved."""
        line_number = 0
        for section in self.all_sections():
            section.renumber(line_number)
            line_number = section.last_line_number + 1

    def text(self) -> str:
        return "".join(section.text() for section in self.all_sections())

    def save(self, root: Path) -> None:
        logger.debug("writing %s", self.path)
        (root / self.path).write_text(self.text(), encoding="utf-8")
