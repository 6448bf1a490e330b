from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator
import re

from tikibase.database.line import Line

FENCE_MARKER = "```"
_ANCHOR_SEPARATOR_RE = re.compile(r"[\W_]+")


def is_fence(text: str) -> bool:
    return text.startswith(FENCE_MARKER)


def make_anchor(human_title: str) -> str:
    return "#" + _ANCHOR_SEPARATOR_RE.sub("-", human_title.lower()).strip("-")


def heading_level(title_line: str) -> int:
    return len(title_line) - len(title_line.lstrip("#"))


@dataclass
class Section:
    """A heading line and the body lines up to the next heading.

    ``level`` and ``title_text_start`` are derived from ``title_line`` and
    recomputed only through ``retitle``.
    """

    line_number: int
    title_line: str
    body: list[Line] = field(default_factory=list)
    level: int = field(init=False)
    title_text_start: int = field(init=False)

    def __post_init__(self) -> None:
        self._derive()

    def _derive(self) -> None:
        level = heading_level(self.title_line)
        start = level
        while start < len(self.title_line) and self.title_line[start] == " ":
            start += 1
        self.level = level
        self.title_text_start = start

    @classmethod
    def build(cls, title_line: str, line_number: int, body: Iterable[str] = ()) -> Section:
        lines = [
            Line(text, line_number + offset)
            for offset, text in enumerate(body, start=1)
        ]
        return cls(line_number=line_number, title_line=title_line, body=lines)

    @property
    def human_title(self) -> str:
        return self.title_line[self.title_text_start:].strip()

    @property
    def anchor(self) -> str:
        return make_anchor(self.human_title)

    @property
    def last_line_number(self) -> int:
        return self.line_number + len(self.body)

    def retitle(self, title_line: str) -> None:
        self.title_line = title_line
        self._derive()

    def with_level(self, level: int) -> str:
        """The title line rewritten to the given heading level."""
        return "#" * level + " " + self.human_title

    def is_empty(self) -> bool:
        return all(line.is_blank() for line in self.body)

    def append_line(self, text: str) -> None:
        self.body.append(Line(text, self.last_line_number + 1))

    def renumber(self, line_number: int) -> None:
        self.line_number = line_number
        for offset, line in enumerate(self.body, start=1):
            line.number = line_number + offset

    def prose_lines(self) -> Iterator[Line]:
        """Body lines outside of fenced code blocks."""
        inside_fence = False
        for line in self.body:
            if is_fence(line.text):
                inside_fence = not inside_fence
                continue
            if not inside_fence:
                yield line

    def lines(self) -> Iterator[Line]:
        """The title line followed by the prose lines of the body."""
        yield Line(self.title_line, self.line_number)
        yield from self.prose_lines()

    def text(self) -> str:
        parts = [self.title_line + "\n"]
        parts.extend(line.text + "\n" for line in self.body)
        return "".join(parts)
