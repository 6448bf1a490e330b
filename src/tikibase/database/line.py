from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from functools import cached_property
import re

from tikibase.exceptions import UnclosedBacktickError

MD_REFERENCE_RE = re.compile(r"(!?)\[[^\]]*\]\(([^)]*)\)")
A_TAG_RE = re.compile(r'<a href="([^"]*)"[^>]*>(.*?)</a>')
IMG_TAG_RE = re.compile(r'<img src="([^"]*)"[^>]*>')
FOOTNOTE_RE = re.compile(r"\[\^([\w-]+)\](:?)")
CITATION_RE = re.compile(r"\[(\d+)\](?!\()")
STRIP_LINKS_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")


class ReferenceKind(StrEnum):
    LINK = "link"
    IMAGE = "image"


@dataclass(frozen=True)
class Reference:
    kind: ReferenceKind
    target: str
    start: int
    end: int


@dataclass(frozen=True)
class Citation:
    index: int
    start: int
    end: int


@dataclass(frozen=True)
class Footnote:
    identifier: str
    start: int
    end: int
    definition: bool


def sanitize_code_segments(text: str) -> str:
    """Blank out inline code spans, keeping every character offset intact."""
    result: list[str] = []
    code_start: int | None = None
    for position, char in enumerate(text):
        if char == "`":
            code_start = position if code_start is None else None
            result.append(" ")
        elif code_start is not None:
            result.append(" ")
        else:
            result.append(char)
    if code_start is not None:
        raise UnclosedBacktickError(code_start)
    return "".join(result)


def strip_links(text: str) -> str:
    """Replace ``[text](target)`` with ``text``."""
    return STRIP_LINKS_RE.sub(r"\1", text)


@dataclass(eq=True)
class Line:
    """One line of a document together with its 0-based line number."""

    text: str
    number: int = 0

    @cached_property
    def prose(self) -> str | None:
        """The text with inline code blanked out, None if a backtick is unclosed."""
        try:
            return sanitize_code_segments(self.text)
        except UnclosedBacktickError:
            return None

    def unclosed_backtick(self) -> int | None:
        try:
            sanitize_code_segments(self.text)
        except UnclosedBacktickError as error:
            return error.start
        return None

    @cached_property
    def references(self) -> list[Reference]:
        text = self.prose
        if text is None:
            return []
        found: list[Reference] = []
        for match in MD_REFERENCE_RE.finditer(text):
            kind = ReferenceKind.IMAGE if match.group(1) else ReferenceKind.LINK
            target = self.text[match.start(2):match.end(2)]
            found.append(Reference(kind, target, match.start(), match.end()))
        for match in A_TAG_RE.finditer(text):
            target = self.text[match.start(1):match.end(1)]
            found.append(Reference(ReferenceKind.LINK, target, match.start(), match.end()))
        for match in IMG_TAG_RE.finditer(text):
            target = self.text[match.start(1):match.end(1)]
            found.append(Reference(ReferenceKind.IMAGE, target, match.start(), match.end()))
        found.sort(key=lambda reference: reference.start)
        return found

    @cached_property
    def citations(self) -> list[Citation]:
        text = self.prose
        if text is None:
            return []
        return [
            Citation(int(match.group(1)), match.start(), match.end())
            for match in CITATION_RE.finditer(text)
        ]

    @cached_property
    def footnotes(self) -> list[Footnote]:
        text = self.prose
        if text is None:
            return []
        return [
            Footnote(match.group(1), match.start(), match.end(), bool(match.group(2)))
            for match in FOOTNOTE_RE.finditer(text)
        ]

    def is_blank(self) -> bool:
        return not self.text.strip()
