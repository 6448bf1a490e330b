"""The findings a Tikibase check can report.

Every finding is a frozen dataclass deriving from ``Issue``. The set of
subclasses is closed: ``ISSUE_TYPES`` lists all of them and the fix
dispatch table covers each one.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import ClassVar, Optional, Tuple

from tikibase.location import Location


@total_ordering
@dataclass(frozen=True)
class Issue:
    location: Location

    # False for findings about a whole file or directory.
    has_line: ClassVar[bool] = True

    def message(self) -> str:
        raise NotImplementedError

    def sort_key(self) -> tuple[Location, str, str]:
        return (self.location, type(self).__name__, repr(self))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Issue):
            return NotImplemented
        return self.sort_key() < other.sort_key()


@dataclass(frozen=True)
class BrokenImage(Issue):
    target: str

    def message(self) -> str:
        return f'image link to non-existing file "{self.target}"'


@dataclass(frozen=True)
class CannotReadConfigurationFile(Issue):
    reason: str
    has_line: ClassVar[bool] = False

    def message(self) -> str:
        return f"cannot read configuration file: {self.reason}"


@dataclass(frozen=True)
class CannotReadDirectory(Issue):
    reason: str
    has_line: ClassVar[bool] = False

    def message(self) -> str:
        return f"cannot read directory: {self.reason}"


@dataclass(frozen=True)
class CannotWriteConfigFile(Issue):
    reason: str
    has_line: ClassVar[bool] = False

    def message(self) -> str:
        return f"cannot write configuration file: {self.reason}"


@dataclass(frozen=True)
class CannotWriteJsonSchemaFile(Issue):
    reason: str
    has_line: ClassVar[bool] = False

    def message(self) -> str:
        return f"cannot write JSON Schema file: {self.reason}"


@dataclass(frozen=True)
class DocumentWithoutLinks(Issue):
    def message(self) -> str:
        return "document has no links"


@dataclass(frozen=True)
class DuplicateSection(Issue):
    section_title: str

    def message(self) -> str:
        return f'document contains multiple "{self.section_title}" sections'


@dataclass(frozen=True)
class EmptyDocument(Issue):
    has_line: ClassVar[bool] = False

    def message(self) -> str:
        return "empty document"


@dataclass(frozen=True)
class EmptySection(Issue):
    section_title: str

    def message(self) -> str:
        return f'section "{self.section_title}" has no content'


@dataclass(frozen=True)
class HeadingLevelDifferentThanConfigured(Issue):
    section_title: str
    configured_level: int
    actual_level: int

    def message(self) -> str:
        return (
            f'section "{self.section_title}" should have level '
            f"{self.configured_level} but has {self.actual_level}"
        )


@dataclass(frozen=True)
class InconsistentHeadingLevel(Issue):
    section_title: str
    all_variants: Tuple[int, ...]
    this_variant: int
    common_variant: Optional[int]

    def message(self) -> str:
        if self.common_variant is None:
            levels = ", ".join(str(level) for level in self.all_variants)
            return (
                f'section "{self.section_title}" has inconsistent heading levels: {levels}'
            )
        return (
            f'section "{self.section_title}" has level {self.this_variant} '
            f"but usually has level {self.common_variant}"
        )


@dataclass(frozen=True)
class InvalidConfigurationFile(Issue):
    reason: str
    has_line: ClassVar[bool] = False

    def message(self) -> str:
        return f"tikibase.json has an invalid structure: {self.reason}"


@dataclass(frozen=True)
class InvalidTitleRegex(Issue):
    regex: str
    reason: str
    has_line: ClassVar[bool] = False

    def message(self) -> str:
        return f'invalid regular expression in the "titleRegex" entry "{self.regex}": {self.reason}'


@dataclass(frozen=True)
class LinkToNonExistingAnchorInCurrentDocument(Issue):
    anchor: str

    def message(self) -> str:
        return f'link to non-existing anchor "{self.anchor}" in current file'


@dataclass(frozen=True)
class LinkToNonExistingAnchorInExistingDocument(Issue):
    target_file: str
    anchor: str

    def message(self) -> str:
        return f'link to non-existing anchor "{self.anchor}" in "{self.target_file}"'


@dataclass(frozen=True)
class LinkToNonExistingDir(Issue):
    target: str

    def message(self) -> str:
        return f'link to non-existing directory "{self.target}"'


@dataclass(frozen=True)
class LinkToNonExistingFile(Issue):
    target: str

    def message(self) -> str:
        return f'link to non-existing file "{self.target}"'


@dataclass(frozen=True)
class LinkToSameDocument(Issue):
    def message(self) -> str:
        return "document contains link to itself"


@dataclass(frozen=True)
class LinkWithoutTarget(Issue):
    def message(self) -> str:
        return "link without destination"


@dataclass(frozen=True)
class MissingFootnote(Issue):
    identifier: str

    def message(self) -> str:
        return f'footnote "{self.identifier}" doesn\'t exist'


@dataclass(frozen=True)
class MissingLink(Issue):
    path: str
    title: str

    def message(self) -> str:
        return f'missing link to [{self.title}]({self.path})'


@dataclass(frozen=True)
class MixCapSection(Issue):
    all_variants: Tuple[str, ...]
    this_variant: str
    common_variant: Optional[str]

    def message(self) -> str:
        if self.common_variant is None:
            variants = "|".join(self.all_variants)
            return f"section title occurs with inconsistent capitalization: {variants}"
        return (
            f'section "{self.this_variant}" has inconsistent capitalization, '
            f'usually it is "{self.common_variant}"'
        )


@dataclass(frozen=True)
class NoTitleSection(Issue):
    def message(self) -> str:
        return "no title section"


@dataclass(frozen=True)
class ObsoleteOccurrence(Issue):
    """An occurrences entry for a document that no longer links here."""

    path: str

    def message(self) -> str:
        return f'"{self.path}" is listed in the occurrences section but doesn\'t link here'


@dataclass(frozen=True)
class ObsoleteOccurrencesSection(Issue):
    def message(self) -> str:
        return 'obsolete "occurrences" section'


@dataclass(frozen=True)
class OrphanedResource(Issue):
    has_line: ClassVar[bool] = False

    def message(self) -> str:
        return "file isn't linked to"


@dataclass(frozen=True)
class PathEscapesRoot(Issue):
    link: str

    def message(self) -> str:
        return f'link "{self.link}" points outside the Tikibase'


@dataclass(frozen=True)
class SectionWithoutHeader(Issue):
    def message(self) -> str:
        return "section with empty title"


@dataclass(frozen=True)
class TitleRegexNoCaptures(Issue):
    regex: str
    has_line: ClassVar[bool] = False

    def message(self) -> str:
        return f'the "titleRegex" entry "{self.regex}" has no capture groups'


@dataclass(frozen=True)
class TitleRegexTooManyCaptures(Issue):
    regex: str
    captures: int
    has_line: ClassVar[bool] = False

    def message(self) -> str:
        return (
            f'the "titleRegex" entry "{self.regex}" has {self.captures} '
            "capture groups, it must have exactly one"
        )


@dataclass(frozen=True)
class UnclosedBacktick(Issue):
    def message(self) -> str:
        return "unclosed backtick"


@dataclass(frozen=True)
class UnclosedFence(Issue):
    def message(self) -> str:
        return "unclosed fence"


@dataclass(frozen=True)
class UnknownSection(Issue):
    section_title: str
    allowed_titles: Tuple[str, ...]

    def message(self) -> str:
        allowed = "".join(f"\n  - {title}" for title in self.allowed_titles)
        return (
            f'section "{self.section_title}" isn\'t listed in tikibase.json, '
            f"allowed sections:{allowed}"
        )


@dataclass(frozen=True)
class UnorderedSections(Issue):
    def message(self) -> str:
        return "sections occur in different order than specified by tikibase.json"


@dataclass(frozen=True)
class UnusedFootnote(Issue):
    identifier: str

    def message(self) -> str:
        return f'footnote "{self.identifier}" isn\'t used'


ISSUE_TYPES: tuple[type[Issue], ...] = (
    BrokenImage,
    CannotReadConfigurationFile,
    CannotReadDirectory,
    CannotWriteConfigFile,
    CannotWriteJsonSchemaFile,
    DocumentWithoutLinks,
    DuplicateSection,
    EmptyDocument,
    EmptySection,
    HeadingLevelDifferentThanConfigured,
    InconsistentHeadingLevel,
    InvalidConfigurationFile,
    InvalidTitleRegex,
    LinkToNonExistingAnchorInCurrentDocument,
    LinkToNonExistingAnchorInExistingDocument,
    LinkToNonExistingDir,
    LinkToNonExistingFile,
    LinkToSameDocument,
    LinkWithoutTarget,
    MissingFootnote,
    MissingLink,
    MixCapSection,
    NoTitleSection,
    ObsoleteOccurrence,
    ObsoleteOccurrencesSection,
    OrphanedResource,
    PathEscapesRoot,
    SectionWithoutHeader,
    TitleRegexNoCaptures,
    TitleRegexTooManyCaptures,
    UnclosedBacktick,
    UnclosedFence,
    UnknownSection,
    UnorderedSections,
    UnusedFootnote,
)
