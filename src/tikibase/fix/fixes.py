"""The repairs the fixers can report."""

from __future__ import annotations

from dataclasses import dataclass

from tikibase.location import Location


@dataclass(frozen=True)
class Fix:
    location: Location

    def message(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class AddedOccurrencesSection(Fix):
    target: str

    def message(self) -> str:
        return f'added link to "{self.target}" to the occurrences section'


@dataclass(frozen=True)
class NormalizedSectionCapitalization(Fix):
    old_capitalization: str
    new_capitalization: str

    def message(self) -> str:
        return (
            f'normalized capitalization of section "{self.old_capitalization}" '
            f'to "{self.new_capitalization}"'
        )


@dataclass(frozen=True)
class NormalizedSectionLevel(Fix):
    section_title: str
    old_level: int
    new_level: int

    def message(self) -> str:
        return (
            f'normalized level of section "{self.section_title}" '
            f"from {self.old_level} to {self.new_level}"
        )


@dataclass(frozen=True)
class RemovedEmptySection(Fix):
    section_title: str

    def message(self) -> str:
        return f'removed empty section "{self.section_title}"'


@dataclass(frozen=True)
class RemovedObsoleteOccurrence(Fix):
    target: str

    def message(self) -> str:
        return f'removed "{self.target}" from the occurrences section'


@dataclass(frozen=True)
class RemovedObsoleteOccurrencesSection(Fix):
    def message(self) -> str:
        return "removed obsolete occurrences section"


@dataclass(frozen=True)
class SortedSections(Fix):
    def message(self) -> str:
        return "fixed section order"
