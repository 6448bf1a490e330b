"""Checks that look at the sections of one document at a time."""

from __future__ import annotations

from collections import Counter

from tikibase.config import Config
from tikibase.database.document import Document
from tikibase.database.section import Section
from tikibase.issue import (
    DuplicateSection,
    EmptySection,
    HeadingLevelDifferentThanConfigured,
    Issue,
    SectionWithoutHeader,
    UnknownSection,
)
from tikibase.location import Location


def _title_location(doc: Document, section: Section) -> Location:
    return Location(doc.path, section.line_number, section.title_text_start, len(section.title_line))


def scan_structure(doc: Document, config: Config) -> list[Issue]:
    issues: list[Issue] = []
    title_counts = Counter(section.human_title for section in doc.content_sections)
    schema = config.section_schema()
    allowed = config.allowed_titles()
    configured_levels = {
        entry.title: entry.level for entry in schema or () if entry.level is not None
    }
    for section in doc.content_sections:
        title = section.human_title
        if not title:
            issues.append(
                SectionWithoutHeader(
                    Location(doc.path, section.line_number, 0, len(section.title_line))
                )
            )
            continue
        location = _title_location(doc, section)
        if title_counts[title] > 1:
            issues.append(DuplicateSection(location, title))
        if section.is_empty():
            issues.append(EmptySection(location, title))
        if schema is not None and title not in allowed:
            issues.append(UnknownSection(location, title, allowed))
        configured = configured_levels.get(title)
        if configured is not None and configured != section.level:
            issues.append(
                HeadingLevelDifferentThanConfigured(
                    Location(doc.path, section.line_number, 0, len(section.title_line)),
                    section_title=title,
                    configured_level=configured,
                    actual_level=section.level,
                )
            )
    return issues
