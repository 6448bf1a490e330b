from __future__ import annotations

import re

from tikibase import paths
from tikibase.database.document import Document, OCCURRENCES_TITLE_LINE
from tikibase.database.line import strip_links
from tikibase.database.section import Section
from tikibase.database.tikibase import Tikibase
from tikibase.exceptions import IssueError
from tikibase.fix.fixes import (
    AddedOccurrencesSection,
    Fix,
    RemovedObsoleteOccurrence,
    RemovedObsoleteOccurrencesSection,
)
from tikibase.fix.sections import document_for
from tikibase.issue import (
    MissingLink,
    ObsoleteOccurrence,
    ObsoleteOccurrencesSection,
    TitleRegexNoCaptures,
    TitleRegexTooManyCaptures,
)
from tikibase.location import Location


def shorten_title(title: str, pattern: re.Pattern[str] | None, location: Location) -> str:
    """The title without links, reduced to the capture of ``pattern`` if given."""
    title = strip_links(title)
    if pattern is None:
        return title
    if pattern.groups == 0:
        raise IssueError(TitleRegexNoCaptures(location, pattern.pattern))
    if pattern.groups > 1:
        raise IssueError(TitleRegexTooManyCaptures(location, pattern.pattern, pattern.groups))
    match = pattern.search(title)
    if match is None or match.group(1) is None:
        return title
    return match.group(1)


def _occurrences_section(doc: Document) -> Section:
    if doc.occurrences_section is not None:
        return doc.occurrences_section
    last = list(doc.sections())[-1]
    if not last.body or not last.body[-1].is_blank():
        last.append_line("")
    doc.occurrences_section = Section.build(
        OCCURRENCES_TITLE_LINE, last.last_line_number + 1, [""]
    )
    return doc.occurrences_section


def add_occurrence(tikibase: Tikibase, issue: MissingLink) -> Fix | None:
    doc = document_for(tikibase, issue)
    config = tikibase.config_for(doc.path)
    title = shorten_title(issue.title, config.title_pattern(), Location(doc.path))
    section = _occurrences_section(doc)
    section.append_line(f"- [{title}]({paths.relative(doc.path, issue.path)})")
    tikibase.save(doc)
    return AddedOccurrencesSection(issue.location, issue.path)


def remove_occurrences(tikibase: Tikibase, issue: ObsoleteOccurrencesSection) -> Fix | None:
    doc = document_for(tikibase, issue)
    if doc.occurrences_section is None:
        return None
    doc.occurrences_section = None
    tikibase.save(doc)
    return RemovedObsoleteOccurrencesSection(issue.location)


def remove_occurrence(tikibase: Tikibase, issue: ObsoleteOccurrence) -> Fix | None:
    doc = document_for(tikibase, issue)
    section = doc.occurrences_section
    if section is None:
        return None
    kept = [
        line
        for line in section.body
        if not any(doc.resolve(reference.target) == issue.path for reference in line.references)
    ]
    if len(kept) == len(section.body):
        # an earlier fix removed all entries for this document
        return None
    section.body = kept
    doc.renumber()
    tikibase.save(doc)
    return RemovedObsoleteOccurrence(issue.location, issue.path)
