from __future__ import annotations

from tikibase.check.section_order import find_unordered, reorder
from tikibase.database.document import Document
from tikibase.database.section import Section
from tikibase.database.tikibase import Tikibase
from tikibase.exceptions import IssueError
from tikibase.fix.fixes import (
    Fix,
    NormalizedSectionCapitalization,
    NormalizedSectionLevel,
    RemovedEmptySection,
    SortedSections,
)
from tikibase.issue import (
    EmptySection,
    HeadingLevelDifferentThanConfigured,
    InconsistentHeadingLevel,
    Issue,
    MixCapSection,
    UnorderedSections,
)


def document_for(tikibase: Tikibase, issue: Issue) -> Document:
    doc = tikibase.get_doc(issue.location.file)
    if doc is None:
        raise IssueError(issue)
    return doc


def _find(doc: Document, title: str, level: int | None = None) -> Section | None:
    for section in doc.content_sections:
        if section.human_title == title and (level is None or section.level == level):
            return section
    return None


def remove_empty_section(tikibase: Tikibase, issue: EmptySection) -> Fix | None:
    doc = document_for(tikibase, issue)
    for section in doc.content_sections:
        if section.human_title == issue.section_title and section.is_empty():
            doc.remove_section(section)
            tikibase.save(doc)
            return RemovedEmptySection(issue.location, issue.section_title)
    raise IssueError(issue)


def normalize_capitalization(tikibase: Tikibase, issue: MixCapSection) -> Fix | None:
    if issue.common_variant is None:
        raise IssueError(issue)
    doc = document_for(tikibase, issue)
    section = _find(doc, issue.this_variant)
    if section is None:
        raise IssueError(issue)
    section.retitle(section.title_line[:section.title_text_start] + issue.common_variant)
    tikibase.save(doc)
    return NormalizedSectionCapitalization(
        issue.location, issue.this_variant, issue.common_variant
    )


def _relevel(tikibase: Tikibase, issue: Issue, title: str, old: int, new: int) -> Fix | None:
    doc = document_for(tikibase, issue)
    section = _find(doc, title, old)
    if section is None:
        if _find(doc, title, new) is not None:
            # an earlier fix in this run already moved it
            return None
        raise IssueError(issue)
    section.retitle(section.with_level(new))
    tikibase.save(doc)
    return NormalizedSectionLevel(issue.location, title, old, new)


def normalize_heading_level(tikibase: Tikibase, issue: InconsistentHeadingLevel) -> Fix | None:
    if issue.common_variant is None:
        raise IssueError(issue)
    return _relevel(
        tikibase, issue, issue.section_title, issue.this_variant, issue.common_variant
    )


def apply_configured_level(
    tikibase: Tikibase, issue: HeadingLevelDifferentThanConfigured
) -> Fix | None:
    return _relevel(
        tikibase, issue, issue.section_title, issue.actual_level, issue.configured_level
    )


def sort_sections(tikibase: Tikibase, issue: UnorderedSections) -> Fix | None:
    doc = document_for(tikibase, issue)
    schema = tikibase.config_for(doc.path).allowed_titles()
    ordered = reorder(doc.content_sections, schema)
    if all(old is new for old, new in zip(ordered, doc.content_sections)):
        if find_unordered(schema, ordered):
            # duplicate titles, sorting cannot help
            raise IssueError(issue)
        # an earlier sort of this document already repaired it
        return None
    doc.content_sections = ordered
    doc.renumber()
    tikibase.save(doc)
    return SortedSections(issue.location)
