from __future__ import annotations

from typing import Sequence

from tikibase.config import Config
from tikibase.database.document import Document
from tikibase.database.section import Section
from tikibase.issue import Issue, UnorderedSections
from tikibase.location import Location


def find_unordered(schema: Sequence[str], sections: Sequence[Section]) -> list[Section]:
    """Sections that break the order given by ``schema``.

    The section titles must form an order-preserving subsequence of the
    schema. Titles the schema does not know are skipped, also after the last
    schema entry matched.
    """
    if len(sections) < 2:
        return []
    known = set(schema)
    unordered: list[Section] = []
    schema_index = 0
    section_index = 0
    while section_index < len(sections):
        section = sections[section_index]
        title = section.human_title
        if title not in known:
            section_index += 1
            continue
        if schema_index >= len(schema):
            unordered.append(section)
            section_index += 1
            continue
        if title == schema[schema_index]:
            schema_index += 1
            section_index += 1
            continue
        schema_index += 1
    return unordered


def scan_section_order(doc: Document, config: Config) -> list[Issue]:
    allowed = config.allowed_titles()
    if not allowed:
        return []
    return [
        UnorderedSections(Location(doc.path, section.line_number, 0, len(section.title_line)))
        for section in find_unordered(allowed, doc.content_sections)
    ]


def reorder(sections: Sequence[Section], schema: Sequence[str]) -> list[Section]:
    """Sections sorted into schema order.

    Sections the schema does not know keep their relative order and follow
    the sorted ones.
    """
    remaining = list(sections)
    result: list[Section] = []
    for title in schema:
        for section in remaining:
            if section.human_title == title:
                remaining.remove(section)
                result.append(section)
                break
    result.extend(remaining)
    return result
