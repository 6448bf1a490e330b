"""Back-link consistency between documents that link to each other.

Runs after link resolution because it needs the complete link graph.
"""

from __future__ import annotations

from tikibase.check.links import LinkScan
from tikibase.database.document import Document
from tikibase.database.tikibase import Tikibase
from tikibase.issue import Issue, MissingLink, ObsoleteOccurrence, ObsoleteOccurrencesSection
from tikibase.location import Location


def scan_occurrences(tikibase: Tikibase, scan: LinkScan) -> list[Issue]:
    issues: list[Issue] = []
    for doc in tikibase.documents():
        config = tikibase.config_for(doc.path)
        missing = {
            path
            for path in scan.incoming.get(doc.path) - scan.outgoing.get(doc.path)
            if tikibase.config_for(path).bidi
        }
        if not missing:
            section = doc.occurrences_section
            if section is not None and config.bidi:
                issues.append(
                    ObsoleteOccurrencesSection(
                        Location(doc.path, section.line_number, 0, len(section.title_line))
                    )
                )
            continue
        issues.extend(_obsolete_entries(doc, scan.listed.get(doc.path) - missing))
        end = Location(doc.path, doc.lines_count(), 0, 0)
        for path in sorted(missing - scan.listed.get(doc.path)):
            if (doc.path, path) in scan.reported_missing:
                continue
            source = tikibase.get_doc(path)
            if source is None:
                continue
            scan.reported_missing.add((doc.path, path))
            issues.append(MissingLink(end, path, source.human_title))
    return issues


def _obsolete_entries(doc: Document, obsolete: frozenset[str]) -> list[Issue]:
    if not obsolete:
        return []
    issues: list[Issue] = []
    for line, reference in doc.occurrence_references():
        path = doc.resolve(reference.target)
        if path in obsolete:
            issues.append(
                ObsoleteOccurrence(
                    Location(doc.path, line.number, reference.start, reference.end), path
                )
            )
    return issues
