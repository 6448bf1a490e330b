from __future__ import annotations

from tikibase.database.document import Document
from tikibase.issue import Issue, MissingFootnote, UnclosedBacktick, UnusedFootnote
from tikibase.location import Location


def scan_footnotes(doc: Document) -> list[Issue]:
    """Balances footnote references against definitions, flags broken inline code."""
    issues: list[Issue] = []
    references: list[tuple[str, Location]] = []
    definitions: list[tuple[str, Location]] = []
    for section in doc.all_sections():
        for line in section.lines():
            backtick = line.unclosed_backtick()
            if backtick is not None:
                issues.append(
                    UnclosedBacktick(Location(doc.path, line.number, backtick, len(line.text)))
                )
                continue
            for footnote in line.footnotes:
                location = Location(doc.path, line.number, footnote.start, footnote.end)
                if footnote.definition:
                    definitions.append((footnote.identifier, location))
                else:
                    references.append((footnote.identifier, location))
    defined = {identifier for identifier, _ in definitions}
    referenced = {identifier for identifier, _ in references}
    for identifier, location in references:
        if identifier not in defined:
            issues.append(MissingFootnote(location, identifier))
    for identifier, location in definitions:
        if identifier not in referenced:
            issues.append(UnusedFootnote(location, identifier))
    return issues
