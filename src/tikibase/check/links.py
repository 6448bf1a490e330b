"""Link resolution: validates every reference and builds the link graph."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

from tikibase import paths
from tikibase.database.directory import EntryType
from tikibase.database.doc_links import DocLinks
from tikibase.database.document import Document
from tikibase.database.line import Line, Reference, ReferenceKind
from tikibase.database.tikibase import Tikibase
from tikibase.exceptions import PathEscapesRootError
from tikibase.issue import (
    BrokenImage,
    DocumentWithoutLinks,
    Issue,
    LinkToNonExistingAnchorInCurrentDocument,
    LinkToNonExistingAnchorInExistingDocument,
    LinkToNonExistingDir,
    LinkToNonExistingFile,
    LinkToSameDocument,
    LinkWithoutTarget,
    MissingLink,
    PathEscapesRoot,
)
from tikibase.location import Location

logger = logging.getLogger(__name__)


@dataclass
class LinkScan:
    """Everything link resolution learns about the Tikibase."""

    issues: list[Issue] = field(default_factory=list)
    # document -> documents its body links to
    outgoing: DocLinks = field(default_factory=DocLinks)
    # document -> documents whose body links to it
    incoming: DocLinks = field(default_factory=DocLinks)
    # document -> documents listed in its occurrences section
    listed: DocLinks = field(default_factory=DocLinks)
    referenced_resources: set[str] = field(default_factory=set)
    # (document missing the link, document to link to)
    reported_missing: set[tuple[str, str]] = field(default_factory=set)


def scan_links(tikibase: Tikibase) -> LinkScan:
    scan = LinkScan()
    documents = 0
    for doc in tikibase.documents():
        documents += 1
        count = 0
        for line, reference in doc.references():
            count += 1
            _check_reference(tikibase, doc, line, reference, scan, in_occurrences=False)
        for line, reference in doc.occurrence_references():
            count += 1
            _check_reference(tikibase, doc, line, reference, scan, in_occurrences=True)
        if count == 0 and tikibase.config_for(doc.path).links_required:
            title = doc.title_section
            scan.issues.append(
                DocumentWithoutLinks(
                    Location(doc.path, title.line_number, 0, len(title.title_line))
                )
            )
    logger.debug(
        "resolved links of %d documents, %d link issues",
        documents,
        len(scan.issues),
    )
    return scan


def _check_reference(
    tikibase: Tikibase,
    doc: Document,
    line: Line,
    reference: Reference,
    scan: LinkScan,
    *,
    in_occurrences: bool,
) -> None:
    location = Location(doc.path, line.number, reference.start, reference.end)
    target = reference.target
    if not target:
        scan.issues.append(LinkWithoutTarget(location))
        return
    if target.startswith("http"):
        return
    file_part, _, anchor_part = target.partition("#")
    anchor = f"#{anchor_part}" if anchor_part else ""
    try:
        path = paths.normalize(paths.join(doc.directory, file_part))
    except PathEscapesRootError:
        scan.issues.append(PathEscapesRoot(location, target))
        return
    if reference.kind == ReferenceKind.IMAGE:
        scan.referenced_resources.add(path)
        if not file_part:
            return
        if not tikibase.dir.has_resource(path) and tikibase.get_doc(path) is None:
            scan.issues.append(BrokenImage(location, target))
        return
    if path == doc.path:
        scan.issues.append(LinkToSameDocument(location))
        return
    if not file_part:
        if anchor and anchor not in doc.anchors():
            scan.issues.append(LinkToNonExistingAnchorInCurrentDocument(location, anchor))
        return
    kind = EntryType.from_name(path)
    if kind == EntryType.DOCUMENT:
        _check_document_link(tikibase, doc, target, path, anchor, location, scan, in_occurrences)
    elif kind == EntryType.RESOURCE:
        scan.referenced_resources.add(path)
        if not tikibase.dir.has_resource(path):
            scan.issues.append(LinkToNonExistingFile(location, target))
    elif kind == EntryType.DIRECTORY:
        if not tikibase.dir.has_dir(path):
            scan.issues.append(LinkToNonExistingDir(location, target))


def _check_document_link(
    tikibase: Tikibase,
    doc: Document,
    target: str,
    path: str,
    anchor: str,
    location: Location,
    scan: LinkScan,
    in_occurrences: bool,
) -> None:
    target_doc = tikibase.get_doc(path)
    if target_doc is None:
        scan.issues.append(LinkToNonExistingFile(location, target))
        return
    if anchor and anchor not in target_doc.anchors():
        scan.issues.append(LinkToNonExistingAnchorInExistingDocument(location, path, anchor))
    if in_occurrences:
        scan.listed.add(doc.path, path)
        return
    scan.outgoing.add(doc.path, path)
    scan.incoming.add(path, doc.path)
    if not tikibase.config_for(doc.path).bidi:
        return
    if target_doc.links_to(doc.path):
        return
    key = (path, doc.path)
    if key in scan.reported_missing:
        return
    scan.reported_missing.add(key)
    scan.issues.append(
        MissingLink(
            Location(path, target_doc.lines_count(), 0, 0),
            doc.path,
            doc.human_title,
        )
    )
