"""Checks that find issues in a loaded Tikibase."""

from __future__ import annotations

import logging

from tikibase.check.footnotes import scan_footnotes
from tikibase.check.links import LinkScan, scan_links
from tikibase.check.occurrences import scan_occurrences
from tikibase.check.outliers import scan_capitalization, scan_heading_levels
from tikibase.check.resources import scan_orphaned_resources
from tikibase.check.section_order import scan_section_order
from tikibase.check.structure import scan_structure
from tikibase.database.tikibase import Tikibase
from tikibase.issue import Issue

logger = logging.getLogger(__name__)


def check(tikibase: Tikibase) -> list[Issue]:
    """All issues in the given Tikibase, sorted by location."""
    issues: list[Issue] = []
    scan = scan_links(tikibase)
    issues.extend(scan.issues)
    # needs the complete link graph
    issues.extend(scan_occurrences(tikibase, scan))
    issues.extend(scan_capitalization(tikibase))
    issues.extend(scan_heading_levels(tikibase))
    for doc in tikibase.documents():
        config = tikibase.config_for(doc.path)
        issues.extend(scan_structure(doc, config))
        issues.extend(scan_section_order(doc, config))
        issues.extend(scan_footnotes(doc))
    issues.extend(scan_orphaned_resources(tikibase, scan.referenced_resources))
    logger.debug("found %d issues", len(issues))
    return sorted(issues)


__all__ = ["LinkScan", "check", "scan_links"]
