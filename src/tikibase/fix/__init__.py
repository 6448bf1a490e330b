"""Repairs for the issues that have one.

``FIXERS`` maps every Issue type to its fixer, or to None when the issue
cannot be repaired automatically. A fixer mutates one document, saves it
and returns the Fix it performed. It returns None when an earlier fix in
the same run already resolved the issue, and raises IssueError carrying
the issue to report when it cannot repair this particular instance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping, Optional
import logging

from tikibase import issue as issue_kinds
from tikibase.database.tikibase import Tikibase
from tikibase.exceptions import IssueError
from tikibase.fix.fixes import (
    AddedOccurrencesSection,
    Fix,
    NormalizedSectionCapitalization,
    NormalizedSectionLevel,
    RemovedEmptySection,
    RemovedObsoleteOccurrence,
    RemovedObsoleteOccurrencesSection,
    SortedSections,
)
from tikibase.fix.occurrences import add_occurrence, remove_occurrence, remove_occurrences
from tikibase.fix.sections import (
    apply_configured_level,
    normalize_capitalization,
    normalize_heading_level,
    remove_empty_section,
    sort_sections,
)
from tikibase.issue import Issue

Fixer = Callable[[Tikibase, Issue], Optional[Fix]]

logger = logging.getLogger(__name__)

FIXERS: Mapping[type[Issue], Fixer | None] = {
    issue_kinds.BrokenImage: None,
    issue_kinds.CannotReadConfigurationFile: None,
    issue_kinds.CannotReadDirectory: None,
    issue_kinds.CannotWriteConfigFile: None,
    issue_kinds.CannotWriteJsonSchemaFile: None,
    issue_kinds.DocumentWithoutLinks: None,
    issue_kinds.DuplicateSection: None,
    issue_kinds.EmptyDocument: None,
    issue_kinds.EmptySection: remove_empty_section,
    issue_kinds.HeadingLevelDifferentThanConfigured: apply_configured_level,
    issue_kinds.InconsistentHeadingLevel: normalize_heading_level,
    issue_kinds.InvalidConfigurationFile: None,
    issue_kinds.InvalidTitleRegex: None,
    issue_kinds.LinkToNonExistingAnchorInCurrentDocument: None,
    issue_kinds.LinkToNonExistingAnchorInExistingDocument: None,
    issue_kinds.LinkToNonExistingDir: None,
    issue_kinds.LinkToNonExistingFile: None,
    issue_kinds.LinkToSameDocument: None,
    issue_kinds.LinkWithoutTarget: None,
    issue_kinds.MissingFootnote: None,
    issue_kinds.MissingLink: add_occurrence,
    issue_kinds.MixCapSection: normalize_capitalization,
    issue_kinds.NoTitleSection: None,
    issue_kinds.ObsoleteOccurrence: remove_occurrence,
    issue_kinds.ObsoleteOccurrencesSection: remove_occurrences,
    issue_kinds.OrphanedResource: None,
    issue_kinds.PathEscapesRoot: None,
    issue_kinds.SectionWithoutHeader: None,
    issue_kinds.TitleRegexNoCaptures: None,
    issue_kinds.TitleRegexTooManyCaptures: None,
    issue_kinds.UnclosedBacktick: None,
    issue_kinds.UnclosedFence: None,
    issue_kinds.UnknownSection: None,
    issue_kinds.UnorderedSections: sort_sections,
    issue_kinds.UnusedFootnote: None,
}


@dataclass
class FixOutcome:
    fixes: list[Fix] = field(default_factory=list)
    # issues that were not or could not be fixed
    issues: list[Issue] = field(default_factory=list)


def fix_issues(tikibase: Tikibase, issues: Iterable[Issue]) -> FixOutcome:
    """Applies the fixer of every fixable issue, in the order given."""
    outcome = FixOutcome()
    for issue in issues:
        fixer = FIXERS[type(issue)]
        if fixer is None:
            outcome.issues.append(issue)
            continue
        try:
            fix = fixer(tikibase, issue)
        except IssueError as error:
            logger.debug("cannot fix %r: %s", issue, error)
            outcome.issues.append(error.issue)
            continue
        if fix is not None:
            outcome.fixes.append(fix)
    return outcome


__all__ = [
    "AddedOccurrencesSection",
    "FIXERS",
    "Fix",
    "FixOutcome",
    "NormalizedSectionCapitalization",
    "NormalizedSectionLevel",
    "RemovedEmptySection",
    "RemovedObsoleteOccurrence",
    "RemovedObsoleteOccurrencesSection",
    "SortedSections",
    "fix_issues",
]
