from __future__ import annotations

from tests.helpers import dedent
from tikibase.check.footnotes import scan_footnotes
from tikibase.check.resources import scan_orphaned_resources
from tikibase.check.structure import scan_structure
from tikibase.config import Config
from tikibase.database.document import Document
from tikibase.issue import (
    DuplicateSection,
    EmptySection,
    HeadingLevelDifferentThanConfigured,
    MissingFootnote,
    OrphanedResource,
    SectionWithoutHeader,
    UnclosedBacktick,
    UnknownSection,
    UnusedFootnote,
)
from tikibase.location import Location


def test_duplicate_and_empty_sections() -> None:
    doc = Document.from_text(
        "1.md",
        dedent(
            """
            # Title
            ### one
            text
            ### one
            more
            ### two

            ###
            text
            """
        ),
    )
    assert scan_structure(doc, Config()) == [
        DuplicateSection(Location("1.md", 1, 4, 7), "one"),
        DuplicateSection(Location("1.md", 3, 4, 7), "one"),
        EmptySection(Location("1.md", 5, 4, 7), "two"),
        SectionWithoutHeader(Location("1.md", 7, 0, 3)),
    ]


def test_unknown_sections_and_configured_levels() -> None:
    doc = Document.from_text("1.md", "# Title\n## links\ntext\n### extra\ntext\n")
    config = Config(sections=("what is it", "### links"))
    assert scan_structure(doc, config) == [
        HeadingLevelDifferentThanConfigured(
            Location("1.md", 1, 0, 8),
            section_title="links",
            configured_level=3,
            actual_level=2,
        ),
        UnknownSection(Location("1.md", 3, 4, 9), "extra", ("what is it", "links")),
    ]


def test_unknown_section_message_lists_allowed_titles() -> None:
    issue = UnknownSection(Location("1.md", 3, 4, 9), "extra", ("one", "two"))
    assert issue.message() == (
        'section "extra" isn\'t listed in tikibase.json, allowed sections:\n  - one\n  - two'
    )


def test_footnotes() -> None:
    doc = Document.from_text(
        "1.md",
        dedent(
            """
            # Title
            text[^used] and[^missing]
            ### notes
            [^used]: defined
            [^unused]: defined
            broken `code
            """
        ),
    )
    assert scan_footnotes(doc) == [
        UnclosedBacktick(Location("1.md", 5, 7, 12)),
        MissingFootnote(Location("1.md", 1, 15, 25), "missing"),
        UnusedFootnote(Location("1.md", 4, 0, 10), "unused"),
    ]


def test_orphaned_resources(load_tikibase) -> None:
    tikibase, _ = load_tikibase(
        {
            "1.md": "# One\n![photo](photo.jpg)\n",
            "photo.jpg": "binary",
            "sub/paper.pdf": "binary",
        }
    )
    assert scan_orphaned_resources(tikibase, {"photo.jpg"}) == [
        OrphanedResource(Location("sub/paper.pdf"))
    ]
