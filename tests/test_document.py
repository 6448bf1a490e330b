from __future__ import annotations

import pytest

from tests.helpers import dedent
from tikibase.database.document import Document
from tikibase.database.line import Line
from tikibase.database.section import Section, make_anchor
from tikibase.exceptions import IssueError
from tikibase.issue import EmptyDocument, NoTitleSection, UnclosedFence
from tikibase.location import Location


def test_section_derives_level_and_title() -> None:
    section = Section(line_number=4, title_line="###   What is it ")
    assert section.level == 3
    assert section.title_text_start == 6
    assert section.human_title == "What is it"
    assert section.anchor == "#what-is-it"


def test_section_retitle_rederives() -> None:
    section = Section(line_number=0, title_line="### one")
    section.retitle(section.with_level(2))
    assert section.title_line == "## one"
    assert section.level == 2
    assert section.title_text_start == 3


def test_make_anchor() -> None:
    assert make_anchor("Hello, World!") == "#hello-world"
    assert make_anchor("what_is it") == "#what-is-it"


def test_from_text_splits_sections() -> None:
    text = dedent(
        """
        # Title
        intro
        ### one
        text
        ```
        # not a heading
        ```
        ### two
        """
    )
    doc = Document.from_text("1.md", text)
    assert doc.human_title == "Title"
    assert doc.title_section.body == [Line("intro", 1)]
    assert [section.human_title for section in doc.content_sections] == ["one", "two"]
    one = doc.content_sections[0]
    assert one.line_number == 2
    assert [line.text for line in one.body] == ["text", "```", "# not a heading", "```"]
    assert list(one.prose_lines()) == [Line("text", 3)]
    assert doc.lines_count() == 8


def test_from_text_captures_occurrences_section() -> None:
    text = dedent(
        """
        # Title
        ### one
        text
        ### occurrences
        - [Two](2.md)
        """
    )
    doc = Document.from_text("1.md", text)
    assert [section.human_title for section in doc.content_sections] == ["one"]
    assert doc.occurrences_section is not None
    assert doc.occurrences_section.line_number == 3
    assert [ref.target for _, ref in doc.occurrence_references()] == ["2.md"]
    assert list(doc.references()) == []


def test_round_trip() -> None:
    text = dedent(
        """
        # Title

        intro [one](1.md)

        ### one

        text `code`

        ```
        # comment
        ```

        ### occurrences

        - [Two](2.md)
        """
    )
    doc = Document.from_text("1.md", text)
    assert doc.text() == text
    assert Document.from_text("1.md", doc.text()) == doc


def test_round_trip_keeps_unicode_line_separators() -> None:
    text = "# Title\nalpha\x0cbeta gamma\x85delta\n"
    doc = Document.from_text("1.md", text)
    assert doc.title_section.body == [Line("alpha\x0cbeta gamma\x85delta", 1)]
    assert doc.text() == text


def test_crlf_line_endings_are_read() -> None:
    doc = Document.from_text("1.md", "# Title\r\ntext\r\n")
    assert doc.human_title == "Title"
    assert doc.text() == "# Title\ntext\n"


def test_text_adds_missing_trailing_newline() -> None:
    doc = Document.from_text("1.md", "# Title\ntext")
    assert doc.text() == "# Title\ntext\n"


def test_empty_document_is_an_error() -> None:
    with pytest.raises(IssueError) as info:
        Document.from_text("1.md", "")
    assert info.value.issue == EmptyDocument(Location("1.md"))


def test_missing_title_section_is_an_error() -> None:
    with pytest.raises(IssueError) as info:
        Document.from_text("1.md", "text\n# Title\n")
    assert info.value.issue == NoTitleSection(Location("1.md", 0))


def test_unclosed_fence_is_an_error() -> None:
    with pytest.raises(IssueError) as info:
        Document.from_text("1.md", "# Title\n```js\ncode\n")
    assert info.value.issue == UnclosedFence(Location("1.md", 1, 0, 5))


def test_links_to_resolves_relative_targets() -> None:
    doc = Document.from_text("sub/1.md", "# Title\n[up](../2.md#anchor)\n")
    assert doc.links_to("2.md")
    assert not doc.links_to("sub/2.md")


def test_anchors_include_all_sections() -> None:
    doc = Document.from_text("1.md", "# Title\n### One Two\n### occurrences\n")
    assert doc.anchors() == {"#title", "#one-two", "#occurrences"}


def test_remove_section_renumbers() -> None:
    doc = Document.from_text("1.md", "# Title\n### one\n\n### two\ntext\n")
    doc.remove_section(doc.content_sections[0])
    two = doc.content_sections[0]
    assert two.line_number == 1
    assert two.body == [Line("text", 2)]
    assert doc.text() == "# Title\n### two\ntext\n"
