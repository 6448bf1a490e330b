from __future__ import annotations

from tikibase.check.section_order import find_unordered, reorder, scan_section_order
from tikibase.config import Config
from tikibase.database.document import Document
from tikibase.database.section import Section
from tikibase.issue import UnorderedSections
from tikibase.location import Location


def _sections(*titles: str) -> list[Section]:
    return [Section(line_number=index, title_line=f"### {title}") for index, title in enumerate(titles)]


def _titles(sections: list[Section]) -> list[str]:
    return [section.human_title for section in sections]


def test_out_of_order_section_is_reported() -> None:
    unordered = find_unordered(["one", "two", "three"], _sections("one", "three", "two"))
    assert _titles(unordered) == ["two"]


def test_subsequence_of_schema_is_ordered() -> None:
    assert find_unordered(["one", "two", "three"], _sections("one", "three")) == []


def test_unknown_sections_are_skipped() -> None:
    assert find_unordered(["one", "two"], _sections("one", "extra", "two")) == []


def test_unknown_sections_after_the_schema_are_skipped() -> None:
    assert find_unordered(["one", "two"], _sections("one", "two", "foo")) == []


def test_repeated_title_after_the_schema_is_unordered() -> None:
    assert _titles(find_unordered(["one", "two"], _sections("one", "two", "one"))) == ["one"]


def test_single_section_always_passes() -> None:
    assert find_unordered(["one"], _sections("two")) == []


def test_scan_section_order_reports_location() -> None:
    doc = Document.from_text("1.md", "# Title\n### one\ntext\n### three\ntext\n### two\ntext\n")
    config = Config(sections=("one", "two", "three"))
    assert scan_section_order(doc, config) == [UnorderedSections(Location("1.md", 5, 0, 7))]


def test_scan_section_order_without_schema() -> None:
    doc = Document.from_text("1.md", "# Title\n### two\ntext\n### one\ntext\n")
    assert scan_section_order(doc, Config()) == []


def test_reorder_sorts_and_keeps_unknown_sections() -> None:
    sections = _sections("three", "extra", "one", "two")
    assert _titles(reorder(sections, ["one", "two", "three"])) == ["one", "two", "three", "extra"]


def test_reorder_with_missing_schema_entries() -> None:
    assert _titles(reorder(_sections("three", "one"), ["one", "two", "three"])) == ["one", "three"]
