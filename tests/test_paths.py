from __future__ import annotations

import pytest

from tikibase import paths
from tikibase.exceptions import PathEscapesRootError


def test_normalize_collapses_parent_segments() -> None:
    assert paths.normalize("one/three/../two/three/../../new.md") == "one/new.md"


def test_normalize_drops_current_dir_segments() -> None:
    assert paths.normalize("./one/./two.md") == "one/two.md"


def test_normalize_keeps_trailing_slash_of_directories() -> None:
    assert paths.normalize("one/two/../three/") == "one/three/"


def test_normalize_rejects_paths_above_root() -> None:
    with pytest.raises(PathEscapesRootError):
        paths.normalize("one/../../1.md")


def test_join_and_dirname() -> None:
    assert paths.join("", "1.md") == "1.md"
    assert paths.join("sub", "1.md") == "sub/1.md"
    assert paths.dirname("1.md") == ""
    assert paths.dirname("sub/deeper/1.md") == "sub/deeper"
    assert paths.basename("sub/1.md") == "1.md"


@pytest.mark.parametrize(
    ("source", "target", "expected"),
    [
        ("1.md", "2.md", "2.md"),
        ("1.md", "sub/2.md", "sub/2.md"),
        ("sub/1.md", "2.md", "../2.md"),
        ("sub/1.md", "sub/2.md", "2.md"),
        ("a/b/1.md", "a/c/2.md", "../c/2.md"),
    ],
)
def test_relative(source: str, target: str, expected: str) -> None:
    assert paths.relative(source, target) == expected


def test_split_first() -> None:
    assert paths.split_first("a/b/c.md") == ("a", "b/c.md")
    assert paths.split_first("c.md") == ("c.md", None)
