from __future__ import annotations

from pathlib import Path

import pytest

from tikibase.config import Config, SchemaEntry, load_config, merge_payload
from tikibase.exceptions import IssueError
from tikibase.issue import InvalidConfigurationFile, InvalidTitleRegex
from tikibase.location import Location
from tikibase.schema import config_json_schema


def test_merge_payload_prefers_explicit_values() -> None:
    defaults = {"sections": ["one"], "bidi_links": False, "ignore": ["*.tmp"]}
    payload = {"sections": None, "bidi_links": True, "ignore": None}
    merged = merge_payload(payload, defaults)
    assert merged == {"sections": ["one"], "bidi_links": True, "ignore": ["*.tmp"]}


def test_config_merge_inherits_unset_fields() -> None:
    parent = Config(bidi_links=True, sections=("one", "two"))
    child = Config(sections=("three",), title_regex="(.*)")
    merged = parent.merge(child)
    assert merged == Config(bidi_links=True, sections=("three",), title_regex="(.*)")
    assert parent.merge(None) is parent


def test_links_required_defaults_to_bidi() -> None:
    assert Config(bidi_links=True).links_required
    assert not Config().links_required
    assert not Config(bidi_links=True, require_links=False).links_required
    assert Config(require_links=True).links_required


def test_is_ignored_matches_globs() -> None:
    config = Config(ignore=("*.tmp", "drafts"))
    assert config.is_ignored("scratch.tmp")
    assert config.is_ignored("drafts")
    assert not config.is_ignored("1.md")


def test_schema_entries_may_pin_levels() -> None:
    assert SchemaEntry.parse("### links") == SchemaEntry(title="links", level=3)
    assert SchemaEntry.parse("what is it") == SchemaEntry(title="what is it", level=None)
    config = Config(sections=("what is it", "### links"))
    assert config.allowed_titles() == ("what is it", "links")


def test_load_config_reads_aliases(tmp_path: Path) -> None:
    (tmp_path / "tikibase.json").write_text(
        '{"$schema": "x", "bidiLinks": true, "sections": ["one"], "titleRegex": "^(\\\\w+)"}'
    )
    config = load_config(tmp_path, "")
    assert config == Config(bidi_links=True, sections=("one",), title_regex="^(\\w+)")


def test_load_config_without_file(tmp_path: Path) -> None:
    assert load_config(tmp_path, "") is None


def test_load_config_rejects_unknown_keys(tmp_path: Path) -> None:
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "tikibase.json").write_text('{"unknown": 1}')
    with pytest.raises(IssueError) as info:
        load_config(tmp_path, "sub")
    issue = info.value.issue
    assert isinstance(issue, InvalidConfigurationFile)
    assert issue.location == Location("sub/tikibase.json")
    assert "unknown" in issue.reason


def test_load_config_rejects_malformed_json(tmp_path: Path) -> None:
    (tmp_path / "tikibase.json").write_text("{")
    with pytest.raises(IssueError) as info:
        load_config(tmp_path, "")
    assert isinstance(info.value.issue, InvalidConfigurationFile)


def test_load_config_rejects_invalid_title_regex(tmp_path: Path) -> None:
    (tmp_path / "tikibase.json").write_text('{"titleRegex": "("}')
    with pytest.raises(IssueError) as info:
        load_config(tmp_path, "")
    assert isinstance(info.value.issue, InvalidTitleRegex)


def test_json_schema_uses_file_names() -> None:
    schema = config_json_schema()
    properties = schema["properties"]
    assert isinstance(properties, dict)
    assert {"$schema", "bidiLinks", "ignore", "requireLinks", "sections", "titleRegex"} <= set(
        properties
    )
    assert schema["additionalProperties"] is False
