from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Mapping
import fnmatch
import json
import logging
import re

from pydantic import ValidationError

from tikibase import paths
from tikibase.exceptions import IssueError
from tikibase.issue import (
    CannotReadConfigurationFile,
    InvalidConfigurationFile,
    InvalidTitleRegex,
)
from tikibase.location import Location
from tikibase.schema import ConfigFile

CONFIG_FILE_NAME = "tikibase.json"
JSON_SCHEMA_FILE_NAME = "tikibase.schema.json"
SCHEMA_URL = "https://raw.githubusercontent.com/kevgo/tikibase/main/doc/tikibase.schema.json"

logger = logging.getLogger(__name__)


def merge_payload(payload: Mapping[str, object], defaults: Mapping[str, object]) -> dict[str, object]:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


@dataclass(frozen=True)
class SchemaEntry:
    """One entry of the ``sections`` list: a title and an optional pinned level."""

    title: str
    level: int | None

    @classmethod
    def parse(cls, entry: str) -> SchemaEntry:
        level = len(entry) - len(entry.lstrip("#"))
        title = entry[level:].strip()
        return cls(title=title, level=level or None)


@dataclass(frozen=True)
class Config:
    """The effective configuration of one directory."""

    bidi_links: bool | None = None
    ignore: tuple[str, ...] | None = None
    require_links: bool | None = None
    sections: tuple[str, ...] | None = None
    title_regex: str | None = None

    @classmethod
    def from_file(cls, config_file: ConfigFile) -> Config:
        return cls(
            bidi_links=config_file.bidi_links,
            ignore=tuple(config_file.ignore) if config_file.ignore is not None else None,
            require_links=config_file.require_links,
            sections=tuple(config_file.sections) if config_file.sections is not None else None,
            title_regex=config_file.title_regex,
        )

    def merge(self, child: Config | None) -> Config:
        """``child`` layered over this config, unset child fields inherit."""
        if child is None:
            return self
        return Config(**merge_payload(asdict(child), asdict(self)))

    @property
    def bidi(self) -> bool:
        return bool(self.bidi_links)

    @property
    def links_required(self) -> bool:
        if self.require_links is not None:
            return self.require_links
        return self.bidi

    def is_ignored(self, name: str) -> bool:
        return any(fnmatch.fnmatchcase(name, pattern) for pattern in self.ignore or ())

    def section_schema(self) -> list[SchemaEntry] | None:
        if self.sections is None:
            return None
        return [SchemaEntry.parse(entry) for entry in self.sections]

    def allowed_titles(self) -> tuple[str, ...]:
        return tuple(entry.title for entry in self.section_schema() or ())

    def title_pattern(self) -> re.Pattern[str] | None:
        if self.title_regex is None:
            return None
        return re.compile(self.title_regex)


def load_config(root: Path, directory: str) -> Config | None:
    """Reads the tikibase.json file of ``directory``, None if there is none.

    Raises IssueError when the file exists but cannot be used.
    """
    relative_path = paths.join(directory, CONFIG_FILE_NAME)
    location = Location(relative_path)
    config_path = root / relative_path
    if not config_path.is_file():
        return None
    try:
        raw = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeError) as error:
        raise IssueError(CannotReadConfigurationFile(location, str(error))) from error
    try:
        payload = json.loads(raw)
        config_file = ConfigFile.model_validate(payload)
    except json.JSONDecodeError as error:
        raise IssueError(InvalidConfigurationFile(location, str(error))) from error
    except ValidationError as error:
        reason = "; ".join(
            f"{'.'.join(str(part) for part in detail['loc']) or 'root'}: {detail['msg']}"
            for detail in error.errors()
        )
        raise IssueError(InvalidConfigurationFile(location, reason)) from error
    if config_file.title_regex is not None:
        try:
            re.compile(config_file.title_regex)
        except re.error as error:
            raise IssueError(
                InvalidTitleRegex(location, config_file.title_regex, str(error))
            ) from error
    logger.debug("loaded %s", relative_path)
    return Config.from_file(config_file)
