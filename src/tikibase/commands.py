"""The operations the command-line interface exposes.

Each command returns an Outcome: the messages to print and the process
exit code.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence
import json
import logging

from tikibase.check import check as check_tikibase
from tikibase.config import CONFIG_FILE_NAME, JSON_SCHEMA_FILE_NAME, SCHEMA_URL
from tikibase.database.tikibase import Tikibase
from tikibase.fix import fix_issues
from tikibase.issue import CannotWriteConfigFile, CannotWriteJsonSchemaFile, Issue
from tikibase.location import Location
from tikibase.output import Message
from tikibase.schema import config_json_schema

logger = logging.getLogger(__name__)


@dataclass
class Outcome:
    messages: list[Message] = field(default_factory=list)
    exit_code: int = 0

    @classmethod
    def from_issues(cls, issues: Sequence[Issue]) -> Outcome:
        return cls(
            messages=[Message.from_issue(issue) for issue in issues],
            exit_code=len(issues),
        )


def _load(root: Path) -> tuple[Tikibase, list[Issue]]:
    tikibase, load_issues = Tikibase.load(root)
    return tikibase, sorted(load_issues + check_tikibase(tikibase))


def check(root: Path) -> Outcome:
    """Reports all issues, the exit code is their number."""
    _, issues = _load(root)
    return Outcome.from_issues(issues)


def fix(root: Path) -> Outcome:
    """Fixes all fixable issues and reports the fixes."""
    tikibase, issues = _load(root)
    result = fix_issues(tikibase, issues)
    logger.debug("%d fixes, %d issues left", len(result.fixes), len(result.issues))
    return Outcome(messages=[Message.from_fix(applied) for applied in result.fixes])


def pitstop(root: Path) -> Outcome:
    """Fixes what it can and reports the rest, the exit code is the number of unfixed issues."""
    tikibase, issues = _load(root)
    result = fix_issues(tikibase, issues)
    messages = [Message.from_fix(applied) for applied in result.fixes]
    messages.extend(Message.from_issue(issue) for issue in result.issues)
    return Outcome(messages=messages, exit_code=len(result.issues))


def stats(root: Path) -> Outcome:
    tikibase, _ = Tikibase.load(root)
    documents = list(tikibase.documents())
    resources = list(tikibase.resources())
    titles = Counter(
        section.human_title for doc in documents for section in doc.content_sections
    )
    messages = [
        Message(f"documents: {len(documents)}"),
        Message(f"resources: {len(resources)}"),
        Message(""),
        Message(f"{len(titles)} section titles:"),
    ]
    messages.extend(Message(f"- {title} ({titles[title]})") for title in sorted(titles))
    return Outcome(messages=messages)


def init(root: Path) -> Outcome:
    """Writes a minimal tikibase.json."""
    payload = {"$schema": SCHEMA_URL}
    try:
        (root / CONFIG_FILE_NAME).write_text(
            json.dumps(payload, indent=2) + "\n", encoding="utf-8"
        )
    except OSError as error:
        issue = CannotWriteConfigFile(Location(CONFIG_FILE_NAME), str(error))
        return Outcome.from_issues([issue])
    return Outcome(messages=[Message(f"created {CONFIG_FILE_NAME}")])


def json_schema(root: Path) -> Outcome:
    """Exports the JSON Schema of tikibase.json."""
    try:
        (root / JSON_SCHEMA_FILE_NAME).write_text(
            json.dumps(config_json_schema(), indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
    except OSError as error:
        issue = CannotWriteJsonSchemaFile(Location(JSON_SCHEMA_FILE_NAME), str(error))
        return Outcome.from_issues([issue])
    return Outcome(messages=[Message(f"exported {JSON_SCHEMA_FILE_NAME}")])


def search(root: Path, terms: Sequence[str]) -> Outcome:
    """Documents containing all terms, with the lines that contain any of them."""
    if not terms:
        return Outcome(messages=[Message("No search terms provided")])
    needles = [term.lower() for term in terms]
    tikibase, _ = Tikibase.load(root)
    messages: list[Message] = []
    for doc in sorted(tikibase.documents(), key=lambda doc: doc.path):
        text = doc.text()
        lowered = text.lower()
        if not all(needle in lowered for needle in needles):
            continue
        matches = [
            Message(f"  {number}: {line}")
            for number, line in enumerate(text.splitlines(), start=1)
            if any(needle in line.lower() for needle in needles)
        ]
        if not matches:
            continue
        messages.append(Message(doc.path))
        messages.extend(matches)
        messages.append(Message(""))
    return Outcome(messages=messages)
