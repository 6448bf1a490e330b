"""Rendering of issues and fixes for the terminal."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable
import json

from tikibase.fix.fixes import Fix
from tikibase.issue import Issue


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class Message:
    """One line of output. ``line`` is 1-based."""

    text: str
    file: str | None = None
    line: int | None = None
    start: int | None = None
    end: int | None = None

    @classmethod
    def from_issue(cls, issue: Issue) -> Message:
        location = issue.location
        if not issue.has_line:
            return cls(text=issue.message(), file=location.file)
        return cls(
            text=issue.message(),
            file=location.file,
            line=location.line + 1,
            start=location.start,
            end=location.end,
        )

    @classmethod
    def from_fix(cls, fix: Fix) -> Message:
        location = fix.location
        return cls(
            text=fix.message(),
            file=location.file,
            line=location.line + 1,
            start=location.start,
            end=location.end,
        )

    def to_text(self) -> str:
        if self.file is None:
            return self.text
        if self.line is None:
            return f"{self.file}  {self.text}"
        return f"{self.file}:{self.line}  {self.text}"

    def to_json(self) -> dict[str, object]:
        return {
            "end": self.end,
            "file": self.file,
            "line": self.line,
            "start": self.start,
            "text": self.text,
        }


def render(messages: Iterable[Message], output_format: OutputFormat) -> str:
    if output_format == OutputFormat.JSON:
        payload = [message.to_json() for message in messages]
        return json.dumps(payload, indent=2, sort_keys=True)
    return "\n".join(message.to_text() for message in messages)
