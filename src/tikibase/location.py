from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Location:
    """A span in a file of the Tikibase.

    ``line`` is 0-based. ``start`` and ``end`` are string offsets within
    that line.
    """

    file: str
    line: int = 0
    start: int = 0
    end: int = 0
