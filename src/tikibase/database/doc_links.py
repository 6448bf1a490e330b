from __future__ import annotations

from typing import Iterator


class DocLinks:
    """Directed edges between documents, keyed by document path."""

    def __init__(self) -> None:
        self._links: dict[str, set[str]] = {}

    def add(self, key: str, value: str) -> None:
        self._links.setdefault(key, set()).add(value)

    def get(self, key: str) -> frozenset[str]:
        return frozenset(self._links.get(key, ()))

    def keys(self) -> Iterator[str]:
        return iter(sorted(self._links))

    def __contains__(self, key: object) -> bool:
        return key in self._links

    def __len__(self) -> int:
        return len(self._links)
