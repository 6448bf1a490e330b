"""String helpers for paths relative to the Tikibase root.

All paths use ``/`` as separator and never start with one. The root
directory is the empty string.
"""

from __future__ import annotations

from tikibase.exceptions import PathEscapesRootError


def join(directory: str, name: str) -> str:
    if not directory:
        return name
    return f"{directory}/{name}"


def dirname(path: str) -> str:
    head, sep, _ = path.rstrip("/").rpartition("/")
    return head if sep else ""


def basename(path: str) -> str:
    return path.rstrip("/").rpartition("/")[2]


def normalize(path: str) -> str:
    """Collapse ``.`` and ``..`` segments.

    A trailing slash survives normalization because it marks a link to a
    directory. Raises PathEscapesRootError when the path climbs above the
    root.
    """
    segments: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not segments:
                raise PathEscapesRootError(path)
            segments.pop()
            continue
        segments.append(segment)
    result = "/".join(segments)
    if result and path.endswith("/"):
        result += "/"
    return result


def relative(source: str, target: str) -> str:
    """Path of ``target`` as seen from the file ``source``."""
    source_parts = [part for part in dirname(source).split("/") if part]
    target_parts = target.split("/")
    common = 0
    while (
        common < len(source_parts)
        and common < len(target_parts) - 1
        and source_parts[common] == target_parts[common]
    ):
        common += 1
    ups = [".."] * (len(source_parts) - common)
    return "/".join(ups + target_parts[common:])


def split_first(path: str) -> tuple[str, str | None]:
    """Split off the first path segment: ``"a/b/c"`` -> ``("a", "b/c")``."""
    head, sep, tail = path.partition("/")
    if not sep:
        return head, None
    return head, tail
