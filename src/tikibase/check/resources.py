from __future__ import annotations

from typing import Collection

from tikibase.database.tikibase import Tikibase
from tikibase.issue import Issue, OrphanedResource
from tikibase.location import Location


def scan_orphaned_resources(tikibase: Tikibase, referenced: Collection[str]) -> list[Issue]:
    return [
        OrphanedResource(Location(resource.path))
        for resource in tikibase.resources()
        if resource.path not in referenced
    ]
