"""Corpus-wide consistency of section titles.

Both checks count how often each variant of a section title occurs across
all documents, pick the most common variant per title, and flag every
other variant. A shared maximum means there is no common variant, and then
every variant is flagged.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Mapping, TypeVar

from tikibase.database.section import Section
from tikibase.database.tikibase import Tikibase
from tikibase.issue import InconsistentHeadingLevel, Issue, MixCapSection
from tikibase.location import Location

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(frozen=True)
class Outlier(Generic[V]):
    all_variants: tuple[V, ...]
    common: V | None


def find_common(variants: Mapping[V, int]) -> V | None:
    """The variant with the strictly highest count, None on a tie."""
    best: V | None = None
    best_count = 0
    tied = False
    for variant, count in variants.items():
        if count > best_count:
            best, best_count, tied = variant, count, False
        elif count == best_count:
            tied = True
    return None if tied else best


def find_outliers(counts: Mapping[K, Mapping[V, int]]) -> dict[tuple[K, V], Outlier[V]]:
    outliers: dict[tuple[K, V], Outlier[V]] = {}
    for key, variants in counts.items():
        if len(variants) < 2:
            continue
        common = find_common(variants)
        all_variants = tuple(sorted(variants))  # type: ignore[type-var]
        for variant in variants:
            if variant != common:
                outliers[(key, variant)] = Outlier(all_variants, common)
    return outliers


def _count(
    tikibase: Tikibase,
    key: Callable[[Section], K],
    variant: Callable[[Section], V],
) -> dict[K, Counter[V]]:
    counts: dict[K, Counter[V]] = defaultdict(Counter)
    for doc in tikibase.documents():
        for section in doc.content_sections:
            counts[key(section)][variant(section)] += 1
    return counts


def _capitalization_key(section: Section) -> str:
    return section.human_title.lower()


def _title(section: Section) -> str:
    return section.human_title


def _level(section: Section) -> int:
    return section.level


def scan_capitalization(tikibase: Tikibase) -> list[Issue]:
    outliers = find_outliers(_count(tikibase, _capitalization_key, _title))
    issues: list[Issue] = []
    for doc in tikibase.documents():
        for section in doc.content_sections:
            outlier = outliers.get((_capitalization_key(section), section.human_title))
            if outlier is None:
                continue
            issues.append(
                MixCapSection(
                    Location(
                        doc.path,
                        section.line_number,
                        section.title_text_start,
                        len(section.title_line),
                    ),
                    all_variants=outlier.all_variants,
                    this_variant=section.human_title,
                    common_variant=outlier.common,
                )
            )
    return issues


def scan_heading_levels(tikibase: Tikibase) -> list[Issue]:
    outliers = find_outliers(_count(tikibase, _title, _level))
    issues: list[Issue] = []
    for doc in tikibase.documents():
        for section in doc.content_sections:
            outlier = outliers.get((section.human_title, section.level))
            if outlier is None:
                continue
            issues.append(
                InconsistentHeadingLevel(
                    Location(doc.path, section.line_number, 0, len(section.title_line)),
                    section_title=section.human_title,
                    all_variants=outlier.all_variants,
                    this_variant=section.level,
                    common_variant=outlier.common,
                )
            )
    return issues
