"""Bibliometric indices computed from enriched publication records."""

from __future__ import annotations

from typing import Collection, Iterable, Sequence

from publications_page.config import FIRST_AUTHOR_ALIASES, FIRST_AUTHOR_NAME
from publications_page.models import CitationRecord, MetricsSummary, PublicationRecord

DEFAULT_FIRST_AUTHOR_SPELLINGS = frozenset((FIRST_AUTHOR_NAME, *FIRST_AUTHOR_ALIASES))

I10_THRESHOLD = 10


def citation_count_of(
    publication: PublicationRecord, citations: Iterable[CitationRecord]
) -> int:
    """Count citation rows whose identifier equals the publication's."""
    return sum(1 for citation in citations if citation.id == publication.id)


def h_index(publications: Iterable[PublicationRecord]) -> int:
    counts = sorted((pub.citation_count for pub in publications), reverse=True)
    h = 0
    for rank, count in enumerate(counts, start=1):
        if count < rank:
            break
        h = rank
    return h


def i10_index(publications: Iterable[PublicationRecord]) -> int:
    return sum(1 for pub in publications if pub.citation_count >= I10_THRESHOLD)


def first_authored_count(
    publications: Iterable[PublicationRecord],
    spellings: Collection[str] = DEFAULT_FIRST_AUTHOR_SPELLINGS,
) -> int:
    """Count publications whose first listed author is one of ``spellings`` exactly."""
    return sum(
        1
        for pub in publications
        if any(pub.is_first_authored_by(spelling) for spelling in spellings)
    )


def distinct_categories(publications: Iterable[PublicationRecord]) -> set[str]:
    return {pub.category for pub in publications if pub.category}


def category_counts(publications: Iterable[PublicationRecord]) -> dict[str, int]:
    """Number of publications per non-empty category, in first-seen order."""
    counts: dict[str, int] = {}
    for pub in publications:
        if pub.category:
            counts[pub.category] = counts.get(pub.category, 0) + 1
    return counts


def years_active(publications: Iterable[PublicationRecord]) -> int:
    years = [pub.year for pub in publications if pub.year is not None]
    if not years:
        return 0
    return max(years) - min(years) + 1


def summarize(
    publications: Sequence[PublicationRecord],
    citations: Sequence[CitationRecord],
    spellings: Collection[str] = DEFAULT_FIRST_AUTHOR_SPELLINGS,
) -> MetricsSummary:
    """Aggregate the page statistics for enriched publications."""
    return MetricsSummary(
        total_publications=len(publications),
        total_citations=len(citations),
        h_index=h_index(publications),
        i10_index=i10_index(publications),
        first_authored_count=first_authored_count(publications, spellings),
        distinct_category_count=len(distinct_categories(publications)),
        years_active=years_active(publications),
    )
