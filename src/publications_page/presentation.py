"""View records handed to whatever renders the publications page."""

from __future__ import annotations

from typing import Iterable, Literal, Optional, Sequence

from pydantic import BaseModel, Field

from publications_page.models import (
    ALL_CATEGORIES,
    CitationRecord,
    MetricsSummary,
    PublicationRecord,
)

NO_RESULTS_MESSAGE = "No publications found matching your criteria."
UNKNOWN_YEAR = "Unknown"

LinkKind = Literal["doi", "article", "available", "none"]


class StatView(BaseModel):
    key: str
    label: str
    value: int


class CategoryFilterView(BaseModel):
    category: str
    label: str
    active: bool = False


class LinkView(BaseModel):
    kind: LinkKind = "none"
    href: Optional[str] = None
    text: str = ""


class CitationView(BaseModel):
    title: str
    title_href: Optional[str] = None
    year: str = ""
    container: str = ""
    doi: Optional[str] = None
    doi_href: Optional[str] = None
    authors: str = ""


class PublicationView(BaseModel):
    id: str
    title: str
    title_href: Optional[str] = None
    type: str
    category: str
    authors: str = ""
    journal_line: str = ""
    link: LinkView = Field(default_factory=LinkView)
    citation_count: int = 0
    citation_label: Optional[str] = None
    citations: list[CitationView] = Field(default_factory=list)


class YearSection(BaseModel):
    year: str
    count_label: str
    publications: list[PublicationView]


class PageView(BaseModel):
    stats: list[StatView]
    filters: list[CategoryFilterView]
    sections: list[YearSection]
    message: Optional[str] = None


_STAT_LABELS = (
    ("total_publications", "Publications"),
    ("total_citations", "Citations"),
    ("h_index", "h-index"),
    ("i10_index", "i10-index"),
    ("first_authored_count", "First-authored"),
    ("distinct_category_count", "Research areas"),
    ("years_active", "Years active"),
)


def usable_link(link: Optional[str]) -> bool:
    return bool(link and link.strip() and link.lower() != "na")


def _is_http(link: str) -> bool:
    return link.startswith(("https://", "http://"))


def _strip_outer_quotes(title: str) -> str:
    if title.startswith('"'):
        title = title[1:]
    if title.endswith('"'):
        title = title[:-1]
    return title


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count > 1 else ''}"


def build_stats(summary: MetricsSummary) -> list[StatView]:
    return [
        StatView(key=key, label=label, value=getattr(summary, key))
        for key, label in _STAT_LABELS
    ]


def build_category_filters(
    category_counts: dict[str, int], active: str = ALL_CATEGORIES
) -> list[CategoryFilterView]:
    filters = [
        CategoryFilterView(
            category=ALL_CATEGORIES,
            label="All Publications",
            active=active == ALL_CATEGORIES,
        )
    ]
    for category, count in category_counts.items():
        filters.append(
            CategoryFilterView(
                category=category,
                label=f"{category} ({count})",
                active=active == category,
            )
        )
    return filters


def build_link(publication: PublicationRecord) -> LinkView:
    link = publication.link
    if not usable_link(link):
        return LinkView()
    if _is_http(link):
        doi = publication.doi
        if doi and doi.startswith("10.") and doi.lower() != "na":
            return LinkView(kind="doi", href=link, text=f"DOI: {doi}")
        return LinkView(kind="article", href=link, text="View Article")
    return LinkView(kind="available", text=link)


def build_journal_line(publication: PublicationRecord) -> str:
    line = publication.journal
    if publication.volume:
        line += f", Vol. {publication.volume}"
    if publication.pages:
        line += f": {publication.pages}"
    if publication.year is not None:
        line += f" ({publication.year})"
    return line


def build_citation_view(citation: CitationRecord) -> CitationView:
    title = f'"{_strip_outer_quotes(citation.title)}"' if citation.title else ""
    has_doi = bool(citation.doi and citation.doi != "NA" and citation.link)
    return CitationView(
        title=title,
        title_href=citation.link if usable_link(citation.link) else None,
        year=citation.year,
        container=citation.journal_book,
        doi=citation.doi if has_doi else None,
        doi_href=citation.link if has_doi else None,
        authors=citation.author,
    )


def build_publication_view(
    publication: PublicationRecord, citations: Sequence[CitationRecord] = ()
) -> PublicationView:
    count = publication.citation_count
    return PublicationView(
        id=publication.id,
        title=_strip_outer_quotes(publication.title),
        title_href=publication.link if usable_link(publication.link) else None,
        type=publication.type or "Article",
        category=publication.category or "Research",
        authors=publication.authors,
        journal_line=build_journal_line(publication),
        link=build_link(publication),
        citation_count=count,
        citation_label=_plural(count, "citation") if count > 0 else None,
        citations=[build_citation_view(citation) for citation in citations] if count > 0 else [],
    )


def group_by_year(
    publications: Iterable[PublicationRecord], views: Iterable[PublicationView]
) -> list[YearSection]:
    """Group views into year sections, newest first and unknown years last."""
    grouped: dict[Optional[int], list[PublicationView]] = {}
    for publication, view in zip(publications, views):
        grouped.setdefault(publication.year, []).append(view)

    known = sorted((year for year in grouped if year is not None), reverse=True)
    ordered: list[Optional[int]] = [*known, *([None] if None in grouped else [])]
    return [
        YearSection(
            year=str(year) if year is not None else UNKNOWN_YEAR,
            count_label=_plural(len(grouped[year]), "publication"),
            publications=grouped[year],
        )
        for year in ordered
    ]
