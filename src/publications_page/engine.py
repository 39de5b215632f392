"""The per-load engine joining publications with the works citing them."""

from __future__ import annotations

import logging
from typing import Callable, Collection, Optional, Sequence

from publications_page.models import (
    CitationRecord,
    FilterState,
    MetricsSummary,
    PublicationRecord,
    canonical_id,
)
from publications_page.services.citation_index import CitationIndex
from publications_page.services.filtering import FilterEngine, VisibleListener
from publications_page.services.metrics import (
    DEFAULT_FIRST_AUTHOR_SPELLINGS,
    category_counts,
    summarize,
)

logger = logging.getLogger(__name__)


def enrich(
    publications: Sequence[PublicationRecord], index: CitationIndex
) -> list[PublicationRecord]:
    """Return copies of ``publications`` carrying their citation counts."""
    return [pub.with_citation_count(index.count_for(pub.id)) for pub in publications]


class PublicationEngine:
    """Owns both tables, the citation index, the cached metrics and the filter state.

    One instance is built per load. The tables are never mutated afterwards;
    only the filter state changes, through :meth:`set_category` and
    :meth:`set_search`.
    """

    def __init__(
        self,
        publications: Sequence[PublicationRecord],
        citations: Sequence[CitationRecord],
        first_author_spellings: Collection[str] = DEFAULT_FIRST_AUTHOR_SPELLINGS,
    ) -> None:
        self._index = CitationIndex(citations)
        self._publications = tuple(enrich(publications, self._index))
        self._index.orphans(pub.id for pub in self._publications)
        self._summary = summarize(self._publications, self._index.citations, first_author_spellings)
        self._category_counts = category_counts(self._publications)
        self._filters = FilterEngine(self._publications)
        logger.info(
            "Loaded %d publications and %d citations",
            len(self._publications),
            len(self._index),
        )

    @property
    def publications(self) -> list[PublicationRecord]:
        return list(self._publications)

    @property
    def citations(self) -> list[CitationRecord]:
        return list(self._index.citations)

    @property
    def filter_state(self) -> FilterState:
        return self._filters.state

    def metrics(self) -> MetricsSummary:
        return self._summary.model_copy()

    def categories(self) -> list[str]:
        return list(self._category_counts)

    def category_counts(self) -> dict[str, int]:
        return dict(self._category_counts)

    def index_for(self, publication_id: object) -> list[CitationRecord]:
        return self._index.index_for(publication_id)

    def find(self, publication_id: object) -> Optional[PublicationRecord]:
        wanted = canonical_id(publication_id)
        for pub in self._publications:
            if pub.id == wanted:
                return pub
        return None

    def citation_count(self, publication_id: object) -> int:
        pub = self.find(publication_id)
        return pub.citation_count if pub else 0

    def visible(self) -> list[PublicationRecord]:
        return self._filters.visible

    def set_category(self, category: str) -> list[PublicationRecord]:
        return self._filters.set_category(category)

    def set_search(self, query: Optional[str]) -> list[PublicationRecord]:
        return self._filters.set_search(query)

    def subscribe(self, listener: VisibleListener) -> Callable[[], None]:
        return self._filters.subscribe(listener)
