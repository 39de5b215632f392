"""Lookup from publication identifier to the works citing it."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Sequence

from publications_page.models import CitationRecord, canonical_id

logger = logging.getLogger(__name__)


class CitationIndex:
    """Groups citation rows by the identifier of the publication they cite.

    The index is built once from an immutable citations list; lookups never
    mutate it.
    """

    def __init__(self, citations: Sequence[CitationRecord]) -> None:
        self._citations = tuple(citations)
        grouped: dict[str, list[CitationRecord]] = defaultdict(list)
        for citation in self._citations:
            grouped[citation.id].append(citation)
        self._by_id = {key: tuple(value) for key, value in grouped.items()}

    def __len__(self) -> int:
        return len(self._citations)

    @property
    def citations(self) -> tuple[CitationRecord, ...]:
        return self._citations

    def index_for(self, publication_id: object) -> list[CitationRecord]:
        return list(self._by_id.get(canonical_id(publication_id), ()))

    def count_for(self, publication_id: object) -> int:
        return len(self._by_id.get(canonical_id(publication_id), ()))

    def orphans(self, known_ids: Iterable[str]) -> list[CitationRecord]:
        """Return citations whose target matches none of ``known_ids``."""
        known = {canonical_id(value) for value in known_ids}
        orphaned = [citation for citation in self._citations if citation.id not in known]
        if orphaned:
            logger.debug(
                "%d citations reference unknown publications: %s",
                len(orphaned),
                sorted({citation.id for citation in orphaned}),
            )
        return orphaned
