"""Category and free-text filtering of the publication list."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from publications_page.models import ALL_CATEGORIES, FilterState, PublicationRecord

logger = logging.getLogger(__name__)

VisibleListener = Callable[[list[PublicationRecord]], None]


def matches_category(publication: PublicationRecord, category: str) -> bool:
    return category == ALL_CATEGORIES or publication.category == category


def matches_search(publication: PublicationRecord, query: str) -> bool:
    """Case-insensitive substring match on title, authors, journal or keywords."""
    if not query:
        return True
    fields = [publication.title, publication.authors, publication.journal]
    if publication.keywords:
        fields.append(publication.keywords)
    return any(query in value.lower() for value in fields)


class FilterEngine:
    """Holds the current filter state and the publications it selects from.

    Both setters recompute the visible subset and notify subscribers with it.
    """

    def __init__(self, publications: Sequence[PublicationRecord] = ()) -> None:
        self._publications = tuple(publications)
        self._state = FilterState()
        self._listeners: list[VisibleListener] = []
        self._visible = self.visible_subset(self._publications)

    @property
    def state(self) -> FilterState:
        return self._state.model_copy()

    @property
    def visible(self) -> list[PublicationRecord]:
        return list(self._visible)

    def subscribe(self, listener: VisibleListener) -> Callable[[], None]:
        """Register ``listener`` for visible-subset changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_category(self, category: str) -> list[PublicationRecord]:
        self._state = FilterState(category=category, search=self._state.search)
        return self._recompute()

    def set_search(self, query: Optional[str]) -> list[PublicationRecord]:
        self._state = FilterState(category=self._state.category, search=(query or "").lower())
        return self._recompute()

    def visible_subset(
        self, publications: Sequence[PublicationRecord]
    ) -> list[PublicationRecord]:
        state = self._state
        return [
            pub
            for pub in publications
            if matches_category(pub, state.category) and matches_search(pub, state.search)
        ]

    def _recompute(self) -> list[PublicationRecord]:
        self._visible = self.visible_subset(self._publications)
        logger.debug(
            "Filter category=%r search=%r selects %d of %d publications",
            self._state.category,
            self._state.search,
            len(self._visible),
            len(self._publications),
        )
        visible = self.visible
        for listener in list(self._listeners):
            listener(list(visible))
        return visible
