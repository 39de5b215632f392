"""High-level orchestration: load both tables, build the engine, produce page views."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from publications_page.config import Settings
from publications_page.engine import PublicationEngine
from publications_page.models import ALL_CATEGORIES, CitationRecord
from publications_page.presentation import (
    NO_RESULTS_MESSAGE,
    PageView,
    build_category_filters,
    build_publication_view,
    build_stats,
    group_by_year,
)
from publications_page.services.loader import DataLoadError, SourceLoader

logger = logging.getLogger(__name__)

PageListener = Callable[[PageView], None]


class PipelineError(RuntimeError):
    """Raised when the publications page could not be built."""


@dataclass
class PublicationsPage:
    """Either a ready engine or the message explaining why loading failed.

    A failed page stays inert: setters and lookups return empty results until
    a new page is loaded.
    """

    engine: Optional[PublicationEngine] = None
    error: Optional[str] = None

    @classmethod
    async def load(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> PublicationsPage:
        loader = SourceLoader(settings=settings, transport=transport)
        try:
            publications, citations = await loader.load()
        except DataLoadError as exc:
            logger.error("Error loading data: %s", exc)
            return cls(error=str(exc))
        engine = PublicationEngine(
            publications,
            citations,
            first_author_spellings=settings.first_author_spellings(),
        )
        return cls(engine=engine)

    @property
    def ready(self) -> bool:
        return self.engine is not None

    def set_category(self, category: str) -> PageView:
        if self.engine is not None:
            self.engine.set_category(category)
        return self.view()

    def set_search(self, query: Optional[str]) -> PageView:
        if self.engine is not None:
            self.engine.set_search(query)
        return self.view()

    def citations_for(self, publication_id: object) -> list[CitationRecord]:
        if self.engine is None:
            return []
        return self.engine.index_for(publication_id)

    def subscribe(self, listener: PageListener) -> Callable[[], None]:
        """Call ``listener`` with a fresh page view after every filter change."""
        if self.engine is None:
            return lambda: None
        return self.engine.subscribe(lambda _visible: listener(self.view()))

    def view(self) -> PageView:
        engine = self.engine
        if engine is None:
            return PageView(
                stats=[],
                filters=[],
                sections=[],
                message=f"Error loading publications: {self.error}",
            )

        visible = engine.visible()
        views = [build_publication_view(pub, engine.index_for(pub.id)) for pub in visible]
        return PageView(
            stats=build_stats(engine.metrics()),
            filters=build_category_filters(
                engine.category_counts(), active=engine.filter_state.category
            ),
            sections=group_by_year(visible, views),
            message=None if visible else NO_RESULTS_MESSAGE,
        )


def run_pipeline(
    settings: Settings,
    category: str = ALL_CATEGORIES,
    search: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> PageView:
    """Load the page, apply the requested filters and return the resulting view."""
    page = asyncio.run(PublicationsPage.load(settings, transport=transport))
    if not page.ready:
        raise PipelineError(page.error or "Data load failed")

    if category != ALL_CATEGORIES:
        page.set_category(category)
    if search:
        page.set_search(search)
    return page.view()
