"""Fetching and parsing of the publications and citations tables."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional

import httpx

from publications_page.config import Settings
from publications_page.models import CitationRecord, PublicationRecord
from publications_page.services import tabular

logger = logging.getLogger(__name__)

USER_AGENT = "PublicationsPage/0.1"


class DataLoadError(RuntimeError):
    """Raised when a data source cannot be fetched or read."""


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def source_name(source: str) -> str:
    path = httpx.URL(source).path if is_remote(source) else source
    return PurePosixPath(path).name or source


@dataclass
class SourceLoader:
    """Fetches the two tables concurrently and turns them into records."""

    settings: Settings
    transport: Optional[httpx.AsyncBaseTransport] = None

    def resolve(self, source: str) -> str:
        base = self.settings.base_url
        if is_remote(source) or not base:
            return source
        if is_remote(base):
            return str(httpx.URL(base).join(source))
        return str(Path(base) / source)

    async def fetch_text(self, client: httpx.AsyncClient, source: str) -> str:
        """Return the text behind ``source``, an http(s) URL or a local path."""
        location = self.resolve(source)
        name = source_name(location)

        if not is_remote(location):
            try:
                return await asyncio.to_thread(Path(location).read_text, encoding="utf-8")
            except OSError as exc:
                raise DataLoadError(f"Failed to load {name}: {exc.strerror or exc}") from exc
            except UnicodeDecodeError as exc:
                raise DataLoadError(f"Failed to load {name}: not valid UTF-8 ({exc.reason})") from exc

        try:
            response = await client.get(location)
        except httpx.HTTPError as exc:
            raise DataLoadError(f"Failed to load {name}: {exc}") from exc
        if not response.is_success:
            logger.error("GET %s returned %s", location, response.status_code)
            raise DataLoadError(f"Failed to load {name}: {response.reason_phrase}")
        return response.text

    async def fetch_sources(self) -> tuple[str, str]:
        """Fetch both tables; the first failure, publications first, is raised."""
        async with httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=self.settings.http_timeout,
            transport=self.transport,
        ) as client:
            results = await asyncio.gather(
                self.fetch_text(client, self.settings.publications_source),
                self.fetch_text(client, self.settings.citations_source),
                return_exceptions=True,
            )

        for result in results:
            if isinstance(result, BaseException):
                raise result
        publications_text, citations_text = results
        return publications_text, citations_text

    async def load(self) -> tuple[list[PublicationRecord], list[CitationRecord]]:
        publications_text, citations_text = await self.fetch_sources()
        return parse_publications(publications_text), parse_citations(citations_text)


def parse_publications(text: str) -> list[PublicationRecord]:
    publications: list[PublicationRecord] = []
    for row in tabular.parse(text):
        record = PublicationRecord.from_row(row)
        if not record.id:
            logger.debug("Dropping publication row without an id: %r", row.get("title", ""))
            continue
        publications.append(record)
    return publications


def parse_citations(text: str) -> list[CitationRecord]:
    return [CitationRecord.from_row(row) for row in tabular.parse(text)]
