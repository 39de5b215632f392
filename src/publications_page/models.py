"""Core data models used across the publications page engine."""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ALL_CATEGORIES = "all"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def canonical_id(value: object) -> str:
    """Return the single string form used to compare publication identifiers."""
    return str(value).strip()


def parse_year(value: object) -> Optional[int]:
    """Parse a leading integer the way the source data is written (``"2021 (in press)"`` -> 2021)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


class PublicationRecord(BaseModel):
    """One row of the publications table, enriched with its citation count."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    authors: str = ""
    journal: str = ""
    year: Optional[int] = None
    category: str = ""
    type: str = ""
    volume: str = ""
    pages: str = ""
    link: str = ""
    doi: str = ""
    keywords: Optional[str] = None
    citation_count: int = Field(default=0, ge=0)

    @field_validator("id", mode="before")
    @classmethod
    def _canonical_id(cls, value: Any) -> str:
        return canonical_id(value)

    @field_validator("year", mode="before")
    @classmethod
    def _parse_year(cls, value: Any) -> Optional[int]:
        return parse_year(value)

    @classmethod
    def from_row(cls, row: Mapping[str, str]) -> PublicationRecord:
        return cls(
            id=row.get("id", ""),
            title=row.get("title", ""),
            authors=row.get("authors", ""),
            journal=row.get("journal", ""),
            year=row.get("year"),
            category=row.get("category", ""),
            type=row.get("type", ""),
            volume=row.get("volume", ""),
            pages=row.get("pages", ""),
            link=row.get("link", ""),
            doi=row.get("doi", ""),
            keywords=row.get("keywords"),
        )

    def first_author_token(self) -> str:
        """Text before the first comma of the author list."""
        return self.authors.strip().split(",")[0].strip()

    def is_first_authored_by(self, spelling: str) -> bool:
        """True when the first author token equals ``spelling`` exactly."""
        if not self.authors:
            return False
        return self.first_author_token() == spelling

    def with_citation_count(self, count: int) -> PublicationRecord:
        return self.model_copy(update={"citation_count": count})


class CitationRecord(BaseModel):
    """A work citing one of the publications, keyed by the cited publication id."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    author: str = ""
    year: str = ""
    journal_book: str = ""
    link: str = ""
    doi: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _canonical_id(cls, value: Any) -> str:
        return canonical_id(value)

    @classmethod
    def from_row(cls, row: Mapping[str, str]) -> CitationRecord:
        return cls(
            id=row.get("id", ""),
            title=row.get("title", ""),
            author=row.get("author", ""),
            year=row.get("year", ""),
            journal_book=row.get("journal_book", ""),
            link=row.get("link", ""),
            doi=row.get("doi", ""),
        )


class FilterState(BaseModel):
    """Current category selector and lower-cased search text."""

    category: str = ALL_CATEGORIES
    search: str = ""


class MetricsSummary(BaseModel):
    total_publications: int = 0
    total_citations: int = 0
    h_index: int = 0
    i10_index: int = 0
    first_authored_count: int = 0
    distinct_category_count: int = 0
    years_active: int = 0
