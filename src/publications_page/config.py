"""Configuration loading for the publications page engine."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Optional


# Page owner's canonical spelling, plus the variant without the trailing period.
FIRST_AUTHOR_NAME = "Adhurya, S."
FIRST_AUTHOR_ALIASES: tuple[str, ...] = ("Adhurya, S",)

DEFAULT_PUBLICATIONS_SOURCE = "assets/publications.csv"
DEFAULT_CITATIONS_SOURCE = "assets/citations.csv"
DEFAULT_HTTP_TIMEOUT = 15.0


@dataclass
class Settings:
    publications_source: str = DEFAULT_PUBLICATIONS_SOURCE
    citations_source: str = DEFAULT_CITATIONS_SOURCE
    base_url: Optional[str] = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    first_author_name: str = FIRST_AUTHOR_NAME
    first_author_aliases: tuple[str, ...] = field(default=FIRST_AUTHOR_ALIASES)

    def first_author_spellings(self) -> frozenset[str]:
        return frozenset((self.first_author_name, *self.first_author_aliases))


def load_settings() -> Settings:
    """Load configuration from environment variables."""
    timeout_raw = os.getenv("PUBLICATIONS_HTTP_TIMEOUT")
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_HTTP_TIMEOUT
    except ValueError as exc:
        raise RuntimeError(
            f"PUBLICATIONS_HTTP_TIMEOUT must be a number, got {timeout_raw!r}."
        ) from exc

    aliases_raw = os.getenv("PUBLICATIONS_FIRST_AUTHOR_ALIASES")
    if aliases_raw is None:
        aliases = FIRST_AUTHOR_ALIASES
    else:
        aliases = tuple(part.strip() for part in aliases_raw.split(";") if part.strip())

    return Settings(
        publications_source=os.getenv("PUBLICATIONS_SOURCE", DEFAULT_PUBLICATIONS_SOURCE),
        citations_source=os.getenv("CITATIONS_SOURCE", DEFAULT_CITATIONS_SOURCE),
        base_url=os.getenv("PUBLICATIONS_BASE_URL") or None,
        http_timeout=timeout,
        first_author_name=os.getenv("PUBLICATIONS_FIRST_AUTHOR", FIRST_AUTHOR_NAME),
        first_author_aliases=aliases,
    )
