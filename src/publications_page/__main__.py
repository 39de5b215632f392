"""Command-line entry point for the publications page engine."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from publications_page.config import load_settings
from publications_page.models import ALL_CATEGORIES
from publications_page.pipeline import PipelineError, run_pipeline
from publications_page.presentation import PageView

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="publications-page",
        description="Load publication and citation tables and print the publications page.",
    )
    parser.add_argument(
        "--publications",
        help="URL or path of the publications table (defaults to PUBLICATIONS_SOURCE).",
    )
    parser.add_argument(
        "--citations",
        help="URL or path of the citations table (defaults to CITATIONS_SOURCE).",
    )
    parser.add_argument(
        "--category",
        default=ALL_CATEGORIES,
        help="Show only publications in this category.",
    )
    parser.add_argument("--search", help="Case-insensitive text to search for.")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the page view as JSON instead of text.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def format_page(page: PageView) -> str:
    lines = [f"{stat.label}: {stat.value}" for stat in page.stats]
    lines.append("")
    lines.append(
        " | ".join(f"[{f.label}]" if f.active else f.label for f in page.filters)
    )
    for section in page.sections:
        lines.append("")
        lines.append(f"{section.year} ({section.count_label})")
        for pub in section.publications:
            lines.append(f"  {pub.title}")
            if pub.authors:
                lines.append(f"    {pub.authors}")
            if pub.journal_line:
                lines.append(f"    {pub.journal_line}")
            if pub.link.kind != "none":
                lines.append(f"    {pub.link.text}" + (f" <{pub.link.href}>" if pub.link.href else ""))
            if pub.citation_label:
                lines.append(f"    {pub.citation_label}")
    if page.message:
        lines.append("")
        lines.append(page.message)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        settings = load_settings()
    except RuntimeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if args.publications:
        settings = replace(settings, publications_source=args.publications)
    if args.citations:
        settings = replace(settings, citations_source=args.citations)

    try:
        page = run_pipeline(settings, category=args.category, search=args.search)
    except PipelineError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        logger.debug("Full traceback:", exc_info=True)
        return 1

    if args.json:
        print(page.model_dump_json(indent=2))
    else:
        print(format_page(page))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
