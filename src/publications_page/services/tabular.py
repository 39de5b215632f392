"""Parser for the comma-delimited tables backing the publications page."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

QUOTE = '"'
DELIMITER = ","


def tokenize(line: str) -> list[str]:
    """Split one line into raw field values.

    Double quotes open and close a quoted span in which commas are literal.
    Inside a span, a doubled quote stands for one literal quote. A span left
    open at the end of the line is closed implicitly.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == QUOTE:
            if in_quotes and i + 1 < length and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current))
    return fields


def parse(text: str) -> list[dict[str, str]]:
    """Parse a table with a header row into row records, in source order."""
    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        return []

    headers = [header.strip() for header in tokenize(lines[0])]
    rows: list[dict[str, str]] = []

    for row_number, line in enumerate(lines[1:], start=2):
        values = tokenize(line)
        if not values[0]:
            logger.debug("Skipping row %d with an empty leading field", row_number)
            continue
        if len(values) < len(headers):
            logger.debug(
                "Row %d has %d fields for %d columns; padding with empty values",
                row_number,
                len(values),
                len(headers),
            )
        rows.append(
            {
                header: values[index].strip() if index < len(values) else ""
                for index, header in enumerate(headers)
            }
        )

    return rows
