from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..core.exceptions import ParseError
from .model import ParsedRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    headers: list[str]
    rows: list[ParsedRow]
    malformed: list[ParseError] = field(default_factory=list)


def _split(line: str) -> list[str]:
    return [value.strip() for value in line.split(",")]


def parse_csv(text: str) -> ParseResult:
    """Split DTR CSV text into rows keyed by header.

    Blank lines are ignored and do not count toward row numbers. Lines whose
    field count differs from the header are left out of `rows` and collected
    in `malformed`.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return ParseResult(headers=[], rows=[])

    headers = [h.lower() for h in _split(lines[0])]
    rows: list[ParsedRow] = []
    malformed: list[ParseError] = []

    for line_number, line in enumerate(lines[1:], start=2):
        values = _split(line)
        if len(values) != len(headers):
            logger.warning(
                "Dropping CSV line %s: expected %s fields, got %s",
                line_number, len(headers), len(values),
            )
            malformed.append(
                ParseError(
                    f"Expected {len(headers)} fields but found {len(values)}",
                    line_number=line_number,
                    raw_line=line,
                )
            )
            continue
        rows.append(ParsedRow(row_number=line_number, fields=dict(zip(headers, values))))

    return ParseResult(headers=headers, rows=rows, malformed=malformed)
