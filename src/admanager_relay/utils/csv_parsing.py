"""CSV parsing utilities for report output."""

import csv
import logging
import math
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)


class RevenueTotals(NamedTuple):
    total_revenue: float
    records_found: int


def parse_revenue_value(value: Any) -> float:
    """Parse a revenue cell, returning 0.0 for anything that is not a finite number.

    Examples:
        >>> parse_revenue_value("12.5")
        12.5
        >>> parse_revenue_value("bad")
        0.0
    """
    if value is None:
        return 0.0
    try:
        parsed = float(str(value).strip())
    except (ValueError, OverflowError):
        logger.debug(f"Unable to parse revenue value: '{value}', counting 0")
        return 0.0
    if not math.isfinite(parsed):
        return 0.0
    return parsed


def sum_revenue_column(csv_text: str, column_index: int = 2) -> RevenueTotals:
    """Sum one column of a report CSV.

    The first line is the header and is skipped. Every other non-blank line
    counts as a record; a missing or unparseable cell contributes 0.

    Args:
        csv_text: Report output as text
        column_index: Zero-based position of the revenue column

    Returns:
        Total revenue and the number of data rows
    """
    lines = csv_text.splitlines()[1:]

    total_revenue = 0.0
    records_found = 0
    for line in lines:
        if not line.strip():
            continue
        records_found += 1
        row = next(csv.reader([line]))
        if column_index >= len(row):
            # An unbalanced quote swallows the rest of the line
            row = line.split(",")
        if column_index < len(row):
            total_revenue += parse_revenue_value(row[column_index])

    return RevenueTotals(total_revenue=total_revenue, records_found=records_found)
