"""Factories for the bucket count column of a formatted histogram.

A bucket count formatter takes ``(count, total_count)`` and returns the text
shown at the right-hand end of a histogram row.
"""

from decimal import ROUND_HALF_EVEN, Decimal
from typing import Callable

BucketCountFormatter = Callable[[int, int], str]

NO_TOTAL_PLACEHOLDER = "--"


def percent_formatter(fraction_digits: int = 0) -> BucketCountFormatter:
    """Format counts as a percentage of the total.

    Percentages are rounded half to even, so 12.5% with no fraction digits
    renders as "12%". An empty histogram (total of zero) renders "--".

    Args:
        fraction_digits: Digits to show after the decimal point

    Raises:
        ValueError: If fraction_digits is negative
    """
    if fraction_digits < 0:
        raise ValueError("fraction_digits must be non-negative.")
    quantum = Decimal(1).scaleb(-fraction_digits)

    def format_percent(count: int, total: int) -> str:
        if total == 0:
            return NO_TOTAL_PLACEHOLDER
        percent = Decimal(int(count)) * 100 / Decimal(int(total))
        return f"{percent.quantize(quantum, rounding=ROUND_HALF_EVEN)}%"

    return format_percent


def count_formatter(thousands_separator: bool = False) -> BucketCountFormatter:
    """Format the raw count, ignoring the total."""

    def format_count(count: int, total: int) -> str:
        return f"{count:,}" if thousands_separator else str(count)

    return format_count
