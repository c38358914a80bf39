"""Configuration for a HistogramFormatter."""

from dataclasses import dataclass, field
from typing import Callable, Generic, Optional, TypeVar

from stats_histogram.core.bar_graph import DEFAULT_BAR_PART
from stats_histogram.core.bucket_count_formatters import (
    BucketCountFormatter,
    count_formatter,
    percent_formatter,
)
from stats_histogram.core.config_manager import (
    DEFAULT_HISTOGRAM_DISPLAY_CONFIG,
    HistogramDisplayConfig,
)

T = TypeVar("T")


@dataclass(frozen=True)
class HistogramFormat(Generic[T]):
    """How a HistogramFormatter renders a histogram.

    Attributes:
        upper_bound_value_formatter: Turns an upper bound value into label text
        label_for_singular_bucket: Label used when the histogram has only one
            bucket, since that bucket has no upper bound to show
        bucket_count_formatter: Turns (count, total_count) into the text shown
            after each bar, e.g. a percentage or the raw count
        max_width: Total width of each rendered row, in characters
        bar_part: Character used to draw bars
    """

    upper_bound_value_formatter: Callable[[T], str] = str
    label_for_singular_bucket: str = "All"
    bucket_count_formatter: BucketCountFormatter = field(default_factory=percent_formatter)
    max_width: int = 80
    bar_part: str = DEFAULT_BAR_PART

    def __post_init__(self):
        if not callable(self.upper_bound_value_formatter):
            raise TypeError("upper_bound_value_formatter must be callable.")
        if not callable(self.bucket_count_formatter):
            raise TypeError("bucket_count_formatter must be callable.")
        if self.label_for_singular_bucket is None:
            raise TypeError("label_for_singular_bucket is required.")
        if self.max_width < 2:
            raise ValueError("max_width must be at least 2.")
        if not isinstance(self.bar_part, str) or len(self.bar_part) != 1:
            raise ValueError("bar_part must be a single character.")

    @classmethod
    def from_config(
        cls,
        config: Optional[HistogramDisplayConfig] = None,
        upper_bound_value_formatter: Callable[[T], str] = str,
    ) -> "HistogramFormat[T]":
        """Create a format from display configuration.

        Args:
            config: Display settings (defaults to DEFAULT_HISTOGRAM_DISPLAY_CONFIG)
            upper_bound_value_formatter: Turns an upper bound value into text

        Raises:
            ValueError: If the configuration is invalid
        """
        if config is None:
            config = DEFAULT_HISTOGRAM_DISPLAY_CONFIG
        is_valid, errors = config.validate()
        if not is_valid:
            raise ValueError("Invalid histogram display config: " + "; ".join(errors))

        if config.count_display == "count":
            bucket_count_formatter = count_formatter(config.count_thousands_separator)
        else:
            bucket_count_formatter = percent_formatter(config.percent_fraction_digits)

        return cls(
            upper_bound_value_formatter=upper_bound_value_formatter,
            label_for_singular_bucket=config.label_for_singular_bucket,
            bucket_count_formatter=bucket_count_formatter,
            max_width=config.max_width,
            bar_part=config.bar_part,
        )
