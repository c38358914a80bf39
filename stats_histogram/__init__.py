"""Bucketing, histogram counting and text bar graph rendering."""

from stats_histogram.core.bar_graph import (
    FormattingHints,
    HorizontalBarGraph,
    HorizontalBarGraphBuilder,
)
from stats_histogram.core.bucket_count_formatters import count_formatter, percent_formatter
from stats_histogram.core.bucket_selectors import (
    IrregularSetBucketSelector,
    exponential,
    exponential_long,
    irregular_set,
    linear_long_values,
    power_of_2_long_values,
    transform,
)
from stats_histogram.core.bucketing import (
    NO_UPPER_BOUND_IN_LAST_BUCKET_MESSAGE,
    BucketingSystem,
    BucketSelector,
    FunctionBasedBucketSelector,
)
from stats_histogram.core.concurrent_histogram import ConcurrentHistogram
from stats_histogram.core.config_manager import HistogramDisplayConfig, load_config
from stats_histogram.core.histogram import Histogram, MutableHistogram
from stats_histogram.core.histogram_format import HistogramFormat
from stats_histogram.core.histogram_formatter import HistogramFormatter
from stats_histogram.core.histograms import transform_values
from stats_histogram.core.immutable_histogram import (
    ImmutableHistogram,
    ImmutableHistogramBuilder,
)

__all__ = [
    "BucketingSystem",
    "BucketSelector",
    "FunctionBasedBucketSelector",
    "IrregularSetBucketSelector",
    "NO_UPPER_BOUND_IN_LAST_BUCKET_MESSAGE",
    "exponential",
    "exponential_long",
    "irregular_set",
    "linear_long_values",
    "power_of_2_long_values",
    "transform",
    "Histogram",
    "MutableHistogram",
    "ConcurrentHistogram",
    "ImmutableHistogram",
    "ImmutableHistogramBuilder",
    "transform_values",
    "FormattingHints",
    "HorizontalBarGraph",
    "HorizontalBarGraphBuilder",
    "count_formatter",
    "percent_formatter",
    "HistogramFormat",
    "HistogramFormatter",
    "HistogramDisplayConfig",
    "load_config",
]
