"""Format Histogram contents for text display.

The output is a vertical list of labeled buckets, each with a horizontal bar
proportional to its count and a formatted count (a percentage of the total by
default):

    <= 1 ***                               4%
    <= 2 ***********                      15%
    <= 4 ******************************** 43%
    >  4 ****************************     38%
"""

import logging
from typing import Generic, List, TypeVar

from stats_histogram.core.bar_graph import HorizontalBarGraph
from stats_histogram.core.histogram import Histogram
from stats_histogram.core.histogram_format import HistogramFormat
from stats_histogram.core.immutable_histogram import ImmutableHistogram

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HistogramFormatter(Generic[T]):
    """Renders histograms as fixed-width text bar graphs."""

    def __init__(self, histogram_format: HistogramFormat[T]):
        """Initialise the formatter.

        Args:
            histogram_format: Describes how the formatted histogram should look

        Raises:
            TypeError: If histogram_format is not a HistogramFormat
        """
        if not isinstance(histogram_format, HistogramFormat):
            raise TypeError("histogram_format must be a HistogramFormat.")
        self.format_config = histogram_format

    def format(self, histogram: Histogram[T]) -> str:
        """Render ``histogram`` as one newline-terminated row per bucket.

        A live histogram is copied once up front, so every row is computed
        from the same counts even if other threads keep counting.

        Raises:
            TypeError: If histogram is None
            ValueError: If max_width is too small for the labels and counts
        """
        if histogram is None:
            raise TypeError("histogram is required.")
        snapshot = ImmutableHistogram.from_histogram(histogram)
        return self._build_graph(snapshot).format()

    def _build_graph(self, histogram: ImmutableHistogram[T]) -> HorizontalBarGraph:
        bucket_count = histogram.num_buckets
        total_count = histogram.total_count
        last_bucket = bucket_count - 1

        labels: List[str] = []
        magnitudes: List[int] = []
        formatted_counts: List[str] = []
        for i in range(bucket_count):
            count = histogram.count_in_bucket(i)
            labels.append(self._bucket_label(i, last_bucket, histogram))
            magnitudes.append(count)
            formatted_counts.append(
                self.format_config.bucket_count_formatter(count, total_count)
            )

        logger.debug(
            f"Formatting histogram: buckets={bucket_count} total={total_count} "
            f"max_width={self.format_config.max_width}"
        )
        return (
            HorizontalBarGraph.builder()
            .set_width(self.format_config.max_width)
            .set_num_rows(bucket_count)
            .set_bar_part(self.format_config.bar_part)
            .set_labels(labels)
            .set_magnitudes(magnitudes)
            .set_formatted_magnitudes(formatted_counts)
            .build()
        )

    def _bucket_label(self, index: int, last_bucket: int, histogram: Histogram[T]) -> str:
        format_value = self.format_config.upper_bound_value_formatter
        if index < last_bucket:
            return f"<= {format_value(histogram.bucket_upper_bound(index))}"
        if last_bucket > 0:
            # Two spaces keep the value aligned with the "<= " labels above.
            return f">  {format_value(histogram.bucket_upper_bound(index - 1))}"
        return self.format_config.label_for_singular_bucket
