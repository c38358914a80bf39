"""Utility functions for working with Histograms."""

from typing import Callable, TypeVar

from stats_histogram.core.histogram import Histogram

T = TypeVar("T")
V = TypeVar("V")


class _TransformedValuesHistogram(Histogram[V]):
    def __init__(self, input_histogram: Histogram[T], transformation: Callable[[T], V]):
        self._input = input_histogram
        self._transformation = transformation

    @property
    def num_buckets(self) -> int:
        return self._input.num_buckets

    def bucket_upper_bound(self, index: int) -> V:
        return self._transformation(self._input.bucket_upper_bound(index))

    def count_in_bucket(self, index: int) -> int:
        return self._input.count_in_bucket(index)


def transform_values(
    input_histogram: Histogram[T], transformation: Callable[[T], V]
) -> Histogram[V]:
    """Wrap a histogram so that its upper bound values pass through a function.

    Counts and bucket count are read straight from ``input_histogram``. Mapped
    upper bounds are not cached; copy the result with
    ImmutableHistogram.copy_of to materialize them once.

    Args:
        input_histogram: Histogram to wrap
        transformation: Converts one upper bound value

    Returns:
        Histogram view with transformed upper bound values

    Raises:
        TypeError: If either argument is None
    """
    if input_histogram is None:
        raise TypeError("The input histogram parameter is required.")
    if transformation is None:
        raise TypeError("The transformation function parameter is required.")
    return _TransformedValuesHistogram(input_histogram, transformation)
