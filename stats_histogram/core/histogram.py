"""Histogram contracts.

A histogram holds how many values were counted in each bucket of a bucketing
system. Example: a histogram of strings with upper bounds "Apple", "Hewlett
Packard", "Sun" and "Wang" has five buckets. "Acorn" is counted in the first
bucket, "Tandem" in the fourth, and "Zenith" in the last (unbounded) bucket.
"""

from abc import abstractmethod
from typing import TypeVar

from stats_histogram.core.bucketing import BucketingSystem

T = TypeVar("T")


class Histogram(BucketingSystem[T]):
    """Read access to per-bucket counts."""

    @abstractmethod
    def count_in_bucket(self, index: int) -> int:
        """Get the number of values counted in the bucket at ``index``."""


class MutableHistogram(Histogram[T]):
    """A Histogram that can count additional values."""

    @abstractmethod
    def count_value(self, value: T) -> None:
        """Assign ``value`` to a bucket and add 1 to that bucket's count.

        Raises:
            TypeError: If value is None
        """
