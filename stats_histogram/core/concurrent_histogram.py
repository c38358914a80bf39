"""Thread-safe histogram for concurrent producers."""

import threading
from typing import List, TypeVar

import numpy as np

from stats_histogram.core.bucketing import BucketSelector, check_element_index, check_value
from stats_histogram.core.histogram import MutableHistogram

T = TypeVar("T")


class ConcurrentHistogram(MutableHistogram[T]):
    """A MutableHistogram that any number of threads may count into at once.

    Each bucket's counter has its own lock, so an increment or a read is atomic
    for that one bucket. There is no histogram-wide lock: reading every bucket
    while writers are active does not give a point-in-time snapshot, only a
    set of individually consistent counts. Use
    :meth:`ImmutableHistogram.copy_of` to take a snapshot for rendering.
    """

    def __init__(self, bucket_selector: BucketSelector[T]):
        """Initialise a histogram with all counts at zero.

        Args:
            bucket_selector: Decides which bucket each counted value goes in

        Raises:
            TypeError: If bucket_selector is not a BucketSelector
        """
        if not isinstance(bucket_selector, BucketSelector):
            raise TypeError("bucket_selector must be a BucketSelector.")
        self._bucket_selector = bucket_selector
        num_buckets = bucket_selector.num_buckets
        self._bucket_counts = np.zeros(num_buckets, dtype=np.int64)
        self._bucket_locks: List[threading.Lock] = [
            threading.Lock() for _ in range(num_buckets)
        ]

    @property
    def num_buckets(self) -> int:
        return self._bucket_selector.num_buckets

    def bucket_upper_bound(self, index: int) -> T:
        return self._bucket_selector.bucket_upper_bound(index)

    def count_in_bucket(self, index: int) -> int:
        check_element_index(index, len(self._bucket_counts))
        with self._bucket_locks[index]:
            return int(self._bucket_counts[index])

    def count_value(self, value: T) -> None:
        check_value(value)
        bucket_index = self._bucket_selector.bucket_index_for(value)
        with self._bucket_locks[bucket_index]:
            self._bucket_counts[bucket_index] += 1
