"""Immutable, validated histogram snapshots."""

import logging
import operator
from typing import Any, Generic, Optional, Sequence, Tuple, TypeVar

import numpy as np

from stats_histogram.core.bucketing import check_element_index, check_upper_bound_index
from stats_histogram.core.histogram import Histogram

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET: Any = object()


class ImmutableHistogram(Histogram[T]):
    """A frozen copy of a histogram's counts and upper bounds.

    Counts are stored in a read-only numpy int64 array and upper bounds in a
    tuple, so an instance can be shared between threads without locking.
    max_count and total_count are computed once, when the instance is built.

    Example:
        histogram = (
            ImmutableHistogram.builder()
            .set_count_by_bucket([0, 10, 5, 4, 6])
            .set_bucket_upper_bounds([1, 2, 4, 8])
            .build()
        )
        histogram.total_count  # 25
    """

    def __init__(self, count_by_bucket: Sequence[int], bucket_upper_bounds: Sequence[T]):
        """Validate and copy the counts and upper bounds.

        Prefer :meth:`builder`, :meth:`copy_of` or :meth:`from_histogram`.

        Args:
            count_by_bucket: Count per bucket, in ascending bucket order. Its
                length defines the number of buckets.
            bucket_upper_bounds: Upper bound per bucket except the last, in
                ascending bucket order

        Raises:
            ValueError: If either sequence is malformed (see
                :meth:`ImmutableHistogramBuilder.build`)
        """
        counts = list(count_by_bucket)
        upper_bounds = tuple(bucket_upper_bounds)

        if not counts:
            raise ValueError("count_by_bucket cannot be empty")
        if any(c is None for c in counts):
            raise ValueError("count_by_bucket cannot contain None elements")
        if any(b is None for b in upper_bounds):
            raise ValueError("bucket_upper_bounds cannot contain None elements")
        counts = [operator.index(c) for c in counts]
        if any(c < 0 for c in counts):
            raise ValueError("count_by_bucket values cannot be negative")

        expected_num_upper_bounds = len(counts) - 1
        if len(upper_bounds) != expected_num_upper_bounds:
            raise ValueError(
                "Wrong number of bucket_upper_bounds values. "
                f"(Expected {expected_num_upper_bounds}, got {len(upper_bounds)})"
            )

        count_array = np.array(counts, dtype=np.int64)
        count_array.setflags(write=False)
        self._count_by_bucket = count_array
        self._bucket_upper_bounds = upper_bounds
        # Python ints, so the total cannot wrap at the int64 limit.
        self._max_count = max(counts)
        self._total_count = sum(counts)

    # -------------------------------------------------------------------------
    # Histogram
    # -------------------------------------------------------------------------

    @property
    def num_buckets(self) -> int:
        return len(self._count_by_bucket)

    def count_in_bucket(self, index: int) -> int:
        check_element_index(index, self.num_buckets)
        return int(self._count_by_bucket[index])

    def bucket_upper_bound(self, index: int) -> T:
        check_upper_bound_index(index, self.num_buckets)
        return self._bucket_upper_bounds[index]

    # -------------------------------------------------------------------------
    # Snapshot values
    # -------------------------------------------------------------------------

    @property
    def count_by_bucket(self) -> np.ndarray:
        """Read-only int64 array of counts, one per bucket."""
        return self._count_by_bucket

    @property
    def bucket_upper_bounds(self) -> Tuple[T, ...]:
        return self._bucket_upper_bounds

    @property
    def max_count(self) -> int:
        """Largest count in any single bucket."""
        return self._max_count

    @property
    def total_count(self) -> int:
        """Sum of the counts in all buckets."""
        return self._total_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImmutableHistogram):
            return NotImplemented
        return (
            np.array_equal(self._count_by_bucket, other._count_by_bucket)
            and self._bucket_upper_bounds == other._bucket_upper_bounds
        )

    def __hash__(self) -> int:
        return hash((tuple(self._count_by_bucket.tolist()), self._bucket_upper_bounds))

    def __repr__(self) -> str:
        return (
            f"ImmutableHistogram(count_by_bucket={self._count_by_bucket.tolist()!r}, "
            f"bucket_upper_bounds={list(self._bucket_upper_bounds)!r})"
        )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @staticmethod
    def builder(
        initial_values: Optional["ImmutableHistogram[T]"] = None,
    ) -> "ImmutableHistogramBuilder[T]":
        """Get a builder, optionally pre-populated from an existing instance."""
        return ImmutableHistogramBuilder(initial_values)

    @classmethod
    def copy_of(cls, histogram: Histogram[T]) -> "ImmutableHistogram[T]":
        """Make an immutable copy of any histogram.

        A new instance is always allocated, even when ``histogram`` is already
        immutable.

        Raises:
            TypeError: If histogram is None
        """
        if histogram is None:
            raise TypeError("histogram is required.")
        last_bucket_index = histogram.num_buckets - 1
        counts = [histogram.count_in_bucket(i) for i in range(last_bucket_index + 1)]
        upper_bounds = [histogram.bucket_upper_bound(i) for i in range(last_bucket_index)]
        logger.debug(f"Copied histogram with {len(counts)} buckets")
        return (
            cls.builder()
            .set_count_by_bucket(counts)
            .set_bucket_upper_bounds(upper_bounds)
            .build()
        )

    @classmethod
    def from_histogram(cls, histogram: Histogram[T]) -> "ImmutableHistogram[T]":
        """Return ``histogram`` itself if it is immutable, otherwise a copy."""
        if isinstance(histogram, ImmutableHistogram):
            return histogram
        return cls.copy_of(histogram)


class ImmutableHistogramBuilder(Generic[T]):
    """Collects the fields of an ImmutableHistogram before validating them."""

    def __init__(self, initial_values: Optional[ImmutableHistogram[T]] = None):
        self._count_by_bucket: Any = _UNSET
        self._bucket_upper_bounds: Any = _UNSET
        if initial_values is not None:
            self._count_by_bucket = initial_values.count_by_bucket.tolist()
            self._bucket_upper_bounds = list(initial_values.bucket_upper_bounds)

    def set_count_by_bucket(self, count_by_bucket: Sequence[int]) -> "ImmutableHistogramBuilder[T]":
        """Set every bucket's count at once; the length defines num_buckets."""
        if count_by_bucket is None:
            raise TypeError("count_by_bucket cannot be None")
        self._count_by_bucket = count_by_bucket
        return self

    def set_bucket_upper_bounds(
        self, bucket_upper_bounds: Sequence[T]
    ) -> "ImmutableHistogramBuilder[T]":
        """Set every bounded bucket's upper bound; one fewer than the counts."""
        if bucket_upper_bounds is None:
            raise TypeError("bucket_upper_bounds cannot be None")
        self._bucket_upper_bounds = bucket_upper_bounds
        return self

    def build(self) -> ImmutableHistogram[T]:
        """Validate the collected values and create an ImmutableHistogram.

        Raises:
            ValueError: If a property was never set, count_by_bucket is empty,
                either sequence contains None, a count is negative, or there is
                not exactly one fewer upper bound than counts
        """
        missing = [
            name
            for name, value in (
                ("count_by_bucket", self._count_by_bucket),
                ("bucket_upper_bounds", self._bucket_upper_bounds),
            )
            if value is _UNSET
        ]
        if missing:
            raise ValueError("Missing required properties: " + " ".join(missing))
        return ImmutableHistogram(self._count_by_bucket, self._bucket_upper_bounds)
