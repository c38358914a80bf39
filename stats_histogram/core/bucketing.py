"""Bucketing contracts shared by selectors and histograms.

A bucketing system is an ordered partition of a value space into adjacent
intervals numbered from 0, left to right:

- With one bucket, the bucket is unbounded and holds every value.
- With two or more buckets, every bucket except the last has an inclusive
  upper bound, and the bounds strictly increase with the index. The last bucket
  holds every value greater than the largest upper bound.

Example: upper bounds 0 and 100 give three buckets, (-inf, 0], (0, 100] and
(100, +inf). A value equal to an upper bound belongs to that bound's bucket.
"""

import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

NO_UPPER_BOUND_IN_LAST_BUCKET_MESSAGE = "There is no upper bound for the last bucket."


# =============================================================================
# Precondition helpers
# =============================================================================


def check_element_index(index: int, size: int) -> int:
    """Raise IndexError unless 0 <= index < size."""
    if index < 0:
        raise IndexError(f"index ({index}) must not be negative")
    if index >= size:
        raise IndexError(f"index ({index}) must be less than size ({size})")
    return index


def check_upper_bound_index(index: int, num_buckets: int) -> int:
    """Validate an index passed to bucket_upper_bound.

    Raises:
        IndexError: If index is outside [0, num_buckets)
        ValueError: If index refers to the last (unbounded) bucket
    """
    check_element_index(index, num_buckets)
    if index >= num_buckets - 1:
        raise ValueError(NO_UPPER_BOUND_IN_LAST_BUCKET_MESSAGE)
    return index


def check_value(value: Any) -> Any:
    """Reject values that cannot be placed in any bucket."""
    if value is None:
        raise TypeError("Can't bucket a None value.")
    if isinstance(value, float) and math.isnan(value):
        raise ValueError("Can't bucket a NaN value.")
    return value


# =============================================================================
# Contracts
# =============================================================================


class BucketingSystem(ABC, Generic[T]):
    """Something that divides values of type T into a fixed number of buckets."""

    @property
    @abstractmethod
    def num_buckets(self) -> int:
        """Total number of buckets, never smaller than 1."""

    @abstractmethod
    def bucket_upper_bound(self, index: int) -> T:
        """Get the inclusive upper bound of the bucket at ``index``.

        The last bucket has no upper bound, so a system with 10 buckets has
        only 9 upper bound values (indices 0 through 8).

        Raises:
            IndexError: If index is outside [0, num_buckets)
            ValueError: If index is the last bucket's index
        """


class BucketSelector(BucketingSystem[T]):
    """Decides which bucket a particular value belongs in.

    Selectors are immutable once constructed and safe to share across threads.
    """

    @abstractmethod
    def bucket_index_for(self, value: T) -> int:
        """Get the index of the bucket that ``value`` should be counted in."""


class FunctionBasedBucketSelector(BucketSelector[T]):
    """A BucketSelector built from a pair of functions.

    One function converts a value into a bucket index, the other converts a
    bucket index into the bucket's upper bound. Neither function has to handle
    None values or the last bucket's index; the selector checks those itself.
    """

    def __init__(
        self,
        value_to_bucket_index: Callable[[T], int],
        bucket_index_to_upper_bound: Callable[[int], T],
        num_buckets: int,
    ):
        """Initialise the selector.

        Args:
            value_to_bucket_index: Selects a bucket index for a value
            bucket_index_to_upper_bound: Returns the upper bound for an index
            num_buckets: Total number of buckets, including the unbounded one

        Raises:
            ValueError: If num_buckets is not positive
            TypeError: If either function is not callable
        """
        if num_buckets <= 0:
            raise ValueError("num_buckets must be greater than 0.")
        if not callable(value_to_bucket_index):
            raise TypeError("value_to_bucket_index must be callable.")
        if not callable(bucket_index_to_upper_bound):
            raise TypeError("bucket_index_to_upper_bound must be callable.")
        self._num_buckets = int(num_buckets)
        self._value_to_bucket_index = value_to_bucket_index
        self._bucket_index_to_upper_bound = bucket_index_to_upper_bound

    @property
    def num_buckets(self) -> int:
        return self._num_buckets

    def bucket_upper_bound(self, index: int) -> T:
        check_upper_bound_index(index, self._num_buckets)
        return self._bucket_index_to_upper_bound(index)

    def bucket_index_for(self, value: T) -> int:
        check_value(value)
        return self._value_to_bucket_index(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(num_buckets={self._num_buckets})"
