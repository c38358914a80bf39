"""BucketSelector factories for common bucketing strategies.

Each factory validates its parameters when it is called and raises ValueError
for contradictory values, so a selector that was built successfully never fails
at use time for a valid value.
"""

import math
import operator
from bisect import bisect_left
from decimal import ROUND_CEILING, ROUND_HALF_EVEN, Decimal, localcontext
from fractions import Fraction
from typing import Callable, Iterable, Tuple, TypeVar

import numpy as np

from stats_histogram.core.bucketing import (
    BucketSelector,
    FunctionBasedBucketSelector,
    check_upper_bound_index,
    check_value,
)

T = TypeVar("T")
V = TypeVar("V")

INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)

# Log ratios are rounded to this many decimal places before taking the
# ceiling, so that log(125)/log(5) lands on exactly 3.
LOG_RATIO_PLACES = Decimal(1).scaleb(-12)


# =============================================================================
# Composition
# =============================================================================


class TransformedBucketSelector(BucketSelector[V]):
    """A BucketSelector for type V that delegates to a selector for type T."""

    def __init__(
        self,
        input_selector: BucketSelector[T],
        convert_inward: Callable[[V], T],
        convert_outward: Callable[[T], V],
    ):
        if not isinstance(input_selector, BucketSelector):
            raise TypeError("input_selector must be a BucketSelector.")
        if not callable(convert_inward) or not callable(convert_outward):
            raise TypeError("convert_inward and convert_outward must be callable.")
        self._input = input_selector
        self._convert_inward = convert_inward
        self._convert_outward = convert_outward

    @property
    def num_buckets(self) -> int:
        return self._input.num_buckets

    def bucket_upper_bound(self, index: int) -> V:
        return self._convert_outward(self._input.bucket_upper_bound(index))

    def bucket_index_for(self, value: V) -> int:
        check_value(value)
        return self._input.bucket_index_for(self._convert_inward(value))


def transform(
    input_selector: BucketSelector[T],
    convert_inward: Callable[[V], T],
    convert_outward: Callable[[T], V],
) -> BucketSelector[V]:
    """Wrap a selector for type T inside one that handles type V.

    This is how wrapped or unit-bearing values reuse the numeric selectors in
    this module without duplicating the bucketing math.

    Args:
        input_selector: Existing selector handling values of type T
        convert_inward: Converts a V value into the T value to bucket
        convert_outward: Converts a T upper bound back into a V value

    Returns:
        BucketSelector handling values of type V, with the same num_buckets
    """
    return TransformedBucketSelector(input_selector, convert_inward, convert_outward)


# =============================================================================
# Numeric selectors
# =============================================================================


def power_of_2_long_values(min_power: int, num_buckets: int) -> BucketSelector[int]:
    """Get a selector whose upper bounds are consecutive powers of 2.

    Example: min_power=2 and num_buckets=5 give upper bounds 4, 8, 16 and 32.

    Args:
        min_power: Smallest power of 2 to use as an upper bound
        num_buckets: Number of buckets the selector should provide

    Returns:
        BucketSelector for integer values

    Raises:
        ValueError: If min_power is negative or num_buckets is not positive
        TypeError: If min_power or num_buckets is not an integer
    """
    min_power = operator.index(min_power)
    num_buckets = operator.index(num_buckets)
    if min_power < 0:
        raise ValueError("min_power must be non-negative.")

    def value_to_bucket_index(value) -> int:
        current_bucket_max_value = 1 << min_power
        for i in range(num_buckets - 1):
            if value <= current_bucket_max_value:
                return i
            current_bucket_max_value <<= 1
        return num_buckets - 1

    def bucket_index_to_upper_bound(index: int) -> int:
        return 1 << (index + min_power)

    return FunctionBasedBucketSelector(
        value_to_bucket_index, bucket_index_to_upper_bound, num_buckets
    )


def linear_long_values(
    lowest_upper_bound: int, highest_upper_bound: int, num_buckets: int
) -> BucketSelector[int]:
    """Get a selector whose upper bounds are evenly spaced integers.

    Example: lowest_upper_bound=0, highest_upper_bound=20 and num_buckets=6
    give upper bounds 0, 5, 10, 15 and 20.

    The step width is kept as an exact fraction, so uneven divisions never
    accumulate rounding drift: the next-to-last upper bound is always exactly
    highest_upper_bound.

    Args:
        lowest_upper_bound: Upper bound of the first bucket (index 0)
        highest_upper_bound: Upper bound of the next-to-last bucket
        num_buckets: Total number of buckets

    Returns:
        BucketSelector for integer values

    Raises:
        ValueError: If there are fewer than 3 buckets, or the bounds are too
            close together to give each bucket a distinct integer upper bound
    """
    lowest = operator.index(lowest_upper_bound)
    highest = operator.index(highest_upper_bound)
    num_buckets = operator.index(num_buckets)
    if num_buckets < 3:
        raise ValueError("num_buckets must be at least 3.")
    if highest - lowest < num_buckets - 2:
        raise ValueError(
            f"highest_upper_bound ({highest}) must exceed lowest_upper_bound "
            f"({lowest}) by at least num_buckets - 2 ({num_buckets - 2})."
        )

    bucket_width = Fraction(highest - lowest, num_buckets - 2)
    last_bucket = num_buckets - 1

    def value_to_bucket_index(value) -> int:
        if value <= lowest:
            return 0
        if value > highest:
            return last_bucket
        return math.ceil((Fraction(value) - lowest) / bucket_width)

    def bucket_index_to_upper_bound(index: int) -> int:
        return lowest + math.floor(bucket_width * index)

    return FunctionBasedBucketSelector(
        value_to_bucket_index, bucket_index_to_upper_bound, num_buckets
    )


def exponential(base: float, min_power: float, num_buckets: int) -> BucketSelector[float]:
    """Get a selector whose upper bounds form an exponential series.

    Each upper bound's exponent is 1.0 more than the previous one. Example:
    base=5.0, min_power=0.0 and num_buckets=5 give 5**0, 5**1, 5**2 and 5**3,
    so the upper bounds are 1.0, 5.0, 25.0 and 125.0.

    Args:
        base: Value raised to each exponent to produce an upper bound
        min_power: Smallest exponent to use
        num_buckets: Number of buckets into which values are counted

    Returns:
        BucketSelector for float values

    Raises:
        ValueError: If base is not a finite number greater than 1, or
            num_buckets is not positive
        TypeError: If num_buckets is not an integer
    """
    base = float(base)
    min_power = float(min_power)
    num_buckets = operator.index(num_buckets)
    if not math.isfinite(base) or base <= 0:
        raise ValueError("base must be a finite number greater than 0.")
    if base <= 1:
        raise ValueError("base must be greater than 1 for upper bounds to increase.")
    if not math.isfinite(min_power):
        raise ValueError("min_power must be finite.")

    log_of_base = Decimal(repr(math.log(base)))
    min_power_as_decimal = Decimal(repr(min_power))
    last_bucket = num_buckets - 1

    def value_to_bucket_index(value) -> int:
        value = float(value)
        if value <= 0:
            return 0
        if value == math.inf:
            return last_bucket
        log_of_value = Decimal(repr(math.log(value)))
        with localcontext() as ctx:
            ctx.prec = 40
            ctx.rounding = ROUND_HALF_EVEN
            ratio = (log_of_value / log_of_base).quantize(
                LOG_RATIO_PLACES, rounding=ROUND_HALF_EVEN
            )
            index = int(
                (ratio - min_power_as_decimal).to_integral_value(rounding=ROUND_CEILING)
            )
        return min(max(index, 0), last_bucket)

    def bucket_index_to_upper_bound(index: int) -> float:
        try:
            return base ** (min_power + index)
        except OverflowError:
            return math.inf

    return FunctionBasedBucketSelector(
        value_to_bucket_index, bucket_index_to_upper_bound, num_buckets
    )


def _float_to_int64(value: float) -> int:
    if math.isinf(value):
        return INT64_MAX if value > 0 else INT64_MIN
    return min(max(int(value), INT64_MIN), INT64_MAX)


def exponential_long(base: float, min_power: float, num_buckets: int) -> BucketSelector[int]:
    """Integer version of :func:`exponential`.

    Example: base=3.0, min_power=0 and num_buckets=5 give upper bounds 1, 3, 9
    and 27. Upper bounds too large for a float map to the int64 limits.
    """
    return transform(exponential(base, min_power, num_buckets), float, _float_to_int64)


# =============================================================================
# Explicit upper bounds
# =============================================================================


class IrregularSetBucketSelector(BucketSelector[T]):
    """Buckets values using an explicit set of upper bounds, such as {1, 5, 7}.

    Useful when the bounds are irregular and easier to list than to generate
    with a formula. There is always one more bucket than there are upper
    bounds; an empty set gives a single unbounded bucket.
    """

    def __init__(self, upper_bounds: Iterable[T]):
        """Initialise the selector.

        Args:
            upper_bounds: Upper bound values in any order. Duplicates collapse
                into one bound.

        Raises:
            TypeError: If upper_bounds is None
            ValueError: If upper_bounds contains None
        """
        if upper_bounds is None:
            raise TypeError("upper_bounds is required.")
        values = list(upper_bounds)
        if any(v is None for v in values):
            raise ValueError("upper_bounds cannot contain None.")

        ordered = []
        for v in sorted(values):
            if not ordered or ordered[-1] < v:
                ordered.append(v)
        self._upper_bounds: Tuple[T, ...] = tuple(ordered)

    @property
    def num_buckets(self) -> int:
        return len(self._upper_bounds) + 1

    @property
    def upper_bounds(self) -> Tuple[T, ...]:
        return self._upper_bounds

    def bucket_index_for(self, value: T) -> int:
        check_value(value)
        # Count of upper bounds strictly less than the value.
        return bisect_left(self._upper_bounds, value)

    def bucket_upper_bound(self, index: int) -> T:
        check_upper_bound_index(index, self.num_buckets)
        return self._upper_bounds[index]

    def __repr__(self) -> str:
        return f"IrregularSetBucketSelector({list(self._upper_bounds)!r})"


def irregular_set(upper_bounds: Iterable[T]) -> BucketSelector[T]:
    """Get a selector with an explicit, arbitrary set of upper bounds."""
    return IrregularSetBucketSelector(upper_bounds)
