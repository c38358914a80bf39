"""Tests for transform_values."""

from unittest.mock import MagicMock

import pytest

from stats_histogram.core.histograms import transform_values
from stats_histogram.core.immutable_histogram import ImmutableHistogram


@pytest.fixture
def histogram():
    return (
        ImmutableHistogram.builder()
        .set_count_by_bucket([3, 1, 4])
        .set_bucket_upper_bounds(["A", "B"])
        .build()
    )


class TestTransformValues:
    """Test the transformed-values histogram view."""

    def test_upper_bounds_are_transformed(self, histogram):
        transformed = transform_values(histogram, str.lower)
        assert transformed.bucket_upper_bound(0) == "a"
        assert transformed.bucket_upper_bound(1) == "b"

    def test_counts_pass_through(self, histogram):
        transformed = transform_values(histogram, str.lower)
        assert transformed.num_buckets == 3
        assert [transformed.count_in_bucket(i) for i in range(3)] == [3, 1, 4]

    def test_last_bucket_error_passes_through(self, histogram):
        """The transformation never sees the missing last upper bound."""
        transformation = MagicMock()
        transformed = transform_values(histogram, transformation)
        with pytest.raises(ValueError, match="no upper bound"):
            transformed.bucket_upper_bound(2)
        transformation.assert_not_called()

    def test_transformation_is_not_cached(self, histogram):
        transformation = MagicMock(side_effect=str.lower)
        transformed = transform_values(histogram, transformation)
        transformed.bucket_upper_bound(0)
        transformed.bucket_upper_bound(0)
        assert transformation.call_count == 2

    def test_copy_materializes_bounds(self, histogram):
        copy = ImmutableHistogram.copy_of(transform_values(histogram, str.lower))
        assert copy.bucket_upper_bounds == ("a", "b")
        assert copy.count_by_bucket.tolist() == [3, 1, 4]

    def test_none_arguments(self, histogram):
        with pytest.raises(TypeError, match="histogram"):
            transform_values(None, str.lower)
        with pytest.raises(TypeError, match="transformation"):
            transform_values(histogram, None)
