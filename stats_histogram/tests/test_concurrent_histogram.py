#!/usr/bin/env python3
"""Tests for ConcurrentHistogram."""

import unittest
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

from stats_histogram.core.bucket_selectors import power_of_2_long_values
from stats_histogram.core.bucketing import BucketSelector
from stats_histogram.core.concurrent_histogram import ConcurrentHistogram


class TestConcurrentHistogram(unittest.TestCase):
    """Test counting and delegation to the bucket selector."""

    def setUp(self):
        self.selector = MagicMock(spec=BucketSelector)
        self.selector.num_buckets = 37

    def test_num_buckets_delegates_to_selector(self):
        histogram = ConcurrentHistogram(self.selector)
        self.assertEqual(histogram.num_buckets, 37)

    def test_bucket_upper_bound_delegates_to_selector(self):
        self.selector.bucket_upper_bound.return_value = 12345.0
        histogram = ConcurrentHistogram(self.selector)
        self.assertEqual(histogram.bucket_upper_bound(3), 12345.0)
        self.selector.bucket_upper_bound.assert_called_once_with(3)

    def test_counts_start_at_zero(self):
        histogram = ConcurrentHistogram(self.selector)
        self.assertEqual(
            [histogram.count_in_bucket(i) for i in range(37)], [0] * 37
        )

    def test_count_value_increments_selected_bucket(self):
        """Each counted value adds one to the bucket the selector picks."""
        self.selector.bucket_index_for.side_effect = {-345.0: 5, 678.0: 6}.get
        histogram = ConcurrentHistogram(self.selector)

        histogram.count_value(-345.0)
        histogram.count_value(678.0)
        histogram.count_value(678.0)

        self.assertEqual(histogram.count_in_bucket(5), 1)
        self.assertEqual(histogram.count_in_bucket(6), 2)
        self.assertEqual(histogram.count_in_bucket(7), 0)

    def test_count_in_bucket_returns_python_int(self):
        histogram = ConcurrentHistogram(power_of_2_long_values(0, 4))
        histogram.count_value(3)
        self.assertIs(type(histogram.count_in_bucket(2)), int)

    def test_count_in_bucket_out_of_range(self):
        histogram = ConcurrentHistogram(self.selector)
        with self.assertRaises(IndexError):
            histogram.count_in_bucket(37)
        with self.assertRaises(IndexError):
            histogram.count_in_bucket(-1)

    def test_none_value_is_rejected(self):
        histogram = ConcurrentHistogram(self.selector)
        with self.assertRaises(TypeError):
            histogram.count_value(None)
        self.selector.bucket_index_for.assert_not_called()

    def test_requires_bucket_selector(self):
        with self.assertRaises(TypeError):
            ConcurrentHistogram(None)
        with self.assertRaises(TypeError):
            ConcurrentHistogram([1, 2, 3])

    def test_last_bucket_has_no_upper_bound(self):
        histogram = ConcurrentHistogram(power_of_2_long_values(0, 4))
        with self.assertRaises(ValueError):
            histogram.bucket_upper_bound(3)


class TestConcurrentCounting(unittest.TestCase):
    """Test that concurrent producers never lose counts."""

    NUM_THREADS = 8
    VALUES = range(1, 1001)

    def test_parallel_counts_match_serial_counts(self):
        selector = power_of_2_long_values(0, 12)
        serial = ConcurrentHistogram(selector)
        for _ in range(self.NUM_THREADS):
            for value in self.VALUES:
                serial.count_value(value)

        parallel = ConcurrentHistogram(selector)

        def produce(_):
            for value in self.VALUES:
                parallel.count_value(value)

        with ThreadPoolExecutor(max_workers=self.NUM_THREADS) as executor:
            list(executor.map(produce, range(self.NUM_THREADS)))

        counts = [parallel.count_in_bucket(i) for i in range(12)]
        self.assertEqual(counts, [serial.count_in_bucket(i) for i in range(12)])
        self.assertEqual(sum(counts), self.NUM_THREADS * len(self.VALUES))


if __name__ == "__main__":
    unittest.main()
