#!/usr/bin/env python3
"""Tests for histogram display configuration."""

import json
import os
import tempfile
import unittest

from stats_histogram.core.config_manager import (
    DEFAULT_HISTOGRAM_DISPLAY_CONFIG,
    HistogramDisplayConfig,
    load_config,
)


class TestHistogramDisplayConfig(unittest.TestCase):
    """Test HistogramDisplayConfig serialization and validation."""

    def test_defaults_are_valid(self):
        is_valid, errors = DEFAULT_HISTOGRAM_DISPLAY_CONFIG.validate()
        self.assertTrue(is_valid)
        self.assertEqual(errors, [])

    def test_to_dict(self):
        data = HistogramDisplayConfig(max_width=60).to_dict()
        self.assertEqual(data["max_width"], 60)
        self.assertEqual(data["count_display"], "percent")
        self.assertEqual(data["label_for_singular_bucket"], "All")

    def test_from_dict_skips_documentation_keys(self):
        config = HistogramDisplayConfig.from_dict(
            {"_comment": "Narrow output for logs", "max_width": 40, "bar_part": "#"}
        )
        self.assertEqual(config.max_width, 40)
        self.assertEqual(config.bar_part, "#")

    def test_json_round_trip(self):
        config = HistogramDisplayConfig(max_width=50, count_display="count")
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "display.json")
            config.to_json(path)
            with open(path) as f:
                self.assertEqual(json.load(f)["max_width"], 50)
            self.assertEqual(HistogramDisplayConfig.from_json(path), config)

    def test_validate_collects_all_errors(self):
        config = HistogramDisplayConfig(
            max_width=1, bar_part="", count_display="bogus", percent_fraction_digits=-1
        )
        is_valid, errors = config.validate()
        self.assertFalse(is_valid)
        self.assertEqual(len(errors), 4)
        self.assertIn("max_width", errors[0])
        self.assertIn("bar_part", errors[1])
        self.assertIn("count_display", errors[2])
        self.assertIn("percent_fraction_digits", errors[3])


class TestLoadConfig(unittest.TestCase):
    """Test load_config."""

    def test_load_from_dict(self):
        config = load_config(config_dict={"max_width": 72})
        self.assertEqual(config.max_width, 72)

    def test_load_from_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "display.json")
            with open(path, "w") as f:
                json.dump({"_comment": "test", "count_display": "count"}, f)
            config = load_config(config_file=path)
        self.assertEqual(config.count_display, "count")

    def test_missing_file(self):
        with self.assertRaises(ValueError) as ctx:
            load_config(config_file="/nonexistent/display.json")
        self.assertIn("Config file not found", str(ctx.exception))

    def test_no_source(self):
        with self.assertRaises(ValueError):
            load_config()

    def test_invalid_config(self):
        with self.assertRaises(ValueError) as ctx:
            load_config(config_dict={"count_display": "bogus"})
        self.assertIn("Invalid histogram display config", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
