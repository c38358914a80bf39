#!/usr/bin/env python3
"""Configuration for text histogram display.

Display settings can come from:
1. Keyword arguments (HistogramDisplayConfig(...))
2. JSON configuration files (HistogramDisplayConfig.from_json / load_config)
3. Plain dictionaries, e.g. a section of a larger application config

Keys starting with "_" are treated as documentation and ignored when loading.
"""

import json
import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

VALID_COUNT_DISPLAYS = {"percent", "count"}


@dataclass
class HistogramDisplayConfig:
    """How a histogram should look when rendered as text."""

    max_width: int = 80  # Total characters per row, including labels and counts
    label_for_singular_bucket: str = "All"  # Label when there is only one bucket
    bar_part: str = "*"  # Character used to draw bars
    count_display: str = "percent"  # percent or count
    percent_fraction_digits: int = 0  # Digits after the decimal point for percent
    count_thousands_separator: bool = False  # Group digits when count_display=count

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def to_json(self, filepath: str, indent: int = 2) -> None:
        """Save configuration to JSON file.

        Args:
            filepath: Path to JSON file
            indent: JSON indentation level
        """
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistogramDisplayConfig":
        """Create config from dictionary, skipping "_" documentation keys."""
        return cls(**{k: v for k, v in data.items() if not k.startswith("_")})

    @classmethod
    def from_json(cls, filepath: str) -> "HistogramDisplayConfig":
        """Load configuration from JSON file."""
        with open(filepath, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    def validate(self) -> tuple[bool, list[str]]:
        """Validate configuration.

        Returns:
            Tuple of (is_valid, error_messages)
        """
        errors = []

        if self.max_width < 2:
            errors.append(f"max_width must be at least 2. Got {self.max_width}.")

        if not isinstance(self.bar_part, str) or len(self.bar_part) != 1:
            errors.append(f"bar_part must be a single character. Got {self.bar_part!r}.")

        if self.count_display not in VALID_COUNT_DISPLAYS:
            errors.append(
                "count_display must be one of {options}. Got '{value}'.".format(
                    options=", ".join(sorted(VALID_COUNT_DISPLAYS)),
                    value=self.count_display,
                )
            )

        if self.percent_fraction_digits < 0:
            errors.append(
                "percent_fraction_digits must be non-negative. "
                f"Got {self.percent_fraction_digits}."
            )

        return len(errors) == 0, errors


def load_config(
    config_file: Optional[str] = None,
    config_dict: Optional[Dict[str, Any]] = None,
) -> HistogramDisplayConfig:
    """Load configuration from file or dictionary.

    Args:
        config_file: Path to JSON config file
        config_dict: Configuration dictionary (alternative to file)

    Returns:
        HistogramDisplayConfig instance

    Raises:
        ValueError: If neither file nor dict provided, if the file doesn't
            exist, or if the loaded configuration is invalid
    """
    if config_file:
        if not os.path.exists(config_file):
            raise ValueError(f"Config file not found: {config_file}")
        config = HistogramDisplayConfig.from_json(config_file)
    elif config_dict is not None:
        config = HistogramDisplayConfig.from_dict(config_dict)
    else:
        raise ValueError("Must provide either config_file or config_dict")

    is_valid, errors = config.validate()
    if not is_valid:
        raise ValueError("Invalid histogram display config: " + "; ".join(errors))
    return config


# Single source of truth for display defaults.
DEFAULT_HISTOGRAM_DISPLAY_CONFIG = HistogramDisplayConfig()
