"""Fixed-width text rendering of labeled magnitudes as horizontal bars.

Example output for width=40:

    <= 1 ***                              4%
    <= 2 ***********                     15%
    <= 4 ******************************* 43%
    >  4 ***************************     38%

Column widths and the bar scale depend on every row, so the graph is laid out
in two passes: validation computes FormattingHints from the whole row set, and
format() renders rows using those hints.
"""

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

DEFAULT_BAR_PART = "*"

_UNSET: Any = object()


@dataclass(frozen=True)
class FormattingHints:
    """Layout values derived from all rows of a graph."""

    max_label_width: int
    max_formatted_magnitude_length: int
    max_bar_width: int
    max_magnitude: int

    @property
    def shows_bar(self) -> bool:
        return self.max_bar_width > 0 and self.max_magnitude > 0


def _max_length(strings: Sequence[str]) -> int:
    return max((len(s) for s in strings), default=0)


@dataclass(frozen=True)
class HorizontalBarGraph:
    """A validated, renderable bar graph.

    Each row is the label padded to the widest label, a space, a bar of
    ``bar_part`` characters scaled against the largest magnitude, a space, and
    the row's formatted magnitude right-aligned. When the bar is shown every
    row is exactly ``width`` characters long before its newline.
    """

    width: int
    num_rows: int
    labels: Tuple[str, ...]
    magnitudes: Tuple[int, ...]
    formatted_magnitudes: Tuple[str, ...]
    bar_part: str = DEFAULT_BAR_PART
    hints: FormattingHints = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Validate the rows and derive the formatting hints.

        Raises:
            TypeError: If a row sequence is None
            ValueError: On the first failed check, in this order: num_rows,
                bar_part, label count, None labels, magnitude count, None or
                negative magnitudes, formatted magnitude count, None formatted
                magnitudes, and a width too small for the widest label and
                formatted magnitude
        """
        if self.num_rows < 1:
            raise ValueError(f"num_rows must be at least 1 (got {self.num_rows}).")
        if not isinstance(self.bar_part, str) or len(self.bar_part) != 1:
            raise ValueError("bar_part must be a single character.")

        labels = self._check_rows("labels", self.labels)
        magnitudes = self._check_rows("magnitudes", self.magnitudes)
        if any(m < 0 for m in magnitudes):
            raise ValueError("magnitudes cannot contain negative values.")
        formatted_magnitudes = self._check_rows(
            "formatted_magnitudes", self.formatted_magnitudes
        )

        object.__setattr__(self, "labels", tuple(str(s) for s in labels))
        object.__setattr__(self, "magnitudes", tuple(int(m) for m in magnitudes))
        object.__setattr__(
            self, "formatted_magnitudes", tuple(str(s) for s in formatted_magnitudes)
        )

        max_label_width = _max_length(self.labels)
        max_formatted_magnitude_length = _max_length(self.formatted_magnitudes)
        min_formattable_width = max_label_width + 1 + max_formatted_magnitude_length
        if self.width < min_formattable_width:
            raise ValueError(
                f"Width value ({self.width} chars) is too small to fit contents "
                f"({min_formattable_width} chars wide without bar graph)."
            )

        hints = FormattingHints(
            max_label_width=max_label_width,
            max_formatted_magnitude_length=max_formatted_magnitude_length,
            max_bar_width=self.width - max_label_width - max_formatted_magnitude_length - 2,
            max_magnitude=max(self.magnitudes),
        )
        object.__setattr__(self, "hints", hints)
        logger.debug(f"Bar graph layout for {self.num_rows} rows: {hints}")

    def _check_rows(self, name: str, rows: Optional[Sequence[Any]]) -> Tuple[Any, ...]:
        if rows is None:
            raise TypeError(f"{name} is required.")
        rows = tuple(rows)
        if len(rows) != self.num_rows:
            raise ValueError(
                f"{name} has {len(rows)} elements, but num_rows is {self.num_rows}."
            )
        if any(r is None for r in rows):
            raise ValueError(f"{name} cannot contain None elements.")
        return rows

    @staticmethod
    def builder(
        initial_values: Optional["HorizontalBarGraph"] = None,
    ) -> "HorizontalBarGraphBuilder":
        """Get a builder, optionally pre-populated from an existing graph."""
        return HorizontalBarGraphBuilder(initial_values)

    def format(self) -> str:
        """Render every row, each terminated by a newline."""
        hints = self.hints
        show_bar = hints.shows_bar

        lines = []
        for label, magnitude, formatted_magnitude in zip(
            self.labels, self.magnitudes, self.formatted_magnitudes
        ):
            parts = [label.ljust(hints.max_label_width), " "]
            if show_bar:
                # round() on a Fraction rounds half to even.
                num_bar_parts = round(
                    Fraction(magnitude * hints.max_bar_width, hints.max_magnitude)
                )
                parts.append((self.bar_part * num_bar_parts).ljust(hints.max_bar_width))
                parts.append(" ")
            parts.append(formatted_magnitude.rjust(hints.max_formatted_magnitude_length))
            parts.append("\n")
            lines.append("".join(parts))
        return "".join(lines)

    def __str__(self) -> str:
        return self.format()


class HorizontalBarGraphBuilder:
    """Collects bar graph values; build() validates them."""

    def __init__(self, initial_values: Optional[HorizontalBarGraph] = None):
        self._width: Any = _UNSET
        self._num_rows: Any = _UNSET
        self._labels: Any = _UNSET
        self._magnitudes: Any = _UNSET
        self._formatted_magnitudes: Any = _UNSET
        self._bar_part = DEFAULT_BAR_PART
        if initial_values is not None:
            self._width = initial_values.width
            self._num_rows = initial_values.num_rows
            self._labels = initial_values.labels
            self._magnitudes = initial_values.magnitudes
            self._formatted_magnitudes = initial_values.formatted_magnitudes
            self._bar_part = initial_values.bar_part

    def set_width(self, width: int) -> "HorizontalBarGraphBuilder":
        self._width = width
        return self

    def set_num_rows(self, num_rows: int) -> "HorizontalBarGraphBuilder":
        self._num_rows = num_rows
        return self

    def set_bar_part(self, bar_part: str) -> "HorizontalBarGraphBuilder":
        self._bar_part = bar_part
        return self

    def set_labels(self, labels: Sequence[str]) -> "HorizontalBarGraphBuilder":
        self._labels = labels
        return self

    def set_magnitudes(self, magnitudes: Sequence[int]) -> "HorizontalBarGraphBuilder":
        self._magnitudes = magnitudes
        return self

    def set_formatted_magnitudes(
        self, formatted_magnitudes: Sequence[str]
    ) -> "HorizontalBarGraphBuilder":
        self._formatted_magnitudes = formatted_magnitudes
        return self

    def build(self) -> HorizontalBarGraph:
        """Validate the collected values and create a HorizontalBarGraph.

        Raises:
            ValueError: If a required property was never set, or validation
                fails (see HorizontalBarGraph)
        """
        required = (
            ("width", self._width),
            ("num_rows", self._num_rows),
            ("labels", self._labels),
            ("magnitudes", self._magnitudes),
            ("formatted_magnitudes", self._formatted_magnitudes),
        )
        missing = [name for name, value in required if value is _UNSET]
        if missing:
            raise ValueError("Missing required properties: " + " ".join(missing))
        return HorizontalBarGraph(
            width=self._width,
            num_rows=self._num_rows,
            labels=self._labels,
            magnitudes=self._magnitudes,
            formatted_magnitudes=self._formatted_magnitudes,
            bar_part=self._bar_part,
        )
