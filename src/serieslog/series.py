"""Series variants for the accumulator.

A series is one named, ordered, homogeneously-typed time series. Two variants
exist and no others:
- ScalarSeries: dimension 1, one float per entry
- VectorSeries: dimension 2, one (x, y) pair per entry
"""

from numbers import Real
from typing import List, TextIO, Tuple, Union

import numpy as np

Vector2 = Tuple[float, float]
SeriesValue = Union[float, Vector2]

SCALAR_DIMENSION = 1
VECTOR_DIMENSION = 2

# Fixed-point, 12 digits after the decimal point
NUMBER_FORMAT = "{:.12f}"

_INVALID_NAME_CHARS = (":", "\n", "\r")


def _is_real(value) -> bool:
    # bool is a Real subclass but never a measurement
    return isinstance(value, Real) and not isinstance(value, (bool, np.bool_))


def value_dimension(value) -> int:
    """Classify a value by shape.

    Args:
        value: A real number, or a length-2 sequence / numpy array of reals

    Returns:
        1 for a scalar value, 2 for a planar vector

    Raises:
        TypeError: If the value has neither shape
    """
    if _is_real(value):
        return SCALAR_DIMENSION

    if isinstance(value, np.ndarray):
        if value.shape != (2,):
            raise TypeError(f"Array value must have shape (2,), got {value.shape}")
        if not (np.issubdtype(value.dtype, np.floating) or np.issubdtype(value.dtype, np.integer)):
            raise TypeError(f"Array value must hold real numbers, got dtype {value.dtype}")
        return VECTOR_DIMENSION

    if isinstance(value, (tuple, list)) and len(value) == 2 and all(
        _is_real(component) for component in value
    ):
        return VECTOR_DIMENSION

    raise TypeError(
        f"Value must be a real number or an (x, y) pair, got {type(value).__name__}"
    )


def format_number(number: float) -> str:
    """Format one number the way every saved entry is written."""
    return NUMBER_FORMAT.format(number)


def format_header(name: str, dimension: int, count: int) -> str:
    """Return the block header line, without the newline."""
    return f"{name}: {dimension} {count}"


def format_entry(value: SeriesValue) -> str:
    """Return one data line (without the newline) for a stored entry."""
    if isinstance(value, tuple):
        return f"{format_number(value[0])} {format_number(value[1])}"
    return format_number(value)


class Series:
    """Base for the two series variants.

    Subclasses set `dimension` and implement `_convert`.
    `append` is the only operation that grows the series, so the entry count
    always equals the number of stored values.
    """

    dimension: int = 0

    def __init__(self, name: str) -> None:
        if any(char in name for char in _INVALID_NAME_CHARS):
            raise ValueError(f"Series name cannot contain ':' or line breaks: {name!r}")
        try:
            name.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError(f"Series name is not encodable as UTF-8: {name!r}") from None
        self._name = name
        self._values: List = []

    @property
    def name(self) -> str:
        """Return the series name."""
        return self._name

    @property
    def entry_count(self) -> int:
        """Return the number of entries."""
        return len(self._values)

    @property
    def values(self) -> tuple:
        """Return a read-only snapshot of the stored values."""
        return tuple(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def append(self, value) -> None:
        """Append one entry. The caller has already checked the shape."""
        self._values.append(self._convert(value))

    def clear(self) -> None:
        """Drop every entry."""
        self._values.clear()

    def header(self) -> str:
        return format_header(self._name, self.dimension, len(self._values))

    def write_to(self, sink: TextIO) -> None:
        """Write the header line followed by one line per entry.

        Args:
            sink: Any text stream with a write() method
        """
        sink.write(self.header() + "\n")
        for value in self._values:
            sink.write(format_entry(value) + "\n")

    def _convert(self, value):
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, entries={len(self._values)})"


class ScalarSeries(Series):
    """Dimension-1 series: one float per entry."""

    dimension = SCALAR_DIMENSION

    def _convert(self, value) -> float:
        return float(value)


class VectorSeries(Series):
    """Dimension-2 series: one (x, y) pair per entry."""

    dimension = VECTOR_DIMENSION

    def _convert(self, value) -> Vector2:
        x, y = value
        return (float(x), float(y))


SERIES_TYPES = {
    SCALAR_DIMENSION: ScalarSeries,
    VECTOR_DIMENSION: VectorSeries,
}


def series_for_dimension(name: str, dimension: int) -> Series:
    """Create an empty series of the variant matching `dimension`.

    Raises:
        ValueError: If dimension is not 1 or 2
    """
    try:
        series_type = SERIES_TYPES[dimension]
    except KeyError:
        raise ValueError(f"Unsupported series dimension: {dimension}") from None
    return series_type(name)
