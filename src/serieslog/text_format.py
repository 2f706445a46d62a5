"""Flat text format for saved series.

Grammar:
    file       := block* terminator
    block      := header data_line{count}
    header     := name ":" SP dimension SP count NEWLINE
    data_line  := number NEWLINE               (dimension 1)
                | number SP number NEWLINE     (dimension 2)
    terminator := "-1" NEWLINE

Blocks appear in series creation order. The loader stops at the first line
that is not a header; that line must be the terminator or the end of input.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, TextIO, Union

from serieslog.series import (
    SCALAR_DIMENSION,
    VECTOR_DIMENSION,
    Series,
    SeriesValue,
)

logger = logging.getLogger(__name__)

TERMINATOR = "-1"
SUPPORTED_DIMENSIONS = (SCALAR_DIMENSION, VECTOR_DIMENSION)

_HEADER_RE = re.compile(r"^(?P<name>[^:]*):\s*(?P<dimension>[+-]?\d+)\s+(?P<count>[+-]?\d+)\s*$")


class SeriesFileError(Exception):
    """Base exception for series file errors."""

    pass


class MalformedInputError(SeriesFileError):
    """Raised when a saved file does not follow the block grammar."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class SaveError(SeriesFileError):
    """Raised when a save cannot create, open, or fully write its target."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Failed to save series to {path}: {cause}")
        self.path = path
        self.cause = cause


@dataclass
class SeriesBlock:
    """One decoded block.

    Attributes:
        name: Series name from the header
        dimension: Declared dimension (1 or 2)
        count: Declared number of data lines
        values: Decoded entries, or None when the block was filtered out
    """

    name: str
    dimension: int
    count: int
    values: Optional[List[SeriesValue]] = None


# =============================================================================
# Serializer
# =============================================================================


def write_blocks(sink: TextIO, series: Iterable[Series]) -> int:
    """Write every series block followed by the terminator.

    Args:
        sink: Text stream to write to
        series: Series in the order they should appear

    Returns:
        Number of blocks written
    """
    written = 0
    for item in series:
        item.write_to(sink)
        written += 1
    sink.write(TERMINATOR + "\n")
    return written


def write_series_file(path: Union[str, Path], series: Iterable[Series]) -> int:
    """Write a complete file, truncating any existing one.

    Parent directories are created as needed.

    Raises:
        SaveError: If the directory or file cannot be created or written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            written = write_blocks(f, series)
    except OSError as e:
        raise SaveError(path, e) from e

    logger.debug(f"Wrote {written} series blocks to {path}")
    return written


# =============================================================================
# Deserializer
# =============================================================================


def parse_header(line: str) -> Optional[SeriesBlock]:
    """Parse a header line into an empty block, or None if it is not a header."""
    match = _HEADER_RE.match(line.rstrip("\r\n"))
    if match is None:
        return None
    return SeriesBlock(
        name=match.group("name"),
        dimension=int(match.group("dimension")),
        count=int(match.group("count")),
    )


def _parse_entry(line: str, dimension: int, line_number: int) -> SeriesValue:
    fields = line.split()
    if len(fields) != dimension:
        raise MalformedInputError(
            f"expected {dimension} number(s), got {len(fields)}", line_number
        )
    try:
        numbers = [float(field) for field in fields]
    except ValueError:
        raise MalformedInputError(f"invalid number in {line.strip()!r}", line_number) from None

    if dimension == SCALAR_DIMENSION:
        return numbers[0]
    return (numbers[0], numbers[1])


def iter_blocks(
    lines: Iterable[str],
    dimensions: Optional[Iterable[int]] = None,
    strict: bool = False,
) -> Iterator[SeriesBlock]:
    """Decode blocks from an iterable of lines.

    Blocks whose dimension is not in `dimensions` are consumed but their
    values are not stored (the yielded block has values=None).

    Args:
        lines: Lines of a saved file (e.g. an open text file)
        dimensions: Dimensions whose values should be kept; None keeps all
        strict: If True, a missing terminator is an error

    Raises:
        MalformedInputError: If the input does not follow the grammar
    """
    wanted = set(SUPPORTED_DIMENSIONS if dimensions is None else dimensions)
    line_iter = iter(lines)
    line_number = 0

    for line in line_iter:
        line_number += 1
        block = parse_header(line)

        if block is None:
            stripped = line.strip()
            if stripped == TERMINATOR:
                return
            if stripped == "" and all(not rest.strip() for rest in line_iter):
                break
            raise MalformedInputError(f"expected a series header, got {stripped!r}", line_number)

        if block.dimension not in SUPPORTED_DIMENSIONS:
            raise MalformedInputError(
                f"series {block.name!r} has unsupported dimension {block.dimension}", line_number
            )
        if block.count < 0:
            raise MalformedInputError(
                f"series {block.name!r} has negative count {block.count}", line_number
            )

        keep = block.dimension in wanted
        values: List[SeriesValue] = []
        for read in range(block.count):
            data_line = next(line_iter, None)
            if data_line is None:
                raise MalformedInputError(
                    f"series {block.name!r} ended after {read} of {block.count} entries"
                )
            line_number += 1
            if keep:
                values.append(_parse_entry(data_line, block.dimension, line_number))

        if keep:
            block.values = values
        yield block

    if strict:
        raise MalformedInputError("missing terminator line")
    logger.debug("Input ended without terminator line")


def read_series_file(
    path: Union[str, Path],
    dimensions: Optional[Iterable[int]] = None,
    strict: bool = False,
) -> List[SeriesBlock]:
    """Read every block of a saved file.

    Raises:
        OSError: If the file cannot be opened or read
        MalformedInputError: If the content is not valid UTF-8 or does not
            follow the grammar
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return list(iter_blocks(f, dimensions=dimensions, strict=strict))
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"not valid UTF-8: {e}") from e
