"""In-memory accumulator of named series with deferred text persistence.

Producers call append(name, value) on the hot path; nothing touches the disk
until save() is called. Series are created lazily on the first append for a
name, keep their variant forever, and keep their position in creation order.

The accumulator is not thread-safe. Callers with several producers must
serialize access themselves.

Usage:
    acc = SeriesAccumulator("logs", "controller", timestamped=True)
    acc.append("t", 0.0)
    acc.append("position", (1.5, 2.3))
    acc.save()   # logs/controller_2026_10_17-0930.txt
    acc.clear()
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Iterator, List, MutableMapping, Optional, Tuple, Union

from serieslog.config import LoggerConfig
from serieslog.series import (
    SCALAR_DIMENSION,
    VECTOR_DIMENSION,
    Series,
    SeriesValue,
    Vector2,
    series_for_dimension,
    value_dimension,
)
from serieslog.text_format import (
    MalformedInputError,
    iter_blocks,
    read_series_file,
    write_series_file,
)

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y_%m_%d-%H%M"
FILE_SUFFIX = ".txt"

MismatchCallback = Callable[[str, SeriesValue], None]


class SeriesAccumulator:
    """Owns every series of one logging session.

    The registry is two cooperating structures: an append-only list of
    series and a dict from name to list position. Positions never change
    once assigned.

    Attributes:
        directory: Default target directory for save/load
        base_name: Default file base name for save/load
        timestamped: Whether file names carry the captured save timestamp
        max_series: Cap on distinct series names (None = unlimited)
        enabled: When False, append and save do nothing
    """

    def __init__(
        self,
        directory: Union[str, Path] = "logs",
        base_name: str = "series",
        timestamped: bool = False,
        max_series: Optional[int] = None,
        enabled: bool = True,
        on_type_mismatch: Optional[MismatchCallback] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize an empty accumulator.

        Args:
            directory: Default directory for saved files
            base_name: Default file base name
            timestamped: Append _YYYY_MM_DD-HHMM to file names
            max_series: Maximum number of distinct series names
            enabled: Master switch; a disabled accumulator records nothing
            on_type_mismatch: Called with (name, value) for every dropped
                append whose shape does not match the existing series
            clock: Source of wall-clock time for the save timestamp
        """
        self.directory = Path(directory)
        self.base_name = base_name
        self.timestamped = timestamped
        self.max_series = max_series
        self.enabled = enabled
        self._on_type_mismatch = on_type_mismatch
        self._clock = clock

        self._series: List[Series] = []
        self._positions: Dict[str, int] = {}

        self._cap_reached = False
        self._mismatch_count = 0

        self._timestamp_captured = False
        self._timestamp: Optional[str] = None

    @classmethod
    def from_config(cls, config: LoggerConfig, **kwargs) -> "SeriesAccumulator":
        """Create an accumulator from a LoggerConfig.

        Extra keyword arguments (on_type_mismatch, clock) are passed through.
        """
        return cls(
            directory=config.directory,
            base_name=config.base_name,
            timestamped=config.timestamped,
            max_series=config.max_series,
            enabled=config.enabled,
            **kwargs,
        )

    # ---------------------------------------------------------------------
    # Registry queries
    # ---------------------------------------------------------------------

    @property
    def names(self) -> List[str]:
        """Return series names in creation order."""
        return [series.name for series in self._series]

    @property
    def cap_reached(self) -> bool:
        """Return True once the name cap has refused at least one new name."""
        return self._cap_reached

    @property
    def mismatch_count(self) -> int:
        """Return the number of appends dropped for a shape mismatch."""
        return self._mismatch_count

    @property
    def timestamp(self) -> Optional[str]:
        """Return the captured save timestamp, or None before the first save."""
        return self._timestamp

    def get(self, name: str) -> Optional[Series]:
        """Return the series for `name`, or None if it was never created.

        The returned series is borrowed; it stays owned by this accumulator.
        """
        position = self._positions.get(name)
        if position is None:
            return None
        return self._series[position]

    def position_of(self, name: str) -> Optional[int]:
        """Return the creation-order position of `name`, or None."""
        return self._positions.get(name)

    def __len__(self) -> int:
        return len(self._series)

    def __contains__(self, name: object) -> bool:
        return name in self._positions

    def __iter__(self) -> Iterator[Series]:
        return iter(self._series)

    # ---------------------------------------------------------------------
    # Accumulation
    # ---------------------------------------------------------------------

    def append(self, name: str, value: SeriesValue) -> None:
        """Append one value to the series called `name`.

        - Unseen name: a series of the value's variant is created, unless
          the name cap is already full (then the value is dropped).
        - Seen name with matching variant: the value is appended.
        - Seen name with the other variant: the value is dropped.

        Raises:
            TypeError: If value is neither a real number nor an (x, y) pair
            OverflowError: If a number does not fit in a float; nothing is stored
        """
        if not self.enabled:
            return

        dimension = value_dimension(value)
        position = self._positions.get(name)

        if position is None:
            self._create(name, dimension, value)
            return

        series = self._series[position]
        if series.dimension != dimension:
            self._drop_mismatch(series, value)
            return

        series.append(value)

    def _create(self, name: str, dimension: int, value: SeriesValue) -> None:
        if self.max_series is not None and len(self._series) >= self.max_series:
            if not self._cap_reached:
                self._cap_reached = True
                logger.warning(
                    f"Series cap of {self.max_series} reached; "
                    f"new series such as {name!r} will be ignored"
                )
            return

        # Registered only once the first value has been stored
        series = series_for_dimension(name, dimension)
        series.append(value)
        self._positions[name] = len(self._series)
        self._series.append(series)
        logger.debug(f"Created {type(series).__name__} {name!r} at position {self._positions[name]}")

    def _drop_mismatch(self, series: Series, value: SeriesValue) -> None:
        self._mismatch_count += 1
        logger.debug(
            f"Dropped value for {series.name!r}: series has dimension {series.dimension}"
        )
        if self._on_type_mismatch is not None:
            self._on_type_mismatch(series.name, value)

    def clear(self) -> None:
        """Empty every series. Membership, positions and timestamp are kept."""
        for series in self._series:
            series.clear()

    # ---------------------------------------------------------------------
    # Persistence
    # ---------------------------------------------------------------------

    def _capture_timestamp(self) -> str:
        if not self._timestamp_captured:
            self._timestamp = self._clock().strftime(TIMESTAMP_FORMAT)
            self._timestamp_captured = True
        return self._timestamp

    def target_path(
        self,
        directory: Optional[Union[str, Path]] = None,
        base_name: Optional[str] = None,
    ) -> Path:
        """Return the file path save() writes to.

        The timestamp suffix uses the captured timestamp, so before the
        first save of a timestamped accumulator there is no suffix yet.
        """
        directory = self.directory if directory is None else Path(directory)
        base_name = self.base_name if base_name is None else base_name
        if self.timestamped and self._timestamp is not None:
            base_name = f"{base_name}_{self._timestamp}"
        return directory / f"{base_name}{FILE_SUFFIX}"

    def save(
        self,
        directory: Optional[Union[str, Path]] = None,
        base_name: Optional[str] = None,
    ) -> Optional[Path]:
        """Write every series, in creation order, followed by the terminator.

        The first save captures the wall-clock time (minute resolution);
        later saves from this accumulator reuse it, so two saves within one
        session always target the same timestamped file.

        Args:
            directory: Override for the target directory
            base_name: Override for the file base name

        Returns:
            Path of the written file, or None if the accumulator is disabled

        Raises:
            SaveError: If the directory or file cannot be created or written
        """
        if not self.enabled:
            return None

        if self.timestamped:
            self._capture_timestamp()
        path = self.target_path(directory, base_name)

        written = write_series_file(path, self._series)
        logger.info(f"Saved {written} series to {path}")
        return path

    def load(
        self,
        dimension: int,
        output: MutableMapping[str, list],
        directory: Optional[Union[str, Path]] = None,
        base_name: Optional[str] = None,
        strict: bool = False,
    ) -> bool:
        """Load every series of one dimension from a saved file.

        Series of the other dimension are parsed and skipped. On failure
        `output` may already hold some series.

        Args:
            dimension: 1 for scalar series, 2 for vector series
            output: Mapping filled with name -> list of values
            directory: Override for the source directory
            base_name: Override for the file base name
            strict: If True, a missing terminator is a failure

        Returns:
            True on success, False if the file is missing, unreadable or
            malformed
        """
        if dimension not in (SCALAR_DIMENSION, VECTOR_DIMENSION):
            raise ValueError(f"Unsupported series dimension: {dimension}")

        outputs = {dimension: output}
        return self._load_into(outputs, self.target_path(directory, base_name), strict)

    def load_all(
        self,
        scalar_out: MutableMapping[str, List[float]],
        vector_out: MutableMapping[str, List[Vector2]],
        directory: Optional[Union[str, Path]] = None,
        base_name: Optional[str] = None,
        strict: bool = False,
    ) -> bool:
        """Load scalar and vector series in a single pass over the file.

        Returns:
            True on success, False if the file is missing, unreadable or
            malformed
        """
        outputs = {SCALAR_DIMENSION: scalar_out, VECTOR_DIMENSION: vector_out}
        return self._load_into(outputs, self.target_path(directory, base_name), strict)

    def _load_into(
        self,
        outputs: Dict[int, MutableMapping[str, list]],
        path: Path,
        strict: bool,
    ) -> bool:
        try:
            with open(path, "r", encoding="utf-8") as f:
                for block in iter_blocks(f, dimensions=outputs.keys(), strict=strict):
                    if block.values is not None:
                        outputs[block.dimension][block.name] = block.values
        except OSError as e:
            logger.warning(f"Could not read series file {path}: {e}")
            return False
        except UnicodeDecodeError as e:
            logger.warning(f"Series file {path} is not valid UTF-8: {e}")
            return False
        except MalformedInputError as e:
            logger.warning(f"Malformed series file {path}: {e}")
            return False
        return True

    def __repr__(self) -> str:
        return (
            f"SeriesAccumulator(directory={str(self.directory)!r}, "
            f"base_name={self.base_name!r}, series={len(self._series)})"
        )


def load_series(
    path: Union[str, Path],
    strict: bool = False,
) -> Tuple[Dict[str, List[float]], Dict[str, List[Vector2]]]:
    """Read a saved file into (scalar, vector) dictionaries.

    Unlike SeriesAccumulator.load_all, errors are raised, not reported as
    a flag.

    Raises:
        OSError: If the file cannot be read
        MalformedInputError: If the content is not valid UTF-8 or does not
            follow the grammar
    """
    scalar: Dict[str, List[float]] = {}
    vector: Dict[str, List[Vector2]] = {}
    for block in read_series_file(path, strict=strict):
        target = scalar if block.dimension == SCALAR_DIMENSION else vector
        target[block.name] = block.values
    return scalar, vector
