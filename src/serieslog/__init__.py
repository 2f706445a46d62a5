"""Named time-series accumulation with deferred text persistence.

This package provides:
- Scalar and planar-vector series with fixed variants
- SeriesAccumulator: lazy series creation, name cap, save/load/clear
- The flat text format (serializer and deserializer)
- Configuration dataclasses
- Interval-driven batch saving
- numpy/matplotlib analysis of loaded files
"""

from serieslog.series import (
    Series,
    ScalarSeries,
    VectorSeries,
    value_dimension,
    series_for_dimension,
)
from serieslog.text_format import (
    SeriesBlock,
    SeriesFileError,
    MalformedInputError,
    SaveError,
    iter_blocks,
    read_series_file,
    write_series_file,
)
from serieslog.config import LoggerConfig, BatchConfig, Config, load_config
from serieslog.accumulator import SeriesAccumulator, load_series
from serieslog.batch_saver import BatchSaver

__version__ = "0.1.0"

__all__ = [
    # Series
    "Series",
    "ScalarSeries",
    "VectorSeries",
    "value_dimension",
    "series_for_dimension",
    # Text format
    "SeriesBlock",
    "SeriesFileError",
    "MalformedInputError",
    "SaveError",
    "iter_blocks",
    "read_series_file",
    "write_series_file",
    # Config
    "LoggerConfig",
    "BatchConfig",
    "Config",
    "load_config",
    # Accumulator
    "SeriesAccumulator",
    "load_series",
    # Batching
    "BatchSaver",
]
