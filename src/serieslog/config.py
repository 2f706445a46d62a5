"""Configuration dataclasses for series logging.

The accumulator only needs already-resolved primitive values. These frozen
dataclasses hold them, and the helpers below move them to and from plain
dictionaries / JSON files.
"""

import dataclasses
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class LoggerConfig:
    """Configuration for one SeriesAccumulator."""

    enabled: bool = True
    directory: str = "logs"
    base_name: str = "series"

    # Append _YYYY_MM_DD-HHMM (captured at first save) to the file name
    timestamped: bool = False

    # Maximum number of distinct series names; None = unlimited
    max_series: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.base_name.strip():
            raise ValueError("base_name cannot be empty or whitespace")
        if self.max_series is not None and self.max_series <= 0:
            raise ValueError(f"max_series must be positive, got {self.max_series}")


@dataclass(frozen=True)
class BatchConfig:
    """Configuration for interval-driven saving."""

    save_interval: int = 100  # Save every N completed cycles
    clear_on_final: bool = False

    def __post_init__(self) -> None:
        if self.save_interval <= 0:
            raise ValueError(f"save_interval must be positive, got {self.save_interval}")


@dataclass
class Config:
    """Master configuration combining all config sections."""

    logger: LoggerConfig = field(default_factory=LoggerConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)


def serialize_config(config: Any) -> Any:
    """Recursively serialize a configuration object to JSON-compatible data.

    Handles:
    - Frozen and regular dataclasses (recursively serialized)
    - Tuples (converted to lists for JSON compatibility)
    - Primitive types (passed through)
    """
    if dataclasses.is_dataclass(config) and not isinstance(config, type):
        return {f.name: serialize_config(getattr(config, f.name)) for f in dataclasses.fields(config)}

    elif isinstance(config, (tuple, list)):
        return [serialize_config(item) for item in config]

    elif isinstance(config, dict):
        return {key: serialize_config(value) for key, value in config.items()}

    else:
        return config


def config_from_dict(data: Dict[str, Any]) -> Config:
    """Build a Config from a dictionary, using defaults for missing sections.

    Raises:
        ValueError: If a section has unknown keys or invalid values
    """
    sections = {}
    for section_name, section_type in (("logger", LoggerConfig), ("batch", BatchConfig)):
        values = data.get(section_name, {})
        known = {f.name for f in dataclasses.fields(section_type)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown {section_name} config keys: {sorted(unknown)}")
        sections[section_name] = section_type(**values)
    return Config(**sections)


def load_config(path: Union[str, Path]) -> Config:
    """Load a Config from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return config_from_dict(json.load(f))


def save_config(config: Config, path: Union[str, Path]) -> None:
    """Write a Config to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_config(config), f, indent=2, ensure_ascii=False)
