"""Interval-driven saving for a SeriesAccumulator.

Keeps save I/O off most cycles of a control loop: the loop reports how many
cycles it has completed and the saver writes the file every N cycles.
"""

import logging
from pathlib import Path
from typing import Optional

from serieslog.accumulator import SeriesAccumulator
from serieslog.config import BatchConfig

logger = logging.getLogger(__name__)


class BatchSaver:
    """Saves an accumulator at regular cycle intervals.

    Every save rewrites the same target (the accumulator captures its
    timestamp once), so the file always holds everything accumulated so far.

    Usage:
        saver = BatchSaver(acc, save_interval=100)
        for cycle in range(1, n + 1):
            acc.append("t", cycle * dt)
            saver.maybe_save(cycle)
        saver.save_final()
    """

    def __init__(
        self,
        accumulator: SeriesAccumulator,
        save_interval: int = 100,
        clear_on_final: bool = False,
    ) -> None:
        """Initialize the batch saver.

        Args:
            accumulator: Accumulator to save
            save_interval: Save every N completed cycles (default 100)
            clear_on_final: Empty the accumulator after save_final by default
        """
        if save_interval <= 0:
            raise ValueError(f"save_interval must be positive, got {save_interval}")
        self._accumulator = accumulator
        self._save_interval = save_interval
        self._clear_on_final = clear_on_final
        self._last_saved_cycle = 0
        self._save_count = 0

    @classmethod
    def from_config(cls, accumulator: SeriesAccumulator, config: BatchConfig) -> "BatchSaver":
        return cls(
            accumulator,
            save_interval=config.save_interval,
            clear_on_final=config.clear_on_final,
        )

    @property
    def save_interval(self) -> int:
        """Return the save interval."""
        return self._save_interval

    @property
    def clear_on_final(self) -> bool:
        """Return whether save_final clears the accumulator by default."""
        return self._clear_on_final

    @property
    def last_saved_cycle(self) -> int:
        """Return the cycle count of the last interval save (0 if none)."""
        return self._last_saved_cycle

    @property
    def save_count(self) -> int:
        """Return the number of saves performed, final save included."""
        return self._save_count

    def maybe_save(self, completed_cycles: int) -> bool:
        """Save if we've reached a save interval.

        Args:
            completed_cycles: Number of cycles completed

        Returns:
            True if the accumulator was saved, False otherwise

        Raises:
            SaveError: If the save fails
        """
        if completed_cycles == 0:
            return False

        if completed_cycles % self._save_interval != 0:
            return False

        if completed_cycles <= self._last_saved_cycle:
            return False

        self._save()
        self._last_saved_cycle = completed_cycles
        return True

    def save_final(self, clear: Optional[bool] = None) -> Optional[Path]:
        """Save unconditionally, e.g. at the end of an experiment.

        Args:
            clear: Empty the accumulator after a successful save; None uses
                the clear_on_final setting

        Returns:
            Path of the written file, or None if the accumulator is disabled
        """
        path = self._save()
        if path is not None:
            logger.info(f"Final series save written to {path}")
        if clear is None:
            clear = self._clear_on_final
        if clear:
            self._accumulator.clear()
        return path

    def _save(self) -> Optional[Path]:
        path = self._accumulator.save()
        self._save_count += 1
        return path
