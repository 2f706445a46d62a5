"""Tests for interval-driven saving."""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from serieslog.accumulator import SeriesAccumulator
from serieslog.batch_saver import BatchSaver
from serieslog.config import BatchConfig


@pytest.fixture
def saver(accumulator):
    return BatchSaver(accumulator, save_interval=10)


class TestBatchSaver:
    """Tests for BatchSaver."""

    def test_invalid_interval(self, accumulator):
        """Interval must be positive."""
        with pytest.raises(ValueError):
            BatchSaver(accumulator, save_interval=0)

    def test_saves_on_interval(self, accumulator, saver, temp_dir):
        """Only multiples of the interval trigger a save."""
        results = []
        for cycle in range(0, 31):
            accumulator.append("t", float(cycle))
            results.append(saver.maybe_save(cycle))

        assert [i for i, saved in enumerate(results) if saved] == [10, 20, 30]
        assert saver.save_count == 3
        assert saver.last_saved_cycle == 30
        assert "t: 1 31" in (temp_dir / "run.txt").read_text(encoding="utf-8")

    def test_no_repeat_for_same_cycle(self, saver):
        """Reporting the same cycle twice saves once."""
        assert saver.maybe_save(10) is True
        assert saver.maybe_save(10) is False
        assert saver.maybe_save(5) is False

    def test_save_final(self, accumulator, saver, temp_dir):
        """save_final always writes and can clear afterwards."""
        accumulator.append("t", 1.0)
        path = saver.save_final(clear=True)
        assert path == temp_dir / "run.txt"
        assert "t: 1 1" in path.read_text(encoding="utf-8")
        assert accumulator.get("t").entry_count == 0
        assert saver.save_count == 1

    def test_save_final_keeps_data(self, accumulator, saver):
        """Without clear the data stays in memory."""
        accumulator.append("t", 1.0)
        saver.save_final()
        assert accumulator.get("t").entry_count == 1

    def test_disabled_accumulator(self, temp_dir):
        """A disabled accumulator makes save_final return None."""
        acc = SeriesAccumulator(temp_dir / "none", "run", enabled=False)
        assert BatchSaver(acc).save_final() is None
        assert not (temp_dir / "none").exists()

    def test_from_config(self, accumulator):
        """Interval comes from BatchConfig."""
        saver = BatchSaver.from_config(accumulator, BatchConfig(save_interval=7))
        assert saver.save_interval == 7
        assert saver.clear_on_final is False

    def test_from_config_clear_on_final(self, accumulator):
        """clear_on_final from BatchConfig applies to save_final()."""
        saver = BatchSaver.from_config(accumulator, BatchConfig(clear_on_final=True))
        accumulator.append("t", 1.0)
        saver.save_final()
        assert accumulator.get("t").entry_count == 0

    def test_explicit_clear_overrides_config(self, accumulator):
        """An explicit clear=False keeps the data despite clear_on_final."""
        saver = BatchSaver(accumulator, clear_on_final=True)
        accumulator.append("t", 1.0)
        saver.save_final(clear=False)
        assert accumulator.get("t").entry_count == 1
