"""Pytest fixtures for serieslog tests."""

import shutil
import tempfile
from datetime import datetime

import matplotlib
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

matplotlib.use("Agg")

from serieslog.accumulator import SeriesAccumulator


SCENARIO_A_TEXT = (
    "t: 1 2\n"
    "0.000000000000\n"
    "1.000000000000\n"
    "p: 2 1\n"
    "1.500000000000 2.300000000000\n"
    "-1\n"
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp = tempfile.mkdtemp()
    yield Path(temp)
    shutil.rmtree(temp, ignore_errors=True)


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed wall-clock time."""
    return lambda: datetime(2024, 3, 5, 14, 7, 42)


@pytest.fixture
def accumulator(temp_dir):
    """Create an empty accumulator saving into the temp directory."""
    return SeriesAccumulator(temp_dir, "run")


@pytest.fixture
def scenario_a(accumulator):
    """Accumulator holding scalar 't' (2 entries) and vector 'p' (1 entry)."""
    accumulator.append("t", 0.0)
    accumulator.append("t", 1.0)
    accumulator.append("p", (1.5, 2.3))
    return accumulator


@pytest.fixture
def scenario_a_file(temp_dir):
    """Write the reference file for scenario A and return its path."""
    path = temp_dir / "reference.txt"
    path.write_text(SCENARIO_A_TEXT, encoding="utf-8")
    return path
