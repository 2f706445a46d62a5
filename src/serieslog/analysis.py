"""Analysis helpers for loaded series.

Turns the dictionaries produced by load_all / load_series into numpy arrays,
summary statistics, and matplotlib charts.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from serieslog.series import SCALAR_DIMENSION, VECTOR_DIMENSION, Vector2

logger = logging.getLogger(__name__)


@dataclass
class SeriesSummary:
    """Summary statistics for one loaded series.

    For vector series, mean/minimum/maximum are (x, y) tuples.
    Statistics are None for an empty series.
    """

    name: str
    dimension: int
    count: int
    mean: Optional[object] = None
    minimum: Optional[object] = None
    maximum: Optional[object] = None


def to_array(values: Sequence, dimension: int) -> np.ndarray:
    """Convert one series' values to a float64 array.

    Returns shape (n,) for scalar series and (n, 2) for vector series,
    including when the series is empty.
    """
    if dimension == SCALAR_DIMENSION:
        return np.asarray(values, dtype=np.float64).reshape(-1)
    return np.asarray(values, dtype=np.float64).reshape(-1, 2)


def to_arrays(mapping: Mapping[str, Sequence]) -> Dict[str, np.ndarray]:
    """Convert a loaded name -> values mapping to name -> numpy array.

    The dimension of each series is inferred from its first value; empty
    series become arrays of shape (0,).
    """
    arrays = {}
    for name, values in mapping.items():
        dimension = VECTOR_DIMENSION if values and isinstance(values[0], tuple) else SCALAR_DIMENSION
        arrays[name] = to_array(values, dimension)
    return arrays


def _stats(array: np.ndarray) -> Tuple[object, object, object]:
    if array.shape[0] == 0:
        return None, None, None
    if array.ndim == 1:
        return float(array.mean()), float(array.min()), float(array.max())
    mean, minimum, maximum = array.mean(axis=0), array.min(axis=0), array.max(axis=0)
    return tuple(mean.tolist()), tuple(minimum.tolist()), tuple(maximum.tolist())


def summarize(
    scalar: Mapping[str, List[float]],
    vector: Mapping[str, List[Vector2]],
) -> List[SeriesSummary]:
    """Compute per-series statistics, scalar series first."""
    summaries = []
    for dimension, mapping in ((SCALAR_DIMENSION, scalar), (VECTOR_DIMENSION, vector)):
        for name, values in mapping.items():
            mean, minimum, maximum = _stats(to_array(values, dimension))
            summaries.append(SeriesSummary(name, dimension, len(values), mean, minimum, maximum))
    return summaries


def plot_series(
    scalar: Mapping[str, List[float]],
    vector: Mapping[str, List[Vector2]],
    save_path: Optional[str] = None,
    show: bool = False,
    columns: int = 2,
) -> Optional[plt.Figure]:
    """Plot every loaded series in one figure.

    Scalar series are drawn as value vs. entry index; vector series as an
    x/y trajectory.

    Args:
        scalar: Loaded scalar series
        vector: Loaded vector series
        save_path: Optional path to save the figure as an image
        show: Whether to display the figure with plt.show()
        columns: Number of subplot columns

    Returns:
        The figure, or None if there is nothing to plot
    """
    panels = [(name, SCALAR_DIMENSION, values) for name, values in scalar.items()]
    panels += [(name, VECTOR_DIMENSION, values) for name, values in vector.items()]
    if not panels:
        logger.warning("No series to plot")
        return None

    columns = max(1, min(columns, len(panels)))
    rows = math.ceil(len(panels) / columns)
    fig, axes = plt.subplots(rows, columns, figsize=(6 * columns, 4 * rows), squeeze=False)

    for ax, (name, dimension, values) in zip(axes.flat, panels):
        data = to_array(values, dimension)
        if dimension == SCALAR_DIMENSION:
            ax.plot(np.arange(data.shape[0]), data, linewidth=1.0)
            ax.set_xlabel('Entry')
            ax.set_ylabel('Value')
        else:
            ax.plot(data[:, 0], data[:, 1], linewidth=1.0)
            ax.set_xlabel('x')
            ax.set_ylabel('y')
        ax.set_title(f'{name} ({data.shape[0]} entries)')
        ax.grid(True, alpha=0.3)

    # Hide unused subplots
    for ax in list(axes.flat)[len(panels):]:
        ax.set_visible(False)

    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info(f"Series chart saved to {save_path}")

    if show:
        plt.show()
    else:
        plt.close(fig)

    return fig
