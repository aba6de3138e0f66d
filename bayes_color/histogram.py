"""
N-dimensional Histogram Module
Dense frequency table over a quantized color space (1D, 2D or 3D).
"""

import numpy as np
from typing import Tuple, Union

NORM_SUM = 'sum'
NORM_MAX = 'max'


class NDHistogram:
    """
    Frequency table over a cube of `size` cells per axis.

    Elements are stored in a single numpy array of shape (size,) * dim.
    Cells start at zero, are incremented during training and divided by
    their sum (probability mass function) or maximum by normalize().

    normalize() is a single-call operation: calling it again divides the
    already normalized table by its current sum or maximum.
    """

    def __init__(self, size: int, dim: int = 1):
        """
        Initialize an all-zero histogram.

        Args:
            size: Number of cells along each axis
            dim: Number of axes (1, 2 or 3)
        """
        if dim not in (1, 2, 3):
            raise ValueError(f"Histogram dimension must be 1, 2 or 3, got {dim}")
        if size < 1:
            raise ValueError(f"Histogram size must be positive, got {size}")

        self.size = int(size)
        self.dim = dim
        self._data = np.zeros((self.size,) * dim, dtype=np.float64)

    @property
    def dimension(self) -> int:
        return self.dim

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._data.shape

    @property
    def data(self) -> np.ndarray:
        """Copy of the underlying table."""
        return self._data.copy()

    def _index(self, coords: Tuple[int, ...]) -> Tuple[int, ...]:
        assert 1 <= len(coords) <= self.dim, f"Expected 1 to {self.dim} coordinates, got {len(coords)}"
        # Missing trailing coordinates address the first cell of that axis
        index = tuple(int(c) for c in coords) + (0,) * (self.dim - len(coords))
        assert all(0 <= c < self.size for c in index), f"Coordinates {index} out of range [0, {self.size})"
        return index

    def increment(self, *coords: int):
        """Add one observation at the given cell."""
        self._data[self._index(coords)] += 1

    def accumulate(self, coords: Tuple[np.ndarray, ...]):
        """
        Add one observation per coordinate tuple.

        Args:
            coords: One integer array per axis, all of equal length.
                Repeated coordinates are counted once per occurrence.
        """
        assert len(coords) == self.dim, f"Expected {self.dim} coordinate arrays, got {len(coords)}"
        for axis in coords:
            if len(axis) > 0:
                assert axis.min() >= 0 and axis.max() < self.size, "Coordinates out of range"
        np.add.at(self._data, tuple(coords), 1)

    def at(self, *coords: int) -> float:
        """Read the value of a single cell."""
        return float(self._data[self._index(coords)])

    def lookup(self, coords: Tuple[np.ndarray, ...]) -> np.ndarray:
        """Read cell values for arrays of coordinates (one array per axis)."""
        assert len(coords) == self.dim, f"Expected {self.dim} coordinate arrays, got {len(coords)}"
        return self._data[tuple(coords)]

    def sum(self) -> float:
        """Total of all cells."""
        return float(self._data.sum())

    def max(self) -> float:
        """Maximum cell value."""
        return float(self._data.max())

    def normalize(self, method: str = NORM_SUM):
        """
        Divide every cell by the sum (NORM_SUM) or maximum (NORM_MAX) of the table.

        Not idempotent: a second call divides again by the current norm.
        An empty table is left unchanged.
        """
        if method == NORM_SUM:
            norm = self.sum()
        elif method == NORM_MAX:
            norm = self.max()
        else:
            raise ValueError(f"Unknown normalization method: {method}")

        if norm == 0:
            return

        self._data /= norm

    def __len__(self) -> int:
        return self._data.size

    def __repr__(self) -> str:
        return f"NDHistogram(size={self.size}, dim={self.dim}, total={self.sum():g})"


def histogram_from_array(values: Union[np.ndarray, list]) -> NDHistogram:
    """Build a histogram holding a copy of a cubic array (used when restoring saved models)."""
    values = np.asarray(values, dtype=np.float64)
    if values.ndim == 0 or len(set(values.shape)) != 1:
        raise ValueError(f"Histogram data must be a non-empty cube, got shape {values.shape}")

    histogram = NDHistogram(values.shape[0], values.ndim)
    histogram._data[...] = values
    return histogram
