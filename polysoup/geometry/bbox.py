"""
Axis-aligned bounding box over Vector3.

Provides:
- min/max corners
- derived center, size and half size
- construction from a set of points (per-axis min/max)
"""

from dataclasses import dataclass
from typing import Any, Iterable, Union

import numpy as np
from numpy.typing import ArrayLike

from polysoup.geometry.scalar import resolve_dtype
from polysoup.geometry.vector import Vector3


@dataclass
class BoundingBox:
    """Axis-Aligned Bounding Box (AABB).

    min[i] <= max[i] is expected on every axis but not enforced; derived
    values of a malformed box are computed as-is.

    Attributes:
        min: Minimum corner (x_min, y_min, z_min)
        max: Maximum corner (x_max, y_max, z_max)
    """
    min: Vector3
    max: Vector3

    @classmethod
    def from_points(
        cls,
        points: Union[Iterable[Vector3], ArrayLike],
        dtype: Any = None,
    ) -> 'BoundingBox':
        """Build the bounding box of a set of points.

        NaN components are skipped per axis. An empty point set gives a
        zero box.

        Args:
            points: Vector3 instances or an Nx3 array
            dtype: Scalar precision; inferred from the points if None

        Returns:
            BoundingBox instance
        """
        rows = [p.to_array() if isinstance(p, Vector3) else np.asarray(p) for p in points]
        if dtype is None:
            dtype = rows[0].dtype if rows and rows[0].dtype in (np.float32, np.float64) else np.float64
        dtype = resolve_dtype(dtype)

        if not rows:
            return cls(min=Vector3.zeros(dtype), max=Vector3.zeros(dtype))

        arr = np.asarray(rows, dtype=dtype).reshape(-1, 3)
        with np.errstate(invalid="ignore"):
            lo = np.fmin.reduce(arr, axis=0)
            hi = np.fmax.reduce(arr, axis=0)
        return cls(min=Vector3.from_array(lo, dtype), max=Vector3.from_array(hi, dtype))

    @property
    def dtype(self) -> np.dtype:
        return self.min.dtype

    @property
    def center(self) -> Vector3:
        """Box center (max + min) * 0.5."""
        return (self.max + self.min) * 0.5

    @property
    def size(self) -> Vector3:
        """Box extent along each axis (max - min)."""
        return self.max - self.min

    @property
    def half_size(self) -> Vector3:
        """Half of the box extent (max - min) * 0.5."""
        return (self.max - self.min) * 0.5

    def contains_point(self, point: Vector3) -> bool:
        """Check if point is inside the box (boundary included)."""
        p = point.to_array()
        return bool(
            np.all(p >= self.min.to_array()) and
            np.all(p <= self.max.to_array())
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'min': self.min.to_array().tolist(),
            'max': self.max.to_array().tolist(),
            'size': self.size.to_array().tolist(),
            'center': self.center.to_array().tolist(),
        }
