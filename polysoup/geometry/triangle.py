"""
Треугольник из трёх вершин Vector3.

Порядок вершин (p, q, r) задаёт направление обхода и, следовательно,
знак нормали. Вырожденные треугольники допустимы: их нормаль состоит из NaN,
а площадь равна нулю.
"""

from typing import Any, Iterator, Optional

import numpy as np
from numpy.typing import ArrayLike, NDArray

from polysoup.geometry.bbox import BoundingBox
from polysoup.geometry.scalar import check_component_index, resolve_dtype
from polysoup.geometry.vector import Vector3


class Triangle:
    """Треугольник (p, q, r)."""

    __slots__ = ("_vertices",)

    def __init__(self, p: Vector3, q: Vector3, r: Vector3):
        self._vertices = [p, q, r]

    @classmethod
    def from_array(cls, points: ArrayLike, dtype: Any = None) -> 'Triangle':
        """Построить треугольник из массива вершин формы (3, 3)."""
        arr = np.asarray(points)
        if arr.shape != (3, 3):
            raise ValueError(f"Ожидается массив формы (3, 3), получено {arr.shape}")
        if dtype is None:
            dtype = arr.dtype if arr.dtype in (np.float32, np.float64) else np.float64
        dtype = resolve_dtype(dtype)
        return cls(*(Vector3.from_array(row, dtype) for row in arr))

    @property
    def p(self) -> Vector3:
        return self._vertices[0]

    @property
    def q(self) -> Vector3:
        return self._vertices[1]

    @property
    def r(self) -> Vector3:
        return self._vertices[2]

    @property
    def dtype(self) -> np.dtype:
        return self.p.dtype

    def __getitem__(self, index: int) -> Vector3:
        return self._vertices[check_component_index(index)]

    def __setitem__(self, index: int, vertex: Vector3) -> None:
        self._vertices[check_component_index(index)] = vertex

    def __iter__(self) -> Iterator[Vector3]:
        return iter(self._vertices)

    def __len__(self) -> int:
        return 3

    def _edge_cross(self) -> Vector3:
        return Vector3.cross(self.q - self.p, self.r - self.p)

    def normal(self) -> Vector3:
        """Единичная нормаль unit((q - p) × (r - p)).

        Returns:
            Нормаль; для вырожденного треугольника компоненты NaN.
        """
        return self._edge_cross().unit()

    def area(self) -> np.floating:
        """Площадь 0.5 * |(q - p) × (r - p)| (неотрицательна)."""
        return self._edge_cross().mag() * self.dtype.type(0.5)

    def bbox(self) -> BoundingBox:
        """Ограничивающий параллелепипед по трём вершинам."""
        return BoundingBox.from_points(self._vertices, dtype=self.dtype)

    def centroid(self) -> Vector3:
        """Центр масс треугольника (среднее вершин)."""
        return (self.p + self.q + self.r) / 3.0

    def is_degenerate(self, eps: Optional[float] = None) -> bool:
        """Проверить вырожденность (площадь не больше eps, по умолчанию 0).

        NaN-площадь также считается вырожденной.
        """
        area = float(self.area())
        limit = 0.0 if eps is None else eps
        return not area > limit

    def to_array(self) -> NDArray:
        """Вершины в виде массива формы (3, 3)."""
        return np.stack([v.to_array() for v in self._vertices])

    def __repr__(self) -> str:
        return f"Triangle({self.p!r}, {self.q!r}, {self.r!r})"
