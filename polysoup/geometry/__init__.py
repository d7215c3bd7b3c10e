"""Геометрические примитивы: вектор, ограничивающий параллелепипед, треугольник."""

from polysoup.geometry.bbox import BoundingBox
from polysoup.geometry.scalar import (
    SUPPORTED_DTYPES,
    parse_index,
    parse_scalar,
    resolve_dtype,
)
from polysoup.geometry.triangle import Triangle
from polysoup.geometry.vector import Vector3

__all__ = [
    "BoundingBox",
    "SUPPORTED_DTYPES",
    "Triangle",
    "Vector3",
    "parse_index",
    "parse_scalar",
    "resolve_dtype",
]
