"""
Mesh value types: Vertex, Face and Patch.

A Face stores 0-based indices into the owning soup's vertex list and an
optional index into its patch list. Neither index is checked against the
soup here; see polysoup.io.validator for reference checks.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from polysoup.geometry.scalar import check_component_index, resolve_dtype
from polysoup.geometry.vector import Scalar, Vector3

DEFAULT_PATCH_NAME = "_DEFAULT"


class Vertex:
    """A point of the mesh vertex list."""

    __slots__ = ("_data",)

    def __init__(self, x: Scalar, y: Scalar, z: Scalar, dtype: Any = np.float64):
        self._data = np.array((x, y, z), dtype=resolve_dtype(dtype))

    @classmethod
    def from_vector(cls, vector: Vector3) -> 'Vertex':
        return cls(vector.x, vector.y, vector.z, dtype=vector.dtype)

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def x(self) -> np.floating:
        return self._data[0]

    @property
    def y(self) -> np.floating:
        return self._data[1]

    @property
    def z(self) -> np.floating:
        return self._data[2]

    def __getitem__(self, index: int) -> np.floating:
        return self._data[check_component_index(index)]

    def __setitem__(self, index: int, value: Scalar) -> None:
        self._data[check_component_index(index)] = value

    def __iter__(self) -> Iterator[np.floating]:
        return iter(self._data)

    def __len__(self) -> int:
        return 3

    def to_vector(self) -> Vector3:
        """Position as a Vector3 of the same precision."""
        return Vector3(self.x, self.y, self.z, dtype=self.dtype)

    def to_array(self) -> NDArray:
        return self._data.copy()

    def astype(self, dtype: Any) -> 'Vertex':
        return Vertex(self.x, self.y, self.z, dtype=dtype)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (f"Vertex({float(self.x)!r}, {float(self.y)!r}, {float(self.z)!r}, "
                f"dtype={self.dtype.name})")


class Face:
    """Ordered vertex indices of a polygon plus an optional patch index."""

    __slots__ = ("_vertices", "_patch")

    def __init__(self, vertices: Iterable[int], patch: Optional[int] = None):
        self._vertices = [int(v) for v in vertices]
        self._patch = patch

    @classmethod
    def with_patch(cls, vertices: Iterable[int], patch: int) -> 'Face':
        """Construct a face bound to a patch."""
        return cls(vertices, patch=patch)

    @property
    def vertices(self) -> Tuple[int, ...]:
        return tuple(self._vertices)

    @property
    def patch(self) -> Optional[int]:
        return self._patch

    def _check_index(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise IndexError("index out of range")
        if not 0 <= index < len(self._vertices):
            raise IndexError("index out of range")
        return int(index)

    def __getitem__(self, index: int) -> int:
        return self._vertices[self._check_index(index)]

    def __setitem__(self, index: int, vertex: int) -> None:
        self._vertices[self._check_index(index)] = int(vertex)

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[int]:
        return iter(self._vertices)

    def is_triangle(self) -> bool:
        """True for exactly three indices with no two consecutive ones equal.

        The first and last index are not compared, so (a, b, a) passes.
        """
        if len(self._vertices) != 3:
            return False
        a, b, c = self._vertices
        return a != b and b != c

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Face):
            return NotImplemented
        return self._vertices == other._vertices and self._patch == other._patch

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Face({self._vertices!r}, patch={self._patch!r})"


@dataclass(frozen=True)
class Patch:
    """Named face group (OBJ 'g')."""
    name: str

    @classmethod
    def default(cls) -> 'Patch':
        """Patch used for faces declared before any group."""
        return cls(DEFAULT_PATCH_NAME)
