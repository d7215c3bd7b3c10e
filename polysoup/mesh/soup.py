"""
Polygon soup: vertices, faces and patches without connectivity.

The soup is append-only. Indices of vertices, faces and patches are stable
once assigned (insertion order = index order). Cross references (face ->
vertex, face -> patch) are not checked on insertion; the importer is
responsible for them and polysoup.io.validator can audit a built soup.

Usage:
    from polysoup.mesh import PolygonSoup

    soup = PolygonSoup.from_obj("model.obj.gz", dtype=np.float32)
    for face_index, triangle in soup.triangles():
        print(face_index, triangle.area())
"""

from pathlib import Path
from typing import Any, Iterable, Iterator, List, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from polysoup.geometry.bbox import BoundingBox
from polysoup.geometry.scalar import resolve_dtype
from polysoup.geometry.triangle import Triangle
from polysoup.mesh.primitives import Face, Patch, Vertex


class PolygonSoup:
    """Mesh aggregate of vertices, faces and patches of one scalar precision."""

    def __init__(
        self,
        vertices: Iterable[Vertex] = (),
        faces: Iterable[Face] = (),
        patches: Iterable[Patch] = (),
        dtype: Any = np.float64,
    ):
        self._dtype = resolve_dtype(dtype)
        self._vertices: List[Vertex] = []
        self._faces: List[Face] = list(faces)
        self._patches: List[Patch] = list(patches)
        for vertex in vertices:
            self.insert_vertex(vertex)

    @classmethod
    def from_obj(cls, path: Union[str, Path], dtype: Any = np.float64) -> 'PolygonSoup':
        """Import from a WaveFront OBJ file (optionally .gz compressed).

        Raises:
            ObjLoadError: if the file cannot be read
            ObjParseError: if a vertex/face line is malformed
        """
        from polysoup.io.obj_loader import load_obj

        return load_obj(path, dtype=dtype)

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def vertices(self) -> Tuple[Vertex, ...]:
        return tuple(self._vertices)

    @property
    def faces(self) -> Tuple[Face, ...]:
        return tuple(self._faces)

    @property
    def patches(self) -> Tuple[Patch, ...]:
        return tuple(self._patches)

    @property
    def n_vertices(self) -> int:
        return len(self._vertices)

    @property
    def n_faces(self) -> int:
        return len(self._faces)

    @property
    def n_patches(self) -> int:
        return len(self._patches)

    def vertex(self, index: int) -> Vertex:
        return self._vertices[index]

    def face(self, index: int) -> Face:
        return self._faces[index]

    def patch(self, index: int) -> Patch:
        return self._patches[index]

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def insert_vertex(self, vertex: Vertex) -> int:
        """Append a vertex (converted to the soup precision), return its index."""
        if vertex.dtype != self._dtype:
            vertex = vertex.astype(self._dtype)
        self._vertices.append(vertex)
        return len(self._vertices) - 1

    def insert_face(self, face: Face) -> int:
        """Append a face, return its index."""
        self._faces.append(face)
        return len(self._faces) - 1

    def insert_patch(self, patch: Patch) -> int:
        """Append a patch, return its index."""
        self._patches.append(patch)
        return len(self._patches) - 1

    # ------------------------------------------------------------------
    # Derived geometry
    # ------------------------------------------------------------------

    def triangle(self, face_index: int) -> Triangle:
        """Build the Triangle of a triangular face.

        Raises:
            ValueError: if the face is not a triangle (see Face.is_triangle)
        """
        face = self._faces[face_index]
        if not face.is_triangle():
            raise ValueError(f"Face {face_index} is not a triangle: {face!r}")
        p, q, r = (self._vertices[i].to_vector() for i in face)
        return Triangle(p, q, r)

    def triangles(self) -> Iterator[Tuple[int, Triangle]]:
        """Iterate (face_index, Triangle) over triangular faces."""
        for face_index, face in enumerate(self._faces):
            if face.is_triangle():
                yield face_index, self.triangle(face_index)

    def faces_in_patch(self, patch_index: int) -> List[int]:
        """Indices of faces bound to a patch."""
        return [i for i, face in enumerate(self._faces) if face.patch == patch_index]

    def bbox(self) -> BoundingBox:
        """Bounding box of all vertices (zero box for an empty soup)."""
        return BoundingBox.from_points(self.vertex_array(), dtype=self._dtype)

    def vertex_array(self) -> NDArray:
        """Vertices as an Nx3 array of the soup precision."""
        if not self._vertices:
            return np.zeros((0, 3), dtype=self._dtype)
        return np.stack([v.to_array() for v in self._vertices])

    def triangle_array(self) -> NDArray[np.int32]:
        """Vertex indices of triangular faces as an Mx3 int32 array."""
        rows = [face.vertices for face in self._faces if face.is_triangle()]
        if not rows:
            return np.zeros((0, 3), dtype=np.int32)
        return np.array(rows, dtype=np.int32)

    def __repr__(self) -> str:
        return (f"PolygonSoup(n_vertices={self.n_vertices}, n_faces={self.n_faces}, "
                f"n_patches={self.n_patches}, dtype={self._dtype.name})")
