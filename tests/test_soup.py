"""
Unit tests for polysoup.mesh.soup module.

Tests:
- Incremental construction and accessors
- Precision conversion on insert
- Derived triangles, bounding box and arrays
"""

import numpy as np
import pytest

from polysoup.geometry.vector import Vector3
from polysoup.mesh.primitives import Face, Patch, Vertex
from polysoup.mesh.soup import PolygonSoup


@pytest.fixture
def quad_soup():
    """Unit square split into two triangles plus the square as a quad."""
    soup = PolygonSoup()
    for x, y in [(0, 0), (1, 0), (1, 1), (0, 1)]:
        soup.insert_vertex(Vertex(x, y, 0))
    soup.insert_patch(Patch("tris"))
    soup.insert_patch(Patch("quads"))
    soup.insert_face(Face.with_patch([0, 1, 2], 0))
    soup.insert_face(Face.with_patch([0, 2, 3], 0))
    soup.insert_face(Face.with_patch([0, 1, 2, 3], 1))
    return soup


class TestConstruction:
    """Tests for building a soup."""

    def test_empty(self):
        soup = PolygonSoup()
        assert soup.vertices == ()
        assert soup.faces == ()
        assert soup.patches == ()
        assert soup.dtype == np.float64

    def test_insert_vertices_round_trip(self):
        soup = PolygonSoup()
        points = [Vertex(i, 2 * i, 3 * i) for i in range(10)]
        indices = [soup.insert_vertex(v) for v in points]

        assert indices == list(range(10))
        assert soup.n_vertices == 10
        assert list(soup.vertices) == points

    def test_insert_returns_indices(self):
        soup = PolygonSoup()
        assert soup.insert_patch(Patch("a")) == 0
        assert soup.insert_patch(Patch("b")) == 1
        assert soup.insert_face(Face([0, 1, 2])) == 0

    def test_from_sequences(self):
        soup = PolygonSoup(
            vertices=[Vertex(0, 0, 0), Vertex(1, 0, 0), Vertex(0, 1, 0)],
            faces=[Face.with_patch([0, 1, 2], 0)],
            patches=[Patch("only")],
        )
        assert (soup.n_vertices, soup.n_faces, soup.n_patches) == (3, 1, 1)
        assert soup.patch(0).name == "only"
        assert soup.face(0).vertices == (0, 1, 2)

    def test_insert_converts_precision(self):
        soup = PolygonSoup(dtype=np.float32)
        soup.insert_vertex(Vertex(1.5, 2.5, 3.5))
        assert soup.vertex(0).dtype == np.float32

    def test_accessors_are_read_only(self, quad_soup):
        assert isinstance(quad_soup.vertices, tuple)
        assert isinstance(quad_soup.faces, tuple)
        assert isinstance(quad_soup.patches, tuple)

    def test_no_reference_validation_on_insert(self):
        soup = PolygonSoup()
        soup.insert_face(Face.with_patch([10, 11, 12], 5))
        assert soup.n_faces == 1

    def test_repr(self, quad_soup):
        assert repr(quad_soup) == (
            "PolygonSoup(n_vertices=4, n_faces=3, n_patches=2, dtype=float64)"
        )


class TestDerivedGeometry:
    """Tests for triangles, bbox and arrays."""

    def test_triangle(self, quad_soup):
        tri = quad_soup.triangle(0)
        assert tri.p == Vector3(0, 0, 0)
        assert tri.r == Vector3(1, 1, 0)
        assert float(tri.area()) == pytest.approx(0.5)

    def test_triangle_rejects_quad(self, quad_soup):
        with pytest.raises(ValueError, match="not a triangle"):
            quad_soup.triangle(2)

    def test_triangles_skip_quads(self, quad_soup):
        found = list(quad_soup.triangles())
        assert [i for i, _ in found] == [0, 1]
        total = sum(float(t.area()) for _, t in found)
        assert total == pytest.approx(1.0)

    def test_faces_in_patch(self, quad_soup):
        assert quad_soup.faces_in_patch(0) == [0, 1]
        assert quad_soup.faces_in_patch(1) == [2]
        assert quad_soup.faces_in_patch(7) == []

    def test_bbox(self, quad_soup):
        bbox = quad_soup.bbox()
        assert bbox.min == Vector3(0, 0, 0)
        assert bbox.max == Vector3(1, 1, 0)

    def test_bbox_empty(self):
        bbox = PolygonSoup(dtype=np.float32).bbox()
        assert bbox.dtype == np.float32
        assert bbox.size == Vector3.zeros(np.float32)

    def test_vertex_array(self, quad_soup):
        arr = quad_soup.vertex_array()
        assert arr.shape == (4, 3)
        assert arr.dtype == np.float64
        np.testing.assert_array_equal(arr[2], [1, 1, 0])

    def test_vertex_array_empty(self):
        assert PolygonSoup().vertex_array().shape == (0, 3)

    def test_triangle_array(self, quad_soup):
        tris = quad_soup.triangle_array()
        assert tris.dtype == np.int32
        np.testing.assert_array_equal(tris, [[0, 1, 2], [0, 2, 3]])

    def test_triangle_array_empty(self):
        assert PolygonSoup().triangle_array().shape == (0, 3)

    def test_from_obj(self, triangle_obj_path):
        soup = PolygonSoup.from_obj(triangle_obj_path, dtype=np.float32)
        assert soup.dtype == np.float32
        assert soup.n_faces == 1
