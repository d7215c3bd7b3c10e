"""
Export of polygon soup triangles to STL via numpy-stl.

Only faces that pass Face.is_triangle() are written; others (quads,
n-gons, weakly degenerate faces) are skipped with a warning, since the
soup does not triangulate.
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np
from stl import mesh

from polysoup.mesh.soup import PolygonSoup

logger = logging.getLogger(__name__)


def soup_to_stl_mesh(soup: PolygonSoup) -> mesh.Mesh:
    """Convert triangular faces of a soup to a numpy-stl Mesh.

    Args:
        soup: Source polygon soup

    Returns:
        mesh.Mesh with one facet per triangular face (normals recomputed)
    """
    vertices = soup.vertex_array()
    triangles = soup.triangle_array()

    n_skipped = soup.n_faces - len(triangles)
    if n_skipped:
        logger.warning("Пропущено нетреугольных граней при экспорте в STL: %d", n_skipped)

    stl_mesh = mesh.Mesh(np.zeros(len(triangles), dtype=mesh.Mesh.dtype))
    if len(triangles):
        stl_mesh.vectors[:] = vertices[triangles].astype(np.float32)
        stl_mesh.update_normals()

    logger.debug("STL mesh built", extra={'facets': len(triangles)})
    return stl_mesh


def save_stl(soup: PolygonSoup, path: Union[str, Path]) -> int:
    """Write triangular faces of a soup as a binary STL file.

    Returns:
        Number of facets written
    """
    stl_mesh = soup_to_stl_mesh(soup)
    stl_mesh.save(str(path))
    logger.info("STL сохранён: %s (%d граней)", path, len(stl_mesh.vectors))
    return len(stl_mesh.vectors)
