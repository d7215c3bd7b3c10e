"""Mesh data model: primitives, polygon soup and importer interface."""

from polysoup.mesh.importer import MeshImporter
from polysoup.mesh.primitives import DEFAULT_PATCH_NAME, Face, Patch, Vertex
from polysoup.mesh.soup import PolygonSoup

__all__ = [
    "DEFAULT_PATCH_NAME",
    "Face",
    "MeshImporter",
    "Patch",
    "PolygonSoup",
    "Vertex",
]
