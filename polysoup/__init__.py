"""
polysoup: векторная алгебра, треугольники и polygon soup из WaveFront OBJ.

Основная точка входа: polysoup.load_obj(path, dtype).
"""

from polysoup.geometry import BoundingBox, Triangle, Vector3
from polysoup.io.obj_loader import ObjLoadError, ObjParseError, load_obj
from polysoup.logging_config import (
    configure_default_logging,
    get_logger,
    log_timing,
    setup_logging,
)
from polysoup.mesh import Face, Patch, PolygonSoup, Vertex

__version__ = "0.1.0"

__all__ = [
    "BoundingBox",
    "Face",
    "ObjLoadError",
    "ObjParseError",
    "Patch",
    "PolygonSoup",
    "Triangle",
    "Vector3",
    "Vertex",
    "configure_default_logging",
    "get_logger",
    "load_obj",
    "log_timing",
    "setup_logging",
]
