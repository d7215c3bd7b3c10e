"""
Pytest configuration and fixtures for polysoup.

Provides:
- OBJ file fixtures written to tmp_path (plain and gzip)
- Package logger isolation between tests
"""

import gzip
import logging
from pathlib import Path

import pytest

from polysoup.logging_config import PACKAGE_LOGGER

TRIANGLE_OBJ = """\
v 0 0 0
v 1 0 0
v 0 1 0
f 1 2 3
"""

TWO_GROUPS_OBJ = """\
# two groups, one face each
v 0 0 0
v 1 0 0
v 0 1 0
v 0 0 1
g left wing
f 1 2 3
g right wing
f 1 3 4
"""

# Unit cube as 12 triangles split in two groups plus one quad.
CUBE_OBJ = """\
v -1 -1 -1
v  1 -1 -1
v  1  1 -1
v -1  1 -1
v -1 -1  1
v  1 -1  1
v  1  1  1
v -1  1  1
g bottom_top
f 1 3 2
f 1 4 3
f 5 6 7
f 5 7 8
g sides
f 1 2 6
f 1 6 5
f 2 3 7
f 2 7 6
f 3 4 8
f 3 8 7
f 4 1 5
f 4 5 8
g cap
f 5 6 7 8
"""


# ============================================================================
# Logging isolation
# ============================================================================

@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() side effects after each test."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# ============================================================================
# OBJ File Fixtures
# ============================================================================

def _write_obj(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def _write_obj_gz(path: Path, text: str) -> Path:
    with gzip.open(path, "wb") as f:
        f.write(text.encode("utf-8"))
    return path


@pytest.fixture
def write_obj(tmp_path: Path):
    """Factory writing OBJ text to tmp_path (gzip when name ends with .gz)."""
    def _factory(text: str, name: str = "mesh.obj") -> Path:
        path = tmp_path / name
        if name.lower().endswith(".gz"):
            return _write_obj_gz(path, text)
        return _write_obj(path, text)
    return _factory


@pytest.fixture
def triangle_obj_path(tmp_path: Path) -> Path:
    """Single triangle, no groups."""
    return _write_obj(tmp_path / "triangle.obj", TRIANGLE_OBJ)


@pytest.fixture
def triangle_obj_gz_path(tmp_path: Path) -> Path:
    """Single triangle, gzip-compressed."""
    return _write_obj_gz(tmp_path / "triangle.obj.gz", TRIANGLE_OBJ)


@pytest.fixture
def two_groups_obj_path(tmp_path: Path) -> Path:
    """Two named groups with one face each."""
    return _write_obj(tmp_path / "two_groups.obj", TWO_GROUPS_OBJ)


@pytest.fixture
def cube_obj_path(tmp_path: Path) -> Path:
    """Cube: 8 vertices, 12 triangles and one quad in three groups."""
    return _write_obj(tmp_path / "cube.obj", CUBE_OBJ)
