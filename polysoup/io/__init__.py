"""Чтение и запись сеток: импорт OBJ, проверка ссылок, экспорт STL."""

from polysoup.io.obj_loader import (
    ObjImporter,
    ObjInfo,
    ObjLoadError,
    ObjParseError,
    load_obj,
    load_obj_with_info,
)
from polysoup.io.stl_writer import save_stl, soup_to_stl_mesh
from polysoup.io.validator import ValidationReport, ValidationSeverity, validate_soup

__all__ = [
    "ObjImporter",
    "ObjInfo",
    "ObjLoadError",
    "ObjParseError",
    "ValidationReport",
    "ValidationSeverity",
    "load_obj",
    "load_obj_with_info",
    "save_stl",
    "soup_to_stl_mesh",
    "validate_soup",
]
