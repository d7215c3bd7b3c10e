"""
Загрузка WaveFront OBJ в PolygonSoup.

Поддерживает:
- директивы `v x y z`, `f i1 i2 i3 ...` (индексы с 1), `g имя...`
- сжатые gzip файлы (расширение .gz без учёта регистра)

Прочие строки (комментарии, vn/vt/usemtl и т.п.) игнорируются.
Нечисловые токены внутри v/f молча отбрасываются; строка `v` не из трёх
чисел или `f` менее чем из трёх индексов прерывает весь импорт.
"""

import gzip
import logging
import os
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from polysoup.geometry.scalar import parse_index, parse_scalar, resolve_dtype
from polysoup.logging_config import log_timing
from polysoup.mesh.importer import MeshImporter
from polysoup.mesh.primitives import DEFAULT_PATCH_NAME, Face, Patch, Vertex
from polysoup.mesh.soup import PolygonSoup
from polysoup.project_config import ProjectConfig

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Сколько номеров граней с висячими ссылками попадает в сообщение об ошибке.
_MAX_REPORTED_FACES = 10


class ObjLoadError(Exception):
    """Ошибка чтения OBJ-файла (нет файла, повреждён gzip, не текст)."""


class ObjParseError(ValueError):
    """Некорректная строка геометрии; импорт прерван целиком.

    Attributes:
        line_number: номер строки (с 1) или None для проверок после разбора.
        line: исходный текст строки или None.
    """

    def __init__(self, message: str, line_number: Optional[int] = None,
                 line: Optional[str] = None):
        if line_number is not None:
            message = f"строка {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


@dataclass
class ObjInfo:
    """Metadata about an imported OBJ file."""
    filepath: str
    compressed: bool
    file_size_bytes: int
    n_vertices: int
    n_faces: int
    n_patches: int
    n_skipped_tokens: int = 0
    n_ignored_lines: int = 0

    @property
    def file_size_kb(self) -> float:
        """File size in kilobytes."""
        return self.file_size_bytes / 1024


@dataclass
class _ParseStats:
    skipped_tokens: int = 0
    ignored_lines: int = 0


def _dangling_faces(soup: PolygonSoup) -> List[int]:
    """Номера граней, ссылающихся на вершину с индексом >= n_vertices."""
    n_vertices = soup.n_vertices
    return [fi for fi, face in enumerate(soup.faces) if any(i >= n_vertices for i in face)]


class ObjImporter(MeshImporter):
    """Импортёр OBJ-файла в PolygonSoup заданной точности.

    Разбор построчный, за один проход, без просмотра вперёд. Текущая группа
    это последняя объявленная: грань ссылается на патч с индексом
    n_patches - 1. Если до первой грани не было `g`, сначала создаётся
    патч по умолчанию.
    """

    def __init__(
        self,
        path: PathLike,
        dtype: Any = np.float64,
        default_patch_name: str = DEFAULT_PATCH_NAME,
        encoding: str = "utf-8",
        validate_references: bool = True,
    ):
        self.path = Path(path)
        self.dtype = resolve_dtype(dtype)
        self.default_patch_name = default_patch_name
        self.encoding = encoding
        self.validate_references = validate_references
        self._stats = _ParseStats()
        self._handlers: Dict[str, Callable[[List[str], PolygonSoup, int, str], None]] = {
            "v": self._parse_vertex,
            "f": self._parse_face,
            "g": self._parse_group,
        }

    @classmethod
    def from_config(cls, path: PathLike, config: ProjectConfig) -> 'ObjImporter':
        """Создать импортёр с параметрами из секции `importer` конфигурации."""
        cfg = config.importer
        return cls(
            path,
            dtype=cfg.dtype,
            default_patch_name=cfg.default_patch_name,
            encoding=cfg.encoding,
            validate_references=cfg.validate_references,
        )

    def is_gzip(self) -> bool:
        """True если расширение файла `.gz` (без учёта регистра)."""
        return self.path.suffix.lower() == ".gz"

    def read_text(self) -> str:
        """Прочитать файл целиком в строку (через gzip для .gz).

        Raises:
            ObjLoadError: если файл не найден, не читается, повреждён
                gzip-поток или содержимое не декодируется.
        """
        try:
            if self.is_gzip():
                with gzip.open(self.path, "rb") as f:
                    data = f.read()
            else:
                with open(self.path, "rb") as f:
                    data = f.read()
        except FileNotFoundError as exc:
            raise ObjLoadError(f"Файл не найден: {str(self.path)!r}") from exc
        except (OSError, EOFError, zlib.error) as exc:
            raise ObjLoadError(
                f"Не удалось прочитать OBJ-файл {str(self.path)!r}: {exc}"
            ) from exc

        try:
            return data.decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise ObjLoadError(
                f"OBJ-файл {str(self.path)!r} не является текстом в кодировке {self.encoding}: {exc}"
            ) from exc

    # ------------------------------------------------------------------
    # Разбор директив
    # ------------------------------------------------------------------

    def _parse_vertex(self, args: List[str], soup: PolygonSoup,
                      line_number: int, line: str) -> None:
        values = []
        for token in args:
            value = parse_scalar(token, self.dtype)
            if value is None:
                self._stats.skipped_tokens += 1
            else:
                values.append(value)

        if len(values) != 3:
            raise ObjParseError(
                f"вершина должна быть трёхмерной (разобрано чисел: {len(values)})",
                line_number, line,
            )

        soup.insert_vertex(Vertex(*values, dtype=self.dtype))

    def _parse_face(self, args: List[str], soup: PolygonSoup,
                    line_number: int, line: str) -> None:
        indices = []
        for token in args:
            value = parse_index(token)
            if value is None:
                self._stats.skipped_tokens += 1
                continue
            if value == 0:
                raise ObjParseError("индексы вершин в OBJ начинаются с 1", line_number, line)
            indices.append(value - 1)

        if len(indices) < 3:
            raise ObjParseError(
                f"грань должна иметь не менее 3 вершин (разобрано индексов: {len(indices)})",
                line_number, line,
            )

        if soup.n_patches == 0:
            soup.insert_patch(Patch(self.default_patch_name))

        soup.insert_face(Face.with_patch(indices, soup.n_patches - 1))

    def _parse_group(self, args: List[str], soup: PolygonSoup,
                     line_number: int, line: str) -> None:
        soup.insert_patch(Patch(" ".join(args)))

    # ------------------------------------------------------------------
    # Импорт
    # ------------------------------------------------------------------

    def parse_text(self, text: str) -> PolygonSoup:
        """Разобрать содержимое OBJ из строки.

        Raises:
            ObjParseError: при некорректной строке v/f или (если включена
                проверка) ссылке грани на несуществующую вершину.
        """
        self._stats = _ParseStats()
        soup = PolygonSoup(dtype=self.dtype)

        for line_number, line in enumerate(text.splitlines(), start=1):
            args = line.split()
            handler = self._handlers.get(args[0]) if args else None
            if handler is None:
                self._stats.ignored_lines += 1
                continue
            handler(args[1:], soup, line_number, line)

        if self._stats.skipped_tokens:
            logger.warning("Пропущено нечисловых токенов: %d", self._stats.skipped_tokens)

        if self.validate_references:
            dangling = _dangling_faces(soup)
            if dangling:
                raise ObjParseError(
                    f"грани ссылаются на несуществующие вершины "
                    f"(граней: {len(dangling)}, первые: {dangling[:_MAX_REPORTED_FACES]})"
                )

        return soup

    def import_soup(self) -> PolygonSoup:
        """Прочитать файл и построить PolygonSoup.

        Raises:
            ObjLoadError: при ошибке ввода-вывода.
            ObjParseError: при некорректной геометрии.
        """
        logger.info("Загрузка OBJ: %s (gzip: %s, точность: %s)",
                    self.path, "да" if self.is_gzip() else "нет", self.dtype.name)

        text = self.read_text()
        with log_timing(logger, "Разбор OBJ", path=str(self.path)) as timing:
            soup = self.parse_text(text)
            timing["faces"] = soup.n_faces

        logger.info(
            "Загружено: %d вершин, %d граней, %d групп.",
            soup.n_vertices, soup.n_faces, soup.n_patches,
        )
        return soup

    @property
    def skipped_tokens(self) -> int:
        """Число отброшенных токенов при последнем разборе."""
        return self._stats.skipped_tokens

    @property
    def ignored_lines(self) -> int:
        """Число пропущенных строк при последнем разборе."""
        return self._stats.ignored_lines


def load_obj(
    path: PathLike,
    dtype: Any = None,
    config: Optional[ProjectConfig] = None,
) -> PolygonSoup:
    """Загрузить OBJ (или OBJ.gz) и вернуть PolygonSoup.

    Args:
        path: путь к файлу.
        dtype: точность (np.float32 / np.float64); перекрывает конфигурацию.
        config: конфигурация проекта; по умолчанию встроенные значения.

    Returns:
        PolygonSoup с вершинами, гранями и группами файла.

    Raises:
        ObjLoadError: если файл не найден или не читается.
        ObjParseError: если строка геометрии некорректна.
    """
    soup, _ = load_obj_with_info(path, dtype=dtype, config=config)
    return soup


def load_obj_with_info(
    path: PathLike,
    dtype: Any = None,
    config: Optional[ProjectConfig] = None,
) -> Tuple[PolygonSoup, ObjInfo]:
    """Load an OBJ file and return the soup together with file metadata.

    Raises:
        ObjLoadError: if the file is missing or unreadable
        ObjParseError: if a geometry line is malformed
    """
    importer = ObjImporter.from_config(path, config or ProjectConfig())
    if dtype is not None:
        importer.dtype = resolve_dtype(dtype)

    soup = importer.import_soup()

    info = ObjInfo(
        filepath=str(path),
        compressed=importer.is_gzip(),
        file_size_bytes=os.path.getsize(path),
        n_vertices=soup.n_vertices,
        n_faces=soup.n_faces,
        n_patches=soup.n_patches,
        n_skipped_tokens=importer.skipped_tokens,
        n_ignored_lines=importer.ignored_lines,
    )
    return soup, info
