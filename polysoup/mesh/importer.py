"""Common interface of mesh importers."""

from abc import ABC, abstractmethod

from polysoup.mesh.soup import PolygonSoup


class MeshImporter(ABC):
    """Абстрактный импортёр сетки.

    Конкретный импортёр знает источник (путь, точность) и строит из него
    PolygonSoup за один вызов `import_soup()`.
    """

    @abstractmethod
    def import_soup(self) -> PolygonSoup:
        """Прочитать источник и вернуть заполненный PolygonSoup.

        Raises:
            ObjLoadError: при ошибке ввода-вывода (для OBJ-импортёра).
        """
