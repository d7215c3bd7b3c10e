"""
Трёхмерный вектор над вещественным скаляром (float32 или float64).

Содержит:
- поэлементную арифметику с вектором или скаляром (+, -, *, /, унарный минус)
- изменяющие формы (+=, -=, *=, /=)
- скалярное и векторное произведения, длину и нормировку
- индексированный доступ к компонентам 0..2

Тип результата арифметики всегда совпадает с dtype левого операнда.
Деление на ноль не проверяется: inf/nan распространяются по IEEE 754.
"""

from numbers import Real
from typing import Any, Iterator, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from polysoup.geometry.scalar import check_component_index, resolve_dtype

Scalar = Union[float, np.floating]


class Vector3:
    """Вектор (x, y, z) с компонентами заданной точности."""

    __slots__ = ("_data",)

    # numpy-скаляр слева (np.float32(2) * v) должен вызывать __rmul__,
    # а не превращать вектор в массив.
    __array_ufunc__ = None

    def __init__(self, x: Scalar, y: Scalar, z: Scalar, dtype: Any = np.float64):
        self._data = np.array((x, y, z), dtype=resolve_dtype(dtype))

    # ------------------------------------------------------------------
    # Конструкторы
    # ------------------------------------------------------------------

    @classmethod
    def from_array(cls, values: ArrayLike, dtype: Any = None) -> 'Vector3':
        """Построить вектор из последовательности трёх чисел.

        Args:
            values: массив формы (3,).
            dtype: точность; по умолчанию берётся из массива (или float64).
        """
        arr = np.asarray(values)
        if arr.shape != (3,):
            raise ValueError(f"Ожидается массив формы (3,), получено {arr.shape}")
        if dtype is None:
            dtype = arr.dtype if arr.dtype in (np.float32, np.float64) else np.float64
        return cls(arr[0], arr[1], arr[2], dtype=dtype)

    @classmethod
    def zeros(cls, dtype: Any = np.float64) -> 'Vector3':
        """Нулевой вектор."""
        return cls(0.0, 0.0, 0.0, dtype=dtype)

    @classmethod
    def ones(cls, dtype: Any = np.float64) -> 'Vector3':
        """Вектор из единиц."""
        return cls(1.0, 1.0, 1.0, dtype=dtype)

    @classmethod
    def _wrap(cls, data: NDArray) -> 'Vector3':
        vec = cls.__new__(cls)
        vec._data = data
        return vec

    # ------------------------------------------------------------------
    # Компоненты
    # ------------------------------------------------------------------

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

    def to_array(self) -> NDArray:
        """Копия компонент в виде массива формы (3,)."""
        return self._data.copy()

    def astype(self, dtype: Any) -> 'Vector3':
        """Копия вектора с другой точностью."""
        return Vector3._wrap(self._data.astype(resolve_dtype(dtype)))

    # ------------------------------------------------------------------
    # Арифметика
    # ------------------------------------------------------------------

    def _operand(self, other: Any) -> Any:
        """Привести второй операнд к dtype этого вектора (или NotImplemented)."""
        if isinstance(other, Vector3):
            return other._data.astype(self.dtype, copy=False)
        if isinstance(other, (Real, np.number)) and not isinstance(other, bool):
            return self.dtype.type(other)
        return NotImplemented

    def __add__(self, other: Any) -> 'Vector3':
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        return Vector3._wrap(self._data + rhs)

    def __radd__(self, other: Any) -> 'Vector3':
        return self.__add__(other)

    def __iadd__(self, other: Any) -> 'Vector3':
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        self._data += rhs
        return self

    def __sub__(self, other: Any) -> 'Vector3':
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        return Vector3._wrap(self._data - rhs)

    def __rsub__(self, other: Any) -> 'Vector3':
        lhs = self._operand(other)
        if lhs is NotImplemented:
            return NotImplemented
        return Vector3._wrap(lhs - self._data)

    def __isub__(self, other: Any) -> 'Vector3':
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        self._data -= rhs
        return self

    def __mul__(self, other: Any) -> 'Vector3':
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        return Vector3._wrap(self._data * rhs)

    def __rmul__(self, other: Any) -> 'Vector3':
        return self.__mul__(other)

    def __imul__(self, other: Any) -> 'Vector3':
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        self._data *= rhs
        return self

    def __truediv__(self, other: Any) -> 'Vector3':
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            return Vector3._wrap(self._data / rhs)

    def __rtruediv__(self, other: Any) -> 'Vector3':
        lhs = self._operand(other)
        if lhs is NotImplemented:
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            return Vector3._wrap(lhs / self._data)

    def __itruediv__(self, other: Any) -> 'Vector3':
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            self._data /= rhs
        return self

    def __neg__(self) -> 'Vector3':
        return Vector3._wrap(-self._data)

    # ------------------------------------------------------------------
    # Произведения и норма
    # ------------------------------------------------------------------

    @staticmethod
    def dot(u: 'Vector3', v: 'Vector3') -> np.floating:
        """Скалярное произведение u · v (в точности u.x*v.x + u.y*v.y + u.z*v.z)."""
        w = v.astype(u.dtype)
        return u.x * w.x + u.y * w.y + u.z * w.z

    @staticmethod
    def cross(u: 'Vector3', v: 'Vector3') -> 'Vector3':
        """Векторное произведение u × v (правая тройка)."""
        w = v.astype(u.dtype)
        i = u.y * w.z - u.z * w.y
        j = u.z * w.x - u.x * w.z
        k = u.x * w.y - u.y * w.x
        return Vector3(i, j, k, dtype=u.dtype)

    def mag(self) -> np.floating:
        """Длина вектора (L2-норма)."""
        return np.sqrt(Vector3.dot(self, self))

    def unit(self) -> 'Vector3':
        """Единичный вектор того же направления.

        Для нулевого вектора компоненты будут NaN.
        """
        return self / self.mag()

    def allclose(self, other: 'Vector3', atol: float = 1e-6) -> bool:
        """Покомпонентное сравнение с допуском."""
        return bool(np.allclose(self._data, other._data, rtol=0.0, atol=atol))

    # ------------------------------------------------------------------
    # Сравнение и представление
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (f"Vector3({float(self.x)!r}, {float(self.y)!r}, {float(self.z)!r}, "
                f"dtype={self.dtype.name})")
