"""
Скалярные типы и разбор чисел.

Поддерживаются две точности: одинарная (float32) и двойная (float64).
Все геометрические типы хранят компоненты в numpy-массиве выбранного dtype.
"""

import re
from fractions import Fraction
from typing import Any, Optional

import numpy as np

SUPPORTED_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))

_PRECISION_ALIASES = {
    "single": np.float32,
    "double": np.float64,
}

# Беззнаковое целое: только ASCII-цифры, допускается ведущий '+'.
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")

# Вещественное число в ASCII: 1, -2.5, .5, 3., 1e-3, inf, Infinity, NaN.
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def resolve_dtype(dtype: Any) -> np.dtype:
    """Привести описание точности к numpy dtype.

    Args:
        dtype: np.float32 / np.float64, float, np.dtype или строка
            ("float32", "float64", "single", "double", "f4", "f8").

    Returns:
        np.dtype(float32) или np.dtype(float64).

    Raises:
        TypeError: если тип не является поддерживаемым вещественным типом.
    """
    if isinstance(dtype, str):
        dtype = _PRECISION_ALIASES.get(dtype.lower(), dtype)
    try:
        resolved = np.dtype(dtype)
    except TypeError as exc:
        raise TypeError(f"Неизвестный скалярный тип: {dtype!r}") from exc

    if resolved not in SUPPORTED_DTYPES:
        raise TypeError(
            f"Неподдерживаемый скалярный тип {resolved}; ожидается float32 или float64"
        )
    return resolved


def _round_to_float32(token: str, value: float) -> np.float32:
    # float(token) уже округлён до float64; если он попал ровно в середину
    # между соседними float32, второе округление может уйти не в ту сторону.
    with np.errstate(over="ignore"):
        result = np.float32(value)
    if not np.isfinite(result) or float(result) == value:
        return result

    direction = np.float32(np.inf if value > float(result) else -np.inf)
    neighbour = np.nextafter(result, direction)
    if float(result) + float(neighbour) != 2.0 * value:
        return result

    exact = Fraction(token)
    if exact == Fraction(value):
        return result
    if (exact > Fraction(value)) == (float(neighbour) > float(result)):
        return neighbour
    return result


def parse_scalar(token: str, dtype: Any = np.float64) -> Optional[np.floating]:
    """Разобрать токен как число заданной точности.

    Принимается только ASCII-запись: знак, цифры с необязательной точкой
    и порядком, а также inf / infinity / nan в любом регистре. Значение
    округляется к ближайшему числу выбранной точности за один шаг.

    Returns:
        Скаляр типа dtype, или None если токен не является числом.
    """
    if _FLOAT_RE.fullmatch(token) is None:
        return None
    value = float(token)
    if resolve_dtype(dtype) == np.float32:
        return _round_to_float32(token, value)
    return np.float64(value)


def parse_index(token: str) -> Optional[int]:
    """Разобрать токен как беззнаковое целое (None если не удалось)."""
    if _UNSIGNED_RE.fullmatch(token) is None:
        return None
    return int(token)


def check_component_index(index: Any) -> int:
    """Проверить индекс компоненты тройки (0, 1, 2).

    Raises:
        IndexError: при индексе вне диапазона, отрицательном или нецелом.
    """
    if isinstance(index, (bool, np.bool_)) or not isinstance(index, (int, np.integer)):
        raise IndexError("index out of range")
    if not 0 <= index <= 2:
        raise IndexError("index out of range")
    return int(index)
