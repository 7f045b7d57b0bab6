"""
Float Formats — числовой backend для constrained-значений

Модуль изолирует всё, что зависит от ширины float, за узким интерфейсом:
- Аддитивная единица (zero) для каждого формата
- Приведение сырого значения к скаляру формата (f16 / f32 / f64)
- Запросы знака, нормальности и конечности
- Кратчайшее десятичное представление для сериализации

Политики валидации пишутся поверх этих запросов и поэтому одинаково
работают для 16-, 32- и 64-битных значений.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. coerce() никогда не clamp'ит: переполнение даёт ±inf, как литерал той же ширины
2. zero() типизирован форматом, а не захардкожен как 0.0 Python
3. to_builtin() читается обратно в тот же скаляр формата без потерь
4. bool и нечисловые типы отклоняются (UnsupportedFloatError)
"""

import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, Final, Tuple

import numpy as np

from floco.core.errors import UnsupportedFloatError


# =============================================================================
# FLOAT FORMAT
# =============================================================================


@dataclass(frozen=True)
class FloatFormat:
    """
    Описание формата IEEE-754 поверх numpy scalar type.

    Экземпляры неизменяемы и сравниваются по имени, поэтому могут служить
    ключами кэшей (см. floco.core.contracts.serde).
    """

    name: str
    scalar_type: type = field(compare=False, repr=False)

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.scalar_type)

    @property
    def bits(self) -> int:
        return self.dtype.itemsize * 8

    @property
    def _finfo(self) -> np.finfo:
        return np.finfo(self.scalar_type)

    # -------------------------------------------------------------------------
    # Конструирование значений
    # -------------------------------------------------------------------------

    def zero(self) -> Any:
        """Аддитивная единица формата."""
        return self.scalar_type(0)

    def coerce(self, value: Any) -> Any:
        """
        Приведение сырого значения к скаляру формата.

        Args:
            value: int, float или numpy-скаляр (integer/floating)

        Returns:
            Скаляр self.scalar_type (округление к ближайшему, как у литерала)

        Raises:
            UnsupportedFloatError: Если value не является вещественным числом
        """
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
            raise UnsupportedFloatError(
                f"Cannot interpret {value!r} ({type(value).__name__}) as {self.name}"
            )
        if isinstance(value, self.scalar_type):
            return value
        with np.errstate(over="ignore"):
            return self.scalar_type(value)

    def to_builtin(self, value: Any) -> float:
        """
        Кратчайший Python float, который читается обратно в тот же скаляр.

        Examples:
            >>> F32.to_builtin(F32.coerce(2.1))
            2.1
        """
        scalar = self.coerce(value)
        if self.scalar_type is np.float64:
            return float(scalar)
        return float(np.format_float_scientific(scalar, unique=True))

    # -------------------------------------------------------------------------
    # Запросы
    # -------------------------------------------------------------------------

    def is_finite(self, value: Any) -> bool:
        return bool(np.isfinite(self.coerce(value)))

    def is_nan(self, value: Any) -> bool:
        return bool(np.isnan(self.coerce(value)))

    def is_infinite(self, value: Any) -> bool:
        return bool(np.isinf(self.coerce(value)))

    def is_normal(self, value: Any) -> bool:
        """
        Нормальное число: конечное, ненулевое, не subnormal (IEEE-754).
        """
        scalar = self.coerce(value)
        if not np.isfinite(scalar) or scalar == 0:
            return False
        return bool(abs(scalar) >= self.min_positive)

    def is_subnormal(self, value: Any) -> bool:
        scalar = self.coerce(value)
        return bool(scalar != 0 and np.isfinite(scalar) and abs(scalar) < self.min_positive)

    def is_sign_positive(self, value: Any) -> bool:
        """Знаковый бит сброшен (включая +0.0, +inf и NaN без знака)."""
        return not bool(np.signbit(self.coerce(value)))

    def is_sign_negative(self, value: Any) -> bool:
        """Знаковый бит установлен (включая -0.0 и -inf)."""
        return bool(np.signbit(self.coerce(value)))

    # -------------------------------------------------------------------------
    # Лимиты
    # -------------------------------------------------------------------------

    @property
    def epsilon(self) -> Any:
        return self.scalar_type(self._finfo.eps)

    @property
    def max_value(self) -> Any:
        return self.scalar_type(self._finfo.max)

    @property
    def min_positive(self) -> Any:
        """Наименьшее положительное нормальное значение."""
        return self.scalar_type(self._finfo.smallest_normal)

    def __str__(self) -> str:
        return self.name


# =============================================================================
# ПОДДЕРЖИВАЕМЫЕ ФОРМАТЫ
# =============================================================================

F16: Final[FloatFormat] = FloatFormat("f16", np.float16)
F32: Final[FloatFormat] = FloatFormat("f32", np.float32)
F64: Final[FloatFormat] = FloatFormat("f64", np.float64)

FLOAT_FORMATS: Final[Tuple[FloatFormat, ...]] = (F16, F32, F64)

_FORMATS_BY_NAME: Final[Dict[str, FloatFormat]] = {fmt.name: fmt for fmt in FLOAT_FORMATS}


def format_by_name(name: str) -> FloatFormat:
    """
    Поиск формата по имени ('f16', 'f32', 'f64').

    Raises:
        UnsupportedFloatError: Если формат неизвестен
    """
    try:
        return _FORMATS_BY_NAME[name.lower()]
    except KeyError:
        raise UnsupportedFloatError(
            f"Unknown float format {name!r}, expected one of {sorted(_FORMATS_BY_NAME)}"
        ) from None


def format_of(value: Any) -> FloatFormat:
    """
    Определение формата по типу скаляра.

    Python float считается f64. Целые числа и прочие типы не имеют
    однозначной ширины и отклоняются.

    Raises:
        UnsupportedFloatError: Если тип не является поддерживаемым float
    """
    # np.float64 наследует float, поэтому numpy-типы проверяются первыми
    for fmt in FLOAT_FORMATS:
        if isinstance(value, fmt.scalar_type):
            return fmt
    if isinstance(value, float):
        return F64
    raise UnsupportedFloatError(
        f"Cannot infer float format of {value!r} ({type(value).__name__})"
    )


# =============================================================================
# ЗАПРОСЫ, НЕЗАВИСИМЫЕ ОТ ШИРИНЫ
# =============================================================================


def is_valid_float(value: Any) -> bool:
    """True если значение конечно (не NaN, не Inf)."""
    return format_of(value).is_finite(value)


def is_normal(value: Any) -> bool:
    return format_of(value).is_normal(value)


def is_sign_positive(value: Any) -> bool:
    return format_of(value).is_sign_positive(value)


def is_sign_negative(value: Any) -> bool:
    return format_of(value).is_sign_negative(value)
