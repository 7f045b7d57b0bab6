"""
Floco — float, ограниченный политикой валидации

Модуль содержит две связанные абстракции:
- Constrained: политика валидации (предикат, конструктор ошибки, default)
- Floco: непрозрачная обёртка над float, привязанная к политике

Значение Floco существует только если политика его приняла. Все пути
создания (try_new, try_from, default, десериализация) проходят через
один и тот же предикат политики.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Floco нельзя создать в обход политики (прямой вызов конструктора запрещён)
2. Валидация бинарна: значение хранится как есть, без clamp и без округления
   (кроме приведения к ширине формата, как у литерала)
3. Проваленная проверяемая мутация (set) не меняет payload
4. set_unchecked(): единственный путь в обход предиката, ответственность
   за инвариант несёт вызывающий код
5. is_valid() обязан быть чистой функцией (FLOCO_VERIFY_PREDICATE_PURITY
   включает проверку повторной оценкой)

Пример политики:

    class Probability(Constrained):
        @classmethod
        def is_valid(cls, value) -> bool:
            return 0.0 <= value <= 1.0

        @classmethod
        def emit_error(cls, value) -> Exception:
            return PolicyViolation(f"{value} is not a probability", value, cls)

    p = Probability.try_new(0.25)
    p.set(1.5)  # PolicyViolation, p.get() == 0.25
"""

import logging
from typing import Any, ClassVar, Final, Optional, Tuple, Union

from floco.config.settings import get_settings
from floco.core.errors import (
    ImpurePredicateError,
    InvalidDefaultError,
    UnsupportedFloatError,
)
from floco.core.math.float_formats import FloatFormat, format_by_name, format_of

logger = logging.getLogger(__name__)

_CONSTRUCTION_TOKEN: Final = object()

FormatLike = Union[FloatFormat, str, None]


def resolve_format(float_format: FormatLike = None) -> FloatFormat:
    """
    Приведение аргумента формата к FloatFormat.

    None означает формат по умолчанию из настроек (FLOCO_DEFAULT_FLOAT_FORMAT).
    """
    if float_format is None:
        return format_by_name(get_settings().DEFAULT_FLOAT_FORMAT.value)
    if isinstance(float_format, FloatFormat):
        return float_format
    if isinstance(float_format, str):
        return format_by_name(float_format)
    raise UnsupportedFloatError(f"Not a float format: {float_format!r}")


# =============================================================================
# ПОЛИТИКА ВАЛИДАЦИИ
# =============================================================================


class Constrained:
    """
    Базовый класс политики валидации.

    Политика это stateless набор поведения, выбираемый классом, а не
    экземпляром: все методы являются classmethod, создать экземпляр
    политики нельзя.

    Обязательно переопределить:
        is_valid(value) -> bool
        emit_error(value) -> Exception

    Необязательно:
        get_default(float_format) -> значение (по умолчанию zero() формата)
        FORMATS: кортеж поддерживаемых форматов (None = любые)

    Политики с порогами, зависящими от ширины, либо ограничивают FORMATS,
    либо ветвятся по format_of(value) внутри is_valid().
    """

    FORMATS: ClassVar[Optional[Tuple[FloatFormat, ...]]] = None

    def __new__(cls, *args: Any, **kwargs: Any) -> "Constrained":
        raise TypeError(
            f"Policy {cls.__name__} is stateless and cannot be instantiated; "
            f"use the class itself"
        )

    # -------------------------------------------------------------------------
    # Контракт политики
    # -------------------------------------------------------------------------

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        """
        Предикат валидности. Должен быть чистой функцией значения.

        Args:
            value: Скаляр формата (уже приведённый через FloatFormat.coerce)
        """
        raise NotImplementedError(f"Policy {cls.__name__} must implement is_valid()")

    @classmethod
    def emit_error(cls, value: Any) -> Exception:
        """
        Конструктор ошибки для отклонённого значения.

        Возвращает (а не бросает) исключение; str() исключения является сообщением
        для человека, оно же попадает в ошибки десериализации.
        """
        raise NotImplementedError(f"Policy {cls.__name__} must implement emit_error()")

    @classmethod
    def get_default(cls, float_format: FloatFormat) -> Any:
        """Значение по умолчанию: аддитивная единица формата."""
        return float_format.zero()

    # -------------------------------------------------------------------------
    # Общая процедура конструирования
    # -------------------------------------------------------------------------

    @classmethod
    def evaluate(cls, value: Any, float_format: FormatLike = None) -> Union["Floco", Exception]:
        """
        Конструирование без raise: возвращает Floco либо ошибку политики.

        Алгоритм:
        1. Определить формат (явный или из настроек), проверить FORMATS
        2. Привести value к скаляру формата
        3. Один раз оценить is_valid()
        4. True  → Floco с тем же значением, без преобразований
           False → исключение из emit_error(value)

        Raises:
            UnsupportedFloatError: Неподдерживаемый тип или формат
            ImpurePredicateError: Предикат не чист (только при проверке чистоты)
        """
        fmt = cls._format_for(float_format)
        candidate = fmt.coerce(value)
        if cls._accepts(candidate):
            return Floco(candidate, cls, fmt, _token=_CONSTRUCTION_TOKEN)
        return cls._error_for(candidate)

    @classmethod
    def try_new(cls, value: Any, float_format: FormatLike = None) -> "Floco":
        """
        Fallible-конструирование из сырого значения.

        Raises:
            Исключение из emit_error(), если значение отклонено политикой
        """
        result = cls.evaluate(value, float_format)
        if isinstance(result, Exception):
            raise result
        return result

    @classmethod
    def default(cls, float_format: FormatLike = None) -> "Floco":
        """Floco со значением get_default() этой политики."""
        return Floco.default(cls, float_format)

    @classmethod
    def supports(cls, float_format: FloatFormat) -> bool:
        """True если политика определена для float_format (FORMATS = None: для любого)."""
        return cls.FORMATS is None or float_format in cls.FORMATS

    # -------------------------------------------------------------------------
    # Внутренние помощники
    # -------------------------------------------------------------------------

    @classmethod
    def _format_for(cls, float_format: FormatLike) -> FloatFormat:
        fmt = resolve_format(float_format)
        if not cls.supports(fmt):
            raise UnsupportedFloatError(
                f"Policy {cls.__name__} is not defined for {fmt.name}"
            )
        return fmt

    @classmethod
    def _accepts(cls, candidate: Any) -> bool:
        verdict = bool(cls.is_valid(candidate))
        if get_settings().VERIFY_PREDICATE_PURITY and bool(cls.is_valid(candidate)) != verdict:
            logger.error(
                "Policy %s returned different verdicts for %r", cls.__name__, candidate
            )
            raise ImpurePredicateError(cls, candidate)
        return verdict

    @classmethod
    def _error_for(cls, candidate: Any) -> Exception:
        error = cls.emit_error(candidate)
        if not isinstance(error, Exception):
            raise TypeError(
                f"{cls.__name__}.emit_error() must return an Exception, "
                f"got {type(error).__name__}"
            )
        logger.debug("Policy %s rejected %r: %s", cls.__name__, candidate, error)
        return error


# =============================================================================
# ОБЁРТКА
# =============================================================================


class Floco:
    """
    Float, для которого политика гарантирует is_valid(payload).

    Создаётся только через:
        Floco.try_new(value, Policy[, fmt])  ≡  Policy.try_new(value[, fmt])
        Floco.try_from(np.float32(...) | np.float64(...) | float, Policy)
        Floco.default(Policy[, fmt])
        десериализацию (floco.core.contracts.serde)

    Экземпляр изменяемый (set / set_unchecked), поэтому не hashable.
    Сравнение и упорядочивание определены только между экземплярами с той
    же политикой и тем же форматом.

    В аннотациях pydantic: Floco[Policy] или Floco[Policy, F32].
    """

    __slots__ = ("_value", "_policy", "_format")

    def __init__(
        self,
        value: Any,
        policy: type,
        float_format: FloatFormat,
        *,
        _token: object = None,
    ):
        if _token is not _CONSTRUCTION_TOKEN:
            raise TypeError(
                "Floco cannot be instantiated directly; "
                "use Floco.try_new(), Floco.try_from() or Floco.default()"
            )
        self._value = value
        self._policy = policy
        self._format = float_format

    def __class_getitem__(cls, params: Any) -> Any:
        from floco.core.contracts.serde import FlocoType

        if not isinstance(params, tuple):
            params = (params,)
        return FlocoType(*params).annotation()

    # -------------------------------------------------------------------------
    # Конструирование
    # -------------------------------------------------------------------------

    @classmethod
    def try_new(cls, value: Any, policy: type, float_format: FormatLike = None) -> "Floco":
        return policy.try_new(value, float_format)

    @classmethod
    def try_from(cls, value: Any, policy: type) -> "Floco":
        """
        Конверсия из float-скаляра; формат выводится из типа значения.

        Raises:
            UnsupportedFloatError: Если value не float/np.float16/32/64
        """
        return policy.try_new(value, format_of(value))

    @classmethod
    def default(cls, policy: type, float_format: FormatLike = None) -> "Floco":
        """
        Floco со значением policy.get_default(fmt).

        Raises:
            InvalidDefaultError: Default не проходит предикат политики
                (при FLOCO_VERIFY_DEFAULTS=true)
        """
        fmt = policy._format_for(float_format)
        value = fmt.coerce(policy.get_default(fmt))
        if get_settings().VERIFY_DEFAULTS and not policy._accepts(value):
            logger.error("Policy %s has an invalid default %r", policy.__name__, value)
            raise InvalidDefaultError(policy, value)
        return cls(value, policy, fmt, _token=_CONSTRUCTION_TOKEN)

    # -------------------------------------------------------------------------
    # Доступ и мутация
    # -------------------------------------------------------------------------

    def get(self) -> Any:
        return self._value

    @property
    def value(self) -> Any:
        return self._value

    @property
    def policy(self) -> type:
        return self._policy

    @property
    def float_format(self) -> FloatFormat:
        return self._format

    def set(self, value: Any) -> None:
        """
        Проверяемая мутация.

        Новое значение сохраняется только если политика его приняла;
        иначе payload не меняется и бросается ошибка политики.
        """
        candidate = self._format.coerce(value)
        if not self._policy._accepts(candidate):
            raise self._policy._error_for(candidate)
        self._value = candidate

    def set_unchecked(self, value: Any) -> None:
        """
        Мутация без проверки предиката.

        Нарушает инвариант под ответственность вызывающего кода. Только для
        горячих путей, где валидность уже установлена другим способом.
        """
        self._value = self._format.coerce(value)

    # -------------------------------------------------------------------------
    # Значимая семантика
    # -------------------------------------------------------------------------

    def _same_kind(self, other: Any) -> bool:
        return (
            isinstance(other, Floco)
            and other._policy is self._policy
            and other._format == self._format
        )

    def __eq__(self, other: Any) -> Any:
        if not self._same_kind(other):
            return NotImplemented
        return bool(self._value == other._value)

    def __lt__(self, other: Any) -> Any:
        if not self._same_kind(other):
            return NotImplemented
        return bool(self._value < other._value)

    def __le__(self, other: Any) -> Any:
        if not self._same_kind(other):
            return NotImplemented
        return bool(self._value <= other._value)

    def __gt__(self, other: Any) -> Any:
        if not self._same_kind(other):
            return NotImplemented
        return bool(self._value > other._value)

    def __ge__(self, other: Any) -> Any:
        if not self._same_kind(other):
            return NotImplemented
        return bool(self._value >= other._value)

    __hash__ = None  # type: ignore[assignment]

    def __float__(self) -> float:
        return float(self._value)

    def __copy__(self) -> "Floco":
        return Floco(self._value, self._policy, self._format, _token=_CONSTRUCTION_TOKEN)

    def __deepcopy__(self, memo: dict) -> "Floco":
        return self.__copy__()

    def __repr__(self) -> str:
        return (
            f"Floco({self._format.to_builtin(self._value)!r}, "
            f"policy={self._policy.__name__}, format={self._format.name})"
        )

    def __str__(self) -> str:
        return str(self._format.to_builtin(self._value))
