"""
Исключения floco

Библиотека сама не порождает ошибок предметной области: ошибка нарушения
ограничения всегда создаётся политикой (Constrained.emit_error) и
пробрасывается без изменений. Здесь описаны только ошибки контракта
(неподдерживаемый тип, некорректный default, нечистый предикат) и
удобный базовый класс для ошибок политик.
"""

from typing import Any, Optional


class FlocoError(Exception):
    """Корневое исключение библиотеки."""


class UnsupportedFloatError(FlocoError, TypeError):
    """
    Значение не является поддерживаемым float, либо политика не определена
    для запрошенного формата.
    """


class InvalidDefaultError(FlocoError, ValueError):
    """
    Значение по умолчанию политики не проходит её собственный предикат.

    Это ошибка автора политики, а не вызывающего кода: get_default() обязан
    удовлетворять is_valid().
    """

    def __init__(self, policy: type, value: Any):
        self.policy = policy
        self.value = value
        super().__init__(
            f"Default value {value!r} of policy {policy.__name__} "
            f"does not satisfy its own predicate"
        )


class ImpurePredicateError(FlocoError, RuntimeError):
    """
    Повторная оценка is_valid() для того же значения дала другой результат.

    Возникает только при FLOCO_VERIFY_PREDICATE_PURITY=true.
    """

    def __init__(self, policy: type, value: Any):
        self.policy = policy
        self.value = value
        super().__init__(
            f"Predicate of policy {policy.__name__} is not pure: "
            f"repeated evaluation for {value!r} disagreed"
        )


class PolicyViolation(FlocoError, ValueError):
    """
    Базовый класс для ошибок политик (необязательный).

    Хранит отклонённое значение и политику, чтобы сообщение могло на них
    ссылаться. Политики могут возвращать из emit_error() любое исключение.
    """

    def __init__(self, message: str, value: Any = None, policy: Optional[type] = None):
        self.value = value
        self.policy = policy
        super().__init__(message)
