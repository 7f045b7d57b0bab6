"""
Serde — сериализация Floco через pydantic

На проводе Floco представлен ровно как его payload (голое число): политика
стирается при выводе и не имеет представления в документе.

Десериализация принимает число из входного формата и прогоняет его через
ту же процедуру конструирования, что и программное создание
(Constrained.evaluate). Значение, не прошедшее предикат, превращается в
ошибку валидации pydantic (тип floco_constraint_violation) с текстом
ошибки политики, а не в невалидный экземпляр.

Использование в моделях:

    class Reading(BaseModel):
        level: Floco[Positive]
        ratio: Annotated[Floco, FlocoType(UnitInterval, F32)]
"""

import numbers
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any, Dict, Union

import numpy as np
from pydantic import ConfigDict, GetCoreSchemaHandler, TypeAdapter
from pydantic_core import PydanticCustomError, core_schema

from floco.core.domain.constrained import Floco, FormatLike


# =============================================================================
# PYDANTIC ANNOTATION
# =============================================================================


@dataclass(frozen=True)
class FlocoType:
    """
    Метаданные аннотации: политика и (необязательно) формат.

    Без формата используется FLOCO_DEFAULT_FLOAT_FORMAT на момент валидации.
    """

    policy: type
    float_format: FormatLike = None

    def annotation(self) -> Any:
        return Annotated[Floco, self]

    def _from_number(self, raw: float) -> Floco:
        result = self.policy.evaluate(raw, self.float_format)
        if isinstance(result, Exception):
            raise PydanticCustomError(
                "floco_constraint_violation",
                "{message}",
                {"message": str(result), "policy": self.policy.__name__},
            )
        return result

    def _from_instance(self, value: Floco) -> Floco:
        fmt = self.policy._format_for(self.float_format)
        if value.policy is not self.policy or value.float_format != fmt:
            raise PydanticCustomError(
                "floco_policy_mismatch",
                "Expected Floco under {expected} ({format}), got {actual}",
                {
                    "expected": self.policy.__name__,
                    "format": fmt.name,
                    "actual": repr(value),
                },
            )
        return value

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # JSON: только числовые токены (целые допустимы), без true и "42.5"
        number_schema = core_schema.no_info_after_validator_function(
            self._from_number, core_schema.float_schema(strict=True)
        )

        def validate_python(value: Any) -> Floco:
            if isinstance(value, Floco):
                return self._from_instance(value)
            if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
                raise PydanticCustomError(
                    "float_type",
                    "Input should be a valid number, got {type_name}",
                    {"type_name": type(value).__name__},
                )
            return self._from_number(value)

        return core_schema.json_or_python_schema(
            json_schema=number_schema,
            python_schema=core_schema.no_info_plain_validator_function(validate_python),
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize, return_schema=core_schema.float_schema()
            ),
        )


def _serialize(value: Floco) -> float:
    return value.float_format.to_builtin(value.get())


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


@lru_cache(maxsize=None)
def adapter(policy: type, float_format: FormatLike = None) -> TypeAdapter:
    """TypeAdapter для Floco под политикой (кэшируется по политике и формату)."""
    # inf/nan пишутся как Infinity/NaN и читаются обратно, а не как null
    return TypeAdapter(
        FlocoType(policy, float_format).annotation(),
        config=ConfigDict(ser_json_inf_nan="constants"),
    )


def to_json(value: Floco) -> bytes:
    """
    Сериализация в JSON: голое число, без метаданных политики.

    Examples:
        >>> to_json(Positive.try_new(42.0))
        b'42.0'
    """
    return adapter(value.policy, value.float_format).dump_json(value)


def from_json(data: Union[str, bytes], policy: type, float_format: FormatLike = None) -> Floco:
    """
    Десериализация из JSON через предикат политики.

    Raises:
        pydantic.ValidationError: Не число, либо число отклонено политикой
    """
    return adapter(policy, float_format).validate_json(data)


def to_python(value: Floco) -> float:
    return adapter(value.policy, value.float_format).dump_python(value)


def from_python(raw: Any, policy: type, float_format: FormatLike = None) -> Floco:
    return adapter(policy, float_format).validate_python(raw)


def json_schema(policy: type, float_format: FormatLike = None) -> Dict[str, Any]:
    """JSON Schema поля Floco: {"type": "number"}, политика не видна."""
    return adapter(policy, float_format).json_schema()
