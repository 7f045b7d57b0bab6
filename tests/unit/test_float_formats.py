"""
Тесты для модуля Float Formats

Проверяет:
1. Аддитивную единицу каждого формата
2. Приведение сырых значений (coerce) и отклонение нечисловых типов
3. Запросы нормальности, знака и конечности
4. Кратчайшее представление для сериализации
5. Определение формата по типу скаляра
"""

import math

import numpy as np
import pytest

from floco.core.errors import UnsupportedFloatError
from floco.core.math.float_formats import (
    F16,
    F32,
    F64,
    FLOAT_FORMATS,
    format_by_name,
    format_of,
    is_normal,
    is_sign_negative,
    is_sign_positive,
    is_valid_float,
)

# =============================================================================
# ТЕСТЫ КОНСТРУИРОВАНИЯ ЗНАЧЕНИЙ
# =============================================================================


class TestZero:
    """Тесты для zero()"""

    @pytest.mark.parametrize("fmt", FLOAT_FORMATS, ids=lambda f: f.name)
    def test_zero_is_typed_by_format(self, fmt) -> None:
        """zero() возвращает скаляр своего формата"""
        zero = fmt.zero()
        assert zero == 0
        assert isinstance(zero, fmt.scalar_type)
        assert fmt.is_sign_positive(zero)

    def test_bits(self) -> None:
        assert (F16.bits, F32.bits, F64.bits) == (16, 32, 64)


class TestCoerce:
    """Тесты для coerce()"""

    def test_f64_keeps_python_float_exactly(self) -> None:
        assert F64.coerce(2.1) == 2.1
        assert isinstance(F64.coerce(2.1), np.float64)

    def test_f32_rounds_like_a_literal(self) -> None:
        """Приведение к f32 совпадает с np.float32 литералом"""
        assert F32.coerce(2.1) == np.float32(2.1)
        assert isinstance(F32.coerce(2.1), np.float32)

    def test_integers_accepted(self) -> None:
        assert F64.coerce(3) == 3.0
        assert F32.coerce(np.int64(-7)) == np.float32(-7.0)

    def test_same_type_passes_through(self) -> None:
        value = np.float16(1.5)
        assert F16.coerce(value) is value

    def test_overflow_becomes_infinity(self) -> None:
        """Переполнение даёт inf, а не clamp"""
        assert np.isposinf(F16.coerce(1e6))
        assert np.isneginf(F32.coerce(-1e300))

    @pytest.mark.parametrize("value", [True, False, np.bool_(True)])
    def test_bool_rejected(self, value) -> None:
        with pytest.raises(UnsupportedFloatError):
            F64.coerce(value)

    @pytest.mark.parametrize("value", ["1.0", None, [1.0], 1 + 2j])
    def test_non_real_rejected(self, value) -> None:
        with pytest.raises(UnsupportedFloatError, match="Cannot interpret"):
            F64.coerce(value)

    def test_unsupported_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            F32.coerce("nope")


# =============================================================================
# ТЕСТЫ ЗАПРОСОВ
# =============================================================================


class TestNormality:
    """Тесты для is_normal / is_subnormal"""

    @pytest.mark.parametrize("fmt", FLOAT_FORMATS, ids=lambda f: f.name)
    def test_regular_values_are_normal(self, fmt) -> None:
        assert fmt.is_normal(1.0)
        assert fmt.is_normal(-2.5)
        assert fmt.is_normal(fmt.min_positive)

    @pytest.mark.parametrize("fmt", FLOAT_FORMATS, ids=lambda f: f.name)
    def test_special_values_are_not_normal(self, fmt) -> None:
        assert not fmt.is_normal(0.0)
        assert not fmt.is_normal(-0.0)
        assert not fmt.is_normal(math.inf)
        assert not fmt.is_normal(math.nan)

    def test_subnormal_f64(self) -> None:
        assert not F64.is_normal(5e-324)
        assert F64.is_subnormal(5e-324)

    def test_subnormal_depends_on_width(self) -> None:
        """1e-40 нормален в f64, но subnormal в f32"""
        assert F64.is_normal(1e-40)
        assert not F32.is_normal(1e-40)
        assert F32.is_subnormal(1e-40)

    def test_zero_is_not_subnormal(self) -> None:
        assert not F64.is_subnormal(0.0)


class TestSign:
    """Тесты знакового бита"""

    def test_negative_zero_has_negative_sign(self) -> None:
        assert F64.is_sign_negative(-0.0)
        assert not F64.is_sign_positive(-0.0)

    def test_positive_zero_has_positive_sign(self) -> None:
        assert F32.is_sign_positive(0.0)

    def test_infinities(self) -> None:
        assert F16.is_sign_positive(math.inf)
        assert F16.is_sign_negative(-math.inf)


class TestFiniteness:
    def test_queries(self) -> None:
        assert F64.is_finite(1.0)
        assert F64.is_nan(math.nan)
        assert F64.is_infinite(-math.inf)
        assert not F64.is_finite(math.inf)


class TestLimits:
    def test_epsilon_matches_numpy(self) -> None:
        assert F32.epsilon == np.finfo(np.float32).eps
        assert F64.epsilon == np.finfo(np.float64).eps

    def test_max_value(self) -> None:
        assert F16.max_value == np.float16(65504.0)

    def test_min_positive_is_smallest_normal(self) -> None:
        assert F64.min_positive == np.finfo(np.float64).smallest_normal


# =============================================================================
# ТЕСТЫ СЕРИАЛИЗАЦИОННОГО ПРЕДСТАВЛЕНИЯ
# =============================================================================


class TestToBuiltin:
    """Тесты для to_builtin()"""

    def test_f64_unchanged(self) -> None:
        assert F64.to_builtin(2.1) == 2.1
        assert type(F64.to_builtin(2.1)) is float

    def test_f32_shortest_repr(self) -> None:
        """f32 2.1 сериализуется как 2.1, а не 2.0999999046325684"""
        assert F32.to_builtin(F32.coerce(2.1)) == 2.1

    def test_reads_back_to_same_scalar(self) -> None:
        for raw in (0.1, 1.0 / 3.0, 65000.0, 1e-5):
            scalar = F16.coerce(raw)
            assert F16.coerce(F16.to_builtin(scalar)) == scalar

    def test_special_values(self) -> None:
        assert math.isnan(F32.to_builtin(math.nan))
        assert F32.to_builtin(-math.inf) == -math.inf


# =============================================================================
# ТЕСТЫ ОПРЕДЕЛЕНИЯ ФОРМАТА
# =============================================================================


class TestFormatLookup:
    """Тесты для format_of / format_by_name"""

    def test_format_of_numpy_scalars(self) -> None:
        assert format_of(np.float16(1.0)) is F16
        assert format_of(np.float32(1.0)) is F32
        assert format_of(np.float64(1.0)) is F64

    def test_python_float_is_f64(self) -> None:
        assert format_of(1.0) is F64

    @pytest.mark.parametrize("value", [1, True, "1.0", np.int32(1)])
    def test_format_of_rejects_non_floats(self, value) -> None:
        with pytest.raises(UnsupportedFloatError, match="Cannot infer"):
            format_of(value)

    def test_format_by_name(self) -> None:
        assert format_by_name("f32") is F32
        assert format_by_name("F64") is F64

    def test_format_by_name_unknown(self) -> None:
        with pytest.raises(UnsupportedFloatError, match="Unknown float format"):
            format_by_name("f128")

    def test_str(self) -> None:
        assert str(F16) == "f16"


class TestWidthIndependentQueries:
    """Функции модуля диспатчат по формату значения"""

    def test_is_valid_float(self) -> None:
        assert is_valid_float(1.0)
        assert not is_valid_float(np.float32(math.nan))

    def test_is_normal_uses_value_width(self) -> None:
        assert is_normal(1e-40)
        assert not is_normal(np.float32(1e-40))

    def test_sign_helpers(self) -> None:
        assert is_sign_positive(np.float16(3.0))
        assert is_sign_negative(-1.0)
