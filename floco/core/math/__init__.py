"""
Numeric backend для floco

Форматы float (f16/f32/f64) и запросы, на которых строятся предикаты политик.
"""

from floco.core.math.float_formats import (
    F16,
    F32,
    F64,
    FLOAT_FORMATS,
    FloatFormat,
    format_by_name,
    format_of,
    is_normal,
    is_sign_negative,
    is_sign_positive,
    is_valid_float,
)

__all__ = [
    # Formats
    "FloatFormat",
    "F16",
    "F32",
    "F64",
    "FLOAT_FORMATS",
    "format_by_name",
    "format_of",
    # Width-independent queries
    "is_valid_float",
    "is_normal",
    "is_sign_positive",
    "is_sign_negative",
]
