"""
floco — floats validated against constraints.

A Floco holds a float that a validation policy (a Constrained subclass) has
accepted. It can only be created through the policy's predicate, so
consumers never need to re-check it.
"""

from floco.core.contracts import FlocoType, from_json, from_python, json_schema, to_json, to_python
from floco.core.domain import Constrained, Floco
from floco.core.errors import (
    FlocoError,
    ImpurePredicateError,
    InvalidDefaultError,
    PolicyViolation,
    UnsupportedFloatError,
)
from floco.core.math import (
    F16,
    F32,
    F64,
    FloatFormat,
    format_of,
    is_normal,
    is_sign_negative,
    is_sign_positive,
    is_valid_float,
)

__version__ = "0.1.3"

__all__ = [
    # Wrapper and policy
    "Floco",
    "Constrained",
    # Float formats
    "FloatFormat",
    "F16",
    "F32",
    "F64",
    "format_of",
    "is_valid_float",
    "is_normal",
    "is_sign_positive",
    "is_sign_negative",
    # Serialization
    "FlocoType",
    "to_json",
    "from_json",
    "to_python",
    "from_python",
    "json_schema",
    # Errors
    "FlocoError",
    "PolicyViolation",
    "UnsupportedFloatError",
    "InvalidDefaultError",
    "ImpurePredicateError",
]
