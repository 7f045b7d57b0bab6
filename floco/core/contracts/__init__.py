"""
Serialization contracts

Floco на проводе представлен голым числом, десериализация идёт через предикат политики.
"""

from floco.core.contracts.serde import (
    FlocoType,
    adapter,
    from_json,
    from_python,
    json_schema,
    to_json,
    to_python,
)

__all__ = [
    # Classes
    "FlocoType",
    # Functions
    "adapter",
    "to_json",
    "from_json",
    "to_python",
    "from_python",
    "json_schema",
]
