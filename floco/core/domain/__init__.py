"""
Domain: constrained float wrapper and validation policy capability.
"""

from floco.core.domain.constrained import Constrained, Floco, resolve_format

__all__ = [
    "Constrained",
    "Floco",
    "resolve_format",
]
