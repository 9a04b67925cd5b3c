"""Schema registry exports."""

from .registry import (
    DanglingReferenceError,
    RegistryError,
    RegistryFrozenError,
    SchemaCollisionError,
    SchemaNotFoundError,
    SchemaRegistry,
)

__all__ = [
    "DanglingReferenceError",
    "RegistryError",
    "RegistryFrozenError",
    "SchemaCollisionError",
    "SchemaNotFoundError",
    "SchemaRegistry",
]
