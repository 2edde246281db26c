"""
URL registry layer.

This package provides the persistence contract for short URL mappings,
with a SQLAlchemy implementation and an in-memory one.
"""

from shortener.registry.base import UrlRegistry
from shortener.registry.memory import InMemoryUrlRegistry
from shortener.registry.sql import SqlAlchemyUrlRegistry
from shortener.registry.exceptions import (
    RegistryError,
    ShortCodeCollisionError,
    StoreTimeoutError,
    StoreUnavailableError,
)

__all__ = [
    "UrlRegistry",
    "InMemoryUrlRegistry",
    "SqlAlchemyUrlRegistry",
    "RegistryError",
    "ShortCodeCollisionError",
    "StoreTimeoutError",
    "StoreUnavailableError",
]
