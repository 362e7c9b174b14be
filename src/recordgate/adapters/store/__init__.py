"""Store adapters.

- `InMemoryStore`: non-durable, dict-backed; for tests and prototyping.
- `SqlAlchemyStore`: relational store built on SQLAlchemy Core.
"""

from .memory import InMemoryStore
from .sqlalchemy import SqlAlchemyStore

__all__ = [
    "InMemoryStore",
    "SqlAlchemyStore",
]
