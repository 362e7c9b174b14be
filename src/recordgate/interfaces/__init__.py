"""Interfaces (ports) that adapters implement."""

from .store import (
    RecordNotFoundError,
    Store,
    StoreError,
    StoreIntegrityError,
    StoreUnavailableError,
    TableNotFoundError,
)

__all__ = [
    "RecordNotFoundError",
    "Store",
    "StoreError",
    "StoreIntegrityError",
    "StoreUnavailableError",
    "TableNotFoundError",
]
