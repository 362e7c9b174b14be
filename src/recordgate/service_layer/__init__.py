"""Service layer: orchestrates validation and persistence."""

from .persistence import PersistenceGate, SaveOutcome

__all__ = ["PersistenceGate", "SaveOutcome"]
