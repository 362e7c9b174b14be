"""recordgate

Declarative field validation for records, and a persistence gate that only
lets valid records through to a relational store.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
