"""Relational database helpers shared by SQLAlchemy-backed adapters."""
