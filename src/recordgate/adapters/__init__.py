"""Adapters implementing recordgate's interfaces."""
