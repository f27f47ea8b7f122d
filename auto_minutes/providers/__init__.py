"""Concrete adapters for the interfaces in ``auto_minutes.interfaces``."""
