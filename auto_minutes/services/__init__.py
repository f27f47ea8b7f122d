"""Application services."""

from auto_minutes.services.minutes_generator import MinutesGenerator

__all__ = ["MinutesGenerator"]
