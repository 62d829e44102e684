"""Route group exports."""

from . import customers, geocoding, health, jobs, rounds

__all__ = ["customers", "jobs", "rounds", "geocoding", "health"]
