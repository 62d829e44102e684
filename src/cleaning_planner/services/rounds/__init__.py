"""Round services."""

from .service import RoundService

__all__ = ["RoundService"]
