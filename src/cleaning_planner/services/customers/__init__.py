"""Customer service helpers."""

from .service import CustomerService

__all__ = ["CustomerService"]
