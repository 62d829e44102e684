"""Client data layer over the planner HTTP API."""

from .planner import PlannerClient, Result
from .sample_data import sample_collection

__all__ = ["PlannerClient", "Result", "sample_collection"]
