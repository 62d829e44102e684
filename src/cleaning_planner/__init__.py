"""Cleaning service planner: customers, jobs, rounds and recurring schedules."""

__version__ = "0.1.0"
