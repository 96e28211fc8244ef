"""Custody ownership resolution: who has the child on a given day, and why."""

__version__ = "0.1.0"
