"""Lightweight signal statistics used for live display."""

from .rate import RateTracker

__all__ = ["RateTracker"]
