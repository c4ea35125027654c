"""Punch clock: punch in/out tracking with biweekly pay-period summaries."""

__version__ = "0.1.0"
