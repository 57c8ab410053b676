"""Analyst ratings, price targets and EPS consensus aggregates."""

__version__ = "0.1.0"
