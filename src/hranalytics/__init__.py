"""Screening analytics and fairness auditing engine."""

__version__ = "0.1.0"
