"""Helpers package - pure functions shared by services."""

from helpers import formulas

__all__ = [
    "formulas",
]
