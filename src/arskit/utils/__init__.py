"""Utility functions for the arskit package."""

from .validate import (
    validate_positive_int,
    validate_seed_points,
    validate_support,
)

__all__ = [
    "validate_positive_int",
    "validate_seed_points",
    "validate_support",
]
