"""
Helper utilities for identifier normalization and validation.

This module provides utilities for normalizing, validating and formatting
Chilean identification numbers (RUT).
"""

from .rut import compute_check_digit, format_rut, normalize_rut, validate_rut

__all__ = [
    "compute_check_digit",
    "format_rut",
    "normalize_rut",
    "validate_rut",
]
