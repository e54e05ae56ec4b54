#!/usr/bin/env python3
"""
Utility functions and helpers used across the application.
Contains formatting, numeric guards and logging setup.
"""

import logging
import math
from typing import Optional


def format_percentage(value: float, decimal_places: int = 2) -> str:
    """
    Format a percentage value as a string.
    
    Args:
        value: Value already on the 0-100 scale (17.4 = 17.4%)
        decimal_places: Number of decimal places
    
    Returns:
        Formatted percentage string
    """
    return f"{value:.{decimal_places}f}%"


def format_number(value: float, decimal_places: int = 3) -> str:
    """Format a plain metric such as an MAE."""
    return f"{value:.{decimal_places}f}"


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safely divide two numbers, returning default if division by zero.
    
    Args:
        numerator: Numerator value
        denominator: Denominator value
        default: Default value if division by zero
    
    Returns:
        Division result or default
    """
    try:
        if denominator == 0:
            return default
        return numerator / denominator
    except (TypeError, ValueError):
        return default


def clamp(value: float, min_val: float, max_val: float) -> float:
    """
    Clamp value between minimum and maximum bounds.
    
    Args:
        value: Value to clamp
        min_val: Minimum bound
        max_val: Maximum bound
    
    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def step_decimals(step: float) -> int:
    """Number of decimals needed to display values on a given step grid."""
    if step >= 1:
        return 0
    return max(0, -int(math.floor(math.log10(step) + 1e-9)))


def step_format(step: float) -> str:
    """printf-style format string for a widget on a given step grid."""
    return f"%.{step_decimals(step)}f"


def configure_logging(level: str = "INFO", fmt: Optional[str] = None) -> None:
    """
    Configure root logging once for the app.
    
    Streamlit re-executes the script on every interaction, so repeated calls
    must not stack handlers.
    """
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return
    logging.basicConfig(
        level=level,
        format=fmt or "%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
