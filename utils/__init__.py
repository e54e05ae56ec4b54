#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 10:16:06 2026
"""

# utils/__init__.py
"""Utilities and helper functions module."""

from .helpers import (
    format_percentage,
    format_number,
    safe_divide,
    clamp,
    step_decimals,
    step_format,
    configure_logging
)

__all__ = [
    'format_percentage',
    'format_number',
    'safe_divide',
    'clamp',
    'step_decimals',
    'step_format',
    'configure_logging'
]
