#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 10:13:03 2026
"""

# analysis/__init__.py
"""Derived metrics and comparison tables module."""

from .metrics import DashboardView, recompute, importance_rows, contributions_frame, scenarios_frame

__all__ = [
    'DashboardView',
    'recompute',
    'importance_rows',
    'contributions_frame',
    'scenarios_frame'
]
