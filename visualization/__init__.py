#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 10:14:04 2026
"""

# visualization/__init__.py
"""Visualization and chart generation module."""

from .charts import importance_figure, figure_to_png

__all__ = [
    'importance_figure',
    'figure_to_png'
]
