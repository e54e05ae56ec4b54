#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 10:15:05 2026
"""

# ui/__init__.py
"""User interface components module."""

from .components import (
    render_metric_cards,
    render_stage_selector,
    render_importance_panel,
    render_simulation_panel,
    render_scenario_table
)

__all__ = [
    'render_metric_cards',
    'render_stage_selector',
    'render_importance_panel',
    'render_simulation_panel',
    'render_scenario_table'
]
