#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 10:11:01 2026
"""

# config/__init__.py
"""Model registry module for the defect-rate simulator."""

from .parameters import (
    BASELINE_SCORE,
    SCALE_FACTOR,
    SCORE_BOUNDS,
    MAE_REFERENCE,
    STAGE_COLORS,
    MODEL_SPECS,
    STAGES,
    STAGE_ORDER,
    FeatureSpec,
    StageSpec,
    get_stage,
    get_feature,
    initial_values,
)

__all__ = [
    'BASELINE_SCORE',
    'SCALE_FACTOR',
    'SCORE_BOUNDS',
    'MAE_REFERENCE',
    'STAGE_COLORS',
    'MODEL_SPECS',
    'STAGES',
    'STAGE_ORDER',
    'FeatureSpec',
    'StageSpec',
    'get_stage',
    'get_feature',
    'initial_values',
]
