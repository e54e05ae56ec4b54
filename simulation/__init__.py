#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 19 10:12:02 2026
"""

# simulation/__init__.py
"""Scoring engine and simulator state module."""

from .engine import predict, ensemble, stage_predictions, feature_deviation, feature_contribution
from .validation import FeatureValueError, parse_feature_value, validate_registry, preflight_validate
from .state import Scenario, SimulatorState

__all__ = [
    'predict',
    'ensemble',
    'stage_predictions',
    'feature_deviation',
    'feature_contribution',
    'FeatureValueError',
    'parse_feature_value',
    'validate_registry',
    'preflight_validate',
    'Scenario',
    'SimulatorState'
]
