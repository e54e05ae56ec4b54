#!/usr/bin/env python3
"""
Input validation for the simulator.
Rejects unusable slider/number input at the boundary and checks the model
registry before the page renders.
"""

import logging
import math
from typing import List, Mapping

import numpy as np
import streamlit as st

from config.parameters import FeatureSpec, StageSpec
from utils.helpers import clamp

logger = logging.getLogger(__name__)

INPUT_POLICIES = ("clamp", "reject")


class FeatureValueError(ValueError):
    """Raised when an edited feature value cannot be accepted."""

    def __init__(self, feature: FeatureSpec, raw, reason: str):
        self.feature = feature
        self.raw = raw
        self.reason = reason
        super().__init__(f"{feature.name}: {reason} (got {raw!r})")


def parse_feature_value(feature: FeatureSpec, raw, policy: str = "clamp") -> float:
    """
    Convert raw user input into a value for a feature.
    
    Args:
        feature: Feature the value belongs to
        raw: Number or numeric string from the input widget
        policy: "clamp" to pull out-of-range values onto [min, max],
            "reject" to refuse them
    
    Returns:
        The accepted float value
    
    Raises:
        FeatureValueError: non-numeric, non-finite or (with "reject") out-of-range input
    """
    if policy not in INPUT_POLICIES:
        raise ValueError(f"Unknown input policy: {policy}. Available: {list(INPUT_POLICIES)}")

    if isinstance(raw, bool):
        raise FeatureValueError(feature, raw, "value must be numeric")
    if isinstance(raw, str):
        raw_text = raw.strip().replace(",", ".")
    else:
        raw_text = raw

    try:
        value = float(raw_text)
    except (TypeError, ValueError):
        raise FeatureValueError(feature, raw, "value must be numeric")

    if not math.isfinite(value):
        raise FeatureValueError(feature, raw, "value must be finite")

    if value < feature.min or value > feature.max:
        if policy == "reject":
            raise FeatureValueError(feature, raw, f"value must lie within [{feature.min}, {feature.max}]")
        clamped = clamp(value, feature.min, feature.max)
        logger.debug("Clamped %s from %s to %s", feature.id, value, clamped)
        return float(clamped)

    return value


def validate_registry(stages: Mapping[str, StageSpec]) -> List[str]:
    """
    Check the stage tables for structural problems.
    
    Args:
        stages: Stage id -> StageSpec
    
    Returns:
        List of error messages (empty when the registry is usable)
    """
    errors = []
    if not stages:
        errors.append("No stages defined")
        return errors

    for sid, stage in stages.items():
        if sid != stage.id:
            errors.append(f"Stage key '{sid}' does not match stage id '{stage.id}'")
        errors.extend(stage.validate())

    if sum(stage.weight for stage in stages.values()) <= 0:
        errors.append("Ensemble weights must add up to a positive number")

    return errors


def importance_warnings(stages: Mapping[str, StageSpec]) -> List[str]:
    """Non-fatal notes: importances or ensemble weights that do not add up to 1."""
    warnings = []
    for stage in stages.values():
        total = sum(stage.importances.values())
        if not np.isclose(total, 1.0, atol=1e-6):
            warnings.append(f"Importances of {stage.name} add up to {total:.4f}, not 1")

    weight_total = sum(stage.weight for stage in stages.values())
    if not np.isclose(weight_total, 1.0, atol=1e-3):
        warnings.append(f"Ensemble weights add up to {weight_total:.4f}; predictions are normalized")
    return warnings


def preflight_validate(stages: Mapping[str, StageSpec]) -> bool:
    """
    Validate the registry before the page renders.
    
    Args:
        stages: Stage registry
    
    Returns:
        bool: True if the registry is usable
    """
    errs = validate_registry(stages)
    if errs:
        logger.error("Model registry is invalid: %s", "; ".join(errs))
        st.error("Invalid model tables:\n- " + "\n- ".join(errs))
        return False

    for warning in importance_warnings(stages):
        logger.warning(warning)

    return True
