#!/usr/bin/env python3
"""
Scoring engine for the defect-rate simulator.
Linear deviation surrogate per stage and the weighted ensemble across stages.
"""

from typing import Dict, Mapping, Optional

from config.parameters import (
    BASELINE_SCORE, SCALE_FACTOR, SCORE_BOUNDS, STAGES, FeatureSpec, StageSpec
)
from utils.helpers import clamp, safe_divide


def feature_deviation(feature: FeatureSpec, value: float) -> float:
    """Deviation from the mean, normalized by the feature's range."""
    return safe_divide(value - feature.mean, feature.span)


def feature_contribution(feature: FeatureSpec, value: float, importance: float) -> float:
    """Score points one feature adds to (or removes from) the baseline."""
    return feature_deviation(feature, value) * importance * SCALE_FACTOR


def predict(stage: StageSpec, values: Mapping[str, float]) -> float:
    """
    Predicted defect rate (%) of one stage for the given feature values.
    
    Args:
        stage: Stage specification
        values: Feature id -> current value; missing features count as at their mean
    
    Returns:
        Score clamped to [0, 100]
    """
    score = BASELINE_SCORE
    for feature in stage.features:
        value = values.get(feature.id, feature.mean)
        score += feature_contribution(feature, value, stage.importance(feature.id))
    return clamp(score, *SCORE_BOUNDS)


def stage_predictions(all_values: Mapping[str, Mapping[str, float]],
                      stages: Optional[Mapping[str, StageSpec]] = None) -> Dict[str, float]:
    """Prediction of every stage, keyed by stage id."""
    stages = STAGES if stages is None else stages
    return {sid: predict(stage, all_values.get(sid, {})) for sid, stage in stages.items()}


def ensemble(all_values: Mapping[str, Mapping[str, float]],
             stages: Optional[Mapping[str, StageSpec]] = None) -> float:
    """
    Weighted ensemble prediction over all stages.
    
    The weighted sum is divided by the total weight, so the stage weights do
    not have to add up to one.
    
    Args:
        all_values: Stage id -> feature id -> value, for every stage
        stages: Stage registry (defaults to the built-in one)
    
    Returns:
        Ensemble defect rate (%)
    """
    stages = STAGES if stages is None else stages
    total = 0.0
    total_weight = 0.0
    for sid, stage in stages.items():
        total += predict(stage, all_values.get(sid, {})) * stage.weight
        total_weight += stage.weight

    if total_weight <= 0:
        raise ValueError("Ensemble weights must add up to a positive number")
    return total / total_weight
