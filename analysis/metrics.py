#!/usr/bin/env python3
"""
Derived values for the dashboard.
Everything here is recomputed from the simulator state on every rerun.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence

import pandas as pd

from config.parameters import STAGES, StageSpec
from simulation.engine import feature_contribution, feature_deviation, stage_predictions
from simulation.state import Scenario, SimulatorState


@dataclass
class DashboardView:
    """Numbers and chart data shown after each interaction."""
    active_stage: str
    stage_prediction: float
    ensemble_prediction: float
    stage_predictions: Dict[str, float] = field(default_factory=dict)
    importance: List[dict] = field(default_factory=list)


def importance_rows(stage: StageSpec) -> List[dict]:
    """
    Chart rows for the importance bar chart of one stage.
    
    Args:
        stage: Stage specification
    
    Returns:
        List of {"label", "value", "color"} dicts, value in percent, sorted
        from most to least important
    """
    rows = [
        {"label": f.name, "id": f.id, "value": stage.importance(f.id) * 100, "color": stage.color}
        for f in stage.features
    ]
    return sorted(rows, key=lambda r: r["value"], reverse=True)


def recompute(state: SimulatorState) -> DashboardView:
    """
    Compute every derived value from the current state.
    
    Args:
        state: Simulator state
    
    Returns:
        DashboardView for the active stage
    """
    preds = stage_predictions(state.values, state.stages)
    return DashboardView(
        active_stage=state.active_stage,
        stage_prediction=preds[state.active_stage],
        ensemble_prediction=state.ensemble_prediction(),
        stage_predictions=preds,
        importance=importance_rows(state.active),
    )


def contributions_frame(stage: StageSpec, values: Mapping[str, float]) -> pd.DataFrame:
    """
    Per-feature breakdown of a stage prediction.
    
    Args:
        stage: Stage specification
        values: Feature id -> value
    
    Returns:
        DataFrame with value, mean, normalized deviation and score contribution
        per feature, largest absolute contribution first
    """
    rows = []
    for f in stage.features:
        value = values.get(f.id, f.mean)
        rows.append({
            "Variável": f.name,
            "Valor": value,
            "Média": f.mean,
            "Unidade": f.unit,
            "Desvio": feature_deviation(f, value),
            "Contribuição (p.p.)": feature_contribution(f, value, stage.importance(f.id)),
        })
    df = pd.DataFrame(rows)
    order = df["Contribuição (p.p.)"].abs().sort_values(ascending=False).index
    return df.loc[order].reset_index(drop=True)


def scenarios_frame(scenarios: Sequence[Scenario],
                    stages: Mapping[str, StageSpec] = STAGES) -> pd.DataFrame:
    """
    Comparison table of saved scenarios, in insertion order.
    
    Args:
        scenarios: Saved scenarios
        stages: Registry used to name each scenario's stage
    
    Returns:
        DataFrame with one row per scenario
    """
    columns = ["id", "Cenário", "Modelo", "Pred. Modelo", "Pred. Ensemble"]
    if not scenarios:
        return pd.DataFrame(columns=columns)

    rows = []
    for s in scenarios:
        stage = stages.get(s.stage_id)
        rows.append({
            "id": s.id,
            "Cenário": s.label,
            "Modelo": stage.name if stage else s.stage_id,
            "Pred. Modelo": s.stage_prediction,
            "Pred. Ensemble": s.ensemble_prediction,
        })
    return pd.DataFrame(rows, columns=columns)
