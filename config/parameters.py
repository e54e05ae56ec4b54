#!/usr/bin/env python3
"""
Model registry for the defect-rate simulator.
Holds the fixed feature tables, importances and ensemble weights of the three
production stages. These constants stand in for the trained ensemble and must
not be edited casually.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


# Scoring constants of the linear surrogate
BASELINE_SCORE = 5.0
SCALE_FACTOR = 50.0
SCORE_BOUNDS = (0.0, 100.0)

# Reference error metrics of the trained ensemble (display only)
MAE_REFERENCE = {
    "teste": 1.997,
    "validacao": 12.495,
}

STAGE_COLORS = {
    "B2": "#3498db",
    "B3": "#e74c3c",
    "P": "#27ae60",
}

# RAW STAGE SPECIFICATIONS - (id, name, min, max, mean, step, unit)
MODEL_SPECS = {
    "B2": {
        "name": "Banbury 2",
        "weight": 0.1453,
        "features": [
            ("by_tempo_mistura", "Tempo de Mistura", 0, 20, 11.4, 0.1, "min"),
            ("by_temp", "Temperatura", 70, 85, 76.5, 0.1, "°C"),
            ("by_rpm", "Rotação", 5, 25, 17.8, 0.1, "RPM"),
            ("by_pressao_mistura", "Pressão de Mistura", 0, 5, 2.4, 0.1, "bar"),
            ("by_corrente", "Corrente Elétrica", 100, 320, 242, 1, "A"),
            ("by_cronomet_mistura", "Cronômetro Mistura", 20, 270, 165, 1, "s"),
        ],
        "importances": {
            "by_corrente": 0.70,
            "by_rpm": 0.14,
            "by_cronomet_mistura": 0.07,
            "by_tempo_mistura": 0.04,
            "by_temp": 0.03,
            "by_pressao_mistura": 0.02,
        },
    },
    "B3": {
        "name": "Banbury 3",
        "weight": 0.0493,
        "features": [
            ("by_tempo_mistura", "Tempo de Mistura", 35, 50, 41, 0.1, "min"),
            ("by_temp", "Temperatura", 95, 110, 104, 0.1, "°C"),
            ("by_rpm", "Rotação", 28, 32, 30, 0.1, "RPM"),
            ("by_pressao_mistura", "Pressão de Mistura", 3, 4, 3.3, 0.01, "bar"),
            ("by_corrente", "Corrente Elétrica", 420, 485, 455, 1, "A"),
            ("by_cronomet_mistura", "Cronômetro Mistura", 165, 185, 175, 1, "s"),
        ],
        "importances": {
            "by_temp": 0.36,
            "by_rpm": 0.21,
            "by_cronomet_mistura": 0.20,
            "by_tempo_mistura": 0.17,
            "by_pressao_mistura": 0.03,
            "by_corrente": 0.02,
        },
    },
    "P": {
        "name": "Prensa",
        "weight": 0.8053,
        "features": [
            ("ps_temp_plato_01", "Temp. Plato 01", 140, 180, 160, 1, "°C"),
            ("ps_temp_plato_02", "Temp. Plato 02", 140, 180, 160, 1, "°C"),
            ("ps_temp_plato_03", "Temp. Plato 03", 140, 180, 160, 1, "°C"),
            ("ps_temp_plato_04", "Temp. Plato 04", 140, 180, 160, 1, "°C"),
            ("ps_temp_plato_05", "Temp. Plato 05", 140, 180, 160, 1, "°C"),
            ("ps_temp_plato_06", "Temp. Plato 06", 140, 180, 160, 1, "°C"),
            ("ps_pressao_vulc", "Pressão Vulcanização", 100, 200, 150, 1, "bar"),
            ("ps_periodo_vulc", "Período Vulcanização", 300, 600, 450, 10, "s"),
        ],
        "importances": {
            "ps_temp_plato_04": 0.18,
            "ps_pressao_vulc": 0.17,
            "ps_temp_plato_01": 0.15,
            "ps_temp_plato_02": 0.12,
            "ps_temp_plato_03": 0.10,
            "ps_temp_plato_05": 0.10,
            "ps_temp_plato_06": 0.09,
            "ps_periodo_vulc": 0.09,
        },
    },
}


@dataclass(frozen=True)
class FeatureSpec:
    """One adjustable sensor reading of a stage."""
    id: str
    name: str
    min: float
    max: float
    mean: float
    step: float
    unit: str

    @property
    def span(self) -> float:
        return self.max - self.min

    def validate(self) -> List[str]:
        errors = []
        if self.max <= self.min:
            errors.append(f"{self.id}: max ({self.max}) must be greater than min ({self.min})")
        if not self.min <= self.mean <= self.max:
            errors.append(f"{self.id}: mean ({self.mean}) must lie within [{self.min}, {self.max}]")
        if self.step <= 0:
            errors.append(f"{self.id}: step must be positive")
        return errors


@dataclass(frozen=True)
class StageSpec:
    """A production stage: its features, importances and ensemble weight."""
    id: str
    name: str
    features: Tuple[FeatureSpec, ...]
    importances: Dict[str, float] = field(default_factory=dict)
    weight: float = 1.0
    color: str = "#888888"

    @property
    def feature_ids(self) -> List[str]:
        return [f.id for f in self.features]

    def feature(self, feature_id: str) -> FeatureSpec:
        for f in self.features:
            if f.id == feature_id:
                return f
        raise KeyError(f"Unknown feature '{feature_id}' for stage {self.id}. Available: {self.feature_ids}")

    def importance(self, feature_id: str) -> float:
        return self.importances.get(feature_id, 0.0)

    def means(self) -> Dict[str, float]:
        return {f.id: f.mean for f in self.features}

    def validate(self) -> List[str]:
        errors = []
        ids = self.feature_ids
        if len(set(ids)) != len(ids):
            errors.append(f"{self.id}: duplicate feature ids")
        for f in self.features:
            errors.extend(f"{self.id}/{e}" for e in f.validate())
        for key in self.importances:
            if key not in ids:
                errors.append(f"{self.id}: importance key '{key}' has no matching feature")
        if self.weight < 0:
            errors.append(f"{self.id}: ensemble weight cannot be negative")
        return errors


def build_stage(stage_id: str, spec: dict) -> StageSpec:
    """Turn one raw MODEL_SPECS entry into a StageSpec."""
    features = tuple(FeatureSpec(*row) for row in spec["features"])
    return StageSpec(
        id=stage_id,
        name=spec["name"],
        features=features,
        importances=dict(spec["importances"]),
        weight=spec["weight"],
        color=STAGE_COLORS.get(stage_id, "#888888"),
    )


STAGES: Dict[str, StageSpec] = {sid: build_stage(sid, spec) for sid, spec in MODEL_SPECS.items()}
STAGE_ORDER: List[str] = list(STAGES)


def get_stage(stage_id: str) -> StageSpec:
    """Look up a stage by id."""
    if stage_id not in STAGES:
        raise KeyError(f"Unknown stage: {stage_id}. Available: {STAGE_ORDER}")
    return STAGES[stage_id]


def get_feature(stage_id: str, feature_id: str) -> FeatureSpec:
    """Look up a feature by id within a stage."""
    return get_stage(stage_id).feature(feature_id)


def initial_values() -> Dict[str, Dict[str, float]]:
    """Input state with every feature of every stage at its mean."""
    return {sid: stage.means() for sid, stage in STAGES.items()}
