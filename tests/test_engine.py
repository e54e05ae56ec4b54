from dataclasses import replace

import pytest

from config.parameters import STAGES, FeatureSpec, StageSpec, get_stage, initial_values
from simulation.engine import ensemble, feature_contribution, predict, stage_predictions


def test_predict_at_means_is_baseline():
    for stage in STAGES.values():
        assert predict(stage, stage.means()) == 5


def test_predict_missing_values_count_as_means():
    assert predict(get_stage("P"), {}) == 5


def test_banbury2_max_current():
    stage = get_stage("B2")
    values = stage.means()
    values["by_corrente"] = 320
    expected = 5 + ((320 - 242) / 220) * 0.70 * 50
    assert predict(stage, values) == pytest.approx(expected)
    assert predict(stage, values) == pytest.approx(17.409, abs=1e-3)


def test_predict_is_clamped():
    stage = get_stage("B2")
    high = stage.means()
    high["by_corrente"] = 1e9
    low = stage.means()
    low["by_corrente"] = -1e9
    assert predict(stage, high) == 100
    assert predict(stage, low) == 0


def test_predict_within_bounds_at_range_corners():
    for stage in STAGES.values():
        for pick in (lambda f: f.min, lambda f: f.max):
            values = {f.id: pick(f) for f in stage.features}
            assert 0 <= predict(stage, values) <= 100


def test_zero_span_feature_contributes_nothing():
    flat = FeatureSpec("flat", "Flat", 5, 5, 5, 1, "u")
    assert feature_contribution(flat, 9, 1.0) == 0
    stage = StageSpec(id="T", name="T", features=(flat,), importances={"flat": 1.0})
    assert predict(stage, {"flat": 9}) == 5


def test_ensemble_at_means():
    assert ensemble(initial_values()) == pytest.approx(5)


def test_ensemble_is_weighted_mean():
    values = initial_values()
    values["B2"]["by_corrente"] = 320
    preds = stage_predictions(values)
    weights = {sid: s.weight for sid, s in STAGES.items()}
    expected = sum(preds[s] * weights[s] for s in preds) / sum(weights.values())
    assert ensemble(values) == pytest.approx(expected)


def test_ensemble_weight_scaling_invariant():
    values = initial_values()
    values["B3"]["by_temp"] = 110
    values["P"]["ps_pressao_vulc"] = 120
    scaled = {sid: replace(stage, weight=stage.weight * 7.5) for sid, stage in STAGES.items()}
    assert ensemble(values, scaled) == pytest.approx(ensemble(values))


def test_ensemble_depends_on_inactive_stage():
    values = initial_values()
    before = ensemble(values)
    values["P"]["ps_temp_plato_04"] = 180
    assert ensemble(values) > before


def test_ensemble_rejects_zero_weights():
    zero = {sid: replace(stage, weight=0.0) for sid, stage in STAGES.items()}
    with pytest.raises(ValueError):
        ensemble(initial_values(), zero)
