import pytest

from config.parameters import get_stage
from simulation.state import SimulatorState
from simulation.validation import FeatureValueError


def test_initial_state():
    state = SimulatorState()
    assert state.active_stage == "B2"
    assert state.scenarios == []
    assert state.values["B3"]["by_temp"] == 104
    assert state.stage_prediction() == 5
    assert state.ensemble_prediction() == pytest.approx(5)


def test_default_stage_override():
    assert SimulatorState(active_stage="P").active.name == "Prensa"
    with pytest.raises(KeyError):
        SimulatorState(active_stage="B9")


def test_set_value_edits_active_stage():
    state = SimulatorState()
    assert state.set_value("by_corrente", "320") == 320
    assert state.values["B2"]["by_corrente"] == 320
    assert state.values["B3"]["by_corrente"] == 455
    assert state.stage_prediction() == pytest.approx(17.409, abs=1e-3)


def test_set_value_on_inactive_stage_moves_ensemble():
    state = SimulatorState()
    before = state.ensemble_prediction()
    state.set_value("ps_pressao_vulc", 200, stage_id="P")
    assert state.active_stage == "B2"
    assert state.ensemble_prediction() > before


def test_rejected_input_keeps_previous_value():
    state = SimulatorState()
    state.set_value("by_rpm", 20)
    with pytest.raises(FeatureValueError):
        state.set_value("by_rpm", "vinte")
    assert state.values["B2"]["by_rpm"] == 20


def test_reject_policy_keeps_previous_value():
    state = SimulatorState(input_policy="reject")
    with pytest.raises(FeatureValueError):
        state.set_value("by_rpm", 99)
    assert state.values["B2"]["by_rpm"] == 17.8


def test_switch_stage():
    state = SimulatorState()
    state.switch_stage("B3")
    assert state.active_stage == "B3"
    with pytest.raises(KeyError):
        state.switch_stage("Z")
    assert state.active_stage == "B3"


def test_reset_only_touches_active_stage():
    state = SimulatorState()
    state.set_value("ps_temp_plato_01", 175, stage_id="P")
    state.set_value("by_corrente", 300)
    state.set_value("by_rpm", 6)
    state.save_scenario()

    state.reset_stage()

    assert state.stage_values() == get_stage("B2").means()
    assert state.values["P"]["ps_temp_plato_01"] == 175
    assert len(state.scenarios) == 1


def test_save_appends_snapshot():
    state = SimulatorState()
    state.set_value("by_corrente", 300)
    scenario = state.save_scenario()

    assert len(state.scenarios) == 1
    assert scenario.label == "Cenário 1"
    assert scenario.stage_id == "B2"
    assert dict(scenario.values) == state.stage_values()
    assert scenario.stage_prediction == state.stage_prediction()
    assert scenario.ensemble_prediction == state.ensemble_prediction()

    state.set_value("by_corrente", 120)
    assert scenario.values["by_corrente"] == 300
    with pytest.raises(TypeError):
        scenario.values["by_corrente"] = 1


def test_scenario_ids_unique_and_increasing():
    state = SimulatorState()
    ids = [state.save_scenario().id for _ in range(5)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 5


def test_remove_scenario():
    state = SimulatorState()
    first = state.save_scenario()
    state.switch_stage("P")
    state.set_value("ps_periodo_vulc", 600)
    second = state.save_scenario()
    second_record = second.to_record()

    assert state.remove_scenario(first.id) is True
    assert state.scenarios == [second]
    assert state.scenarios[0].to_record() == second_record

    assert state.remove_scenario(123) is False
    assert len(state.scenarios) == 1


def test_labels_follow_current_count():
    state = SimulatorState()
    first = state.save_scenario()
    state.save_scenario()
    state.remove_scenario(first.id)
    assert state.save_scenario().label == "Cenário 2"


def test_custom_label_prefix():
    state = SimulatorState(label_prefix="Scenario")
    assert state.save_scenario().label == "Scenario 1"


def test_to_record_flattens_values():
    state = SimulatorState()
    record = state.save_scenario().to_record()
    assert record["label"] == "Cenário 1"
    assert record["by_corrente"] == 242
    assert record["stage_prediction"] == 5
