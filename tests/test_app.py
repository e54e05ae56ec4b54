from streamlit.testing.v1 import AppTest

from analysis.metrics import recompute
from utils.helpers import format_percentage

APP_TIMEOUT = 60


def _run_app():
    at = AppTest.from_file("../main.py", default_timeout=APP_TIMEOUT)
    return at.run()


def test_page_renders_means():
    at = _run_app()
    assert not at.exception
    assert at.title[0].value == "Simulador de Predição de Inutilizados"
    assert at.metric[0].label == "Predição Ensemble"
    assert at.metric[0].value == "5.00%"
    assert at.metric[1].label == "Predição Banbury 2"
    assert at.metric[1].value == "5.00%"
    assert at.metric[2].value == "1.997"
    assert at.metric[3].value == "12.495"


def test_editing_current_updates_predictions():
    at = _run_app()
    at.number_input(key="B2__by_corrente__number").set_value(320.0).run()
    assert not at.exception
    assert at.metric[1].value == "17.41%"

    state = at.session_state["simulator"]
    assert state.values["B2"]["by_corrente"] == 320
    assert at.metric[0].value == format_percentage(recompute(state).ensemble_prediction)
    assert at.slider(key="B2__by_corrente__slider").value == 320


def test_stage_switch_and_reset():
    at = _run_app()
    at.button(key="stage_P").click().run()
    assert at.metric[1].label == "Predição Prensa"

    at.slider(key="P__ps_pressao_vulc__slider").set_value(200.0).run()
    assert at.metric[1].value != "5.00%"

    at.button(key="btn_reset").click().run()
    assert at.metric[1].value == "5.00%"
    assert at.number_input(key="P__ps_pressao_vulc__number").value == 150


def test_save_and_remove_scenarios():
    at = _run_app()
    at.button(key="btn_save").click().run()
    at.button(key="btn_save").click().run()

    state = at.session_state["simulator"]
    assert [s.label for s in state.scenarios] == ["Cenário 1", "Cenário 2"]
    assert at.subheader[-1].value == "Comparação de Cenários"

    first_id = state.scenarios[0].id
    at.button(key=f"remove_{first_id}").click().run()
    state = at.session_state["simulator"]
    assert [s.label for s in state.scenarios] == ["Cenário 2"]
