import io

from openpyxl import load_workbook

from scenario_export import build_scenarios_workbook, export_filename
from simulation.state import SimulatorState


def test_workbook_layout():
    state = SimulatorState()
    state.set_value("by_corrente", 320)
    state.save_scenario()
    state.switch_stage("P")
    state.save_scenario()

    wb = load_workbook(io.BytesIO(build_scenarios_workbook(state.scenarios)))
    assert wb.sheetnames == ["Resumo", "Banbury 2", "Prensa"]

    summary = list(wb["Resumo"].iter_rows(values_only=True))
    assert summary[0] == ("Cenário", "Modelo", "Pred. Modelo (%)", "Pred. Ensemble (%)")
    assert summary[1][:2] == ("Cenário 1", "Banbury 2")
    assert abs(summary[1][2] - 17.4091) < 1e-4
    assert summary[2][:3] == ("Cenário 2", "Prensa", 5)

    b2 = list(wb["Banbury 2"].iter_rows(values_only=True))
    assert b2[0][0] == "Cenário"
    assert "Corrente Elétrica (A)" in b2[0]
    assert b2[1][b2[0].index("Corrente Elétrica (A)")] == 320


def test_empty_workbook():
    wb = load_workbook(io.BytesIO(build_scenarios_workbook([])))
    assert wb.sheetnames == ["Resumo"]


def test_export_filename():
    name = export_filename()
    assert name.startswith("cenarios_")
    assert name.endswith(".xlsx")


def test_downloads_use_session_stages():
    from dataclasses import replace

    from config.parameters import STAGES
    from ui.components import scenario_downloads

    stages = dict(STAGES, B2=replace(STAGES["B2"], name="Misturador Piloto"))
    state = SimulatorState(stages=stages)
    state.save_scenario()

    csv_data, xlsx_data = scenario_downloads(state)
    lines = csv_data.decode("utf-8").splitlines()
    assert lines[0] == "Cenário,Modelo,Pred. Modelo,Pred. Ensemble"
    assert "Misturador Piloto" in lines[1]
    assert "Banbury 2" not in csv_data.decode("utf-8")

    wb = load_workbook(io.BytesIO(xlsx_data))
    assert wb.sheetnames == ["Resumo", "Misturador Piloto"]
    assert list(wb["Resumo"].iter_rows(values_only=True))[1][1] == "Misturador Piloto"
