#!/usr/bin/env python3
"""
Reusable UI components for the Streamlit interface.
Handles stage selection, feature inputs, metric cards and the scenario table.
"""

import logging
from typing import List, Tuple

import streamlit as st

from analysis.metrics import DashboardView, contributions_frame, importance_rows, scenarios_frame
from config.parameters import MAE_REFERENCE, FeatureSpec
from config_manager import SimulatorConfig
from scenario_export import build_scenarios_workbook, export_filename
from simulation.state import SimulatorState
from simulation.validation import FeatureValueError
from utils.helpers import format_number, format_percentage, step_format
from visualization.charts import figure_to_png, importance_figure

logger = logging.getLogger(__name__)

INPUT_ERROR_KEY = "_input_error"


def feature_widget_keys(stage_id: str, feature_id: str) -> Tuple[str, str]:
    """Session-state keys of the slider and number input of one feature."""
    return f"{stage_id}__{feature_id}__slider", f"{stage_id}__{feature_id}__number"


def sync_feature_widgets(state: SimulatorState, stage_id: str, feature_id: str):
    """Point both widgets of a feature at the value held by the state."""
    value = float(state.values[stage_id][feature_id])
    for key in feature_widget_keys(stage_id, feature_id):
        st.session_state[key] = value


def _on_feature_change(state: SimulatorState, stage_id: str, feature_id: str, source_key: str):
    raw = st.session_state[source_key]
    try:
        state.set_value(feature_id, raw, stage_id=stage_id)
        st.session_state.pop(INPUT_ERROR_KEY, None)
    except FeatureValueError as exc:
        logger.warning("Rejected input for %s/%s: %s", stage_id, feature_id, exc)
        st.session_state[INPUT_ERROR_KEY] = str(exc)
    sync_feature_widgets(state, stage_id, feature_id)


def _on_select_stage(state: SimulatorState, stage_id: str):
    state.switch_stage(stage_id)


def _on_reset(state: SimulatorState):
    state.reset_stage()
    for feature in state.active.features:
        sync_feature_widgets(state, state.active_stage, feature.id)


def _on_save(state: SimulatorState):
    state.save_scenario()


def _on_remove(state: SimulatorState, scenario_id: int):
    state.remove_scenario(scenario_id)


@st.cache_data(show_spinner=False)
def importance_png(rows: List[dict]) -> bytes:
    """
    Cached PNG of a stage's importance chart.
    
    Args:
        rows: Chart rows from importance_rows()
    
    Returns:
        PNG bytes
    """
    return figure_to_png(importance_figure(rows))


def render_metric_cards(state: SimulatorState, view: DashboardView, config: SimulatorConfig):
    """
    Render the four headline metrics.
    
    Args:
        state: Simulator state
        view: Derived values for the current state
        config: Application settings
    """
    stage = state.stages[view.active_stage]
    pred_dec = config.display.prediction_decimals
    mae_dec = config.display.mae_decimals

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Predição Ensemble", format_percentage(view.ensemble_prediction, pred_dec))
    col2.metric(f"Predição {stage.name}", format_percentage(view.stage_prediction, pred_dec))
    col3.metric("MAE Teste", format_number(MAE_REFERENCE["teste"], mae_dec))
    col4.metric("MAE Validação", format_number(MAE_REFERENCE["validacao"], mae_dec))


def render_stage_selector(state: SimulatorState):
    """One button per stage, labelled with its ensemble weight."""
    cols = st.columns(len(state.stages))
    for col, (sid, stage) in zip(cols, state.stages.items()):
        col.button(
            f"{stage.name} ({stage.weight * 100:.1f}%)",
            key=f"stage_{sid}",
            type="primary" if sid == state.active_stage else "secondary",
            on_click=_on_select_stage,
            args=(state, sid),
        )


def render_importance_panel(state: SimulatorState):
    """Importance bar chart of the active stage, plus the prediction breakdown."""
    st.subheader("Importância das Variáveis")
    png = importance_png(importance_rows(state.active))
    st.image(png)
    st.download_button(
        "Baixar gráfico (PNG)",
        data=png,
        file_name=f"importancia_{state.active_stage}.png",
        mime="image/png",
        key="dl_chart",
    )

    with st.expander("Detalhamento da predição", expanded=False):
        df = contributions_frame(state.active, state.values[state.active_stage])
        st.dataframe(df, hide_index=True)


def render_feature_input(state: SimulatorState, feature: FeatureSpec):
    """
    Render the slider and number input of one feature, kept in sync.
    
    Args:
        state: Simulator state
        feature: Feature to render
    """
    sid = state.active_stage
    slider_key, number_key = feature_widget_keys(sid, feature.id)
    sync_feature_widgets(state, sid, feature.id)
    fmt = step_format(feature.step)
    bounds = dict(
        min_value=float(feature.min),
        max_value=float(feature.max),
        step=float(feature.step),
        format=fmt,
    )

    with st.container(border=True):
        c1, c2, c3 = st.columns([3, 2, 1])
        c1.markdown(f"**{feature.name}**")
        c2.number_input(
            feature.name,
            key=number_key,
            on_change=_on_feature_change,
            args=(state, sid, feature.id, number_key),
            label_visibility="collapsed",
            **bounds,
        )
        c3.caption(feature.unit)
        st.slider(
            feature.name,
            key=slider_key,
            on_change=_on_feature_change,
            args=(state, sid, feature.id, slider_key),
            label_visibility="collapsed",
            **bounds,
        )
        st.caption(f"{feature.min}  ·  Média: {feature.mean}  ·  {feature.max}")


def render_simulation_panel(state: SimulatorState):
    """Reset/save buttons and the inputs of the active stage."""
    head, reset_col, save_col = st.columns([4, 1, 1])
    head.subheader("Simulação")
    reset_col.button("Resetar", key="btn_reset", on_click=_on_reset, args=(state,))
    save_col.button("Salvar", key="btn_save", type="primary", on_click=_on_save, args=(state,))

    error = st.session_state.pop(INPUT_ERROR_KEY, None)
    if error:
        st.warning(error)

    for feature in state.active.features:
        render_feature_input(state, feature)


def render_scenario_table(state: SimulatorState, config: SimulatorConfig):
    """
    Comparison table of saved scenarios with a remove action per row.
    
    Args:
        state: Simulator state
        config: Application settings
    """
    if not state.scenarios:
        return

    dec = config.display.prediction_decimals
    st.subheader("Comparação de Cenários")

    widths = [2, 2, 2, 2, 1]
    header = st.columns(widths)
    for col, title in zip(header, ["Cenário", "Modelo", "Pred. Modelo", "Pred. Ensemble", "Ações"]):
        col.markdown(f"**{title}**")

    for scenario in state.scenarios:
        stage = state.stages.get(scenario.stage_id)
        c1, c2, c3, c4, c5 = st.columns(widths)
        c1.write(scenario.label)
        if stage:
            c2.markdown(
                f'<span style="background-color:{stage.color};color:white;'
                f'padding:2px 8px;border-radius:4px">{stage.name}</span>',
                unsafe_allow_html=True,
            )
        else:
            c2.write(scenario.stage_id)
        c3.write(format_percentage(scenario.stage_prediction, dec))
        c4.write(format_percentage(scenario.ensemble_prediction, dec))
        c5.button("Remover", key=f"remove_{scenario.id}", on_click=_on_remove, args=(state, scenario.id))

    render_download_section(state)


def scenario_downloads(state: SimulatorState) -> Tuple[bytes, bytes]:
    """CSV and Excel payloads of the saved scenarios, named after the session's stages."""
    df = scenarios_frame(state.scenarios, state.stages).drop(columns=["id"])
    csv_data = df.to_csv(index=False).encode("utf-8")
    return csv_data, build_scenarios_workbook(state.scenarios, state.stages)


def render_download_section(state: SimulatorState):
    """CSV and Excel downloads of the saved scenarios."""
    csv_data, xlsx_data = scenario_downloads(state)
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "Baixar cenários (CSV)",
            data=csv_data,
            file_name="cenarios.csv",
            mime="text/csv",
            key="dl_csv",
        )
    with col2:
        st.download_button(
            "Baixar cenários (Excel)",
            data=xlsx_data,
            file_name=export_filename(),
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            key="dl_xlsx",
        )


def render_footer():
    st.divider()
    st.caption(
        f"Modelo: RandomForest Ensemble | MAE Validação: {format_number(MAE_REFERENCE['validacao'], 3)}"
    )
    st.caption("⚠️ Simulação aproximada para visualização")
