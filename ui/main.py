#!/usr/bin/env python3
"""
Main Streamlit application for the defect-rate simulator.
Orchestrates the UI components around the session's simulator state.
"""

import logging
from typing import Optional, Tuple

import streamlit as st

from analysis.metrics import recompute
from config_manager import SimulatorConfig, load_config
from simulation.state import SimulatorState
from simulation.validation import preflight_validate
from ui.components import (
    render_metric_cards, render_stage_selector, render_importance_panel,
    render_simulation_panel, render_scenario_table, render_footer
)
from utils.helpers import configure_logging

STATE_KEY = "simulator"

logger = logging.getLogger(__name__)


def load_settings() -> Tuple[SimulatorConfig, Optional[str]]:
    """
    Load application settings, falling back to defaults on error.
    
    Returns:
        tuple: (config, error message or None)
    """
    try:
        return load_config(), None
    except (OSError, ValueError) as e:
        return SimulatorConfig(), str(e)


def initialize_streamlit(config: SimulatorConfig):
    """Initialize Streamlit configuration and page setup."""
    st.set_page_config(page_title=config.display.page_title, layout="wide")
    st.title(config.display.page_title)


def get_state(config: SimulatorConfig) -> SimulatorState:
    """
    Simulator state of this browser session, created on first use.
    
    Args:
        config: Application settings
    
    Returns:
        SimulatorState stored in st.session_state
    """
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = SimulatorState(
            active_stage=config.display.default_stage,
            input_policy=config.inputs.out_of_range,
            label_prefix=config.display.scenario_label_prefix,
        )
        logger.info("New simulator session (active stage %s)", config.display.default_stage)
    return st.session_state[STATE_KEY]


def main():
    """Main application entry point."""
    config, config_error = load_settings()
    configure_logging(config.logging.level.upper(), config.logging.format)
    initialize_streamlit(config)

    if config_error:
        logger.error("Invalid settings: %s", config_error)
        st.error(f"Configuração inválida:\n\n{config_error}")
        st.stop()

    state = get_state(config)
    if not preflight_validate(state.stages):
        st.stop()

    st.caption("Modelo Ensemble: " + " + ".join(stage.name for stage in state.stages.values()))

    view = recompute(state)
    render_metric_cards(state, view, config)
    render_stage_selector(state)

    left, right = st.columns(2)
    with left:
        render_importance_panel(state)
    with right:
        render_simulation_panel(state)

    render_scenario_table(state, config)
    render_footer()


if __name__ == "__main__":
    main()
