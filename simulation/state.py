#!/usr/bin/env python3
"""
Session state of the simulator.
Owns the current input values of every stage, the active stage and the list
of saved scenarios. One instance lives in st.session_state per browser session.
"""

import logging
import time
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from config.parameters import STAGES, StageSpec
from simulation.engine import ensemble, predict
from simulation.validation import parse_feature_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scenario:
    """Saved, read-only snapshot of one stage's inputs and predictions."""
    id: int
    label: str
    stage_id: str
    values: Mapping[str, float]
    stage_prediction: float
    ensemble_prediction: float

    def to_record(self) -> Dict[str, object]:
        """Flat dict for tables and exports."""
        record = {
            "id": self.id,
            "label": self.label,
            "stage_id": self.stage_id,
            "stage_prediction": self.stage_prediction,
            "ensemble_prediction": self.ensemble_prediction,
        }
        record.update(self.values)
        return record


class SimulatorState:
    """
    Current inputs, active stage and saved scenarios.

    Every stage keeps its own values at all times, so the ensemble reflects
    all three stages even though only the active one is edited on screen.
    """

    def __init__(self, stages: Optional[Mapping[str, StageSpec]] = None,
                 active_stage: Optional[str] = None,
                 input_policy: str = "clamp",
                 label_prefix: str = "Cenário"):
        self.stages = dict(STAGES if stages is None else stages)
        self.input_policy = input_policy
        self.label_prefix = label_prefix
        self.values: Dict[str, Dict[str, float]] = {
            sid: stage.means() for sid, stage in self.stages.items()
        }
        self.active_stage = active_stage if active_stage is not None else list(self.stages)[0]
        self._stage(self.active_stage)
        self.scenarios: List[Scenario] = []
        self._last_id = 0

    def _stage(self, stage_id: str) -> StageSpec:
        if stage_id not in self.stages:
            raise KeyError(f"Unknown stage: {stage_id}. Available: {list(self.stages)}")
        return self.stages[stage_id]

    @property
    def active(self) -> StageSpec:
        return self._stage(self.active_stage)

    def stage_values(self, stage_id: Optional[str] = None) -> Dict[str, float]:
        """Copy of one stage's current values (active stage by default)."""
        sid = self.active_stage if stage_id is None else stage_id
        self._stage(sid)
        return dict(self.values[sid])

    def switch_stage(self, stage_id: str) -> None:
        self._stage(stage_id)
        if stage_id != self.active_stage:
            logger.info("Active stage %s -> %s", self.active_stage, stage_id)
        self.active_stage = stage_id

    def set_value(self, feature_id: str, raw, stage_id: Optional[str] = None) -> float:
        """
        Validate and store a new value for one feature.

        Args:
            feature_id: Feature to change
            raw: Value from the input widget (number or numeric string)
            stage_id: Stage to edit; the active stage when omitted

        Returns:
            The value actually stored (clamped under the "clamp" policy)

        Raises:
            FeatureValueError: the input was rejected; the previous value is kept
        """
        sid = self.active_stage if stage_id is None else stage_id
        feature = self._stage(sid).feature(feature_id)
        value = parse_feature_value(feature, raw, self.input_policy)
        self.values[sid][feature_id] = value
        logger.debug("Set %s/%s = %s", sid, feature_id, value)
        return value

    def reset_stage(self, stage_id: Optional[str] = None) -> None:
        """Put every feature of a stage (active by default) back at its mean."""
        sid = self.active_stage if stage_id is None else stage_id
        self.values[sid] = self._stage(sid).means()
        logger.info("Reset stage %s to feature means", sid)

    def stage_prediction(self, stage_id: Optional[str] = None) -> float:
        sid = self.active_stage if stage_id is None else stage_id
        return predict(self._stage(sid), self.values[sid])

    def ensemble_prediction(self) -> float:
        return ensemble(self.values, self.stages)

    def _next_id(self) -> int:
        # millisecond timestamp, bumped so that ids stay unique and increasing
        scenario_id = max(int(time.time() * 1000), self._last_id + 1)
        self._last_id = scenario_id
        return scenario_id

    def save_scenario(self) -> Scenario:
        """Append a snapshot of the active stage and both current predictions."""
        scenario = Scenario(
            id=self._next_id(),
            label=f"{self.label_prefix} {len(self.scenarios) + 1}",
            stage_id=self.active_stage,
            values=MappingProxyType(self.stage_values()),
            stage_prediction=self.stage_prediction(),
            ensemble_prediction=self.ensemble_prediction(),
        )
        self.scenarios.append(scenario)
        logger.info("Saved %s (%s): stage %.2f%%, ensemble %.2f%%", scenario.label,
                    scenario.stage_id, scenario.stage_prediction, scenario.ensemble_prediction)
        return scenario

    def remove_scenario(self, scenario_id: int) -> bool:
        """
        Delete the scenario with the given id.

        Returns:
            True if a scenario was removed, False if the id was not found
        """
        before = len(self.scenarios)
        self.scenarios = [s for s in self.scenarios if s.id != scenario_id]
        removed = len(self.scenarios) != before
        if removed:
            logger.info("Removed scenario %s", scenario_id)
        return removed
