#!/usr/bin/env python3
"""
config_manager.py

Application settings for the simulator page: how edited values are checked,
how numbers are displayed and how logging is set up. Settings come from
defaults, a JSON file, or the file named by the SIMULADOR_CONFIG variable.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict
from typing import Dict, Any, List, Optional

from config.parameters import STAGE_ORDER

CONFIG_ENV_VAR = "SIMULADOR_CONFIG"

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class InputPolicy:
    """What happens to a slider/number value outside its feature range"""
    out_of_range: str = "clamp"  # "clamp" or "reject"

    def validate(self) -> List[str]:
        errors = []
        if not isinstance(self.out_of_range, str) or self.out_of_range not in ["clamp", "reject"]:
            errors.append("Out-of-range policy must be 'clamp' or 'reject'")
        return errors


@dataclass
class DisplaySettings:
    """Page title, default stage and number formatting"""
    page_title: str = "Simulador de Predição de Inutilizados"
    default_stage: str = "B2"
    prediction_decimals: int = 2
    mae_decimals: int = 3
    scenario_label_prefix: str = "Cenário"

    def validate(self) -> List[str]:
        errors = []
        if not isinstance(self.page_title, str) or not self.page_title.strip():
            errors.append("Page title must be a non-empty string")
        if not isinstance(self.default_stage, str) or self.default_stage not in STAGE_ORDER:
            errors.append(f"Default stage must be one of {STAGE_ORDER}")
        if not _is_int(self.prediction_decimals) or not 0 <= self.prediction_decimals <= 6:
            errors.append("Prediction decimals must be an integer between 0 and 6")
        if not _is_int(self.mae_decimals) or not 0 <= self.mae_decimals <= 6:
            errors.append("MAE decimals must be an integer between 0 and 6")
        if not isinstance(self.scenario_label_prefix, str) or not self.scenario_label_prefix.strip():
            errors.append("Scenario label prefix must be a non-empty string")
        return errors


@dataclass
class LoggingSettings:
    """Root logger level and format"""
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    def validate(self) -> List[str]:
        errors = []
        if not isinstance(self.level, str) or self.level.upper() not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            errors.append(f"Unknown log level: {self.level!r}")
        if not isinstance(self.format, str):
            errors.append("Log format must be a string")
        return errors


class SimulatorConfig:
    """
    Groups all application settings and handles (de)serialization.
    """

    def __init__(self):
        self.inputs = InputPolicy()
        self.display = DisplaySettings()
        self.logging = LoggingSettings()

    def _sections(self) -> Dict[str, Any]:
        return {
            "inputs": self.inputs,
            "display": self.display,
            "logging": self.logging,
        }

    def validate_all(self) -> Dict[str, List[str]]:
        """Validate all configuration sections and return any errors"""
        errors = {}
        for section_name, section in self._sections().items():
            section_errors = section.validate()
            if section_errors:
                errors[section_name] = section_errors
        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for serialization"""
        return {name: asdict(section) for name, section in self._sections().items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulatorConfig':
        """Create configuration from dictionary"""
        config = cls()

        if "inputs" in data:
            config.inputs = InputPolicy(**data["inputs"])
        if "display" in data:
            config.display = DisplaySettings(**data["display"])
        if "logging" in data:
            config.logging = LoggingSettings(**data["logging"])

        return config

    def save_to_file(self, filepath: str):
        """Save configuration to JSON file"""
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'SimulatorConfig':
        """Load configuration from JSON file"""
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls.from_dict(data)


def load_config(filepath: Optional[str] = None) -> SimulatorConfig:
    """
    Load settings from a file, the SIMULADOR_CONFIG variable, or defaults.

    Raises:
        ValueError: the settings are malformed or fail validation
    """
    filepath = filepath or os.environ.get(CONFIG_ENV_VAR)
    if not filepath:
        return SimulatorConfig()

    try:
        config = SimulatorConfig.load_from_file(filepath)
    except TypeError as e:
        raise ValueError(f"Unknown setting in {filepath}: {e}") from e

    errors = config.validate_all()
    if errors:
        lines = [f"{section}: {msg}" for section, msgs in errors.items() for msg in msgs]
        raise ValueError(f"Invalid configuration in {filepath}:\n- " + "\n- ".join(lines))

    logger.info("Loaded settings from %s", filepath)
    return config
