"""
YAML configuration loader for strategies.

Loads strategy configurations from YAML files, allowing easy sharing
and modification of strategies without code changes. Missing keys fall back
to the dataclass defaults; unknown keys are rejected.
"""
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Type, TypeVar, Union

import yaml

from .config import BacktestConfig, IndicatorConfig, ScoringWeights, StrategyConfig

T = TypeVar("T")

# YAML section -> config class
SECTIONS = {
    "indicators": IndicatorConfig,
    "scoring": ScoringWeights,
    "backtest": BacktestConfig,
}


def _build_section(cls: Type[T], section: str, values: Any) -> T:
    if values is None:
        return cls()
    if not isinstance(values, dict):
        raise ValueError(f"Section '{section}' must be a mapping, got {type(values).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown keys in section '{section}': {unknown}. Valid: {sorted(known)}")
    return cls(**values)


def config_from_dict(config_dict: Dict[str, Any], default_name: str = "custom") -> StrategyConfig:
    """
    Build a StrategyConfig from a nested dict (the parsed YAML document).

    Raises:
        ValueError: On unknown sections/keys or invalid values
    """
    unknown = sorted(set(config_dict) - set(SECTIONS) - {"name", "description"})
    if unknown:
        raise ValueError(f"Unknown config sections: {unknown}")

    return StrategyConfig(
        name=config_dict.get("name", default_name),
        description=config_dict.get("description", ""),
        indicators=_build_section(IndicatorConfig, "indicators", config_dict.get("indicators")),
        weights=_build_section(ScoringWeights, "scoring", config_dict.get("scoring")),
        backtest=_build_section(BacktestConfig, "backtest", config_dict.get("backtest")),
    )


def load_config_from_yaml(yaml_path: Union[str, Path]) -> StrategyConfig:
    """
    Load strategy configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        StrategyConfig object

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is invalid or contains unknown fields
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if not config_dict:
        raise ValueError(f"Empty config file: {yaml_path}")
    if not isinstance(config_dict, dict):
        raise ValueError(f"Config file must contain a mapping: {yaml_path}")

    return config_from_dict(config_dict, default_name=yaml_path.stem)
