"""Training configuration

Defaults live in code; ``configs/train.yaml`` (or any YAML file) overrides
them section by section.
"""

from copy import deepcopy
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

DEFAULT_CONFIG_PATH = Path("configs/train.yaml")

DEFAULT_CONFIG: Dict[str, Any] = {
    "agent": {
        "state_size": 9,
        "action_size": 9,
        "learning_rate": 0.5,
        "discount_factor": 0.9,
        "epsilon": 1.0,
        "epsilon_decay": 0.99,
        "epsilon_min": 0.05,
    },
    "training": {
        "episodes": 2000,
        "eval_interval": 100,
        "eval_games": 200,
        "max_moves": None,
        "agent_player": 1,
        "seed": None,
        "log_path": None,
        "model_dir": "data",
        "model_name": "qlearning_model",
    },
}


@dataclass
class TrainConfig:
    """Training loop configuration."""

    episodes: int = 2000
    eval_interval: int = 100
    eval_games: int = 200
    max_moves: Optional[int] = None
    agent_player: int = 1
    seed: Optional[int] = None
    log_path: Optional[str] = None
    model_dir: str = "data"
    model_name: str = "qlearning_model"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrainConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def _merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load training configuration.

    Falls back to the defaults when the file is missing or unreadable.
    """
    config_file = Path(path) if path is not None else DEFAULT_CONFIG_PATH

    # Default configuration
    config = deepcopy(DEFAULT_CONFIG)

    if config_file.exists():
        try:
            with open(config_file, "r") as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, Mapping):
                raise ValueError("top level must be a mapping")
            _merge(config, file_config)
        except (OSError, ValueError, yaml.YAMLError) as e:
            print(f"Warning: Could not load config file: {e}")
            print("Using default configuration")
    else:
        print(f"Config file {config_file} not found, using defaults")

    return config
