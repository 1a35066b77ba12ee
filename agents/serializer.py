"""model serialization

converts a TabularQAgent to and from a json-compatible record:

    {
      "qTable": {state_key: {action: value}},
      "epsilon": float,
      "trainingStats": {"episodes", "rewards", "winRate", "avgReward"},
      "hyperparameters": {...},
      "timestamp": iso-8601
    }

models exported from the browser version (``config`` block with
camelCase keys) are accepted as well.
"""

import json
from datetime import datetime, timezone
from numbers import Real
from typing import Any, Dict, Mapping, Optional, Tuple

from .hyperparameters import Hyperparameters
from .q_table import QTable
from .state_key import StateKeyEncoder
from .stats import TrainingStats
from .storage import BlobStore
from .tabular_q import TabularQAgent

MODEL_NAME = "qlearning_model"


class ModelFormatError(ValueError):
    """a persisted model could not be parsed or is missing required fields."""


def to_record(agent: TabularQAgent) -> Dict[str, Any]:
    """snapshot ``agent`` as a plain dict. the agent is not modified."""
    return {
        "qTable": agent.q_table.to_dict(),
        "epsilon": agent.epsilon,
        "trainingStats": agent.stats.to_dict(),
        "hyperparameters": agent.hyperparameters.to_dict(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def dumps(agent: TabularQAgent, indent: Optional[int] = 2) -> str:
    return json.dumps(to_record(agent), indent=indent)


def loads(text: str) -> Dict[str, Any]:
    """parse ``text`` into a record and check its mandatory fields."""
    try:
        record = json.loads(text)
    except (TypeError, ValueError) as e:
        raise ModelFormatError(f"Model is not valid JSON: {e}") from e

    if not isinstance(record, Mapping):
        raise ModelFormatError("Model record must be a JSON object")
    if not isinstance(record.get("qTable"), Mapping):
        raise ModelFormatError("Model record has no qTable")

    return dict(record)


def record_hyperparameters(record: Mapping[str, Any]) -> Optional[Hyperparameters]:
    """hyperparameters stored in ``record``, or None if it carries none."""
    data = record.get("hyperparameters", record.get("config"))
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise ModelFormatError("hyperparameters must be an object")

    try:
        return Hyperparameters.from_dict(data)
    except TypeError as e:
        raise ModelFormatError(f"Invalid hyperparameters: {e}") from e


def decode_record(
    record: Mapping[str, Any],
    hyperparameters: Hyperparameters,
    encoder: Optional[StateKeyEncoder] = None,
) -> Tuple[QTable, float, TrainingStats]:
    """validate ``record`` against ``hyperparameters`` and build its parts.

    every stored state key must be one ``encoder`` could have produced.
    raises ModelFormatError without touching any agent.
    """
    encoder = encoder or StateKeyEncoder(hyperparameters.state_size)
    if not isinstance(record.get("qTable"), Mapping):
        raise ModelFormatError("Model record has no qTable")

    stored = record_hyperparameters(record)
    if stored is not None and stored.action_size != hyperparameters.action_size:
        raise ModelFormatError(
            f"Model has action_size {stored.action_size}, "
            f"agent expects {hyperparameters.action_size}"
        )

    for key in record["qTable"]:
        try:
            canonical = encoder.encode(key)
        except (TypeError, ValueError) as e:
            raise ModelFormatError(f"Invalid state key {key!r}: {e}") from e
        if canonical != key:
            raise ModelFormatError(f"State key {key!r} is not canonical")

    try:
        q_table = QTable.from_dict(record["qTable"], hyperparameters.action_size)
    except (TypeError, ValueError) as e:
        raise ModelFormatError(f"Invalid qTable: {e}") from e

    epsilon = record.get("epsilon")
    if epsilon is None:
        epsilon = hyperparameters.epsilon_min
    elif isinstance(epsilon, bool) or not isinstance(epsilon, Real):
        raise ModelFormatError(f"epsilon {epsilon!r} is not numeric")

    stats_data = record.get("trainingStats")
    if stats_data is None:
        stats = TrainingStats()
    elif not isinstance(stats_data, Mapping):
        raise ModelFormatError("trainingStats must be an object")
    else:
        try:
            stats = TrainingStats.from_dict(stats_data)
        except (TypeError, ValueError) as e:
            raise ModelFormatError(f"Invalid trainingStats: {e}") from e

    return q_table, float(epsilon), stats


def apply_record(agent: TabularQAgent, record: Mapping[str, Any]) -> None:
    """restore ``agent`` from ``record``; all or nothing."""
    q_table, epsilon, stats = decode_record(record, agent.hyperparameters, agent.encoder)
    agent.restore(q_table, epsilon, stats)


def from_record(record: Mapping[str, Any], seed: Optional[int] = None) -> TabularQAgent:
    """build a fresh agent from a record, using its stored hyperparameters."""
    hyperparameters = record_hyperparameters(record) or Hyperparameters()
    agent = TabularQAgent(hyperparameters, seed=seed)
    apply_record(agent, record)
    return agent


def save(agent: TabularQAgent, store: BlobStore, name: str = MODEL_NAME) -> None:
    store.write(name, dumps(agent))


def load(agent: TabularQAgent, store: BlobStore, name: str = MODEL_NAME) -> bool:
    """load ``name`` into ``agent``. returns False if no such blob exists.

    raises ModelFormatError if the blob is malformed; the agent is unchanged.
    """
    text = store.read(name)
    if text is None:
        return False

    apply_record(agent, loads(text))
    return True
