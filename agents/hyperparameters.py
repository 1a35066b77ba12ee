"""hyperparameters of the tabular agent."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping

# camelCase names used by models exported from the browser version. their
# stateSize counts reachable positions, not board cells, so it is not mapped.
_LEGACY_KEYS = {
    "actionSize": "action_size",
    "learningRate": "learning_rate",
    "discountFactor": "discount_factor",
    "epsilonDecay": "epsilon_decay",
    "epsilonMin": "epsilon_min",
}


@dataclass(frozen=True)
class Hyperparameters:
    """learning configuration, fixed for the lifetime of an agent.

    ``epsilon`` is the starting exploration rate; the live value is owned by
    the policy. values are taken as given, without range checks.
    """

    state_size: int = 9
    action_size: int = 9
    learning_rate: float = 0.1
    discount_factor: float = 0.95
    epsilon: float = 1.0
    epsilon_decay: float = 0.995
    epsilon_min: float = 0.01

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Hyperparameters":
        """build from a mapping; unknown keys are ignored, missing use defaults."""
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            key = _LEGACY_KEYS.get(key, key)
            if key in known and value is not None:
                values[key] = value
        return cls(**values)
