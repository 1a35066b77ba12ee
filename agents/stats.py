"""per-agent training statistics."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping


@dataclass
class TrainingStats:
    """append-only record of terminal rewards, one per training episode."""

    episodes: int = 0
    rewards: List[float] = field(default_factory=list)

    def record(self, reward: float) -> None:
        self.episodes += 1
        self.rewards.append(float(reward))

    def reset(self) -> None:
        self.episodes = 0
        self.rewards = []

    @property
    def avg_reward(self) -> float:
        return sum(self.rewards) / len(self.rewards) if self.rewards else 0.0

    def _share(self, predicate) -> float:
        if not self.rewards:
            return 0.0
        return sum(1 for r in self.rewards if predicate(r)) / len(self.rewards)

    @property
    def win_rate(self) -> float:
        return self._share(lambda r: r > 0)

    @property
    def draw_rate(self) -> float:
        return self._share(lambda r: r == 0)

    @property
    def loss_rate(self) -> float:
        return self._share(lambda r: r < 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "episodes": self.episodes,
            "rewards": list(self.rewards),
            "winRate": self.win_rate,
            "avgReward": self.avg_reward,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrainingStats":
        """rebuild from ``to_dict`` output; derived fields are recomputed."""
        rewards = [float(r) for r in data.get("rewards", [])]
        episodes = int(data.get("episodes", len(rewards)))
        return cls(episodes=episodes, rewards=rewards)
