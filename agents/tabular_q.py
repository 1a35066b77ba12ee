"""tabular q-learning agent

q-learning with a sparse q-table, epsilon-greedy exploration and
per-episode epsilon decay, for any GameEnvironment.
"""

from typing import Any, Dict, Optional, Sequence

import numpy as np

from env.base import State

from .base import Agent
from .hyperparameters import Hyperparameters
from .learner import QLearner
from .policy import EpsilonGreedyPolicy
from .q_table import QTable
from .state_key import StateKeyEncoder, StateLike
from .stats import TrainingStats
from .storage import BlobStore


class TabularQAgent(Agent):
    """tabular q-learning agent with epsilon-greedy policy.

    the agent owns its q-table, statistics and random generator. the
    generator is shared by exploration and, during self-play, by the
    default random opponent, so one seed reproduces a whole run.
    reset() between games keeps what was learned; reset_learning() wipes it.
    """

    def __init__(
        self,
        hyperparameters: Optional[Hyperparameters] = None,
        name: str = "TabularQ",
        seed: Optional[int] = None,
        encoder: Optional[StateKeyEncoder] = None,
    ) -> None:
        super().__init__(name)
        self.hyperparameters = hyperparameters or Hyperparameters()
        hp = self.hyperparameters

        self.encoder = encoder or StateKeyEncoder(hp.state_size)
        self.rng = np.random.default_rng(seed)

        self.q_table = QTable(hp.action_size)
        self.policy = EpsilonGreedyPolicy(hp.epsilon, hp.epsilon_decay, hp.epsilon_min, self.rng)
        self.learner = QLearner(self.q_table, hp.learning_rate, hp.discount_factor)
        self.stats = TrainingStats()

        self.training_mode = True

    @property
    def epsilon(self) -> float:
        return self.policy.epsilon

    def seed(self, seed: Optional[int]) -> None:
        """reseed the agent's generator in place.

        anything holding a reference to ``self.rng`` sees the new stream.
        """
        self.rng.bit_generator.state = np.random.default_rng(seed).bit_generator.state

    def encode(self, state: StateLike) -> str:
        return self.encoder.encode(state)

    def act(
        self,
        state: State,
        legal_actions: Sequence[int],
        explore: Optional[bool] = None,
    ) -> int:
        """select action using epsilon-greedy policy.

        args:
            state: current position
            legal_actions: non-empty list of playable actions
            explore: override for exploration, defaults to training mode

        returns:
            chosen action
        """
        if explore is None:
            explore = self.training_mode
        return self.policy.select_action(self.q_table, self.encode(state), legal_actions, explore)

    def best_action(self, state: StateLike, legal_actions: Sequence[int]) -> int:
        return self.policy.best_action(self.q_table, self.encode(state), legal_actions)

    def get_q_value(self, state: StateLike, action: int) -> float:
        return self.q_table.get(self.encode(state), action)

    def set_q_value(self, state: StateLike, action: int, value: float) -> None:
        self.q_table.set(self.encode(state), action, value)

    def update(
        self,
        state: StateLike,
        action: int,
        reward: float,
        next_state: StateLike,
        done: bool,
    ) -> float:
        """apply one q-learning update and return the new value."""
        return self.learner.update(
            self.encode(state), action, reward, self.encode(next_state), done
        )

    def decay_epsilon(self) -> float:
        return self.policy.decay()

    def end_episode(self, final_reward: float) -> None:
        """record the episode result and decay epsilon once."""
        self.stats.record(final_reward)
        self.decay_epsilon()

    def set_training_mode(self, training: bool) -> None:
        """set whether agent explores by default."""
        self.training_mode = training

    def reset_learning(self) -> None:
        """forget everything learned: table, epsilon and statistics."""
        self.q_table.clear()
        self.policy.epsilon = self.hyperparameters.epsilon
        self.stats.reset()

    def restore(self, q_table: QTable, epsilon: float, stats: TrainingStats) -> None:
        """replace learned state wholesale (used by the serializer)."""
        self.q_table.replace_with(q_table)
        self.policy.epsilon = epsilon
        self.stats = stats

    def get_stats(self) -> Dict[str, Any]:
        """get training statistics."""
        return {
            "episodes": self.stats.episodes,
            "avg_reward": self.stats.avg_reward,
            "win_rate": self.stats.win_rate,
            "epsilon": self.epsilon,
            "q_table_size": self.q_table.size(),
            "total_q_values": self.q_table.total_entries(),
        }

    def export_model(self) -> str:
        """json snapshot of table, epsilon, statistics and hyperparameters."""
        from .serializer import dumps

        return dumps(self)

    def import_model(self, text: str) -> bool:
        """load a json snapshot; on failure nothing changes and False is returned."""
        from .serializer import ModelFormatError, apply_record, loads

        try:
            apply_record(self, loads(text))
        except ModelFormatError:
            return False
        return True

    def save_model(self, store: BlobStore, name: Optional[str] = None) -> None:
        from .serializer import MODEL_NAME, save

        save(self, store, name or MODEL_NAME)

    def load_model(self, store: BlobStore, name: Optional[str] = None) -> bool:
        """load from ``store``; False if the blob is missing or malformed."""
        from .serializer import MODEL_NAME, ModelFormatError, load

        try:
            return load(self, store, name or MODEL_NAME)
        except ModelFormatError:
            return False
