"""epsilon-greedy action selection with multiplicative epsilon decay."""

from typing import Sequence

import numpy as np

from .q_table import QTable


class EpsilonGreedyPolicy:
    """explore with probability epsilon, otherwise pick the best known action."""

    def __init__(
        self,
        epsilon: float,
        epsilon_decay: float,
        epsilon_min: float,
        rng: np.random.Generator,
    ) -> None:
        self.epsilon = epsilon
        self.epsilon_decay = epsilon_decay
        self.epsilon_min = epsilon_min
        self.rng = rng

    def select_action(
        self,
        q_table: QTable,
        key: str,
        legal_actions: Sequence[int],
        explore: bool = True,
    ) -> int:
        """select action using epsilon-greedy policy.

        args:
            q_table: table holding the current estimates
            key: encoded state
            legal_actions: non-empty list of playable actions
            explore: whether the epsilon draw is made at all

        returns:
            chosen action
        """
        if len(legal_actions) == 0:
            raise ValueError("No legal actions to choose from")

        if explore and self.rng.random() < self.epsilon:
            # explore: random legal action
            return int(legal_actions[self.rng.integers(len(legal_actions))])

        return self.best_action(q_table, key, legal_actions)

    def best_action(self, q_table: QTable, key: str, legal_actions: Sequence[int]) -> int:
        """argmax over legal actions; ties go to the first one listed."""
        if len(legal_actions) == 0:
            raise ValueError("No legal actions to choose from")

        best = int(legal_actions[0])
        best_value = q_table.get(key, best)
        for action in legal_actions[1:]:
            value = q_table.get(key, int(action))
            if value > best_value:
                best, best_value = int(action), value
        return best

    def decay(self) -> float:
        """decay epsilon once, never below epsilon_min."""
        self.epsilon = max(self.epsilon_min, self.epsilon * self.epsilon_decay)
        return self.epsilon
