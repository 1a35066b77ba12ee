"""random agent

a baseline agent that selects random legal moves.
"""

from typing import Optional, Sequence

import numpy as np

from env.base import State

from .base import Agent


class RandomAgent(Agent):
    """agent that selects uniformly random legal moves."""

    def __init__(
        self,
        name: str = "Random",
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        super().__init__(name)
        # pass the owning agent's generator to share one random stream
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def act(self, state: State, legal_actions: Sequence[int]) -> int:
        """select a random legal action."""
        if len(legal_actions) == 0:
            raise ValueError("No valid moves available")

        return int(legal_actions[self.rng.integers(len(legal_actions))])
