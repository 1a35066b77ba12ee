"""Episode Runner

Plays one game between the learning agent and an opponent policy and
records the learning agent's decisions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from gymnasium.error import InvalidAction

from agents.base import Agent
from agents.tabular_q import TabularQAgent
from env.base import GameEnvironment, State, Winner


class Outcome(Enum):
    """Terminal result from the learning agent's point of view."""

    WIN = "win"
    DRAW = "draw"
    LOSS = "loss"
    INVALID = "invalid"        # agent played an illegal move
    FORFEIT = "forfeit"        # opponent played an illegal move
    TRUNCATED = "truncated"    # move cap reached

    @property
    def reward(self) -> float:
        return _REWARDS[self]


_REWARDS = {
    Outcome.WIN: 1.0,
    Outcome.DRAW: 0.0,
    Outcome.LOSS: -1.0,
    Outcome.INVALID: -1.0,
    Outcome.FORFEIT: 1.0,
    Outcome.TRUNCATED: 0.0,
}


@dataclass
class Episode:
    """Result of one play-through."""

    outcome: Outcome
    final_state: State
    moves: int
    # (state, action) for every decision of the learning agent, in order
    trajectory: List[Tuple[State, int]] = field(default_factory=list)

    @property
    def reward(self) -> float:
        return self.outcome.reward

    @property
    def states(self) -> List[State]:
        """Positions in which the learning agent had to move."""
        return [state for state, _ in self.trajectory]


class EpisodeRunner:
    """Drives one game of ``agent`` against ``opponent`` on ``env``.

    Args:
        env: rule book of the game
        agent: the learning agent
        opponent: any Agent; it is not trained
        agent_player: 1 to move first, 2 to move second
        max_moves: safety cap on plies, defaults to state_size + 2
    """

    def __init__(
        self,
        env: GameEnvironment,
        agent: TabularQAgent,
        opponent: Agent,
        agent_player: int = Winner.PLAYER1,
        max_moves: Optional[int] = None,
    ) -> None:
        self.env = env
        self.agent = agent
        self.opponent = opponent
        self.agent_player = agent_player
        self.max_moves = max_moves if max_moves is not None else env.state_size + 2

    def _outcome(self, winner: int) -> Outcome:
        if winner == Winner.DRAW:
            return Outcome.DRAW
        return Outcome.WIN if winner == self.agent_player else Outcome.LOSS

    def run(self, explore: bool = True) -> Episode:
        """Play until a terminal outcome.

        Illegal moves end the game instead of raising: the agent's own
        illegal move is penalised, the opponent's is a forfeit.
        """
        self.agent.reset()
        self.opponent.reset()

        state = self.env.reset()
        player = Winner.PLAYER1
        trajectory: List[Tuple[State, int]] = []
        moves = 0

        while True:
            if moves >= self.max_moves:
                return Episode(Outcome.TRUNCATED, state, moves, trajectory)

            legal = self.env.legal_actions(state)
            if not legal:
                # faulty terminal detection; nothing left to play
                return Episode(Outcome.TRUNCATED, state, moves, trajectory)

            if player == self.agent_player:
                action = self.agent.act(state, legal, explore=explore)
                trajectory.append((state, action))
            else:
                action = self.opponent.act(state, legal)

            try:
                state = self.env.apply(state, action, player)
            except InvalidAction:
                outcome = Outcome.INVALID if player == self.agent_player else Outcome.FORFEIT
                return Episode(outcome, state, moves, trajectory)
            moves += 1

            winner = self.env.winner(state)
            if winner is not None:
                return Episode(self._outcome(winner), state, moves, trajectory)

            player = self.env.other(player)
