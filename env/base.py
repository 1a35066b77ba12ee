"""Game Environment Interface

Defines the capability interface a two-player grid game must provide so the
learning core can drive it. Environments are stateless rule books: every
operation takes the position explicitly and returns a new one.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

# Canonical, immutable position: one marker per cell in fixed order.
State = Tuple[int, ...]


class Winner:
    """Result codes returned by GameEnvironment.winner()."""

    DRAW = 0
    PLAYER1 = 1
    PLAYER2 = 2


class GameEnvironment(ABC):
    """Abstract deterministic, perfect-information two-player game.

    Subclasses define the board size through ``state_size`` and
    ``action_size``. Player one always moves first.
    """

    state_size: int
    action_size: int

    @abstractmethod
    def reset(self) -> State:
        """Return the initial position."""

    @abstractmethod
    def legal_actions(self, state: State) -> List[int]:
        """Return the ordered legal actions for ``state``."""

    @abstractmethod
    def apply(self, state: State, action: int, player: int) -> State:
        """Return the position after ``player`` plays ``action``.

        Raises gymnasium.error.InvalidAction if the move is illegal.
        """

    @abstractmethod
    def winner(self, state: State) -> Optional[int]:
        """Return None while the game is ongoing, else a Winner code."""

    @staticmethod
    def other(player: int) -> int:
        """Return the opponent of ``player``."""
        return 3 - player

    def render(self, state: State) -> str:
        """Plain-text rendering of ``state``."""
        return " ".join(str(v) for v in state)
