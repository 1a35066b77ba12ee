"""agent interface

anything that can pick a move in a GameEnvironment position.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from env.base import State


class Agent(ABC):
    """a named player.

    the episode runner calls reset() before every game and act() on every
    turn the agent owns.
    """

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def act(self, state: State, legal_actions: Sequence[int]) -> int:
        """pick a move.

        args:
            state: board tuple from the environment
            legal_actions: non-empty, in environment order

        returns:
            one of ``legal_actions`` (anything else is an illegal move)
        """

    def reset(self) -> None:
        """per-game hook; learned state is kept."""

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"

    __repr__ = __str__
