"""Game environments for self-play training."""

from .base import GameEnvironment, State, Winner
from .tictactoe import TicTacToeEnv

__all__ = ["GameEnvironment", "State", "Winner", "TicTacToeEnv"]
