"""Tic-Tac-Toe Environment Implementation

A gymnasium-flavoured tic-tac-toe rule book implementing GameEnvironment.
"""

from typing import List, Optional

import numpy as np
from gymnasium import spaces
from gymnasium.error import InvalidAction

from .base import GameEnvironment, State, Winner


class TicTacToeEnv(GameEnvironment):
    """Tic-Tac-Toe on a 3x3 board.

    Observation Space: Box(0, 2, (9,), uint8)
        - 0: empty cell
        - 1: player one (X, moves first)
        - 2: player two (O)

    Action Space: Discrete(9) - cell index, row-major
    """

    # Winning lines (rows, columns, diagonals)
    WIN_LINES = (
        (0, 1, 2), (3, 4, 5), (6, 7, 8),
        (0, 3, 6), (1, 4, 7), (2, 5, 8),
        (0, 4, 8), (2, 4, 6),
    )

    def __init__(self) -> None:
        self.rows = 3
        self.cols = 3
        self.state_size = self.rows * self.cols
        self.action_size = self.state_size

        # Gymnasium spaces
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(self.state_size,), dtype=np.uint8
        )
        self.action_space = spaces.Discrete(self.action_size)

    def reset(self) -> State:
        """Return the empty board."""
        return (0,) * self.state_size

    def legal_actions(self, state: State) -> List[int]:
        """Get list of legal actions (empty cells)."""
        return [i for i, v in enumerate(state) if v == 0]

    def apply(self, state: State, action: int, player: int) -> State:
        """Place ``player``'s marker on ``action`` and return the new board."""
        if self.winner(state) is not None:
            raise InvalidAction("Game is already over")

        if not (0 <= action < self.action_size):
            raise InvalidAction(f"Invalid action {action}, must be 0-{self.action_size - 1}")

        if state[action] != 0:
            raise InvalidAction(f"Cell {action} is occupied")

        board = list(state)
        board[action] = player
        return tuple(board)

    def winner(self, state: State) -> Optional[int]:
        """Check for a three-in-a-row, a full board, or an ongoing game."""
        for a, b, c in self.WIN_LINES:
            if state[a] != 0 and state[a] == state[b] == state[c]:
                return state[a]

        if all(v != 0 for v in state):
            return Winner.DRAW

        return None

    def render(self, state: State) -> str:
        """Render the board with cell numbers for empty squares."""
        symbols = {1: "X", 2: "O"}
        lines = []
        for row in range(self.rows):
            cells = []
            for col in range(self.cols):
                idx = row * self.cols + col
                cells.append(symbols.get(state[idx], str(idx)))
            lines.append(" " + " | ".join(cells) + " ")
        return "\n---+---+---\n".join(lines) + "\n"
