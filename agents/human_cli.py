"""human cli agent

allows human players to play against a trained agent via command line.
"""

from typing import Callable, Optional, Sequence

from env.base import State

from .base import Agent


class HumanCLIAgent(Agent):
    """human agent that gets moves from command line input."""

    def __init__(
        self,
        name: str = "Human",
        render: Optional[Callable[[State], str]] = None,
        input_fn: Optional[Callable[[str], str]] = None,
    ) -> None:
        super().__init__(name)
        self.render = render
        self.input_fn = input_fn

    def act(self, state: State, legal_actions: Sequence[int]) -> int:
        """get move from human player via cli."""
        if self.render is not None:
            print("\nCurrent board:")
            print(self.render(state))

        if not legal_actions:
            raise ValueError("No valid moves available")

        print(f"Valid moves: {list(legal_actions)}")

        read = self.input_fn or input

        while True:
            try:
                move_input = read("Enter your move: ").strip()

                if not move_input:
                    continue

                move = int(move_input)

                if move in legal_actions:
                    return move
                else:
                    print(f"Invalid move {move}. Valid moves are: {list(legal_actions)}")

            except ValueError:
                print("Please enter a valid number")
