"""state key encoding

canonicalizes a game position into the string key used by the q-table.
"""

from typing import Sequence, Union

import numpy as np

StateLike = Union[str, Sequence[int], np.ndarray]


class StateKeyEncoder:
    """encode fixed-length positions as one digit per cell.

    fields are written in the cell order of the state (row-major for grids),
    so two representations of the same position always yield the same key.
    every cell must be a single digit, which rules out collisions such as
    ``[1, 23]`` vs ``[12, 3]``.
    """

    def __init__(self, length: int) -> None:
        self.length = length

    def encode(self, state: StateLike) -> str:
        """return the canonical key for ``state``.

        args:
            state: digit string, sequence of ints or numpy array

        returns:
            string of ``length`` digits

        raises:
            ValueError: wrong length or a cell outside 0-9
        """
        if isinstance(state, str):
            cells = list(state)
            if not all(c in "0123456789" for c in cells):
                raise ValueError(f"State string {state!r} must contain digits only")
            key = state
        else:
            if isinstance(state, np.ndarray):
                state = state.flatten().tolist()
            cells = list(state)
            for value in cells:
                try:
                    digit = not isinstance(value, bool) and int(value) == value and 0 <= value <= 9
                except (TypeError, ValueError):
                    digit = False
                if not digit:
                    raise ValueError(f"Cell value {value!r} is not a single digit")
            key = "".join(str(int(v)) for v in cells)

        if len(cells) != self.length:
            raise ValueError(f"State has {len(cells)} cells, expected {self.length}")

        return key

    def decode(self, key: str) -> tuple:
        """inverse of encode for keys produced by this encoder."""
        return tuple(int(c) for c in self.encode(key))

    def __call__(self, state: StateLike) -> str:
        return self.encode(state)
