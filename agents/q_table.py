"""sparse q-table

maps state keys to dense per-state action rows, created lazily on first use.
"""

from typing import Dict, Iterator, Mapping, Optional

import numpy as np


class QTable:
    """state key -> q-values for every action of the game.

    a row is materialized (all zeros) the first time a state is read or
    written. rows are never evicted.
    """

    def __init__(self, action_size: int) -> None:
        self.action_size = action_size
        self._rows: Dict[str, np.ndarray] = {}

    def row(self, key: str) -> np.ndarray:
        """get q-values for state, initializing if necessary."""
        if key not in self._rows:
            self._rows[key] = np.zeros(self.action_size, dtype=np.float64)
        return self._rows[key]

    def valid_action(self, action: int) -> bool:
        """whether ``action`` indexes a cell of every row."""
        if isinstance(action, bool) or not isinstance(action, (int, np.integer)):
            return False
        return 0 <= action < self.action_size

    def _check_action(self, action: int) -> None:
        if not self.valid_action(action):
            raise ValueError(f"Action {action!r} out of range 0-{self.action_size - 1}")

    def get(self, key: str, action: int) -> float:
        """raises ValueError for an action outside the table."""
        self._check_action(action)
        return float(self.row(key)[action])

    def set(self, key: str, action: int, value: float) -> None:
        self._check_action(action)
        self.row(key)[action] = value

    def has(self, key: str) -> bool:
        """whether ``key`` has been seen, without materializing it."""
        return key in self._rows

    def peek(self, key: str) -> Optional[np.ndarray]:
        """row for ``key`` if seen, else None. never materializes."""
        return self._rows.get(key)

    def size(self) -> int:
        """number of distinct states."""
        return len(self._rows)

    def total_entries(self) -> int:
        """sum of per-state action counts."""
        return sum(len(r) for r in self._rows.values())

    def keys(self) -> Iterator[str]:
        return iter(self._rows)

    def clear(self) -> None:
        self._rows.clear()

    def replace_with(self, other: "QTable") -> None:
        """take over the rows of ``other`` (same action size)."""
        self._rows = {key: row.copy() for key, row in other._rows.items()}

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        """deep copy as nested plain dicts (json compatible)."""
        return {
            key: {str(a): float(v) for a, v in enumerate(row)}
            for key, row in self._rows.items()
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping], action_size: int) -> "QTable":
        """build a table from ``to_dict`` output.

        actions missing from a row are zero-filled.

        raises:
            ValueError: a row is not a mapping, or an action/value is invalid
        """
        table = cls(action_size)
        for key, entries in data.items():
            if not isinstance(entries, Mapping):
                raise ValueError(f"Row for state {key!r} is not a mapping")
            row = np.zeros(action_size, dtype=np.float64)
            for action, value in entries.items():
                a = int(action)
                if not 0 <= a < action_size:
                    raise ValueError(f"Action {action!r} out of range for state {key!r}")
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ValueError(f"Q-value {value!r} for state {key!r} is not numeric")
                row[a] = float(value)
            table._rows[str(key)] = row
        return table

    def __contains__(self, key: str) -> bool:
        return key in self._rows

    def __len__(self) -> int:
        return len(self._rows)
