"""one-step q-learning update."""

from .q_table import QTable


class QLearner:
    """applies Q(s,a) <- Q(s,a) + alpha * (r + gamma * max_a' Q(s',a') - Q(s,a))."""

    def __init__(self, q_table: QTable, learning_rate: float, discount_factor: float) -> None:
        self.q_table = q_table
        self.learning_rate = learning_rate
        self.discount_factor = discount_factor

    def max_next(self, next_key: str) -> float:
        """best recorded value of the successor state, 0 if never seen.

        the max runs over every action recorded for the state, legal or not.
        illegal actions hold their initial 0, so a state whose legal actions
        are all negative still reports 0. known approximation; legality is not
        tracked at update time.
        """
        row = self.q_table.peek(next_key)
        if row is None or len(row) == 0:
            return 0.0
        return float(row.max())

    def update(self, key: str, action: int, reward: float, next_key: str, done: bool) -> float:
        """update q-value for one transition and return the new value."""
        current_q = self.q_table.get(key, action)
        max_next_q = 0.0 if done else self.max_next(next_key)

        new_q = current_q + self.learning_rate * (
            reward + self.discount_factor * max_next_q - current_q
        )
        self.q_table.set(key, action, new_q)
        return new_q
