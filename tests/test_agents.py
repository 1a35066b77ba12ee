"""Unit Tests for Agents

The tabular q-learning agent façade, the random baseline and the human
command-line agent.
"""

import numpy as np
import pytest

from agents import HumanCLIAgent, Hyperparameters, RandomAgent, TabularQAgent
from env import TicTacToeEnv

EMPTY = (0,) * 9


class TestTabularQAgent:
    """Test suite for TabularQAgent."""

    def test_fresh_state_reads_zero(self):
        """Test lazy initialization through the agent."""
        agent = TabularQAgent()

        assert all(agent.get_q_value(EMPTY, a) == 0.0 for a in range(9))

        stats = agent.get_stats()
        assert stats["q_table_size"] == 1
        assert stats["total_q_values"] == 9

    def test_initial_stats(self):
        """Test statistics of an untrained agent."""
        agent = TabularQAgent(Hyperparameters(epsilon=0.7))

        assert agent.get_stats() == {
            "episodes": 0,
            "avg_reward": 0.0,
            "win_rate": 0.0,
            "epsilon": 0.7,
            "q_table_size": 0,
            "total_q_values": 0,
        }

    def test_greedy_act_uses_q_values(self):
        """Test that act without exploration returns the best legal move."""
        agent = TabularQAgent()
        agent.set_q_value(EMPTY, 6, 0.8)

        assert agent.act(EMPTY, list(range(9)), explore=False) == 6
        assert agent.best_action(EMPTY, [0, 1, 2]) == 0

    def test_training_mode_controls_default_exploration(self):
        """Test that evaluation mode never explores."""
        agent = TabularQAgent(Hyperparameters(epsilon=1.0), seed=3)
        agent.set_q_value(EMPTY, 4, 1.0)
        agent.set_training_mode(False)

        assert all(agent.act(EMPTY, list(range(9))) == 4 for _ in range(50))

    def test_update_and_end_episode(self):
        """Test one update followed by episode bookkeeping."""
        agent = TabularQAgent(Hyperparameters(learning_rate=0.5, epsilon=1.0,
                                              epsilon_decay=0.5, epsilon_min=0.3))
        terminal = (1, 1, 1, 2, 2, 0, 0, 0, 0)
        before = (1, 1, 0, 2, 2, 0, 0, 0, 0)

        assert agent.update(before, 2, 1.0, terminal, True) == pytest.approx(0.5)

        agent.end_episode(1.0)
        agent.end_episode(-1.0)
        stats = agent.get_stats()
        assert stats["episodes"] == 2
        assert stats["avg_reward"] == 0.0
        assert stats["win_rate"] == 0.5
        assert stats["epsilon"] == 0.3

    def test_seed_reproducibility(self):
        """Test that reseeding replays the same exploration stream."""
        agent = TabularQAgent(Hyperparameters(epsilon=1.0))
        legal = list(range(9))

        agent.seed(11)
        first = [agent.act(EMPTY, legal) for _ in range(20)]
        agent.seed(11)
        second = [agent.act(EMPTY, legal) for _ in range(20)]

        assert first == second

    def test_reseed_is_in_place(self):
        """Test that a shared generator follows a reseed."""
        agent = TabularQAgent(seed=1)
        shared = agent.rng

        agent.seed(5)

        assert agent.rng is shared
        assert shared.random() == np.random.default_rng(5).random()

    def test_reset_learning(self):
        """Test that reset_learning clears table, epsilon and stats."""
        agent = TabularQAgent(Hyperparameters(epsilon=0.9))
        agent.set_q_value(EMPTY, 0, 1.0)
        agent.end_episode(1.0)

        agent.reset_learning()

        stats = agent.get_stats()
        assert stats["q_table_size"] == 0
        assert stats["episodes"] == 0
        assert stats["epsilon"] == 0.9

    def test_per_game_reset_keeps_learning(self):
        """Test that the between-games hook leaves table, epsilon and stats alone."""
        agent = TabularQAgent(Hyperparameters(epsilon=0.9, epsilon_decay=0.5))
        agent.set_q_value(EMPTY, 0, 1.0)
        agent.end_episode(1.0)

        agent.reset()

        stats = agent.get_stats()
        assert stats["q_table_size"] == 1
        assert stats["episodes"] == 1
        assert stats["epsilon"] == pytest.approx(0.45)
        assert agent.get_q_value(EMPTY, 0) == 1.0

    def test_tables_are_not_shared(self):
        """Test that two agents own independent tables."""
        a = TabularQAgent()
        b = TabularQAgent()
        a.set_q_value(EMPTY, 0, 1.0)

        assert b.get_q_value(EMPTY, 0) == 0.0

    def test_malformed_state_rejected(self):
        """Test that the encoder guards the table boundary."""
        agent = TabularQAgent()

        with pytest.raises(ValueError):
            agent.get_q_value((0,) * 4, 0)


class TestRandomAgent:
    """Test suite for RandomAgent."""

    def test_only_legal_moves(self):
        """Test that every pick is legal and all legal moves occur."""
        agent = RandomAgent(seed=0)
        legal = [1, 3, 5]

        picks = {agent.act(EMPTY, legal) for _ in range(200)}

        assert picks == set(legal)

    def test_seeded_sequences_match(self):
        """Test determinism under a fixed seed."""
        a = RandomAgent(seed=9)
        b = RandomAgent(seed=9)
        legal = list(range(9))

        assert [a.act(EMPTY, legal) for _ in range(10)] == [b.act(EMPTY, legal) for _ in range(10)]

    def test_no_moves(self):
        """Test that an empty move list is an error."""
        with pytest.raises(ValueError):
            RandomAgent(seed=0).act(EMPTY, [])

    def test_str(self):
        """Test string representation."""
        assert str(RandomAgent()) == "RandomAgent(Random)"


class TestHumanCLIAgent:
    """Test suite for HumanCLIAgent."""

    def test_reprompts_until_legal(self, capsys):
        """Test that blank, non-numeric and illegal input is retried."""
        answers = iter(["", "abc", "0", "4"])
        env = TicTacToeEnv()
        agent = HumanCLIAgent(render=env.render, input_fn=lambda prompt: next(answers))
        state = env.apply(env.reset(), 0, 1)

        move = agent.act(state, env.legal_actions(state))

        assert move == 4
        out = capsys.readouterr().out
        assert "Please enter a valid number" in out
        assert "Invalid move 0" in out
        assert "Current board:" in out
