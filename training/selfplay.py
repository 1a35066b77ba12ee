"""Self-Play Trainer

Trains a TabularQAgent against an opponent policy and back-propagates each
episode's terminal reward through the agent's decisions.
"""

import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from agents.base import Agent
from agents.random_agent import RandomAgent
from agents.tabular_q import TabularQAgent
from env.base import GameEnvironment

from .config import TrainConfig
from .episode import Episode, EpisodeRunner, Outcome


class SelfPlayTrainer:
    """Runs training episodes, statistics sampling and greedy evaluation.

    The default opponent plays uniformly random moves drawn from the agent's
    own generator.
    """

    def __init__(
        self,
        agent: TabularQAgent,
        env: GameEnvironment,
        opponent: Optional[Agent] = None,
        config: Optional[TrainConfig] = None,
    ) -> None:
        self.agent = agent
        self.env = env
        self.config = config or TrainConfig()
        self.opponent = opponent if opponent is not None else RandomAgent(rng=agent.rng)
        self.runner = EpisodeRunner(
            env,
            agent,
            self.opponent,
            agent_player=self.config.agent_player,
            max_moves=self.config.max_moves,
        )
        self.history: List[Dict[str, Any]] = []

    def backpropagate(self, episode: Episode) -> None:
        """Update every decision of the episode, last one first.

        The final decision gets the terminal reward with ``done``; earlier
        ones get 0 and bootstrap from the next decision state, which has
        already been updated by then.

        An illegal final move outside the action range has no table cell;
        its penalty reaches only the statistics.
        """
        trajectory = episode.trajectory
        last = len(trajectory) - 1

        for i in range(last, -1, -1):
            state, action = trajectory[i]
            if not self.agent.q_table.valid_action(action):
                continue
            if i == last:
                self.agent.update(state, action, episode.reward, episode.final_state, True)
            else:
                next_state = trajectory[i + 1][0]
                self.agent.update(state, action, 0.0, next_state, False)

    def train_episode(self) -> Episode:
        """Play, learn from and record one episode."""
        episode = self.runner.run(explore=True)
        self.backpropagate(episode)
        self.agent.end_episode(episode.reward)
        return episode

    def train(
        self,
        episodes: Optional[int] = None,
        progress: bool = True,
        log_path: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Train for ``episodes`` episodes and return the sampled history."""
        num_episodes = episodes if episodes is not None else self.config.episodes
        eval_interval = max(1, self.config.eval_interval)
        log_path = log_path if log_path is not None else self.config.log_path

        log_file = None
        if log_path:
            log_file = Path(log_path)
            log_file.parent.mkdir(parents=True, exist_ok=True)

        rows: List[Dict[str, Any]] = []
        window: List[float] = []
        start_time = time.time()

        with tqdm(total=num_episodes, desc=f"Training {self.agent.name}",
                  unit="episode", disable=not progress) as pbar:
            for episode_idx in range(num_episodes):
                episode = self.train_episode()
                window.append(episode.reward)
                pbar.update(1)

                if (episode_idx + 1) % eval_interval != 0:
                    continue

                stats = self.agent.get_stats()
                row = {
                    "episode": stats["episodes"],
                    "avg_reward": sum(window) / len(window),
                    "win_rate": sum(1 for r in window if r > 0) / len(window),
                    "epsilon": stats["epsilon"],
                    "q_table_size": stats["q_table_size"],
                    "elapsed_s": time.time() - start_time,
                }
                rows.append(row)
                self.history.append(row)
                window = []

                pbar.set_postfix({
                    "Avg_Reward": f"{row['avg_reward']:.3f}",
                    "Win_Rate": f"{row['win_rate']:.3f}",
                    "Eps": f"{row['epsilon']:.3f}",
                    "States": row["q_table_size"],
                })

                if log_file is not None:
                    with open(log_file, "a") as f:
                        f.write(json.dumps({**row, "agent": self.agent.name,
                                            "timestamp": time.time()}) + "\n")

        return rows

    def evaluate(self, games: Optional[int] = None, explore: bool = False) -> Dict[str, Any]:
        """Play ``games`` games without learning.

        Neither the q-values, the statistics nor epsilon change.
        """
        num_games = games if games is not None else self.config.eval_games
        counts = {outcome: 0 for outcome in Outcome}

        for _ in range(num_games):
            episode = self.runner.run(explore=explore)
            counts[episode.outcome] += 1

        wins = counts[Outcome.WIN] + counts[Outcome.FORFEIT]
        draws = counts[Outcome.DRAW] + counts[Outcome.TRUNCATED]
        losses = counts[Outcome.LOSS] + counts[Outcome.INVALID]
        total = max(1, num_games)

        return {
            "games": num_games,
            "wins": wins,
            "draws": draws,
            "losses": losses,
            "win_rate": wins / total,
            "draw_rate": draws / total,
            "loss_rate": losses / total,
        }
