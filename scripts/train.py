#!/usr/bin/env python3
"""Training Script for the Tabular Q-Learning Agent

Trains a tic-tac-toe agent against a random opponent, evaluates it greedily
and saves the model.

Usage:
    python scripts/train.py
    python scripts/train.py --episodes 5000 --seed 7
    python scripts/train.py --config configs/train.yaml --resume
"""

import argparse
import time
from pathlib import Path
from typing import Any, Dict, Optional

from agents import FileBlobStore, Hyperparameters, TabularQAgent
from env import TicTacToeEnv
from training import SelfPlayTrainer, TrainConfig, load_config


def build_trainer(config: Dict[str, Any], seed: Optional[int] = None) -> SelfPlayTrainer:
    """Build agent, environment and trainer from a loaded configuration."""
    train_config = TrainConfig.from_dict(config["training"])
    if seed is not None:
        train_config.seed = seed

    agent = TabularQAgent(Hyperparameters.from_dict(config["agent"]), seed=train_config.seed)
    return SelfPlayTrainer(agent, TicTacToeEnv(), config=train_config)


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Train a tabular Q-learning tic-tac-toe agent")
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--episodes", type=int, default=None, help="Training episodes")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--resume", action="store_true", help="Continue from the saved model")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    trainer = build_trainer(config, seed=args.seed)
    train_config = trainer.config
    agent = trainer.agent
    store = FileBlobStore(train_config.model_dir)

    print("Tic-Tac-Toe Q-Learning Training")
    print("=" * 60)

    if args.resume:
        if agent.load_model(store, train_config.model_name):
            print(f"Resumed from {store.path(train_config.model_name)}")
        else:
            print("Warning: Could not load saved model, starting fresh")

    episodes = args.episodes if args.episodes is not None else train_config.episodes
    start_time = time.time()

    try:
        trainer.train(episodes, progress=not args.no_progress)
    except KeyboardInterrupt:
        print("\nTraining interrupted by user")

    print(f"\nTraining completed in {time.time() - start_time:.2f} seconds")

    stats = agent.get_stats()
    print("\nFinal Statistics:")
    print(f"  Episodes:      {stats['episodes']}")
    print(f"  Avg Reward:    {stats['avg_reward']:.3f}")
    print(f"  Epsilon:       {stats['epsilon']:.4f}")
    print(f"  Q-Table Size:  {stats['q_table_size']}")
    print(f"  Total Q-Values: {stats['total_q_values']}")

    result = trainer.evaluate(train_config.eval_games)
    print(f"\nGreedy evaluation vs random ({result['games']} games):")
    print(f"  Wins:   {result['wins']:4d} ({result['win_rate']:.1%})")
    print(f"  Draws:  {result['draws']:4d} ({result['draw_rate']:.1%})")
    print(f"  Losses: {result['losses']:4d} ({result['loss_rate']:.1%})")

    agent.save_model(store, train_config.model_name)
    print(f"\nModel saved: {store.path(train_config.model_name)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
