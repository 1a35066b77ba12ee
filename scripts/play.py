#!/usr/bin/env python3
"""Play tic-tac-toe against a trained agent.

Usage:
    python scripts/play.py
    python scripts/play.py --model-dir data --second
"""

import argparse
from pathlib import Path
from typing import Optional

from agents import FileBlobStore, HumanCLIAgent, TabularQAgent
from env import TicTacToeEnv, Winner
from training import EpisodeRunner, Outcome


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Play against a trained agent")
    parser.add_argument("--model-dir", type=Path, default=Path("data"))
    parser.add_argument("--model-name", default="qlearning_model")
    parser.add_argument("--second", action="store_true", help="Let the agent move first")
    args = parser.parse_args(argv)

    agent = TabularQAgent()
    if not agent.load_model(FileBlobStore(args.model_dir), args.model_name):
        print("No trained model found! Please run scripts/train.py first.")
        return 1
    agent.set_training_mode(False)

    env = TicTacToeEnv()
    human = HumanCLIAgent(render=env.render)
    agent_player = Winner.PLAYER1 if args.second else Winner.PLAYER2
    runner = EpisodeRunner(env, agent, human, agent_player=agent_player)

    print("Starting game! Cells are numbered 0-8, row by row.")
    try:
        episode = runner.run(explore=False)
    except (KeyboardInterrupt, EOFError):
        print("\nGame aborted")
        return 0

    print(env.render(episode.final_state))
    if episode.outcome in (Outcome.LOSS, Outcome.INVALID):
        print("You win!")
    elif episode.outcome in (Outcome.WIN, Outcome.FORFEIT):
        print("Agent wins!")
    else:
        print("It's a draw!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
