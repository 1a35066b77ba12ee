"""Self-play training for tabular agents."""

from .config import TrainConfig, load_config
from .episode import Episode, EpisodeRunner, Outcome
from .selfplay import SelfPlayTrainer

__all__ = [
    "Episode",
    "EpisodeRunner",
    "Outcome",
    "SelfPlayTrainer",
    "TrainConfig",
    "load_config",
]
