"""agents package

the tabular q-learning core and the opponent policies it trains against.
"""

from .base import Agent
from .human_cli import HumanCLIAgent
from .hyperparameters import Hyperparameters
from .learner import QLearner
from .policy import EpsilonGreedyPolicy
from .q_table import QTable
from .random_agent import RandomAgent
from .serializer import ModelFormatError
from .state_key import StateKeyEncoder
from .stats import TrainingStats
from .storage import BlobStore, FileBlobStore, MemoryBlobStore
from .tabular_q import TabularQAgent

__all__ = [
    "Agent",
    "BlobStore",
    "EpsilonGreedyPolicy",
    "FileBlobStore",
    "HumanCLIAgent",
    "Hyperparameters",
    "MemoryBlobStore",
    "ModelFormatError",
    "QLearner",
    "QTable",
    "RandomAgent",
    "StateKeyEncoder",
    "TabularQAgent",
    "TrainingStats",
]
