"""Quick training drills (energy for a small skill gain)."""

from .catalog import QUICK_TRAINING, QUICK_TRAINING_BY_STAT
from .service import train, training_gain
from .types import TrainingOption, TrainingSession

__all__ = [
    "QUICK_TRAINING",
    "QUICK_TRAINING_BY_STAT",
    "TrainingOption",
    "TrainingSession",
    "train",
    "training_gain",
]
