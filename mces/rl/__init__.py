"""Monte Carlo Exploring Starts training for tabular episodic MDPs."""

from .environment import CallbackEnvironment, Environment, EpisodeStep, make_rng
from .training import (
    EpisodeTooLongError,
    MonteCarloESTrainer,
    TrainingConfig,
    TrainingResult,
    evaluate_policy,
    first_visit_returns,
    train_monte_carlo_exploring_starts,
)
from .values import ActionValueTable, RunningMean

__all__ = [
    "ActionValueTable",
    "CallbackEnvironment",
    "Environment",
    "EpisodeStep",
    "EpisodeTooLongError",
    "MonteCarloESTrainer",
    "RunningMean",
    "TrainingConfig",
    "TrainingResult",
    "evaluate_policy",
    "first_visit_returns",
    "make_rng",
    "train_monte_carlo_exploring_starts",
]
