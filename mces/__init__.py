"""Tabular Monte Carlo control with exploring starts."""

from .rl import (
    ActionValueTable,
    CallbackEnvironment,
    Environment,
    MonteCarloESTrainer,
    TrainingConfig,
    evaluate_policy,
    make_rng,
    train_monte_carlo_exploring_starts,
)

__all__ = [
    "ActionValueTable",
    "CallbackEnvironment",
    "Environment",
    "MonteCarloESTrainer",
    "TrainingConfig",
    "evaluate_policy",
    "make_rng",
    "train_monte_carlo_exploring_starts",
]
