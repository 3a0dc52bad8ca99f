"""Environment contract consumed by the Monte Carlo Exploring Starts trainer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Hashable, List, Optional, Tuple, TypeVar

import numpy as np

from .values import ExactValue, Reward

State = TypeVar("State", bound=Hashable)
Action = TypeVar("Action", bound=Hashable)

RandomSource = np.random.Generator


def make_rng(seed: Optional[int] = None) -> RandomSource:
    """Return the random source threaded through every environment callback."""
    return np.random.default_rng(seed)


@dataclass(frozen=True)
class EpisodeStep(Generic[State, Action]):
    """A single recorded ``(state, action, reward)`` step."""

    state: State
    action: Action
    reward: ExactValue


Episode = List[EpisodeStep]


class Environment(Generic[State, Action]):
    """Finite episodic MDP seen only through simulation.

    Subclasses provide ``default_action`` (taken in states the policy has not
    seen yet) together with the exploring-start sampler and the one-step
    transition. ``step`` must terminate every trajectory after finitely many
    calls; the trainer does not guard against endless episodes unless asked to.
    """

    default_action: Action

    def sample_start(self, rng: RandomSource) -> Tuple[State, Action]:
        raise NotImplementedError

    def step(self, state_action: Tuple[State, Action], rng: RandomSource) -> Tuple[Optional[State], Reward]:
        raise NotImplementedError


class CallbackEnvironment(Environment[State, Action]):
    """Adapt a start sampler and a step function to :class:`Environment`."""

    def __init__(
        self,
        start_sampler: Callable[[RandomSource], Tuple[State, Action]],
        step_fn: Callable[[Tuple[State, Action], RandomSource], Tuple[Optional[State], Reward]],
        default_action: Action,
    ) -> None:
        self.start_sampler = start_sampler
        self.step_fn = step_fn
        self.default_action = default_action

    def sample_start(self, rng: RandomSource) -> Tuple[State, Action]:
        return self.start_sampler(rng)

    def step(self, state_action: Tuple[State, Action], rng: RandomSource) -> Tuple[Optional[State], Reward]:
        return self.step_fn(state_action, rng)


__all__ = [
    "CallbackEnvironment",
    "Environment",
    "Episode",
    "EpisodeStep",
    "RandomSource",
    "make_rng",
]
