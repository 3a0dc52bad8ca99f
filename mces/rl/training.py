"""Monte Carlo Exploring Starts control for finite episodic MDPs.

Implements Monte Carlo ES from Sutton & Barto, 2nd ed., section 5.3: every
episode starts from a randomly drawn ``(state, action)`` pair, then follows
the current greedy policy until termination. Undiscounted first-visit returns
are averaged exactly into the action-value table and the greedy action of
every updated state is refreshed right after each episode.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Optional, Tuple

from tqdm import tqdm

from .environment import CallbackEnvironment, Environment, Episode, EpisodeStep, RandomSource, make_rng
from .values import ActionValueTable, ExactValue, Reward, exact_reward

LOGGER = logging.getLogger(__name__)

Policy = Dict[Hashable, Hashable]


class EpisodeTooLongError(RuntimeError):
    """Raised when an episode exceeds ``TrainingConfig.max_episode_steps``."""


@dataclass
class TrainingConfig:
    """Configuration for Monte Carlo ES training."""

    episodes: int = 100_000
    log_every: int = 10_000
    progress: bool = False
    # None keeps episodes unbounded; the step function must terminate them.
    max_episode_steps: Optional[int] = None

    def __post_init__(self) -> None:
        if self.episodes < 0:
            raise ValueError("episodes must be >= 0")
        if self.log_every < 1:
            raise ValueError("log_every must be >= 1")
        if self.max_episode_steps is not None and self.max_episode_steps < 1:
            raise ValueError("max_episode_steps must be >= 1 when set")


@dataclass
class TrainingResult:
    """Greedy policy, value estimates and metrics from a training run."""

    policy: Policy
    q_table: ActionValueTable
    episode_stats: List[Dict[str, float]]
    summary: Dict[str, float]


def simulate(
    env: Environment,
    state: Hashable,
    action: Hashable,
    policy: Policy,
    rng: RandomSource,
    max_steps: Optional[int] = None,
) -> Episode:
    """Roll out from ``(state, action)`` following ``policy`` until termination."""
    episode: Episode = []
    while True:
        next_state, reward = env.step((state, action), rng)
        episode.append(EpisodeStep(state, action, exact_reward(reward)))
        if next_state is None:
            return episode
        if max_steps is not None and len(episode) >= max_steps:
            raise EpisodeTooLongError(f"episode did not terminate within {max_steps} steps")
        state = next_state
        action = policy.get(state, env.default_action)


def generate_episode(
    env: Environment, policy: Policy, rng: RandomSource, max_steps: Optional[int] = None
) -> Episode:
    """Draw an exploring start and simulate one episode from it."""
    state, action = env.sample_start(rng)
    return simulate(env, state, action, policy, rng, max_steps)


def first_visit_returns(episode: Episode) -> Dict[Tuple[Hashable, Hashable], ExactValue]:
    """Return the undiscounted return following each pair's first occurrence.

    Walking backwards, a pair seen again overwrites the value stored for its
    later occurrence, so the earliest occurrence wins.
    """
    returns = 0
    first_visits: Dict[Tuple[Hashable, Hashable], ExactValue] = {}
    for step in reversed(episode):
        returns += step.reward
        first_visits[(step.state, step.action)] = returns
    return first_visits


class MonteCarloESTrainer:
    """Tabular Monte Carlo ES trainer for an :class:`Environment`."""

    def __init__(
        self,
        env: Environment,
        config: Optional[TrainingConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.env = env
        self.config = config or TrainingConfig()
        self.seed = seed
        self.rng = rng if rng is not None else make_rng(seed)

    def train(self) -> TrainingResult:
        q_table = ActionValueTable()
        policy: Policy = {}
        episode_stats: List[Dict[str, float]] = []
        total_return = 0
        total_steps = 0
        start_time = time.perf_counter()
        LOGGER.info("Training Monte Carlo ES for %d episodes", self.config.episodes)

        episodes = range(1, self.config.episodes + 1)
        for episode_index in tqdm(episodes, desc="episodes", disable=not self.config.progress):
            episode = generate_episode(self.env, policy, self.rng, self.config.max_episode_steps)
            first_visits = first_visit_returns(episode)
            self._improve(q_table, policy, first_visits)

            start = episode[0]
            total_return += first_visits[(start.state, start.action)]
            total_steps += len(episode)

            if episode_index % self.config.log_every == 0:
                stats = self._snapshot(q_table, episode_index, total_return, total_steps)
                episode_stats.append(stats)
                LOGGER.debug(
                    "episode %d: %d states, %d pairs, mean return %.4f",
                    episode_index,
                    len(q_table),
                    q_table.num_pairs(),
                    stats["mean_return"],
                )

        elapsed = time.perf_counter() - start_time
        summary = self._snapshot(q_table, self.config.episodes, total_return, total_steps)
        summary["execution_time_sec"] = elapsed
        LOGGER.info(
            "Finished %d episodes in %.2fs, %d states in policy",
            self.config.episodes,
            elapsed,
            len(policy),
        )
        return TrainingResult(policy=policy, q_table=q_table, episode_stats=episode_stats, summary=summary)

    @staticmethod
    def _improve(
        q_table: ActionValueTable,
        policy: Policy,
        first_visits: Dict[Tuple[Hashable, Hashable], ExactValue],
    ) -> None:
        for (state, action), ret in first_visits.items():
            q_table.update(state, action, ret)
            policy[state] = q_table.greedy_action(state)

    @staticmethod
    def _snapshot(
        q_table: ActionValueTable, episodes: int, total_return: ExactValue, total_steps: int
    ) -> Dict[str, float]:
        return {
            "episodes": float(episodes),
            "states_visited": float(len(q_table)),
            "pairs_visited": float(q_table.num_pairs()),
            "mean_return": float(total_return) / episodes if episodes else 0.0,
            "mean_episode_length": total_steps / episodes if episodes else 0.0,
        }


def train_monte_carlo_exploring_starts(
    episodes: int,
    start_sampler: Callable[[RandomSource], Tuple[Hashable, Hashable]],
    step_fn: Callable[[Tuple[Hashable, Hashable], RandomSource], Tuple[Optional[Hashable], Reward]],
    rng: RandomSource,
    *,
    default_action: Hashable,
    progress: bool = False,
) -> Policy:
    """Train on two plain callbacks and return only the greedy policy."""
    env = CallbackEnvironment(start_sampler, step_fn, default_action)
    config = TrainingConfig(episodes=episodes, log_every=max(episodes, 1), progress=progress)
    return MonteCarloESTrainer(env, config, rng=rng).train().policy


def evaluate_policy(
    env: Environment,
    policy: Policy,
    episodes: int = 1000,
    seed: Optional[int] = None,
    max_steps: Optional[int] = None,
) -> Dict[str, float]:
    """Run greedy episodes from sampled start states and report their returns.

    The start action drawn by the sampler is replaced by the policy's action,
    or the environment default for states the policy has never seen.
    """
    rng = make_rng(seed)
    returns = []
    for _ in range(episodes):
        state, _ = env.sample_start(rng)
        action = policy.get(state, env.default_action)
        episode = simulate(env, state, action, policy, rng, max_steps)
        returns.append(sum(step.reward for step in episode))

    if not returns:
        return {"episodes": 0.0, "mean_return": 0.0, "min_return": 0.0, "max_return": 0.0}
    return {
        "episodes": float(episodes),
        "mean_return": float(sum(returns)) / episodes,
        "min_return": float(min(returns)),
        "max_return": float(max(returns)),
    }


__all__ = [
    "EpisodeTooLongError",
    "MonteCarloESTrainer",
    "TrainingConfig",
    "TrainingResult",
    "evaluate_policy",
    "first_visit_returns",
    "generate_episode",
    "simulate",
    "train_monte_carlo_exploring_starts",
]
